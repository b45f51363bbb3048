# topmark:header:start
#
#   project      : ShapeGen
#   file         : cloner.py
#   file_relpath : src/shapegen/codegen/cloner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Renamed structural copies of shapes, tagged with their provenance.

`ShapeCloner` copies a shape under a new id given by a naming strategy. The copy's
members are re-identified under the *new* id, and the copy carries a
`SyntheticCloneTrait` naming the shape it was copied from. Cloning a clone records
the immediate original only.

`clone_operation_io` uses the cloner to give every operation its own, uniquely
named input and output structures.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, cast

from shapegen.codegen.visitor import ShapeVisitor
from shapegen.config.logging import get_logger
from shapegen.constants import SYNTHETIC_NAMESPACE
from shapegen.core.errors import CodegenError
from shapegen.model.prelude import UNIT_ID
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import MemberShape, Shape, ShapeType
from shapegen.model.traits import SyntheticCloneTrait, SyntheticTrait
from shapegen.model.walker import walk_shapes

if TYPE_CHECKING:
    from collections.abc import Callable

    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.model import Model
    from shapegen.model.traits import TraitLike

logger: ShapegenLogger = get_logger(__name__)

_Cloned = Shape | MemberShape


class ShapeCloner(ShapeVisitor[_Cloned]):
    """Clones shapes of every kind.

    Args:
        naming_strategy (Callable[[ShapeId], ShapeId]): Maps an original id to the
            id of its clone. Must be pure.
    """

    def __init__(self, naming_strategy: Callable[[ShapeId], ShapeId]) -> None:
        self.naming_strategy: Callable[[ShapeId], ShapeId] = naming_strategy

    def clone(self, shape: Shape) -> Shape:
        """Return a renamed, tagged copy of ``shape``."""
        return cast("Shape", self.visit(shape))

    def clone_member(self, member: MemberShape) -> MemberShape:
        """Return a renamed, tagged copy of a single member."""
        return cast("MemberShape", self.visit(member))

    def get_default(self, shape: Shape | MemberShape) -> _Cloned:
        if isinstance(shape, MemberShape):
            return self.member_shape(shape)
        new_id = self.naming_strategy(shape.id)
        if new_id.member is not None:
            raise CodegenError(f"Naming strategy mapped {shape.id} to member id {new_id}")
        renamed = shape.renamed(new_id)
        members = tuple(_untagged(member) for member in renamed.members)
        clone = replace(renamed, members=members).with_trait(SyntheticCloneTrait(shape.id))
        logger.trace("Cloned %s -> %s", shape.id, new_id)
        return clone

    def member_shape(self, shape: MemberShape) -> _Cloned:
        new_id = self.naming_strategy(shape.id)
        if new_id.member is None:
            new_id = new_id.with_member(shape.member_name)
        traits: dict[str, TraitLike] = dict(shape.traits)
        traits[SyntheticCloneTrait.trait_id] = SyntheticCloneTrait(shape.id)
        return replace(shape, id=new_id, traits=traits)


def _untagged(member: MemberShape) -> MemberShape:
    if not member.has_trait(SyntheticCloneTrait.trait_id):
        return member
    traits = {key: value for key, value in member.traits.items() if key != SyntheticCloneTrait.trait_id}
    return replace(member, traits=traits)


def _io_clone(model: Model, original: ShapeId | None, new_id: ShapeId) -> Shape:
    if original is None or original == UNIT_ID:
        return Shape(
            id=new_id,
            type=ShapeType.STRUCTURE,
            traits={SyntheticTrait.trait_id: SyntheticTrait()},
        )
    source = model.expect_shape(original)
    if source.type is not ShapeType.STRUCTURE:
        raise CodegenError(f"Operation input/output {original} is not a structure")
    return ShapeCloner(lambda _id: new_id).clone(source)


def clone_operation_io(
    model: Model,
    service_id: ShapeId | None = None,
    namespace: str = SYNTHETIC_NAMESPACE,
) -> Model:
    """Give each operation dedicated ``<Op>Input`` / ``<Op>Output`` structures.

    Operations are those reachable from ``service_id``, or every operation of the
    model when no service is given. Missing (or ``smithy.api#Unit``) inputs and
    outputs are replaced by empty synthetic structures.

    Args:
        model (Model): The model to rewrite.
        service_id (ShapeId | None): Service whose operations are rewritten.
        namespace (str): Namespace of the new structures.

    Returns:
        Model: A new model with the clones added and operations rewired.
    """
    if service_id is None:
        operations = model.shapes(ShapeType.OPERATION)
    else:
        service = model.expect_shape(service_id)
        operations = [s for s in walk_shapes(model, service) if s.type is ShapeType.OPERATION]

    rewritten: list[Shape] = []
    for operation in operations:
        name = operation.id.name
        input_id = ShapeId(namespace, f"{name}Input")
        output_id = ShapeId(namespace, f"{name}Output")
        rewritten.append(_io_clone(model, operation.input, input_id))
        rewritten.append(_io_clone(model, operation.output, output_id))
        rewritten.append(replace(operation, input=input_id, output=output_id))
        logger.debug("Operation %s uses %s / %s", operation.id, input_id, output_id)
    return model.with_shapes(*rewritten)
