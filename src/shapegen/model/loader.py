# topmark:header:start
#
#   project      : ShapeGen
#   file         : loader.py
#   file_relpath : src/shapegen/model/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load a Smithy JSON AST document into a `Model`.

Only the subset of the JSON AST needed by the generator is understood:

* top-level ``"shapes"`` keyed by absolute shape id;
* ``"type"``, ``"members"``, ``"member"``, ``"key"``, ``"value"`` and ``"traits"``;
* operation ``"input"``/``"output"``/``"errors"`` and service/resource
  ``"operations"``/``"resources"``/``"version"``;
* ``"metadata"`` (kept verbatim).

Shapes of type ``apply`` are merged into their target's traits. Trait ids that are
not absolute are resolved against the prelude namespace, as Smithy does.

Example:
    ```python
    from shapegen.model.loader import load_model

    model = load_model("weather.json")
    ```
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shapegen.config.logging import get_logger
from shapegen.constants import PRELUDE_NAMESPACE
from shapegen.core.errors import CodegenError, ModelLoadError
from shapegen.model.model import Model
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import MemberShape, Shape, ShapeType
from shapegen.model.traits import Trait

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.traits import TraitLike

logger: ShapegenLogger = get_logger(__name__)

_APPLY: str = "apply"


def _trait_id(raw: str) -> str:
    return raw if "#" in raw else f"{PRELUDE_NAMESPACE}#{raw}"


def _parse_traits(raw: Any, where: str) -> dict[str, TraitLike]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ModelLoadError(f"{where}: 'traits' must be an object")
    return {_trait_id(k): Trait(_trait_id(k), v) for k, v in raw.items()}


def _target(node: Any, where: str) -> ShapeId:
    if not isinstance(node, dict) or not isinstance(node.get("target"), str):
        raise ModelLoadError(f"{where}: expected an object with a 'target' string")
    return ShapeId.parse(node["target"])


def _targets(raw: Any, where: str) -> tuple[ShapeId, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ModelLoadError(f"{where}: expected a list of references")
    return tuple(_target(item, where) for item in raw)


def _parse_members(shape_id: ShapeId, shape_type: ShapeType, node: dict[str, Any]) -> tuple[MemberShape, ...]:
    where: str = str(shape_id)
    named: list[tuple[str, Any]]
    if shape_type in (ShapeType.LIST, ShapeType.SET):
        named = [("member", node.get("member"))]
    elif shape_type is ShapeType.MAP:
        named = [("key", node.get("key")), ("value", node.get("value"))]
    else:
        raw_members = node.get("members", {})
        if not isinstance(raw_members, dict):
            raise ModelLoadError(f"{where}: 'members' must be an object")
        named = list(raw_members.items())

    members: list[MemberShape] = []
    for name, member_node in named:
        member_where = f"{where}${name}"
        members.append(
            MemberShape(
                id=shape_id.with_member(name),
                target=_target(member_node, member_where),
                traits=_parse_traits(member_node.get("traits"), member_where),
            )
        )
    return tuple(members)


def _parse_shape(shape_id: ShapeId, node: dict[str, Any]) -> Shape:
    raw_type = node.get("type")
    try:
        shape_type = ShapeType(raw_type)
    except ValueError as exc:
        raise ModelLoadError(f"{shape_id}: unknown shape type {raw_type!r}") from exc
    if shape_type is ShapeType.MEMBER:
        raise ModelLoadError(f"{shape_id}: members cannot be declared as shapes")

    where: str = str(shape_id)
    input_id = _target(node["input"], where) if "input" in node else None
    output_id = _target(node["output"], where) if "output" in node else None
    return Shape(
        id=shape_id,
        type=shape_type,
        members=_parse_members(shape_id, shape_type, node),
        traits=_parse_traits(node.get("traits"), where),
        input=input_id,
        output=output_id,
        errors=_targets(node.get("errors"), where),
        operations=_targets(node.get("operations"), where),
        resources=_targets(node.get("resources"), where),
        version=str(node.get("version", "")),
    )


def _apply_traits(shapes: dict[ShapeId, Shape], target: ShapeId, traits: Mapping[str, TraitLike]) -> None:
    container = shapes.get(target.without_member())
    if container is None:
        raise ModelLoadError(f"apply: target shape not found: {target}")
    if target.member is None:
        for trait in traits.values():
            container = container.with_trait(trait)
        shapes[container.id] = container
        return
    member = container.expect_member(target.member)
    merged: dict[str, TraitLike] = {**member.traits, **traits}
    new_member = MemberShape(id=member.id, target=member.target, traits=merged)
    members = tuple(new_member if m.id == member.id else m for m in container.members)
    shapes[container.id] = Shape(
        id=container.id,
        type=container.type,
        members=members,
        traits=container.traits,
        input=container.input,
        output=container.output,
        errors=container.errors,
        operations=container.operations,
        resources=container.resources,
        version=container.version,
    )


def parse_model(document: Mapping[str, Any]) -> Model:
    """Build a `Model` from an already decoded JSON AST document.

    Args:
        document (Mapping[str, Any]): The decoded document.

    Returns:
        Model: The model, prelude included.

    Raises:
        ModelLoadError: If the document does not follow the JSON AST layout.
    """
    raw_shapes = document.get("shapes", {})
    if not isinstance(raw_shapes, dict):
        raise ModelLoadError("'shapes' must be an object keyed by shape id")

    shapes: dict[ShapeId, Shape] = {}
    applies: list[tuple[ShapeId, dict[str, TraitLike]]] = []
    try:
        for raw_id, node in raw_shapes.items():
            if not isinstance(node, dict):
                raise ModelLoadError(f"{raw_id}: shape definition must be an object")
            shape_id = ShapeId.parse(raw_id)
            if node.get("type") == _APPLY:
                applies.append((shape_id, _parse_traits(node.get("traits"), raw_id)))
                continue
            shapes[shape_id] = _parse_shape(shape_id, node)
        for target, traits in applies:
            _apply_traits(shapes, target, traits)
        metadata = document.get("metadata", {})
        return Model(shapes.values(), metadata=metadata if isinstance(metadata, dict) else {})
    except ModelLoadError:
        raise
    except (CodegenError, ValueError) as exc:
        raise ModelLoadError(str(exc)) from exc


def load_model(path: Path | str) -> Model:
    """Read and parse a Smithy JSON AST file.

    Args:
        path (Path | str): Path of the ``.json`` model document.

    Returns:
        Model: The loaded model.

    Raises:
        ModelLoadError: If the file cannot be read, is not JSON, or is malformed.
    """
    p = Path(path)
    logger.debug("Loading model from %s", p)
    try:
        text: str = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(f"Cannot read model file {p}: {exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ModelLoadError(f"Invalid JSON in {p}: {exc}") from exc
    if not isinstance(document, dict):
        raise ModelLoadError(f"{p}: top-level JSON value must be an object")

    model = parse_model(document)
    logger.info("Loaded %d shapes from %s", len(model), p)
    return model
