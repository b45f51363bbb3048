# topmark:header:start
#
#   project      : ShapeGen
#   file         : shapes.py
#   file_relpath : src/shapegen/model/shapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shapes and members of the type graph.

Shapes are immutable. Rewrites (renaming, re-tagging) always produce new shape
instances; see `shapegen.codegen.cloner`.

Aggregate shapes keep their element edges as ordinary members:

* list/set: one member named ``member``;
* map: members ``key`` and ``value``;
* structure/union/enum/intEnum: declared members in declaration order.

Operation, resource and service shapes reference other shapes through dedicated
fields (``input``, ``output``, ``errors``, ``operations``, ``resources``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from shapegen.core.errors import ShapeNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.model.shape_id import ShapeId
    from shapegen.model.traits import TraitLike


class ShapeType(str, Enum):
    """Closed set of shape kinds.

    Values match the type names used in Smithy JSON AST documents.
    """

    BLOB = "blob"
    BOOLEAN = "boolean"
    STRING = "string"
    TIMESTAMP = "timestamp"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOCUMENT = "document"
    DOUBLE = "double"
    BIG_DECIMAL = "bigDecimal"
    BIG_INTEGER = "bigInteger"
    ENUM = "enum"
    INT_ENUM = "intEnum"
    LIST = "list"
    SET = "set"
    MAP = "map"
    STRUCTURE = "structure"
    UNION = "union"
    MEMBER = "member"
    SERVICE = "service"
    RESOURCE = "resource"
    OPERATION = "operation"

    @property
    def capitalized(self) -> str:
        """Type name with its first letter upper-cased (``bigDecimal`` -> ``BigDecimal``)."""
        return self.value[:1].upper() + self.value[1:]

    @property
    def is_collection(self) -> bool:
        """Whether the kind is a list or a set."""
        return self in (ShapeType.LIST, ShapeType.SET)

    @property
    def is_aggregate(self) -> bool:
        """Whether the kind has members."""
        return self in _AGGREGATE_TYPES


_AGGREGATE_TYPES: frozenset[ShapeType] = frozenset(
    {
        ShapeType.LIST,
        ShapeType.SET,
        ShapeType.MAP,
        ShapeType.STRUCTURE,
        ShapeType.UNION,
        ShapeType.ENUM,
        ShapeType.INT_ENUM,
    }
)


def _freeze_traits(traits: Mapping[str, TraitLike]) -> Mapping[str, TraitLike]:
    if isinstance(traits, MappingProxyType):
        return traits
    return MappingProxyType(dict(traits))


@dataclass(frozen=True)
class MemberShape:
    """A named, directed edge from a container shape to a target shape.

    Attributes:
        id (ShapeId): Member id; always ``<container id>$<member name>``.
        target (ShapeId): Id of the targeted shape.
        traits (Mapping[str, TraitLike]): Traits applied to the member.
    """

    id: ShapeId
    target: ShapeId
    traits: Mapping[str, TraitLike] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if self.id.member is None:
            raise ValueError(f"Member id must name a member: {self.id}")
        object.__setattr__(self, "traits", _freeze_traits(self.traits))

    @property
    def type(self) -> ShapeType:
        """Always `ShapeType.MEMBER`."""
        return ShapeType.MEMBER

    @property
    def member_name(self) -> str:
        """Local name of the member within its container."""
        return cast("str", self.id.member)

    @property
    def container(self) -> ShapeId:
        """Id of the containing shape."""
        return self.id.without_member()

    def has_trait(self, trait_id: str) -> bool:
        """Whether a trait with ``trait_id`` is applied."""
        return trait_id in self.traits

    def get_trait(self, trait_id: str) -> TraitLike | None:
        """Return the trait with ``trait_id``, or None."""
        return self.traits.get(trait_id)

    def reparent(self, container: ShapeId) -> MemberShape:
        """Return this member re-identified under ``container``."""
        return replace(self, id=container.with_member(self.member_name))


@dataclass(frozen=True)
class Shape:
    """A node of the type graph.

    Attributes:
        id (ShapeId): Shape id (never a member id).
        type (ShapeType): Shape kind. `ShapeType.MEMBER` is reserved for `MemberShape`.
        members (tuple[MemberShape, ...]): Member edges, in declaration order.
        traits (Mapping[str, TraitLike]): Traits keyed by trait id.
        input (ShapeId | None): Operation input structure.
        output (ShapeId | None): Operation output structure.
        errors (tuple[ShapeId, ...]): Operation/service error structures.
        operations (tuple[ShapeId, ...]): Service/resource operations.
        resources (tuple[ShapeId, ...]): Service/resource child resources.
        version (str): Service version string.
    """

    id: ShapeId
    type: ShapeType
    members: tuple[MemberShape, ...] = ()
    traits: Mapping[str, TraitLike] = field(default_factory=lambda: MappingProxyType({}))
    input: ShapeId | None = None
    output: ShapeId | None = None
    errors: tuple[ShapeId, ...] = ()
    operations: tuple[ShapeId, ...] = ()
    resources: tuple[ShapeId, ...] = ()
    version: str = ""

    def __post_init__(self) -> None:
        if self.type is ShapeType.MEMBER:
            raise ValueError("Use MemberShape for members")
        if self.id.member is not None:
            raise ValueError(f"Shape id must not name a member: {self.id}")
        object.__setattr__(self, "traits", _freeze_traits(self.traits))
        for member in self.members:
            if member.container != self.id:
                raise ValueError(f"Member {member.id} does not belong to {self.id}")

    def has_trait(self, trait_id: str) -> bool:
        """Whether a trait with ``trait_id`` is applied."""
        return trait_id in self.traits

    def get_trait(self, trait_id: str) -> TraitLike | None:
        """Return the trait with ``trait_id``, or None."""
        return self.traits.get(trait_id)

    def get_member(self, name: str) -> MemberShape | None:
        """Return the member named ``name``, or None."""
        for member in self.members:
            if member.member_name == name:
                return member
        return None

    def expect_member(self, name: str) -> MemberShape:
        """Return the member named ``name``.

        Raises:
            ShapeNotFoundError: If the shape has no such member.
        """
        member = self.get_member(name)
        if member is None:
            raise ShapeNotFoundError(self.id.with_member(name))
        return member

    @property
    def member_names(self) -> tuple[str, ...]:
        """Member names in declaration order."""
        return tuple(m.member_name for m in self.members)

    def with_trait(self, trait: TraitLike) -> Shape:
        """Return a copy with ``trait`` added, replacing any trait with the same id."""
        traits: dict[str, TraitLike] = dict(self.traits)
        traits[trait.trait_id] = trait
        return replace(self, traits=traits)

    def without_trait(self, trait_id: str) -> Shape:
        """Return a copy without the trait ``trait_id``."""
        traits: dict[str, TraitLike] = {k: v for k, v in self.traits.items() if k != trait_id}
        return replace(self, traits=traits)

    def renamed(self, new_id: ShapeId) -> Shape:
        """Return a copy identified as ``new_id`` with every member re-parented."""
        return replace(self, id=new_id, members=tuple(m.reparent(new_id) for m in self.members))

    def referenced_ids(self) -> tuple[ShapeId, ...]:
        """Ids of every shape this shape points at, member targets first."""
        refs: list[ShapeId] = [m.target for m in self.members]
        if self.input is not None:
            refs.append(self.input)
        if self.output is not None:
            refs.append(self.output)
        refs.extend(self.errors)
        refs.extend(self.operations)
        refs.extend(self.resources)
        return tuple(refs)

    def describe(self) -> dict[str, Any]:
        """Return a compact, JSON-friendly summary used in logs and diagnostics."""
        return {
            "id": str(self.id),
            "type": self.type.value,
            "members": list(self.member_names),
            "traits": sorted(self.traits),
        }
