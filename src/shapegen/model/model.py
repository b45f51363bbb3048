# topmark:header:start
#
#   project      : ShapeGen
#   file         : model.py
#   file_relpath : src/shapegen/model/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable index of the shapes making up a model.

The model is a read-only input to a generation pass. Rewrites such as operation
input/output cloning produce a new `Model` via `Model.with_shapes`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from shapegen.config.logging import get_logger
from shapegen.core.errors import ShapeNotFoundError
from shapegen.model.prelude import PRELUDE_SHAPES

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shape_id import ShapeId
    from shapegen.model.shapes import MemberShape, Shape, ShapeType

logger: ShapegenLogger = get_logger(__name__)


class Model:
    """A shape graph keyed by `ShapeId`.

    Prelude shapes are always present. User shapes may override nothing in the
    prelude namespace; a duplicate id among ``shapes`` raises ``ValueError``.

    Args:
        shapes (Iterable[Shape]): Shapes of the model (prelude excluded).
        metadata (Mapping[str, object] | None): Free-form model metadata.
    """

    def __init__(
        self,
        shapes: Iterable[Shape] = (),
        *,
        metadata: Mapping[str, object] | None = None,
    ) -> None:
        index: dict[ShapeId, Shape] = dict(PRELUDE_SHAPES)
        for shape in shapes:
            if shape.id in index:
                raise ValueError(f"Duplicate shape id in model: {shape.id}")
            index[shape.id] = shape
        self._shapes: Mapping[ShapeId, Shape] = MappingProxyType(index)
        self.metadata: Mapping[str, object] = MappingProxyType(dict(metadata or {}))
        logger.trace("Model created with %d shapes", len(index))

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes())

    def __len__(self) -> int:
        return len(self._shapes)

    def get_shape(self, shape_id: ShapeId) -> Shape | None:
        """Return the shape with ``shape_id``, or None."""
        return self._shapes.get(shape_id)

    def expect_shape(self, shape_id: ShapeId) -> Shape:
        """Return the shape with ``shape_id``.

        Raises:
            ShapeNotFoundError: If the model has no such shape.
        """
        shape = self._shapes.get(shape_id)
        if shape is None:
            raise ShapeNotFoundError(shape_id)
        return shape

    def get_member(self, member_id: ShapeId) -> MemberShape | None:
        """Return the member identified by ``member_id``, or None."""
        if member_id.member is None:
            return None
        container = self._shapes.get(member_id.without_member())
        if container is None:
            return None
        return container.get_member(member_id.member)

    def expect_member(self, member_id: ShapeId) -> MemberShape:
        """Return the member identified by ``member_id``.

        Raises:
            ShapeNotFoundError: If the container or member does not exist.
        """
        member = self.get_member(member_id)
        if member is None:
            raise ShapeNotFoundError(member_id)
        return member

    def expect_target(self, member: MemberShape) -> Shape:
        """Return the shape targeted by ``member``."""
        return self.expect_shape(member.target)

    def expect_member_target(self, shape: Shape, name: str = "member") -> Shape:
        """Return the target of ``shape``'s member ``name``.

        For lists and sets the default ``"member"`` is the element; for maps pass
        ``"value"`` (or ``"key"``).
        """
        return self.expect_target(shape.expect_member(name))

    def shapes(self, *types: ShapeType) -> list[Shape]:
        """Return shapes sorted by id, optionally restricted to ``types``."""
        selected = (s for s in self._shapes.values() if not types or s.type in types)
        return sorted(selected, key=lambda s: s.id)

    def with_shapes(self, *shapes: Shape) -> Model:
        """Return a new model where ``shapes`` are added or replace same-id shapes."""
        merged: dict[ShapeId, Shape] = {
            k: v for k, v in self._shapes.items() if k not in PRELUDE_SHAPES
        }
        for shape in shapes:
            merged[shape.id] = shape
        return Model(merged.values(), metadata=self.metadata)

    def without_shapes(self, *shape_ids: ShapeId) -> Model:
        """Return a new model without the given shapes."""
        drop = set(shape_ids)
        kept = (
            v for k, v in self._shapes.items() if k not in PRELUDE_SHAPES and k not in drop
        )
        return Model(kept, metadata=self.metadata)
