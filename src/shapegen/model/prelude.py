# topmark:header:start
#
#   project      : ShapeGen
#   file         : prelude.py
#   file_relpath : src/shapegen/model/prelude.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Prelude shapes available to every model (``smithy.api#String`` and friends)."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from shapegen.constants import PRELUDE_NAMESPACE
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import Shape, ShapeType

if TYPE_CHECKING:
    from collections.abc import Mapping

_PRELUDE_TYPES: Final[tuple[tuple[str, ShapeType], ...]] = (
    ("Blob", ShapeType.BLOB),
    ("Boolean", ShapeType.BOOLEAN),
    ("String", ShapeType.STRING),
    ("Byte", ShapeType.BYTE),
    ("Short", ShapeType.SHORT),
    ("Integer", ShapeType.INTEGER),
    ("Long", ShapeType.LONG),
    ("Float", ShapeType.FLOAT),
    ("Double", ShapeType.DOUBLE),
    ("BigInteger", ShapeType.BIG_INTEGER),
    ("BigDecimal", ShapeType.BIG_DECIMAL),
    ("Timestamp", ShapeType.TIMESTAMP),
    ("Document", ShapeType.DOCUMENT),
    ("PrimitiveBoolean", ShapeType.BOOLEAN),
    ("PrimitiveByte", ShapeType.BYTE),
    ("PrimitiveShort", ShapeType.SHORT),
    ("PrimitiveInteger", ShapeType.INTEGER),
    ("PrimitiveLong", ShapeType.LONG),
    ("PrimitiveFloat", ShapeType.FLOAT),
    ("PrimitiveDouble", ShapeType.DOUBLE),
    ("Unit", ShapeType.STRUCTURE),
)

PRELUDE_SHAPES: Final[Mapping[ShapeId, Shape]] = MappingProxyType(
    {
        shape.id: shape
        for shape in (
            Shape(id=ShapeId(PRELUDE_NAMESPACE, name), type=shape_type)
            for name, shape_type in _PRELUDE_TYPES
        )
    }
)

UNIT_ID: Final[ShapeId] = ShapeId(PRELUDE_NAMESPACE, "Unit")


def is_prelude_shape(shape_id: ShapeId) -> bool:
    """Whether ``shape_id`` lives in the prelude namespace."""
    return shape_id.namespace == PRELUDE_NAMESPACE
