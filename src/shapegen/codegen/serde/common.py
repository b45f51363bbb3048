# topmark:header:start
#
#   project      : ShapeGen
#   file         : common.py
#   file_relpath : src/shapegen/codegen/serde/common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Kind tables and value-level read/write expressions shared by serde generators.

Helpers take the Go expression of the schema (``nil``, ``s``, ``schemas.X_m``) and
of the value, and return a single Go expression or statement.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from shapegen.codegen.symbol_provider import capitalize
from shapegen.core.errors import UnsupportedShapeError
from shapegen.model.shapes import ShapeType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.model.shapes import Shape

SERIALIZERS_FILE: Final[str] = "serializers.go"
DESERIALIZERS_FILE: Final[str] = "deserializers.go"

HELPER_KINDS: Final[frozenset[ShapeType]] = frozenset(
    {ShapeType.LIST, ShapeType.SET, ShapeType.MAP, ShapeType.UNION}
)
"""Kinds decoded and encoded by package-level helper functions."""

INVALID_KINDS: Final[frozenset[ShapeType]] = frozenset(
    {ShapeType.MEMBER, ShapeType.SERVICE, ShapeType.RESOURCE, ShapeType.OPERATION}
)

BIG_KINDS: Final[frozenset[ShapeType]] = frozenset({ShapeType.BIG_INTEGER, ShapeType.BIG_DECIMAL})

# Scalar kind -> runtime method suffix (``Read<X>`` / ``Write<X>``)
SCALAR_METHODS: Final[Mapping[ShapeType, str]] = MappingProxyType(
    {
        ShapeType.BYTE: "Int8",
        ShapeType.SHORT: "Int16",
        ShapeType.INTEGER: "Int32",
        ShapeType.LONG: "Int64",
        ShapeType.FLOAT: "Float32",
        ShapeType.DOUBLE: "Float64",
        ShapeType.BOOLEAN: "Bool",
        ShapeType.STRING: "String",
        ShapeType.TIMESTAMP: "Time",
        ShapeType.BLOB: "Blob",
        ShapeType.DOCUMENT: "Document",
    }
)

# Kinds whose Go representation is never a pointer, so no ``Ptr`` variant is used
_NEVER_POINTER: Final[frozenset[ShapeType]] = frozenset({ShapeType.BLOB, ShapeType.DOCUMENT})

# Enum kind -> underlying Go type
ENUM_BASE_TYPES: Final[Mapping[ShapeType, str]] = MappingProxyType(
    {ShapeType.ENUM: "string", ShapeType.INT_ENUM: "int32"}
)


def deserializer_name(shape: Shape) -> str:
    """Name of the helper function decoding ``shape``."""
    return f"deserialize{capitalize(shape.id.name)}"


def serializer_name(shape: Shape) -> str:
    """Name of the helper function encoding ``shape``."""
    return f"serialize{capitalize(shape.id.name)}"


def check_supported(target: Shape, context: str) -> None:
    """Reject kinds that cannot appear as a serialized value.

    Raises:
        UnsupportedShapeError: For member/service/resource/operation targets and
            for bigInteger/bigDecimal.
    """
    if target.type in INVALID_KINDS or target.type in BIG_KINDS:
        raise UnsupportedShapeError(target.type, context)


def read_value(
    target: Shape,
    schema: str,
    ident: str,
    *,
    pointer: bool = False,
) -> str:
    """Return a Go expression decoding into the addressable ``ident``; it yields an ``error``.

    Args:
        target (Shape): Shape of the decoded value.
        schema (str): Go expression of the schema to read with.
        ident (str): Addressable Go expression receiving the value.
        pointer (bool): Whether ``ident`` is a pointer field (``Ptr`` readers).

    Raises:
        UnsupportedShapeError: If ``target``'s kind cannot be decoded.
    """
    check_supported(target, str(target.id))
    kind = target.type
    if kind in SCALAR_METHODS:
        suffix = "Ptr" if pointer and kind not in _NEVER_POINTER else ""
        return f"d.Read{SCALAR_METHODS[kind]}{suffix}({schema}, &{ident})"
    if kind in ENUM_BASE_TYPES:
        base = ENUM_BASE_TYPES[kind]
        method = "String" if kind is ShapeType.ENUM else "Int32"
        return f"d.Read{method}({schema}, (*{base})(&{ident}))"
    if kind is ShapeType.STRUCTURE:
        return f"{ident}.Deserialize(d)"
    if kind in HELPER_KINDS:
        return f"{deserializer_name(target)}(d, {schema}, &{ident})"
    raise UnsupportedShapeError(kind, str(target.id))


def write_value(
    target: Shape,
    schema: str,
    ident: str,
    *,
    pointer: bool = False,
) -> str:
    """Return a Go statement encoding ``ident``.

    Raises:
        UnsupportedShapeError: If ``target``'s kind cannot be encoded.
    """
    kind = target.type
    if kind in INVALID_KINDS:
        raise UnsupportedShapeError(kind, str(target.id))
    if kind in SCALAR_METHODS:
        suffix = "Ptr" if pointer and kind not in _NEVER_POINTER else ""
        return f"s.Write{SCALAR_METHODS[kind]}{suffix}({schema}, {ident})"
    if kind is ShapeType.BIG_INTEGER:
        return f"s.WriteBigInteger({schema}, {ident})"
    if kind is ShapeType.BIG_DECIMAL:
        return f"s.WriteBigDecimal({schema}, {ident})"
    if kind in ENUM_BASE_TYPES:
        base = ENUM_BASE_TYPES[kind]
        method = "String" if kind is ShapeType.ENUM else "Int32"
        return f"s.Write{method}({schema}, {base}({ident}))"
    if kind is ShapeType.STRUCTURE:
        return f"s.WriteStruct({schema}, {ident if pointer else '&' + ident})"
    if kind in HELPER_KINDS:
        return f"{serializer_name(target)}(s, {schema}, {ident})"
    raise UnsupportedShapeError(kind, str(target.id))
