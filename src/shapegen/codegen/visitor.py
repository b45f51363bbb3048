# topmark:header:start
#
#   project      : ShapeGen
#   file         : visitor.py
#   file_relpath : src/shapegen/codegen/visitor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exhaustive dispatch over shape kinds.

`ShapeVisitor.visit` matches every `ShapeType` explicitly. Each per-kind method
falls back to `ShapeVisitor.get_default`, which raises `UnsupportedShapeError`
unless a subclass handles the kind (or overrides the default).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from shapegen.core.errors import UnsupportedShapeError
from shapegen.model.shapes import MemberShape, ShapeType

if TYPE_CHECKING:
    from shapegen.model.shapes import Shape

T = TypeVar("T")


class ShapeVisitor(Generic[T]):
    """Base class for kind-dispatched operations on shapes."""

    def visit(self, shape: Shape | MemberShape) -> T:
        """Dispatch ``shape`` to the method handling its kind.

        Raises:
            UnsupportedShapeError: If the kind is not handled by this visitor.
        """
        if isinstance(shape, MemberShape):
            return self.member_shape(shape)
        match shape.type:
            case ShapeType.BLOB:
                return self.blob_shape(shape)
            case ShapeType.BOOLEAN:
                return self.boolean_shape(shape)
            case ShapeType.STRING:
                return self.string_shape(shape)
            case ShapeType.TIMESTAMP:
                return self.timestamp_shape(shape)
            case ShapeType.BYTE:
                return self.byte_shape(shape)
            case ShapeType.SHORT:
                return self.short_shape(shape)
            case ShapeType.INTEGER:
                return self.integer_shape(shape)
            case ShapeType.LONG:
                return self.long_shape(shape)
            case ShapeType.FLOAT:
                return self.float_shape(shape)
            case ShapeType.DOUBLE:
                return self.double_shape(shape)
            case ShapeType.DOCUMENT:
                return self.document_shape(shape)
            case ShapeType.BIG_INTEGER:
                return self.big_integer_shape(shape)
            case ShapeType.BIG_DECIMAL:
                return self.big_decimal_shape(shape)
            case ShapeType.ENUM:
                return self.enum_shape(shape)
            case ShapeType.INT_ENUM:
                return self.int_enum_shape(shape)
            case ShapeType.LIST:
                return self.list_shape(shape)
            case ShapeType.SET:
                return self.set_shape(shape)
            case ShapeType.MAP:
                return self.map_shape(shape)
            case ShapeType.STRUCTURE:
                return self.structure_shape(shape)
            case ShapeType.UNION:
                return self.union_shape(shape)
            case ShapeType.SERVICE:
                return self.service_shape(shape)
            case ShapeType.RESOURCE:
                return self.resource_shape(shape)
            case ShapeType.OPERATION:
                return self.operation_shape(shape)
            case _:
                raise UnsupportedShapeError(shape.type, str(shape.id))

    def get_default(self, shape: Shape | MemberShape) -> T:
        """Result for kinds without a dedicated override.

        Raises:
            UnsupportedShapeError: Always, unless overridden.
        """
        raise UnsupportedShapeError(shape.type, str(shape.id))

    def blob_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def boolean_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def string_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def timestamp_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def byte_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def short_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def integer_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def long_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def float_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def double_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def document_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def big_integer_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def big_decimal_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def enum_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def int_enum_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def list_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def set_shape(self, shape: Shape) -> T:
        """Sets behave as lists unless overridden."""
        return self.list_shape(shape)

    def map_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def structure_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def union_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def member_shape(self, shape: MemberShape) -> T:
        return self.get_default(shape)

    def service_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def resource_shape(self, shape: Shape) -> T:
        return self.get_default(shape)

    def operation_shape(self, shape: Shape) -> T:
        return self.get_default(shape)
