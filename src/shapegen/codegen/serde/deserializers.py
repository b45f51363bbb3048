# topmark:header:start
#
#   project      : ShapeGen
#   file         : deserializers.py
#   file_relpath : src/shapegen/codegen/serde/deserializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decoder generators, one per aggregate kind.

Every generated decoder fails fast: the first element or member error is returned
immediately and nothing after it is decoded. Elements decoded before the failure
stay in the destination.

List decoding reads each element into a local ``vv`` and appends it. For enum
elements ``vv`` holds the underlying value (``string`` / ``int32``), which is cast
to the enum type when appended:

```go
func deserializeColors(d smithy.ShapeDeserializer, s *smithy.Schema, v *[]types.Color) error {
	return smithy.ReadList(d, s, func() error {
		var vv string
		if err := d.ReadString(nil, &vv); err != nil {
			return err
		}
		*v = append(*v, types.Color(vv))
		return nil
	})
}
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.schema import member_schema_ref, schema_ref
from shapegen.codegen.serde.common import (
    ENUM_BASE_TYPES,
    HELPER_KINDS,
    check_supported,
    deserializer_name,
    read_value,
)
from shapegen.codegen.symbol_provider import union_member_type_name
from shapegen.config.logging import get_logger
from shapegen.model.shapes import ShapeType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.codegen.context import CodegenContext
    from shapegen.codegen.writer import GoWriter
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shapes import MemberShape, Shape

logger: ShapegenLogger = get_logger(__name__)

# Element kind -> reader used by list decoders. Other kinds emit no read.
_LIST_ELEMENT_READERS: Final[Mapping[ShapeType, str]] = {
    ShapeType.STRING: "ReadString",
    ShapeType.ENUM: "ReadString",
    ShapeType.BLOB: "ReadBlob",
    ShapeType.INTEGER: "ReadInt32",
    ShapeType.INT_ENUM: "ReadInt32",
    ShapeType.LONG: "ReadInt64",
    ShapeType.FLOAT: "ReadFloat32",
    ShapeType.DOUBLE: "ReadFloat64",
    ShapeType.BOOLEAN: "ReadBool",
}


def _sorted_members(shape: Shape) -> list[MemberShape]:
    return sorted(shape.members, key=lambda m: m.member_name)


def _element_var_type(ctx: CodegenContext, writer: GoWriter, target: Shape) -> str:
    base = ENUM_BASE_TYPES.get(target.type)
    if base is not None:
        return base
    return writer.type_ref(ctx.symbol_provider.to_symbol(target))


def _element_value(ctx: CodegenContext, writer: GoWriter, target: Shape) -> str:
    if target.type in ENUM_BASE_TYPES:
        return f"{writer.type_ref(ctx.symbol_provider.to_symbol(target))}(vv)"
    return "vv"


def _write_element_read(writer: GoWriter, read: str | None) -> None:
    if read is None:
        return
    with writer.block(f"if err := {read}; err != nil {{"):
        writer.write("return err")


class ListDeserializer:
    """Writes ``deserialize<Name>`` for a list or set shape."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        target = ctx.model.expect_member_target(self.shape)

        signature = (
            f"func {deserializer_name(self.shape)}(d {smithy}.ShapeDeserializer, "
            f"s *{smithy}.Schema, v *{writer.type_ref(symbol)}) error {{"
        )
        with writer.block(signature):
            with writer.block(f"return {smithy}.ReadList(d, s, func() error {{", "})"):
                writer.write(f"var vv {_element_var_type(ctx, writer, target)}")
                _write_element_read(writer, self.element_read(target))
                writer.write(f"*v = append(*v, {_element_value(ctx, writer, target)})")
                writer.write("return nil")

    def element_read(self, target: Shape) -> str | None:
        """Return the read expression for one element, or None for unhandled kinds."""
        kind = target.type
        reader = _LIST_ELEMENT_READERS.get(kind)
        if reader is not None:
            return f"d.{reader}(nil, &vv)"
        if kind is ShapeType.STRUCTURE:
            return "vv.Deserialize(d)"
        if kind in HELPER_KINDS:
            return f"{deserializer_name(target)}(d, nil, &vv)"
        logger.warning("List %s: no element reader for %s elements", self.shape.id, kind.value)
        return None


class MapDeserializer:
    """Writes ``deserialize<Name>`` for a map shape."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        target = ctx.model.expect_member_target(self.shape, "value")
        map_type = writer.type_ref(symbol)

        signature = (
            f"func {deserializer_name(self.shape)}(d {smithy}.ShapeDeserializer, "
            f"s *{smithy}.Schema, v *{map_type}) error {{"
        )
        with writer.block(signature):
            with writer.block("if *v == nil {"):
                writer.write(f"*v = {map_type}{{}}")
            with writer.block(f"return {smithy}.ReadMap(d, s, func(k string) error {{", "})"):
                writer.write(f"var vv {_element_var_type(ctx, writer, target)}")
                if target.type in ENUM_BASE_TYPES:
                    read = f"d.Read{'String' if target.type is ShapeType.ENUM else 'Int32'}(nil, &vv)"
                else:
                    read = read_value(target, "nil", "vv")
                _write_element_read(writer, read)
                writer.write(f"(*v)[k] = {_element_value(ctx, writer, target)}")
                writer.write("return nil")


class StructureDeserializer:
    """Writes the ``Deserialize`` method of a structure.

    Members are matched by member schema, in member-name order.
    """

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        schema = schema_ref(ctx, writer, self.shape)

        with writer.block(f"func (v *{symbol.name}) Deserialize(d {smithy}.ShapeDeserializer) error {{"):
            with writer.block(
                f"return {smithy}.ReadStruct(d, {schema}, func(s *{smithy}.Schema) error {{", "})"
            ):
                with writer.block("switch s {"):
                    for member in _sorted_members(self.shape):
                        self._write_member(writer, member)
                writer.write("return nil")

    def _write_member(self, writer: GoWriter, member: MemberShape) -> None:
        ctx = self.ctx
        target = ctx.model.expect_target(member)
        check_supported(target, str(member.id))
        member_schema = member_schema_ref(ctx, writer, self.shape, member)
        ident = f"v.{ctx.symbol_provider.to_member_name(member)}"
        target_symbol = ctx.symbol_provider.to_symbol(target)

        writer.write(f"case {member_schema}:")
        writer.indent()
        if target.type is ShapeType.STRUCTURE:
            writer.write(f"{ident} = &{writer.type_ref(target_symbol)}{{}}")
        writer.write(f"return {read_value(target, member_schema, ident, pointer=target_symbol.pointable)}")
        writer.dedent()


class UnionDeserializer:
    """Writes ``deserialize<Name>`` for a union shape.

    The variant named by the member schema read from the stream is allocated,
    stored in the destination, and decodes its own value.
    """

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)

        signature = (
            f"func {deserializer_name(self.shape)}(d {smithy}.ShapeDeserializer, "
            f"s *{smithy}.Schema, v *{writer.type_ref(symbol)}) error {{"
        )
        with writer.block(signature):
            writer.write("ms, err := d.ReadUnion(s)")
            with writer.block("if err != nil {"):
                writer.write("return err")
            writer.write()
            with writer.block("switch ms {"):
                for member in _sorted_members(self.shape):
                    variant = ctx.symbol_provider.variant_symbol(self.shape, member)
                    writer.write(f"case {member_schema_ref(ctx, writer, self.shape, member)}:")
                    writer.indent()
                    writer.write(f"vv := &{writer.type_ref(variant)}{{}}")
                    writer.write("*v = vv")
                    writer.write("return vv.Deserialize(d)")
                    writer.dedent()
            writer.write("return nil")


class UnionVariantDeserializer:
    """Writes the ``Deserialize`` method of each variant type of a union."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        for index, member in enumerate(self.shape.members):
            target = ctx.model.expect_target(member)
            if index:
                writer.write()
            name = union_member_type_name(self.shape, member)
            with writer.block(f"func (v *{name}) Deserialize(d {smithy}.ShapeDeserializer) error {{"):
                writer.write(f"return {read_value(target, 'nil', 'v.Value')}")
