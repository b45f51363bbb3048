# topmark:header:start
#
#   project      : ShapeGen
#   file         : serializers.py
#   file_relpath : src/shapegen/codegen/serde/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder generators, one per aggregate kind.

Collection and union encoders are package-level helpers; structures get a
``Serialize`` method. Elements of collections are written without a schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.schema import member_schema_ref, schema_ref
from shapegen.codegen.serde.common import (
    HELPER_KINDS,
    check_supported,
    serializer_name,
    write_value,
)
from shapegen.codegen.symbol_provider import union_member_type_name
from shapegen.model.shapes import ShapeType

if TYPE_CHECKING:
    from shapegen.codegen.context import CodegenContext
    from shapegen.codegen.writer import GoWriter
    from shapegen.model.shapes import MemberShape, Shape

# Member kinds that are only written when set
_NIL_GUARDED: Final[frozenset[ShapeType]] = HELPER_KINDS | {ShapeType.STRUCTURE, ShapeType.DOCUMENT}


class ListSerializer:
    """Writes ``serialize<Name>`` for a list or set shape."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        target = ctx.model.expect_member_target(self.shape)

        signature = (
            f"func {serializer_name(self.shape)}(s {smithy}.ShapeSerializer, "
            f"schema *{smithy}.Schema, v {writer.type_ref(symbol)}) {{"
        )
        with writer.block(signature):
            writer.write("s.WriteList(schema)")
            with writer.block("for _, vv := range v {"):
                writer.write(write_value(target, "nil", "vv"))
            writer.write("s.CloseList()")


class MapSerializer:
    """Writes ``serialize<Name>`` for a map shape."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        target = ctx.model.expect_member_target(self.shape, "value")

        signature = (
            f"func {serializer_name(self.shape)}(s {smithy}.ShapeSerializer, "
            f"schema *{smithy}.Schema, v {writer.type_ref(symbol)}) {{"
        )
        with writer.block(signature):
            writer.write("s.WriteMap(schema)")
            with writer.block("for k, vv := range v {"):
                writer.write("s.WriteKey(nil, k)")
                if target.type is ShapeType.STRUCTURE:
                    writer.write("vv.Serialize(s)")
                else:
                    writer.write(write_value(target, "nil", "vv"))
            writer.write("s.CloseMap()")


class StructureSerializer:
    """Writes the ``Serialize`` method of a structure.

    Members are written in member-name order. Optional aggregate members are
    skipped when nil; optional scalars use the ``Ptr`` writers.

    Raises:
        UnsupportedShapeError: When called for a structure with a bigInteger or
            bigDecimal member.
    """

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)
        schema = schema_ref(ctx, writer, self.shape)

        with writer.block(f"func (v *{symbol.name}) Serialize(s {smithy}.ShapeSerializer) {{"):
            writer.write(f"s.WriteMap({schema})")
            for member in sorted(self.shape.members, key=lambda m: m.member_name):
                self._write_member(writer, member)
            writer.write("s.CloseMap()")

    def _write_member(self, writer: GoWriter, member: MemberShape) -> None:
        ctx = self.ctx
        target = ctx.model.expect_target(member)
        check_supported(target, str(member.id))
        member_schema = member_schema_ref(ctx, writer, self.shape, member)
        ident = f"v.{ctx.symbol_provider.to_member_name(member)}"
        pointer = ctx.symbol_provider.to_symbol(target).pointable
        statement = write_value(target, member_schema, ident, pointer=pointer)

        if target.type in _NIL_GUARDED:
            with writer.block(f"if {ident} != nil {{"):
                writer.write(statement)
        else:
            writer.write(statement)


class UnionSerializer:
    """Writes ``serialize<Name>`` for a union shape; unknown variants are not written."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        symbol = ctx.symbol_provider.to_symbol(self.shape)

        signature = (
            f"func {serializer_name(self.shape)}(s {smithy}.ShapeSerializer, "
            f"schema *{smithy}.Schema, v {writer.type_ref(symbol)}) {{"
        )
        with writer.block(signature):
            with writer.block("switch vv := v.(type) {"):
                for member in sorted(self.shape.members, key=lambda m: m.member_name):
                    variant = ctx.symbol_provider.variant_symbol(self.shape, member)
                    writer.write(f"case {writer.pointer_ref(variant)}:")
                    writer.indent()
                    member_schema = member_schema_ref(ctx, writer, self.shape, member)
                    writer.write(f"s.WriteUnion(schema, {member_schema}, vv)")
                    writer.dedent()


class UnionVariantSerializer:
    """Writes the ``Serialize`` method of each variant type of a union."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        for index, member in enumerate(self.shape.members):
            target = ctx.model.expect_target(member)
            check_supported(target, str(member.id))
            if index:
                writer.write()
            name = union_member_type_name(self.shape, member)
            with writer.block(f"func (v *{name}) Serialize(s {smithy}.ShapeSerializer) {{"):
                writer.write(write_value(target, "nil", "v.Value"))
