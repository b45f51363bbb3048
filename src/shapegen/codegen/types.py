# topmark:header:start
#
#   project      : ShapeGen
#   file         : types.py
#   file_relpath : src/shapegen/codegen/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Go type definitions for structures, enums and unions.

Structures become structs whose fields use pointers for reference-semantics
targets. Enums become named ``string`` / ``int32`` types with one constant per
value. Unions become interfaces implemented by one ``<Union>Member<M>`` struct per
member; values with an unknown tag decode into `UNKNOWN_UNION_MEMBER`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.symbol_provider import (
    UNKNOWN_UNION_MEMBER,
    capitalize,
    union_member_type_name,
)
from shapegen.config.logging import get_logger
from shapegen.constants import SYNTHETIC_NAMESPACE
from shapegen.core.errors import CodegenError
from shapegen.model.prelude import is_prelude_shape
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import ShapeType
from shapegen.model.traits import TraitIds

if TYPE_CHECKING:
    from shapegen.codegen.context import CodegenContext
    from shapegen.codegen.writer import GoWriter
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shapes import MemberShape, Shape

logger: ShapegenLogger = get_logger(__name__)

_UNKNOWN_MEMBER_ID: ShapeId = ShapeId(SYNTHETIC_NAMESPACE, UNKNOWN_UNION_MEMBER)


def _trait_value(shape: Shape | MemberShape, trait_id: str) -> Any:
    trait = shape.get_trait(trait_id)
    return getattr(trait, "value", None) if trait is not None else None


def write_documentation(writer: GoWriter, shape: Shape | MemberShape) -> None:
    """Write the ``@documentation`` text of ``shape`` as a Go comment, if any."""
    docs = _trait_value(shape, TraitIds.DOCUMENTATION)
    if not isinstance(docs, str) or not docs.strip():
        return
    for line in docs.strip().splitlines():
        writer.write(f"// {line.rstrip()}".rstrip())


class StructureGenerator:
    """Writes a struct, plus the error interface methods for ``@error`` structures."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        provider = self.ctx.symbol_provider
        symbol = provider.to_symbol(self.shape)

        write_documentation(writer, self.shape)
        with writer.block(f"type {symbol.name} struct {{"):
            for member in self.shape.members:
                write_documentation(writer, member)
                field_type = writer.pointer_ref(provider.to_symbol(member))
                writer.write(f"{provider.to_member_name(member)} {field_type}")

        if self.shape.has_trait(TraitIds.ERROR):
            self._write_error_methods(writer, symbol.name)

    def _write_error_methods(self, writer: GoWriter, name: str) -> None:
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        fault = "FaultServer" if _trait_value(self.shape, TraitIds.ERROR) == "server" else "FaultClient"
        message = self._message_member()

        writer.write()
        with writer.block(f"func (e *{name}) Error() string {{"):
            if message is None:
                writer.write("return e.ErrorCode()")
            else:
                fmt = writer.add_dependency(SmithyGoDependency.FMT)
                with writer.block(f"if e.{message} == nil {{"):
                    writer.write("return e.ErrorCode()")
                writer.write(f'return {fmt}.Sprintf("%s: %s", e.ErrorCode(), *e.{message})')
        writer.write()
        with writer.block(f"func (e *{name}) ErrorCode() string {{"):
            writer.write(f'return "{self.shape.id.name}"')
        writer.write()
        with writer.block(f"func (e *{name}) ErrorFault() {smithy}.ErrorFault {{"):
            writer.write(f"return {smithy}.{fault}")

    def _message_member(self) -> str | None:
        for member in self.shape.members:
            if member.member_name.lower() != "message":
                continue
            if self.ctx.model.expect_target(member).type is ShapeType.STRING:
                return self.ctx.symbol_provider.to_member_name(member)
        return None


class EnumGenerator:
    """Writes an enum or intEnum type, its constants and a ``Values`` method."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        ctx = self.ctx
        name = ctx.symbol_provider.to_symbol(self.shape).name
        base = "string" if self.shape.type is ShapeType.ENUM else "int32"
        values = [
            (f"{name}{capitalize(m.member_name)}", self.enum_value(index, m))
            for index, m in enumerate(self.shape.members)
        ]
        for const_name, _value in values:
            ctx.reserve_name(ctx.types_namespace, const_name, self.shape.id)

        write_documentation(writer, self.shape)
        writer.write(f"type {name} {base}")
        if values:
            writer.write()
            writer.write(f"// Enum values for {name}")
            with writer.block("const (", ")"):
                for const_name, value in values:
                    writer.write(f"{const_name} {name} = {value}")
        writer.write()
        writer.write(f"// Values returns all known values for {name}. Note that this can be")
        writer.write("// expanded in the future, and so it is only as up to date as the client.")
        with writer.block(f"func ({name}) Values() []{name} {{"):
            with writer.block(f"return []{name}{{"):
                for _const_name, value in values:
                    writer.write(f"{value},")

    def enum_value(self, index: int, member: MemberShape) -> str:
        """Return the Go literal of ``member``'s value.

        String enums default to the member name; intEnums default to the
        declaration index.

        Raises:
            CodegenError: If an intEnum value is not an integer.
        """
        value = _trait_value(member, TraitIds.ENUM_VALUE)
        if self.shape.type is ShapeType.ENUM:
            text = value if isinstance(value, str) else member.member_name
            return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
        if value is None:
            return str(index)
        if isinstance(value, bool) or not isinstance(value, int):
            raise CodegenError(f"intEnum value of {member.id} must be an integer, got {value!r}")
        return str(value)


class UnionGenerator:
    """Writes a union interface and its variant structs."""

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        provider = self.ctx.symbol_provider
        name = provider.to_symbol(self.shape).name
        marker = f"is{capitalize(self.shape.id.name)}"

        write_documentation(writer, self.shape)
        writer.write("//")
        writer.write("// The following types satisfy this interface:")
        for member in self.shape.members:
            writer.write(f"//\t{union_member_type_name(self.shape, member)}")
        with writer.block(f"type {name} interface {{"):
            writer.write(f"{marker}()")

        for member in self.shape.members:
            variant = union_member_type_name(self.shape, member)
            writer.write()
            write_documentation(writer, member)
            with writer.block(f"type {variant} struct {{"):
                writer.write(f"Value {writer.type_ref(provider.to_symbol(member))}")
            writer.write()
            writer.write(f"func (*{variant}) {marker}() {{}}")

        writer.write()
        writer.write(f"func (*{UNKNOWN_UNION_MEMBER}) {marker}() {{}}")


def write_unknown_union_member(writer: GoWriter) -> None:
    """Write the struct holding union values with an unrecognized tag."""
    writer.write(f"// {UNKNOWN_UNION_MEMBER} is returned when a union member is returned over the")
    writer.write("// wire, but has an unknown tag.")
    with writer.block(f"type {UNKNOWN_UNION_MEMBER} struct {{"):
        writer.write("Tag string")
        writer.write("Value []byte")


def has_type(shape: Shape) -> bool:
    """Whether a Go type definition is generated for ``shape``."""
    return not is_prelude_shape(shape.id) and shape.type in (
        ShapeType.STRUCTURE,
        ShapeType.ENUM,
        ShapeType.INT_ENUM,
        ShapeType.UNION,
    )


def write_types(ctx: CodegenContext, shape: Shape) -> bool:
    """Emit the type definition of ``shape`` into its defining unit, once per pass.

    Returns:
        bool: True if a definition was written.
    """
    if not has_type(shape):
        return False
    symbol = ctx.symbol_provider.to_symbol(shape)
    if not ctx.claim("types", ctx.delegator.resolve_namespace(symbol.namespace), shape.id):
        return False

    match shape.type:
        case ShapeType.STRUCTURE:
            ctx.delegator.use_shape_writer(shape, StructureGenerator(ctx, shape))
        case ShapeType.ENUM | ShapeType.INT_ENUM:
            ctx.delegator.use_shape_writer(shape, EnumGenerator(ctx, shape))
        case ShapeType.UNION:
            if ctx.claim("types", ctx.types_namespace, _UNKNOWN_MEMBER_ID):
                ctx.delegator.use_shape_writer(shape, write_unknown_union_member)
            ctx.delegator.use_shape_writer(shape, UnionGenerator(ctx, shape))
        case _:
            return False
    logger.debug("Type %s written to %s", symbol.name, symbol.definition_file)
    return True
