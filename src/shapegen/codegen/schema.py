# topmark:header:start
#
#   project      : ShapeGen
#   file         : schema.py
#   file_relpath : src/shapegen/codegen/schema.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime type descriptors ("schemas") for shapes.

For each shape one descriptor is emitted into ``schemas/schemas.go``:

```go
var Forecast = &smithy.Schema{
	ID: smithy.ShapeID{Namespace: "example.weather", Name: "Forecast"},
	Type: smithy.ShapeTypeStructure,
	Members: map[string]*smithy.Schema{
		"chance": smithy.NewMember("chance", prelude.Float, &traits.JSONName{Name: "c",}),
	},
	Traits: map[string]smithy.Trait{
		"smithy.api#sensitive": &traits.Sensitive{},
	},
}

var Forecast_chance = Forecast.Members["chance"]
```

Members whose target leads back to the shape are bound in a ``func init()``
block instead, so package initialization has no reference cycle and every
descriptor is emitted exactly once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.symbol_provider import capitalize
from shapegen.codegen.symbols import namespace_reference
from shapegen.codegen.traits import render_traits
from shapegen.config.logging import get_logger
from shapegen.model.prelude import is_prelude_shape
from shapegen.model.shapes import ShapeType
from shapegen.model.walker import recursive_members

if TYPE_CHECKING:
    from shapegen.codegen.context import CodegenContext
    from shapegen.codegen.writer import GoWriter
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shapes import MemberShape, Shape

logger: ShapegenLogger = get_logger(__name__)

SCHEMAS_FILE: Final[str] = "./schemas/schemas.go"

EXPORTED_SCHEMA_TYPES: Final[frozenset[ShapeType]] = frozenset(
    {
        ShapeType.STRUCTURE,
        ShapeType.UNION,
        ShapeType.ENUM,
        ShapeType.INT_ENUM,
        ShapeType.OPERATION,
        ShapeType.SERVICE,
    }
)

_NO_SCHEMA_TYPES: Final[frozenset[ShapeType]] = frozenset({ShapeType.RESOURCE, ShapeType.MEMBER})


def schema_name(shape: Shape) -> str:
    """Go identifier of ``shape``'s descriptor; unexported (``_Name``) for private kinds."""
    name = capitalize(shape.id.name)
    return name if shape.type in EXPORTED_SCHEMA_TYPES else f"_{name}"


def member_schema_name(shape: Shape, member: MemberShape) -> str:
    """Go identifier of the descriptor of ``member`` of ``shape``."""
    return f"{schema_name(shape)}_{member.member_name}"


def schema_ref(ctx: CodegenContext, writer: GoWriter, shape: Shape) -> str:
    """Reference ``shape``'s descriptor from code written by ``writer``.

    Prelude shapes resolve to the runtime prelude package.
    """
    if is_prelude_shape(shape.id):
        return writer.qualify(SmithyGoDependency.SMITHY_PRELUDE.symbol(shape.id.name))
    return writer.qualify(namespace_reference(ctx.schemas_namespace, schema_name(shape)))


def member_schema_ref(ctx: CodegenContext, writer: GoWriter, shape: Shape, member: MemberShape) -> str:
    """Reference the member descriptor of ``member`` from code written by ``writer``."""
    return writer.qualify(namespace_reference(ctx.schemas_namespace, member_schema_name(shape, member)))


class SchemaGenerator:
    """Writes the descriptor of one shape.

    Instances are writables: pass them to `WriterDelegator.use_file_writer`.

    Args:
        ctx (CodegenContext): The generation context.
        shape (Shape): The shape to describe.
    """

    def __init__(self, ctx: CodegenContext, shape: Shape) -> None:
        self.ctx: CodegenContext = ctx
        self.shape: Shape = shape

    def __call__(self, writer: GoWriter) -> None:
        self.generate(writer)

    def generate(self, writer: GoWriter) -> None:
        shape = self.shape
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        name = schema_name(shape)
        cyclic = {m.id for m in recursive_members(self.ctx.model, shape)}

        with writer.block(f"var {name} = &{smithy}.Schema{{"):
            writer.write(
                f"ID: {smithy}.ShapeID{{Namespace: {_quote(shape.id.namespace)}, "
                f"Name: {_quote(shape.id.name)}}},"
            )
            writer.write(f"Type: {smithy}.ShapeType{shape.type.capitalized},")
            if shape.members:
                inline = [m for m in shape.members if m.id not in cyclic]
                if inline:
                    with writer.block(f"Members: map[string]*{smithy}.Schema{{", "},"):
                        for member in inline:
                            writer.write(f"{_quote(member.member_name)}: {self._new_member(writer, member)},")
                else:
                    writer.write(f"Members: map[string]*{smithy}.Schema{{}},")
            traits = render_traits(writer, shape.traits)
            if traits:
                with writer.block(f"Traits: map[string]{smithy}.Trait{{", "},"):
                    for trait_id, expr in traits:
                        writer.write(f"{_quote(trait_id)}: {expr},")

        for member in shape.members:
            if member.id in cyclic:
                continue
            writer.write()
            key = _quote(member.member_name)
            writer.write(f"var {member_schema_name(shape, member)} = {name}.Members[{key}]")

        if cyclic:
            self._write_cyclic_members(writer, smithy, [m for m in shape.members if m.id in cyclic])

    def _write_cyclic_members(self, writer: GoWriter, smithy: str, members: list[MemberShape]) -> None:
        name = schema_name(self.shape)
        writer.write()
        for member in members:
            writer.write(f"var {member_schema_name(self.shape, member)} *{smithy}.Schema")
        writer.write()
        with writer.block("func init() {"):
            for member in members:
                key = _quote(member.member_name)
                writer.write(f"{name}.Members[{key}] = {self._new_member(writer, member)}")
                writer.write(f"{member_schema_name(self.shape, member)} = {name}.Members[{key}]")
        logger.debug("Schema %s: %d cyclic member(s) bound in init()", name, len(members))

    def _new_member(self, writer: GoWriter, member: MemberShape) -> str:
        smithy = writer.add_dependency(SmithyGoDependency.SMITHY)
        target = self.ctx.model.expect_target(member)
        args = [_quote(member.member_name), schema_ref(self.ctx, writer, target)]
        args.extend(expr for _trait_id, expr in render_traits(writer, member.traits))
        return f"{smithy}.NewMember({', '.join(args)})"


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def has_schema(shape: Shape) -> bool:
    """Whether a descriptor is generated for ``shape``."""
    return shape.type not in _NO_SCHEMA_TYPES and not is_prelude_shape(shape.id)


def write_schema(ctx: CodegenContext, shape: Shape) -> bool:
    """Emit ``shape``'s descriptor unless it was already emitted this pass.

    Returns:
        bool: True if a descriptor was written.

    Raises:
        SymbolCollisionError: If another shape already uses the same descriptor name.
    """
    if not has_schema(shape):
        return False
    if not ctx.claim("schema", ctx.schemas_namespace, shape.id):
        return False
    ctx.reserve_name(ctx.schemas_namespace, schema_name(shape), shape.id)
    ctx.delegator.use_file_writer(SCHEMAS_FILE, ctx.schemas_namespace, SchemaGenerator(ctx, shape))
    return True
