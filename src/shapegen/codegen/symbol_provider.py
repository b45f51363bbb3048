# topmark:header:start
#
#   project      : ShapeGen
#   file         : symbol_provider.py
#   file_relpath : src/shapegen/codegen/symbol_provider.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape to `Symbol` mapping for one generation pass.

The provider is the identity authority of a pass:

* results are memoized per shape id, so asking twice returns the identical object;
* two distinct shapes that would define the same ``(namespace, name)`` raise
  `SymbolCollisionError`;
* member names are capitalized and escaped against reserved names.

Type mapping:

| shape kind               | Go type                              | semantics |
|--------------------------|--------------------------------------|-----------|
| blob                     | ``[]byte`` (``io.ReadCloser`` when streaming) | value |
| boolean, numbers, string | predeclared type                      | reference |
| timestamp                | ``time.Time``                         | reference |
| bigInteger / bigDecimal  | ``big.Int`` / ``big.Float``           | reference |
| document                 | ``smithy.Document``                   | value     |
| list / set               | slice of the member's symbol          | value     |
| map                      | ``map[string]`` of the value symbol   | value     |
| enum / intEnum           | named type in ``types/enums.go``      | value     |
| structure                | named type in ``types/types.go`` (or ``errors.go``) | reference |
| union                    | interface in ``types/types.go``       | value     |
| operation                | named type in ``api_op_<Name>.go``    | value     |
| service                  | ``Client`` in ``api_client.go``       | value     |
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.symbols import (
    UNIVERSE_TYPES,
    map_of,
    reference_symbol,
    slice_of,
    value_symbol,
)
from shapegen.codegen.visitor import ShapeVisitor
from shapegen.config.logging import get_logger
from shapegen.constants import SYNTHETIC_NAMESPACE
from shapegen.core.errors import CodegenError, SymbolCollisionError
from shapegen.model.shapes import MemberShape, ShapeType
from shapegen.model.traits import SyntheticCloneTrait, TraitIds

if TYPE_CHECKING:
    from shapegen.codegen.symbols import Symbol
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.model import Model
    from shapegen.model.shape_id import ShapeId
    from shapegen.model.shapes import Shape

logger: ShapegenLogger = get_logger(__name__)

UNKNOWN_UNION_MEMBER: Final[str] = "UnknownUnionMember"

_RESERVED_MEMBER_NAMES: Final[frozenset[str]] = frozenset({"String"})
_RESERVED_ERROR_MEMBER_NAMES: Final[frozenset[str]] = frozenset(
    {"ErrorCode", "ErrorFault", "Unwrap", "Error"}
)


def capitalize(name: str) -> str:
    """Upper-case the first character of ``name``."""
    return name[:1].upper() + name[1:]


def escape(name: str) -> str:
    """Escape a reserved name with a trailing underscore."""
    return f"{name}_"


def union_member_type_name(union: Shape, member: MemberShape) -> str:
    """Name of the variant type wrapping ``member`` of ``union``."""
    return f"{capitalize(union.id.name)}Member{capitalize(member.member_name)}"


class SymbolProvider(ShapeVisitor["Symbol"]):
    """Assigns a `Symbol` to every shape of a model.

    Args:
        model (Model): The model being generated.
        module_name (str): Go module path of the generated package.
    """

    def __init__(self, model: Model, module_name: str) -> None:
        self.model: Model = model
        self.module_name: str = module_name
        self.types_namespace: str = f"{module_name}/types"
        self._symbols: dict[ShapeId, Symbol] = {}
        self._definitions: dict[tuple[str, str], ShapeId] = {}
        self._pending: set[ShapeId] = set()
        self._reserved_names: frozenset[str] = frozenset(
            {UNKNOWN_UNION_MEMBER}
            | {
                union_member_type_name(union, member)
                for union in model.shapes(ShapeType.UNION)
                for member in union.members
            }
        )

    # --- public API -----------------------------------------------------

    def to_symbol(self, shape: Shape | MemberShape) -> Symbol:
        """Return the symbol of ``shape``; members resolve to their target's symbol.

        Raises:
            SymbolCollisionError: If the symbol's identity is already claimed by a
                different shape.
            UnsupportedShapeError: If the shape kind has no Go representation.
        """
        if isinstance(shape, MemberShape):
            return self.member_shape(shape)
        cached = self._symbols.get(shape.id)
        if cached is not None:
            return cached
        if shape.id in self._pending:
            raise CodegenError(f"Collection {shape.id} contains itself without an enclosing structure")
        self._pending.add(shape.id)
        try:
            symbol = self._link_archetype(shape, self.visit(shape))
        finally:
            self._pending.discard(shape.id)
        self._claim(shape, symbol)
        self._symbols[shape.id] = symbol
        logger.trace("Symbol for %s: %s", shape.id, symbol.full_name or symbol.name)
        return symbol

    def to_member_name(self, member: MemberShape) -> str:
        """Return the Go field name of ``member``."""
        name = capitalize(member.member_name)
        reserved = _RESERVED_MEMBER_NAMES
        container = self.model.get_shape(member.container)
        if container is not None and container.has_trait(TraitIds.ERROR):
            reserved = reserved | _RESERVED_ERROR_MEMBER_NAMES
        return escape(name) if name in reserved else name

    def variant_symbol(self, union: Shape, member: MemberShape) -> Symbol:
        """Return the symbol of the variant type wrapping ``member`` of ``union``."""
        return reference_symbol(
            union_member_type_name(union, member),
            self.types_namespace,
            shape=member.id,
            definition_file="./types/types.go",
        )

    def symbols(self) -> dict[ShapeId, Symbol]:
        """Return a snapshot of the symbols assigned so far."""
        return dict(self._symbols)

    # --- helpers --------------------------------------------------------

    def _shape_name(self, shape: Shape) -> str:
        name = capitalize(shape.id.name)
        return escape(name) if name in self._reserved_names else name

    def _claim(self, shape: Shape, symbol: Symbol) -> None:
        if not symbol.defines_type:
            return
        key = (symbol.namespace, symbol.name)
        owner = self._definitions.setdefault(key, shape.id)
        if owner != shape.id:
            raise SymbolCollisionError(symbol.namespace, symbol.name, owner, shape.id)

    @staticmethod
    def _link_archetype(shape: Shape, symbol: Symbol) -> Symbol:
        trait = shape.get_trait(SyntheticCloneTrait.trait_id)
        if isinstance(trait, SyntheticCloneTrait):
            return replace(symbol, archetype=trait.archetype)
        return symbol

    def _scalar(self, shape: Shape, go_type: str) -> Symbol:
        return UNIVERSE_TYPES[go_type].with_shape(shape.id, pointable=True)

    def _types_symbol(self, shape: Shape, filename: str, *, pointable: bool) -> Symbol:
        factory = reference_symbol if pointable else value_symbol
        return factory(
            self._shape_name(shape),
            self.types_namespace,
            shape=shape.id,
            definition_file=f"./types/{filename}",
        )

    # --- kinds ----------------------------------------------------------

    def blob_shape(self, shape: Shape) -> Symbol:
        if shape.has_trait(TraitIds.STREAMING):
            return SmithyGoDependency.IO.symbol("ReadCloser").with_shape(shape.id)
        return value_symbol("[]byte", shape=shape.id, universe=True)

    def boolean_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "bool")

    def string_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "string")

    def byte_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "int8")

    def short_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "int16")

    def integer_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "int32")

    def long_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "int64")

    def float_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "float32")

    def double_shape(self, shape: Shape) -> Symbol:
        return self._scalar(shape, "float64")

    def timestamp_shape(self, shape: Shape) -> Symbol:
        return SmithyGoDependency.TIME.symbol("Time", pointable=True).with_shape(shape.id)

    def big_integer_shape(self, shape: Shape) -> Symbol:
        return SmithyGoDependency.MATH_BIG.symbol("Int", pointable=True).with_shape(shape.id)

    def big_decimal_shape(self, shape: Shape) -> Symbol:
        return SmithyGoDependency.MATH_BIG.symbol("Float", pointable=True).with_shape(shape.id)

    def document_shape(self, shape: Shape) -> Symbol:
        return SmithyGoDependency.SMITHY.symbol("Document").with_shape(shape.id)

    def enum_shape(self, shape: Shape) -> Symbol:
        return self._types_symbol(shape, "enums.go", pointable=False)

    def int_enum_shape(self, shape: Shape) -> Symbol:
        return self._types_symbol(shape, "enums.go", pointable=False)

    def list_shape(self, shape: Shape) -> Symbol:
        element = self.to_symbol(shape.expect_member("member"))
        return replace(slice_of(element), shape=shape.id)

    def map_shape(self, shape: Shape) -> Symbol:
        value = self.to_symbol(shape.expect_member("value"))
        return replace(map_of(value), shape=shape.id)

    def structure_shape(self, shape: Shape) -> Symbol:
        if shape.id.namespace == SYNTHETIC_NAMESPACE:
            return reference_symbol(
                self._shape_name(shape),
                self.module_name,
                shape=shape.id,
                definition_file=f"./api_op_{operation_name(shape)}.go",
            )
        filename = "errors.go" if shape.has_trait(TraitIds.ERROR) else "types.go"
        return self._types_symbol(shape, filename, pointable=True)

    def union_shape(self, shape: Shape) -> Symbol:
        return self._types_symbol(shape, "types.go", pointable=False)

    def member_shape(self, shape: MemberShape) -> Symbol:
        return self.to_symbol(self.model.expect_shape(shape.target))

    def operation_shape(self, shape: Shape) -> Symbol:
        name = self._shape_name(shape)
        return value_symbol(
            name, self.module_name, shape=shape.id, definition_file=f"./api_op_{name}.go"
        )

    def resource_shape(self, shape: Shape) -> Symbol:
        return value_symbol("nil", shape=shape.id, universe=True)

    def service_shape(self, shape: Shape) -> Symbol:
        return value_symbol(
            "Client", self.module_name, shape=shape.id, definition_file="./api_client.go"
        )


def operation_name(shape: Shape) -> str:
    """Return the operation a synthetic ``<Op>Input`` / ``<Op>Output`` belongs to."""
    name = capitalize(shape.id.name)
    for suffix in ("Input", "Output"):
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name
