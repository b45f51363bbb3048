# topmark:header:start
#
#   project      : ShapeGen
#   file         : symbols.py
#   file_relpath : src/shapegen/codegen/symbols.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generated-code identities.

A `Symbol` names a Go type (or any other identifier) together with the package that
defines it. Symbols are pure data: this module never checks for duplicates. Use of
a symbol from another package goes through `ImportDeclarations`, which is where
alias collisions are rejected.

Two factories mirror the two semantics a generated type can have:

* `value_symbol`: the representation is copied by value;
* `reference_symbol`: the representation may be shared, so references to it are
  pointers (optional members, recursive structures).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.model.shape_id import ShapeId


@dataclass(frozen=True)
class Symbol:
    """Identity of a generated or referenced Go identifier.

    Attributes:
        name (str): Display name, e.g. ``GetForecastInput`` or ``[]byte``.
        namespace (str): Import path of the defining package. Empty means the
            current compilation unit (no import required).
        pointable (bool): Reference semantics; references are rendered as pointers.
        shape (ShapeId | None): Id of the shape this symbol was derived from.
        definition_file (str): Relative path of the file defining the type, for
            symbols that the generator itself defines.
        universe (bool): Predeclared Go type; never imported.
        alias (str | None): Package alias to use instead of the default one.
        is_slice (bool): Slice of `element`.
        is_map (bool): ``map[string]`` of `element`.
        element (Symbol | None): Element (slice) or value (map) symbol.
        archetype (ShapeId | None): Shape this symbol's shape was cloned from.
    """

    name: str
    namespace: str = ""
    pointable: bool = False
    shape: ShapeId | None = None
    definition_file: str = ""
    universe: bool = False
    alias: str | None = None
    is_slice: bool = False
    is_map: bool = False
    element: Symbol | None = None
    archetype: ShapeId | None = None

    @property
    def is_collection(self) -> bool:
        """Whether the symbol is a slice or a map."""
        return self.is_slice or self.is_map

    @property
    def defines_type(self) -> bool:
        """Whether the generator writes this symbol's type definition."""
        return bool(self.definition_file)

    @property
    def full_name(self) -> str:
        """``namespace.name``, or just ``name`` without a namespace."""
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def with_shape(self, shape: ShapeId, *, pointable: bool | None = None) -> Symbol:
        """Return a copy bound to ``shape``, optionally overriding `pointable`."""
        if pointable is None:
            return replace(self, shape=shape)
        return replace(self, shape=shape, pointable=pointable)

    def __str__(self) -> str:
        return self.full_name


def value_symbol(name: str, namespace: str = "", **kwargs: Any) -> Symbol:
    """Create a symbol with value semantics.

    Args:
        name (str): Display name; must be a valid Go identifier or type expression.
        namespace (str): Import path of the defining package; empty for local types.
        **kwargs (Any): Any other `Symbol` field.

    Returns:
        Symbol: The new symbol.
    """
    return Symbol(name=name, namespace=namespace, pointable=False, **kwargs)


def reference_symbol(name: str, namespace: str = "", **kwargs: Any) -> Symbol:
    """Create a symbol with reference semantics (rendered through a pointer)."""
    return Symbol(name=name, namespace=namespace, pointable=True, **kwargs)


def namespace_reference(
    import_path: str, name: str, *, alias: str | None = None, pointable: bool = False
) -> Symbol:
    """Reference identifier ``name`` exported by package ``import_path``.

    Used for runtime and standard library identifiers the generator never defines,
    such as ``smithy.Schema`` or ``time.Time``.
    """
    return Symbol(name, import_path, pointable, alias=alias)


def slice_of(element: Symbol) -> Symbol:
    """Return the ``[]element`` symbol."""
    return Symbol(f"[]{element.name}", "", False, is_slice=True, element=element)


def map_of(value: Symbol) -> Symbol:
    """Return the ``map[string]value`` symbol."""
    return Symbol(f"map[string]{value.name}", "", False, is_map=True, element=value)


_UNIVERSE_NAMES: Final[tuple[str, ...]] = (
    "any",
    "bool",
    "byte",
    "comparable",
    "complex64",
    "complex128",
    "error",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
)

UNIVERSE_TYPES: Final[Mapping[str, Symbol]] = MappingProxyType(
    {name: Symbol(name, universe=True) for name in _UNIVERSE_NAMES}
)
"""Predeclared Go types, keyed by name. Read-only."""


def universe(name: str) -> Symbol:
    """Return the predeclared type ``name``.

    Raises:
        KeyError: If ``name`` is not a predeclared Go type.
    """
    return UNIVERSE_TYPES[name]
