# topmark:header:start
#
#   project      : ShapeGen
#   file         : writer.py
#   file_relpath : src/shapegen/codegen/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Text buffer for one generated Go file.

A `GoWriter` accumulates the body of an output unit and owns the unit's
`ImportDeclarations`. Generators never write qualified names by hand: they ask the
writer for `type_ref()` / `pointer_ref()` / `qualify()`, which register the import
and return the name to emit.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager
from typing import TYPE_CHECKING, Final, TypeAlias

from shapegen.codegen.imports import ImportDeclarations, default_alias
from shapegen.constants import GENERATED_BANNER

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from shapegen.codegen.dependencies import GoDependency
    from shapegen.codegen.symbols import Symbol

INDENT: Final[str] = "\t"


class GoWriter:
    """Accumulates Go source for a single package file.

    Args:
        namespace (str): Import path of the unit's package. The package clause is
            its last path segment.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace: str = namespace
        self.imports: ImportDeclarations = ImportDeclarations(namespace)
        self._lines: list[str] = []
        self._level: int = 0

    @property
    def package(self) -> str:
        """Package clause name."""
        return default_alias(self.namespace)

    @property
    def is_empty(self) -> bool:
        """Whether nothing has been written to the body yet."""
        return not self._lines

    # --- text -----------------------------------------------------------

    def write(self, text: str = "") -> GoWriter:
        """Append ``text`` at the current indentation; each line is indented."""
        for line in text.split("\n"):
            self._lines.append(f"{INDENT * self._level}{line}" if line else "")
        return self

    def write_lines(self, lines: Iterable[str]) -> GoWriter:
        """Append each of ``lines``."""
        for line in lines:
            self.write(line)
        return self

    def indent(self, levels: int = 1) -> GoWriter:
        """Increase the indentation level."""
        self._level += levels
        return self

    def dedent(self, levels: int = 1) -> GoWriter:
        """Decrease the indentation level (never below zero)."""
        self._level = max(0, self._level - levels)
        return self

    @contextmanager
    def block(self, opening: str, closing: str = "}") -> Iterator[GoWriter]:
        """Write ``opening``, indent the body of the ``with`` block, then write ``closing``."""
        self.write(opening)
        self.indent()
        try:
            yield self
        finally:
            self.dedent()
            self.write(closing)

    # --- references -----------------------------------------------------

    def add_import(self, import_path: str, alias: str | None = None) -> str | None:
        """Register an import on this unit; see `ImportDeclarations.add_import`."""
        return self.imports.add_import(import_path, alias)

    def add_dependency(self, dependency: GoDependency) -> str:
        """Import ``dependency`` and return the alias to qualify its names with."""
        self.add_import(dependency.import_path, dependency.alias)
        return dependency.alias or default_alias(dependency.import_path)

    def qualify(self, symbol: Symbol) -> str:
        """Return ``symbol``'s name, qualified with its package alias when foreign."""
        if symbol.universe or not symbol.namespace or symbol.namespace == self.namespace:
            return symbol.name
        alias = self.add_import(symbol.namespace, symbol.alias)
        return f"{alias}.{symbol.name}"

    def type_ref(self, symbol: Symbol) -> str:
        """Return the Go type expression for ``symbol`` (values, never a pointer).

        Slices and maps are expanded recursively so element types are imported too.
        """
        if symbol.is_slice and symbol.element is not None:
            return f"[]{self.type_ref(symbol.element)}"
        if symbol.is_map and symbol.element is not None:
            return f"map[string]{self.type_ref(symbol.element)}"
        return self.qualify(symbol)

    def pointer_ref(self, symbol: Symbol) -> str:
        """Like `type_ref`, prefixed with ``*`` for reference-semantics symbols."""
        ref = self.type_ref(symbol)
        return f"*{ref}" if symbol.pointable else ref

    # --- output ---------------------------------------------------------

    @property
    def body(self) -> str:
        """Body text written so far."""
        return "\n".join(self._lines) + "\n" if self._lines else ""

    def render(self) -> str:
        """Return the full unit text: banner, package clause, imports, body."""
        return f"{GENERATED_BANNER}\n\npackage {self.package}\n\n{self.imports.render()}{self.body}"


Writable: TypeAlias = Callable[[GoWriter], None]
"""A deferred fragment of generated code, written into a unit by the delegator."""
