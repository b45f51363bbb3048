# topmark:header:start
#
#   project      : ShapeGen
#   file         : dependencies.py
#   file_relpath : src/shapegen/codegen/dependencies.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Go packages referenced by generated code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from shapegen.codegen.symbols import Symbol, namespace_reference

SMITHY_GO_MODULE: Final[str] = "github.com/aws/smithy-go"


@dataclass(frozen=True)
class GoDependency:
    """A Go package that generated code imports.

    Attributes:
        import_path (str): Full import path.
        alias (str | None): Alias to import the package under; None for the default
            alias (last path segment).
        standard_library (bool): Whether the package ships with Go itself.
    """

    import_path: str
    alias: str | None = None
    standard_library: bool = False

    def symbol(self, name: str, *, pointable: bool = False) -> Symbol:
        """Return a reference to ``name`` exported by this package."""
        return namespace_reference(self.import_path, name, alias=self.alias, pointable=pointable)


class SmithyGoDependency:
    """Runtime and standard library packages used by the generators."""

    SMITHY: Final[GoDependency] = GoDependency(SMITHY_GO_MODULE, alias="smithy")
    SMITHY_TRAITS: Final[GoDependency] = GoDependency(f"{SMITHY_GO_MODULE}/traits")
    SMITHY_PRELUDE: Final[GoDependency] = GoDependency(f"{SMITHY_GO_MODULE}/prelude")

    TIME: Final[GoDependency] = GoDependency("time", standard_library=True)
    FMT: Final[GoDependency] = GoDependency("fmt", standard_library=True)
    IO: Final[GoDependency] = GoDependency("io", standard_library=True)
    MATH_BIG: Final[GoDependency] = GoDependency("math/big", standard_library=True)
