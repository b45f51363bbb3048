# topmark:header:start
#
#   project      : ShapeGen
#   file         : imports.py
#   file_relpath : src/shapegen/codegen/imports.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-unit import bookkeeping and alias collision detection.

Every output unit owns exactly one `ImportDeclarations`. It is the single place that
enforces "no two different packages may claim the same short name in one file":
symbols are handed out freely, but any use of a symbol from another package is
registered here first.

Rendering is deterministic: one line per alias, sorted by alias.

Example:
    ```python
    imports = ImportDeclarations("example.com/weather/types")
    imports.add_import("github.com/aws/smithy-go", "smithy")
    imports.add_import("time")
    print(imports.render())
    # import (
    # 	smithy "github.com/aws/smithy-go"
    # 	"time"
    # )
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from shapegen.config.logging import get_logger
from shapegen.core.errors import ImportCollisionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)

GLOBAL_IMPORT_ALIAS: Final[str] = "."


def default_alias(import_path: str) -> str:
    """Return the alias Go derives for ``import_path`` (its last path segment)."""
    return import_path.rstrip("/").rsplit("/", 1)[-1]


class ImportDeclarations:
    """Alias to import path mapping for one output unit.

    Args:
        namespace (str): Import path of the unit itself. Imports of this path are
            ignored.
    """

    def __init__(self, namespace: str = "") -> None:
        self.namespace: str = namespace
        self._imports: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._imports)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(sorted(self._imports.items()))

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._imports.values()

    def alias_for(self, import_path: str) -> str | None:
        """Return the alias ``import_path`` was registered under, or None."""
        for alias, path in self._imports.items():
            if path == import_path:
                return alias
        return None

    def add_import(self, import_path: str, alias: str | None = None) -> str | None:
        """Register ``import_path`` under ``alias``.

        Blank paths and the unit's own namespace are ignored. Registering the same
        alias and path again is a no-op.

        Args:
            import_path (str): The package to import.
            alias (str | None): Requested alias; None or blank for the default alias.

        Returns:
            str | None: The alias in effect, or None when nothing was registered.

        Raises:
            ImportCollisionError: If ``alias`` is ``"."`` or already bound to a
                different import path.
        """
        path: str = import_path.strip()
        if not path or path == self.namespace:
            return None

        effective: str = alias.strip() if alias and alias.strip() else default_alias(path)
        if effective == GLOBAL_IMPORT_ALIAS:
            raise ImportCollisionError(effective, path)

        previous: str | None = self._imports.get(effective)
        if previous is not None and previous != path:
            raise ImportCollisionError(effective, path, previous)
        if previous is None:
            logger.trace("%s: import %s as %s", self.namespace or "<unit>", path, effective)
            self._imports[effective] = path
        return effective

    def add_imports(self, other: ImportDeclarations) -> None:
        """Merge every entry of ``other`` under the same collision rules."""
        for alias, path in other:
            self.add_import(path, alias)

    def render(self) -> str:
        """Render the import block, or an empty string when there is nothing to import."""
        if not self._imports:
            return ""
        lines: list[str] = []
        for alias, path in self:
            if alias == default_alias(path):
                lines.append(f'\t"{path}"')
            else:
                lines.append(f'\t{alias} "{path}"')
        body = "\n".join(lines)
        return f"import (\n{body}\n)\n\n"
