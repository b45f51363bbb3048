# topmark:header:start
#
#   project      : ShapeGen
#   file         : manifest.py
#   file_relpath : src/shapegen/codegen/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File sinks receiving finalized output units.

The delegator hands each unit to a manifest exactly once, at flush time. Paths are
relative, POSIX style (``types/types.go``).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from shapegen.config.logging import get_logger

if TYPE_CHECKING:
    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)


@runtime_checkable
class FileManifest(Protocol):
    """Destination of generated files."""

    def write_file(self, path: str, text: str) -> None:
        """Store ``text`` under the relative ``path``."""
        ...

    @property
    def files(self) -> list[str]:
        """Relative paths written so far, in write order."""
        ...


class MemoryManifest:
    """Keeps generated files in memory. Used by tests and dry runs."""

    def __init__(self) -> None:
        self.contents: dict[str, str] = {}

    def write_file(self, path: str, text: str) -> None:
        self.contents[path] = text

    @property
    def files(self) -> list[str]:
        return list(self.contents)

    def get(self, path: str) -> str | None:
        """Return the text written to ``path``, or None."""
        return self.contents.get(path)


class DirectoryManifest:
    """Writes generated files below a base directory, creating parents as needed.

    Args:
        base_dir (Path | str): Root of the generated tree.
    """

    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir: Path = Path(base_dir)
        self._files: list[str] = []

    def write_file(self, path: str, text: str) -> None:
        """Write ``text`` to ``base_dir / path`` as UTF-8.

        Raises:
            OSError: If the file or its parent directories cannot be written.
        """
        target = self.base_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        self._files.append(path)
        logger.debug("Wrote %s (%d bytes)", target, len(text.encode("utf-8")))

    @property
    def files(self) -> list[str]:
        return list(self._files)
