# topmark:header:start
#
#   project      : ShapeGen
#   file         : delegator.py
#   file_relpath : src/shapegen/codegen/delegator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Routing of generated fragments to output units.

The `WriterDelegator` is the single owner of the in-memory output units of a pass.
Each unit is a `GoWriter` keyed by its normalized relative path; units are created
on first use and kept in insertion order. Independent writes to the same unit are
separated by one blank line.

`flush()` renders every unit (banner, package clause, imports, body) into the
manifest and then forgets all units, so the next `use_*` call starts a new pass.

Namespace defaulting: a symbol or request whose namespace is empty or ``"."``
resolves to the root module path.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Final

from shapegen.codegen.writer import GoWriter
from shapegen.config.logging import get_logger
from shapegen.constants import GO_FILE_EXTENSION, GO_TEST_FILE_SUFFIX, GO_TEST_PACKAGE_SUFFIX
from shapegen.core.errors import CodegenError, MissingStateError

if TYPE_CHECKING:
    from shapegen.codegen.manifest import FileManifest
    from shapegen.codegen.symbol_provider import SymbolProvider
    from shapegen.codegen.symbols import Symbol
    from shapegen.codegen.writer import Writable
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shapes import Shape

logger: ShapegenLogger = get_logger(__name__)

_CURRENT_PACKAGE: Final[str] = "."


def normalize_path(filename: str) -> str:
    """Return ``filename`` as a normalized relative POSIX path (``./a/../b.go`` -> ``b.go``)."""
    return posixpath.normpath(filename.replace("\\", "/")).lstrip("/")


def companion_test_filename(filename: str) -> str:
    """Return the companion test file name (``types.go`` -> ``types_test.go``)."""
    stem, ext = posixpath.splitext(filename)
    return f"{stem}{GO_TEST_FILE_SUFFIX}{ext or GO_FILE_EXTENSION}"


class WriterDelegator:
    """Hands out per-unit writers and flushes them to a manifest.

    Args:
        manifest (FileManifest): Destination of the finalized units.
        symbol_provider (SymbolProvider): Resolves shapes to their defining symbols.
        module_name (str): Root module path, used when a namespace is empty or ``"."``.

    Raises:
        MissingStateError: If ``module_name`` is empty.
    """

    def __init__(
        self,
        manifest: FileManifest,
        symbol_provider: SymbolProvider,
        module_name: str,
    ) -> None:
        if not module_name:
            raise MissingStateError("module_name", type(self).__name__)
        self.manifest: FileManifest = manifest
        self.symbol_provider: SymbolProvider = symbol_provider
        self.module_name: str = module_name
        self._writers: dict[str, GoWriter] = {}

    @property
    def units(self) -> list[str]:
        """Paths of the units created so far, in creation order."""
        return list(self._writers)

    def resolve_namespace(self, namespace: str) -> str:
        """Apply the namespace defaulting rule."""
        if not namespace or namespace == _CURRENT_PACKAGE:
            return self.module_name
        return namespace

    # --- checkout -------------------------------------------------------

    def use_shape_writer(self, shape: Shape, writable: Writable) -> None:
        """Write into the unit defining ``shape``'s symbol."""
        symbol = self.symbol_provider.to_symbol(shape)
        self.use_symbol_writer(symbol, writable)

    def use_symbol_writer(self, symbol: Symbol, writable: Writable) -> None:
        """Write into the unit defining ``symbol``.

        Raises:
            MissingStateError: If the symbol has no definition file.
        """
        if not symbol.definition_file:
            raise MissingStateError("definition_file", f"Symbol {symbol.full_name}")
        self.use_file_writer(symbol.definition_file, symbol.namespace, writable)

    def use_shape_test_writer(self, shape: Shape, writable: Writable) -> None:
        """Write into the internal test unit (same package) of ``shape``'s file."""
        symbol = self.symbol_provider.to_symbol(shape)
        if not symbol.definition_file:
            raise MissingStateError("definition_file", f"Symbol {symbol.full_name}")
        self.use_file_writer(companion_test_filename(symbol.definition_file), symbol.namespace, writable)

    def use_shape_exported_test_writer(self, shape: Shape, writable: Writable) -> None:
        """Write into the black-box test unit (``<package>_test``) of ``shape``'s file."""
        symbol = self.symbol_provider.to_symbol(shape)
        if not symbol.definition_file:
            raise MissingStateError("definition_file", f"Symbol {symbol.full_name}")
        namespace = self.resolve_namespace(symbol.namespace) + GO_TEST_PACKAGE_SUFFIX
        self.use_file_writer(companion_test_filename(symbol.definition_file), namespace, writable)

    def use_file_writer(self, filename: str, namespace: str, writable: Writable) -> None:
        """Write into the unit at ``filename`` with package ``namespace``.

        Args:
            filename (str): Relative file path; normalized before use.
            namespace (str): Import path of the unit; see `resolve_namespace`.
            writable (Writable): Fragment to write.

        Raises:
            CodegenError: If the unit already exists under a different namespace.
        """
        writer = self._checkout(filename, self.resolve_namespace(namespace))
        writable(writer)

    def _checkout(self, filename: str, namespace: str) -> GoWriter:
        path = normalize_path(filename)
        writer = self._writers.get(path)
        if writer is None:
            logger.trace("New unit %s (%s)", path, namespace)
            writer = GoWriter(namespace)
            self._writers[path] = writer
            return writer
        if writer.namespace != namespace:
            raise CodegenError(
                f"Unit {path} belongs to {writer.namespace}, cannot write {namespace} code to it"
            )
        if not writer.is_empty:
            writer.write()
        return writer

    # --- finalize -------------------------------------------------------

    def dependencies(self) -> list[str]:
        """Sorted, unique import paths referenced across all pending units."""
        paths: set[str] = set()
        for writer in self._writers.values():
            paths.update(path for _alias, path in writer.imports)
        return sorted(paths)

    def flush(self) -> list[str]:
        """Write every unit to the manifest, then clear all units.

        Returns:
            list[str]: The paths written, in unit creation order.
        """
        written: list[str] = []
        for path, writer in self._writers.items():
            self.manifest.write_file(path, writer.render())
            written.append(path)
        logger.info("Flushed %d units", len(written))
        self._writers.clear()
        return written
