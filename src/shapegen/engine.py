# topmark:header:start
#
#   project      : ShapeGen
#   file         : engine.py
#   file_relpath : src/shapegen/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""One generation pass: model + config in, Go files out.

Steps:
    1. Optionally give every operation its own input/output structures.
    2. Compute the closure of shapes to generate (a service's closure, or every
       non-prelude shape).
    3. Assign symbols, then emit types, schemas and serde code through a single
       `WriterDelegator`.
    4. Flush once.

A fault raised in steps 1 to 3 propagates before the flush, so a failed pass
writes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapegen.codegen.cloner import clone_operation_io
from shapegen.codegen.context import CodegenContext
from shapegen.codegen.delegator import WriterDelegator
from shapegen.codegen.manifest import DirectoryManifest, MemoryManifest
from shapegen.codegen.schema import write_schema
from shapegen.codegen.serde import write_serde
from shapegen.codegen.symbol_provider import SymbolProvider
from shapegen.codegen.types import write_types
from shapegen.config.logging import get_logger
from shapegen.model.prelude import is_prelude_shape
from shapegen.model.shapes import ShapeType
from shapegen.model.walker import walk_shapes

if TYPE_CHECKING:
    from shapegen.codegen.manifest import FileManifest
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config
    from shapegen.model.model import Model
    from shapegen.model.shape_id import ShapeId
    from shapegen.model.shapes import Shape

logger: ShapegenLogger = get_logger(__name__)

_COLLECTION_TYPES: frozenset[ShapeType] = frozenset({ShapeType.LIST, ShapeType.SET, ShapeType.MAP})


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful pass.

    Attributes:
        files (tuple[str, ...]): Relative paths written, in unit creation order.
        dependencies (tuple[str, ...]): Sorted Go import paths used by the output.
        manifest (FileManifest): Where the files were written.
    """

    files: tuple[str, ...]
    dependencies: tuple[str, ...]
    manifest: FileManifest


def generation_closure(model: Model, service: ShapeId | None = None) -> list[Shape]:
    """Return the non-prelude shapes to generate, sorted by id.

    Raises:
        ShapeNotFoundError: If ``service`` is not in the model.
    """
    if service is None:
        shapes = list(model)
    else:
        shapes = walk_shapes(model, model.expect_shape(service))
    return sorted((s for s in shapes if not is_prelude_shape(s.id)), key=lambda s: s.id)


def generate(model: Model, config: Config, manifest: FileManifest | None = None) -> GenerationResult:
    """Run one generation pass.

    Args:
        model (Model): The loaded model.
        config (Config): Frozen configuration of the run.
        manifest (FileManifest | None): Destination; defaults to a `MemoryManifest`
            for dry runs and a `DirectoryManifest` on ``config.output_dir`` otherwise.

    Returns:
        GenerationResult: Written files and dependencies.

    Raises:
        CodegenError: Any generation fault; nothing is written in that case.
    """
    if manifest is None:
        manifest = MemoryManifest() if config.dry_run else DirectoryManifest(config.output_dir)

    if config.clone_operation_io:
        model = clone_operation_io(model, config.service)

    shapes = generation_closure(model, config.service)
    logger.info("Generating %d shapes into module %s", len(shapes), config.module_name)

    provider = SymbolProvider(model, config.module_name)
    delegator = WriterDelegator(manifest, provider, config.module_name)
    ctx = CodegenContext(model, config.module_name, provider, delegator)

    for shape in shapes:
        provider.to_symbol(shape)
    if config.types:
        for shape in shapes:
            write_types(ctx, shape)
    if config.schemas:
        for shape in shapes:
            write_schema(ctx, shape)
    if config.serde:
        # collections last, so helpers land where structures already need them
        for shape in sorted(shapes, key=lambda s: s.type in _COLLECTION_TYPES):
            write_serde(ctx, shape)

    dependencies = tuple(delegator.dependencies())
    files = tuple(delegator.flush())
    logger.debug("Dependencies: %s", ", ".join(dependencies))
    return GenerationResult(files=files, dependencies=dependencies, manifest=manifest)
