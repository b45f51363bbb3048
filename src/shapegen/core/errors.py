# topmark:header:start
#
#   project      : ShapeGen
#   file         : errors.py
#   file_relpath : src/shapegen/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Faults raised during a generation pass.

Every fault defined here is fatal to the pass that raised it: nothing is retried
and no output unit is flushed once one of these has been raised. The CLI maps
them to exit codes in `shapegen.cli.errors`.

Taxonomy:
    * Collision faults: `ImportCollisionError`, `SymbolCollisionError`.
    * Unsupported-shape faults: `UnsupportedShapeError`.
    * Missing-required-state faults: `MissingStateError`.
    * Model faults (raised by collaborators): `ShapeIdError`, `ShapeNotFoundError`,
      `ModelLoadError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapegen.model.shape_id import ShapeId
    from shapegen.model.shapes import ShapeType


class CodegenError(Exception):
    """Base class for all ShapeGen generation faults."""


class ImportCollisionError(CodegenError):
    """Two different import paths claim the same alias within one output unit.

    Also raised when a wildcard (``"."``) import is requested.

    Attributes:
        alias (str): The contested alias.
        previous (str | None): Import path already bound to ``alias`` (None for
            a wildcard request).
        requested (str): Import path that was being added.
    """

    def __init__(self, alias: str, requested: str, previous: str | None = None) -> None:
        self.alias = alias
        self.requested = requested
        self.previous = previous
        if previous is None:
            msg = f"Globally importing packages is forbidden: {requested}"
        else:
            msg = f"Import name collision: {alias}. Previous: {previous} New: {requested}"
        super().__init__(msg)


class SymbolCollisionError(CodegenError):
    """Two distinct shapes were assigned the same ``(namespace, name)`` identity."""

    def __init__(self, namespace: str, name: str, first: ShapeId, second: ShapeId) -> None:
        self.namespace = namespace
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Symbol collision: {namespace}.{name} is claimed by both {first} and {second}"
        )


class UnsupportedShapeError(CodegenError):
    """Traversal or dispatch reached a shape kind with no defined handling."""

    def __init__(self, kind: ShapeType | str, context: str = "") -> None:
        self.kind = kind
        self.context = context
        kind_s: str = getattr(kind, "value", str(kind))
        msg = f"unsupported shape type: {kind_s}"
        if context:
            msg = f"{msg} ({context})"
        super().__init__(msg)


class MissingStateError(CodegenError):
    """A component was built or used without a mandatory input."""

    def __init__(self, field: str, owner: str) -> None:
        self.field = field
        self.owner = owner
        super().__init__(f"{owner}: missing required value '{field}'")


class ShapeIdError(CodegenError, ValueError):
    """A shape id string does not follow the ``namespace#Name$member`` format."""


class ShapeNotFoundError(CodegenError, LookupError):
    """A shape id was referenced but is not present in the model."""

    def __init__(self, shape_id: ShapeId | str) -> None:
        self.shape_id = shape_id
        super().__init__(f"Shape not found: {shape_id}")


class ModelLoadError(CodegenError):
    """A model document could not be read or decoded."""
