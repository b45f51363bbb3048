# topmark:header:start
#
#   project      : ShapeGen
#   file         : errors.py
#   file_relpath : src/shapegen/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ShapeGen CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Core generation faults are translated with
    `from_codegen_error`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from shapegen.cli.exit_codes import ExitCode
from shapegen.core.errors import (
    CodegenError,
    MissingStateError,
    ModelLoadError,
    ShapeIdError,
    ShapeNotFoundError,
    UnsupportedShapeError,
)


class ShapegenError(click.ClickException):
    """Base class for all ShapeGen CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class ShapegenModelError(ShapegenError):
    """Error for model documents that cannot be decoded."""

    exit_code = ExitCode.MODEL_ERROR


class ShapegenFileNotFoundError(ShapegenError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ShapegenUnsupportedShapeError(ShapegenError):
    """Error for shape kinds that cannot be generated."""

    exit_code = ExitCode.UNSUPPORTED_SHAPE


class ShapegenGenerationError(ShapegenError):
    """Error for generation faults (collisions, missing state)."""

    exit_code = ExitCode.GENERATION_ERROR


class ShapegenIOError(ShapegenError):
    """Error for I/O errors writing generated files."""

    exit_code = ExitCode.IO_ERROR


class ShapegenPermissionDeniedError(ShapegenError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class ShapegenConfigError(ShapegenError):
    """Error for configuration errors (missing/invalid config)."""

    exit_code = ExitCode.CONFIG_ERROR


def from_codegen_error(exc: CodegenError) -> ShapegenError:
    """Translate a core generation fault into the CLI error carrying its exit code."""
    message = str(exc)
    match exc:
        case ModelLoadError() | ShapeIdError() | ShapeNotFoundError():
            return ShapegenModelError(message)
        case UnsupportedShapeError():
            return ShapegenUnsupportedShapeError(message)
        case MissingStateError():
            return ShapegenConfigError(message)
        case _:
            return ShapegenGenerationError(message)
