# topmark:header:start
#
#   project      : ShapeGen
#   file         : logging.py
#   file_relpath : src/shapegen/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen logging with a TRACE level and colored output.

Generation passes are chatty at low levels: every symbol assignment, unit checkout
and import registration can be traced. This module adds a TRACE level below DEBUG,
a logger class exposing `trace()`, and a `yachalk` based formatter.

Program output (the list of written files, errors shown to users) goes through the
CLI console, never through these loggers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, TextIO, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "SHAPEGEN_LOG_LEVEL"


class ShapegenLogger(logging.Logger):
    """Logger class adding a TRACE level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Optional extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(ShapegenLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Ordered from most to least severe; the first threshold met picks the color.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record according to its severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then colorize the full line.

        Args:
            record (logging.LogRecord): The record to format.

        Returns:
            str: The colorized log line.
        """
        message: str = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def parse_log_level(value: str | None) -> int | None:
    """Parse a level name (``"TRACE"``, ``"debug"``) or a number (``"10"``).

    Returns:
        int | None: The numeric level, or None if ``value`` is empty or unknown.
    """
    if not value:
        return None
    v: str = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return the level configured via ``SHAPEGEN_LOG_LEVEL``, or None if unset."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))


def setup_logging(level: int | None = None, *, stream: TextIO | None = None) -> None:
    """Configure the root logger with colored output.

    If ``level`` is None the environment is consulted via `resolve_env_log_level`;
    when that is unset too, only CRITICAL records are shown.

    Args:
        level (int | None): Explicit log level.
        stream (TextIO | None): Destination stream, ``sys.stderr`` by default so
            that logs never mix with program output.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> ShapegenLogger:
    """Return the `ShapegenLogger` registered under ``name``."""
    return cast("ShapegenLogger", logging.getLogger(name))
