# topmark:header:start
#
#   project      : ShapeGen
#   file         : loaders.py
#   file_relpath : src/shapegen/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module reads ShapeGen configuration from:
- the runtime defaults defined in code, and
- on-disk TOML files (``shapegen.toml`` / ``pyproject.toml``).

Parsing is done with `tomlkit` and returned as plain `dict` structures. Typed
getters extract values from the parsed tables.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from shapegen.config.keys import Toml
from shapegen.config.logging import get_logger
from shapegen.constants import DEFAULT_OUTPUT_DIR, PYPROJECT_TOML_NAME, SHAPEGEN_TOML_NAME

if TYPE_CHECKING:
    from pathlib import Path

    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)

TomlTable: TypeAlias = dict[str, Any]
"""A parsed TOML table as a plain dict."""


# --- TOML file I/O ---


def load_defaults_dict() -> TomlTable:
    """Return ShapeGen's runtime defaults as a TOML-compatible dict.

    ``[module] name`` has no default: it must come from a file or the CLI.

    Returns:
        TomlTable: A new dict, safe to mutate.
    """
    return {
        Toml.SECTION_MODULE: {},
        Toml.SECTION_OUTPUT: {
            Toml.KEY_DIRECTORY: DEFAULT_OUTPUT_DIR,
        },
        Toml.SECTION_GENERATION: {
            Toml.KEY_TYPES: True,
            Toml.KEY_SCHEMAS: True,
            Toml.KEY_SERDE: True,
            Toml.KEY_CLONE_OPERATION_IO: True,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``shapegen.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_tool_section(data: TomlTable, path: Path) -> TomlTable | None:
    """Return the ShapeGen table of a parsed config file.

    ``pyproject.toml`` files hold their configuration in ``[tool.shapegen]``;
    ``shapegen.toml`` files hold it at the top level.

    Returns:
        TomlTable | None: The table, or None when a ``pyproject.toml`` has no
            ``[tool.shapegen]`` section.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    tool_tbl: TomlTable = get_table_value(data, Toml.SECTION_TOOL)
    section: TomlTable = get_table_value(tool_tbl, Toml.SECTION_SHAPEGEN)
    if not section:
        logger.debug("[tool.shapegen] section missing in %s", path)
        return None
    return section


def discover_config_file(start: Path) -> Path | None:
    """Return the nearest config file at or above ``start``.

    In each directory ``shapegen.toml`` wins over a ``pyproject.toml`` with a
    ``[tool.shapegen]`` section.
    """
    anchor = start if start.is_dir() else start.parent
    for directory in (anchor, *anchor.parents):
        candidate = directory / SHAPEGEN_TOML_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_TOML_NAME
        if pyproject.is_file() and extract_tool_section(load_toml_dict(pyproject), pyproject):
            return pyproject
    return None


# --- Typed getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table; returns an empty dict when missing or not a table."""
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.warning("Expected a table for '%s', got %s; ignored", key, type(value).__name__)
    return {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Integers, floats and booleans are coerced with ``str(...)``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The value, or None when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    logger.debug("Cannot coerce %r to string, returning None", value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table.

    Integers are coerced with ``bool(...)``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The value, or None when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    logger.debug("Cannot coerce %r to bool, returning None", value)
    return None
