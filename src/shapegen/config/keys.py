# topmark:header:start
#
#   project      : ShapeGen
#   file         : keys.py
#   file_relpath : src/shapegen/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for ShapeGen configuration.

These constants are the external configuration schema as it appears in
``shapegen.toml`` and in ``[tool.shapegen]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by ShapeGen configuration.

    The ordering of constants mirrors `load_defaults_dict`.
    """

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_SHAPEGEN: Final[str] = "shapegen"

    # [module]
    SECTION_MODULE: Final[str] = "module"

    KEY_NAME: Final[str] = "name"
    KEY_SERVICE: Final[str] = "service"

    # [output]
    SECTION_OUTPUT: Final[str] = "output"

    KEY_DIRECTORY: Final[str] = "directory"

    # [generation]
    SECTION_GENERATION: Final[str] = "generation"

    KEY_TYPES: Final[str] = "types"
    KEY_SCHEMAS: Final[str] = "schemas"
    KEY_SERDE: Final[str] = "serde"
    KEY_CLONE_OPERATION_IO: Final[str] = "clone_operation_io"
