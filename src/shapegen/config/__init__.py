# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ShapeGen.

Public modules:
    - shapegen.config.keys: TOML section and key names
    - shapegen.config.loaders: tomlkit based loading and typed getters
    - shapegen.config.model: `MutableConfig` builder and frozen `Config`
    - shapegen.config.logging: loggers, TRACE level and colored output

This package module imports nothing, so `shapegen.config.logging` can be used
from any layer without import cycles.
"""

from __future__ import annotations
