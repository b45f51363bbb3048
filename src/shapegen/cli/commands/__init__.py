# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen CLI subcommands."""

from __future__ import annotations
