# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen command line interface (Click based)."""

from __future__ import annotations
