# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen package.

ShapeGen is a model-driven code generator. It reads a Smithy-style shape graph,
assigns every shape a collision-free Go identity, and emits type declarations,
runtime schemas and (de)serializers for the resulting Go module. Both a CLI and
a small typed API (`shapegen.engine.generate`) are provided.
"""

from __future__ import annotations
