# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/codegen/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Go code generation: symbols, imports, output units, schemas, types and serde.

Public modules:
    - shapegen.codegen.symbols / symbol_provider: shape identities
    - shapegen.codegen.imports / writer: per-unit imports and text
    - shapegen.codegen.delegator / manifest: output units and file sinks
    - shapegen.codegen.visitor / cloner: kind dispatch and shape cloning
    - shapegen.codegen.schema / traits: schema descriptors
    - shapegen.codegen.types: type definitions
    - shapegen.codegen.serde: serializers and deserializers
"""

from __future__ import annotations
