# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape graph model consumed by the generator.

The model is a read-only input: ids (`ShapeId`), shapes and members (`Shape`,
`MemberShape`), traits, and the `Model` index with the prelude always present.
"""

from __future__ import annotations

from shapegen.model.model import Model
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import MemberShape, Shape, ShapeType
from shapegen.model.traits import SyntheticCloneTrait, SyntheticTrait, Trait, TraitIds

__all__ = [
    "MemberShape",
    "Model",
    "Shape",
    "ShapeId",
    "ShapeType",
    "SyntheticCloneTrait",
    "SyntheticTrait",
    "Trait",
    "TraitIds",
]
