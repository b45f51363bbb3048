# topmark:header:start
#
#   project      : ShapeGen
#   file         : walker.py
#   file_relpath : src/shapegen/model/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cycle-tolerant traversal of the shape graph.

Both functions track a visited set keyed by `ShapeId`, so recursive structures
terminate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapegen.model.model import Model
    from shapegen.model.shape_id import ShapeId
    from shapegen.model.shapes import MemberShape, Shape


def walk_shapes(model: Model, root: Shape) -> list[Shape]:
    """Return every shape reachable from ``root``, ``root`` included.

    Shapes are returned in depth-first discovery order. References to ids that
    are absent from the model are skipped.

    Args:
        model (Model): The model to resolve references in.
        root (Shape): The starting shape.

    Returns:
        list[Shape]: The reachable shapes, each exactly once.
    """
    seen: set[ShapeId] = {root.id}
    ordered: list[Shape] = []
    stack: list[Shape] = [root]
    while stack:
        shape = stack.pop()
        ordered.append(shape)
        # reversed so that the first reference is visited first
        for ref in reversed(shape.referenced_ids()):
            if ref in seen:
                continue
            target = model.get_shape(ref)
            if target is None:
                continue
            seen.add(ref)
            stack.append(target)
    return ordered


def _reaches(model: Model, start: ShapeId, goal: ShapeId) -> bool:
    seen: set[ShapeId] = set()
    pending: list[ShapeId] = [start]
    while pending:
        current = pending.pop()
        if current == goal:
            return True
        if current in seen:
            continue
        seen.add(current)
        shape = model.get_shape(current)
        if shape is not None:
            pending.extend(m.target for m in shape.members)
    return False


def recursive_members(model: Model, shape: Shape) -> list[MemberShape]:
    """Return the members of ``shape`` whose target can reach ``shape`` again.

    Only member edges are followed; a member targeting ``shape`` itself is
    recursive.
    """
    return [m for m in shape.members if _reaches(model, m.target, shape.id)]
