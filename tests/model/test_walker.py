# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_walker.py
#   file_relpath : tests/model/test_walker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for graph traversal in `shapegen.model.walker`."""

from __future__ import annotations

from shapegen.model.model import Model
from shapegen.model.shapes import ShapeType
from shapegen.model.walker import recursive_members, walk_shapes
from tests.conftest import make_shape, mark_model, prelude, sid


@mark_model
def test_walk_from_service_reaches_the_closure(weather_model: Model) -> None:
    service = weather_model.expect_shape(sid("Weather"))
    reached = [s.id for s in walk_shapes(weather_model, service)]

    assert reached[0] == sid("Weather")
    assert len(reached) == len(set(reached))
    expected = ("GetForecast", "GetForecastRequest", "Forecast", "Names", "Color", "Detail", "NoSuchCity")
    assert all(sid(name) in reached for name in expected)
    assert prelude("String") in reached


@mark_model
def test_walk_terminates_on_cycles() -> None:
    node = make_shape("Node", ShapeType.STRUCTURE, {"next": sid("Node"), "children": sid("Nodes")})
    nodes = make_shape("Nodes", ShapeType.LIST, {"member": sid("Node")})
    model = Model([node, nodes])

    reached = walk_shapes(model, node)
    assert [s.id for s in reached] == [sid("Node"), sid("Nodes")]


@mark_model
def test_walk_skips_dangling_references() -> None:
    holder = make_shape("Holder", ShapeType.STRUCTURE, {"ghost": sid("Ghost")})
    model = Model([holder])
    assert [s.id for s in walk_shapes(model, holder)] == [sid("Holder")]


@mark_model
def test_recursive_members_follow_member_edges_only() -> None:
    node = make_shape(
        "Node",
        ShapeType.STRUCTURE,
        {"label": prelude("String"), "next": sid("Node"), "children": sid("Nodes")},
    )
    nodes = make_shape("Nodes", ShapeType.LIST, {"member": sid("Node")})
    leaf = make_shape("Leaf", ShapeType.STRUCTURE, {"label": prelude("String")})
    model = Model([node, nodes, leaf])

    assert [m.member_name for m in recursive_members(model, node)] == ["next", "children"]
    assert recursive_members(model, leaf) == []
