# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_shape_id.py
#   file_relpath : tests/model/test_shape_id.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `shapegen.model.shape_id.ShapeId`."""

from __future__ import annotations

import pytest
from hypothesis import given

from shapegen.core.errors import ShapeIdError
from shapegen.model.shape_id import ShapeId
from tests.conftest import mark_model, parametrize
from tests.strategies_shapegen import member_ids, shape_ids


@mark_model
def test_parse_top_level_and_member_ids() -> None:
    """Both forms of the microformat parse into their parts."""
    top = ShapeId.parse("example.weather#Forecast")
    member = ShapeId.parse("example.weather#Forecast$chance")

    assert (top.namespace, top.name, top.member) == ("example.weather", "Forecast", None)
    assert member.member == "chance"
    assert member.is_member and not top.is_member
    assert member.without_member() == top
    assert top.with_member("chance") == member


@mark_model
@parametrize(
    "text",
    [
        "Forecast",
        "#Forecast",
        "example.weather#",
        "example..weather#Forecast",
        "example.weather#Fore-cast",
        "example.weather#Forecast$",
        "1example#Forecast",
    ],
)
def test_parse_rejects_malformed_ids(text: str) -> None:
    """Relative or syntactically invalid ids raise `ShapeIdError`."""
    with pytest.raises(ShapeIdError):
        ShapeId.parse(text)


@mark_model
def test_shape_id_error_is_a_value_error() -> None:
    """Callers catching ValueError also catch malformed ids."""
    with pytest.raises(ValueError):
        ShapeId("example", "not valid")


@mark_model
def test_ids_order_by_namespace_then_name() -> None:
    ids = [ShapeId("b", "A"), ShapeId("a", "Z"), ShapeId("a", "B")]
    assert sorted(ids) == [ShapeId("a", "B"), ShapeId("a", "Z"), ShapeId("b", "A")]


@given(shape_ids)
def test_str_parse_roundtrip_top_level(shape_id: ShapeId) -> None:
    assert ShapeId.parse(str(shape_id)) == shape_id


@given(member_ids)
def test_member_id_string_form(shape_id: ShapeId) -> None:
    text = str(shape_id)
    assert text.count("#") == 1
    assert text.endswith(f"${shape_id.member}")
    assert ShapeId.parse(text).without_member() == shape_id.without_member()
