# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_shape_id_property.py
#   file_relpath : tests/model/test_shape_id_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property tests for shape id ordering over mixed shape and member ids."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from shapegen.model.shape_id import ShapeId
from tests.strategies_shapegen import member_ids, shape_ids

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=500)
@given(st.lists(st.one_of(shape_ids, member_ids), max_size=30))
def test_sorting_is_total_and_matches_the_sort_key(ids: list[ShapeId]) -> None:
    ordered = sorted(ids)
    assert [i.sort_key() for i in ordered] == sorted(i.sort_key() for i in ids)


@settings(deadline=None, max_examples=500)
@given(member_ids)
def test_containers_sort_before_their_members(member: ShapeId) -> None:
    container = member.without_member()
    assert container < member
    assert sorted([member, container]) == [container, member]
