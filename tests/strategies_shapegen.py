# topmark:header:start
#
#   project      : ShapeGen
#   file         : strategies_shapegen.py
#   file_relpath : tests/strategies_shapegen.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for identifiers, shape ids and Go import paths.

These strategies stay inside the grammar the generator accepts, so property tests
explore valid inputs only.
"""

from __future__ import annotations

from hypothesis import strategies as st

from shapegen.model.shape_id import ShapeId

_LEADING: str = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
_TRAILING: str = _LEADING + "0123456789"

identifiers: st.SearchStrategy[str] = st.builds(
    lambda head, tail: head + tail,
    st.sampled_from(_LEADING),
    st.text(alphabet=_TRAILING, max_size=12),
)
"""Smithy identifiers (``[A-Za-z_][A-Za-z0-9_]*``)."""

namespaces: st.SearchStrategy[str] = st.lists(identifiers, min_size=1, max_size=4).map(".".join)
"""Dotted namespaces."""

shape_ids: st.SearchStrategy[ShapeId] = st.builds(ShapeId, namespaces, identifiers)
"""Top-level (non-member) shape ids."""

member_ids: st.SearchStrategy[ShapeId] = st.builds(ShapeId, namespaces, identifiers, identifiers)
"""Member shape ids."""

_SEGMENT: st.SearchStrategy[str] = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=10
).filter(lambda s: s[0].isalpha())

import_paths: st.SearchStrategy[str] = st.lists(_SEGMENT, min_size=1, max_size=5).map("/".join)
"""Go import paths made of lower-case segments."""
