# topmark:header:start
#
#   project      : ShapeGen
#   file         : shape_id.py
#   file_relpath : src/shapegen/model/shape_id.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shape identifiers.

A shape id is rendered as ``namespace#Name`` for top-level shapes and
``namespace#Name$member`` for members. Member ids are always derived from their
container's id, so renaming a container renames all of its members.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Final

from shapegen.core.errors import ShapeIdError

_IDENTIFIER: Final[str] = r"[A-Za-z_][A-Za-z0-9_]*"
_NAMESPACE_RE: Final[re.Pattern[str]] = re.compile(rf"^{_IDENTIFIER}(\.{_IDENTIFIER})*$")
_IDENTIFIER_RE: Final[re.Pattern[str]] = re.compile(rf"^{_IDENTIFIER}$")


@total_ordering
@dataclass(frozen=True)
class ShapeId:
    """Globally unique identifier of a shape or member.

    Attributes:
        namespace (str): Dotted namespace, e.g. ``example.weather``.
        name (str): Shape name within the namespace.
        member (str | None): Member name for member ids, otherwise None.
    """

    namespace: str
    name: str
    member: str | None = None

    def __post_init__(self) -> None:
        if not _NAMESPACE_RE.match(self.namespace):
            raise ShapeIdError(f"Invalid shape id namespace: {self.namespace!r}")
        if not _IDENTIFIER_RE.match(self.name):
            raise ShapeIdError(f"Invalid shape id name: {self.name!r}")
        if self.member is not None and not _IDENTIFIER_RE.match(self.member):
            raise ShapeIdError(f"Invalid shape id member: {self.member!r}")

    @classmethod
    def parse(cls, text: str) -> ShapeId:
        """Parse the ``namespace#Name[$member]`` microformat.

        Args:
            text (str): The id to parse.

        Returns:
            ShapeId: The parsed id.

        Raises:
            ShapeIdError: If ``text`` is not a valid absolute shape id.
        """
        namespace, sep, rest = text.partition("#")
        if not sep:
            raise ShapeIdError(f"Shape id is not absolute (missing '#'): {text!r}")
        name, sep, member = rest.partition("$")
        return cls(namespace, name, member if sep else None)

    @property
    def is_member(self) -> bool:
        """Whether this id names a member."""
        return self.member is not None

    def with_member(self, member: str) -> ShapeId:
        """Return the id of member ``member`` of this shape."""
        return replace(self, member=member)

    def without_member(self) -> ShapeId:
        """Return the id of the containing shape."""
        return replace(self, member=None)

    def sort_key(self) -> tuple[str, str, str]:
        """Ordering key; a shape sorts before its members."""
        return (self.namespace, self.name, self.member or "")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ShapeId):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.member is None:
            return f"{self.namespace}#{self.name}"
        return f"{self.namespace}#{self.name}${self.member}"
