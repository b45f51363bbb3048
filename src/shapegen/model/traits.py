# topmark:header:start
#
#   project      : ShapeGen
#   file         : traits.py
#   file_relpath : src/shapegen/model/traits.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Traits: metadata attached to shapes and members.

A trait is identified by its trait id (a shape id string such as
``smithy.api#jsonName``) and carries a JSON-like value. A shape carries at most one
trait per trait id.

Two runtime-only traits are attached by the generator itself:

* `SyntheticCloneTrait` marks a shape produced by `ShapeCloner` and names the shape
  it was cloned from (its archetype).
* `SyntheticTrait` marks a shape invented by the generator; it is never serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Final, Protocol, runtime_checkable

from shapegen.constants import SYNTHETIC_CLONE_TRAIT_ID, SYNTHETIC_TRAIT_ID
from shapegen.core.errors import CodegenError

if TYPE_CHECKING:
    from shapegen.model.shape_id import ShapeId


class TraitIds:
    """Trait ids known to the generator.

    The ordering mirrors the trait renderer registry in `shapegen.codegen.traits`.
    """

    SENSITIVE: Final[str] = "smithy.api#sensitive"
    JSON_NAME: Final[str] = "smithy.api#jsonName"
    MEDIA_TYPE: Final[str] = "smithy.api#mediaType"
    TIMESTAMP_FORMAT: Final[str] = "smithy.api#timestampFormat"
    XML_ATTRIBUTE: Final[str] = "smithy.api#xmlAttribute"
    XML_FLATTENED: Final[str] = "smithy.api#xmlFlattened"
    XML_NAME: Final[str] = "smithy.api#xmlName"
    XML_NAMESPACE: Final[str] = "smithy.api#xmlNamespace"
    EVENT_HEADER: Final[str] = "smithy.api#eventHeader"
    EVENT_PAYLOAD: Final[str] = "smithy.api#eventPayload"
    STREAMING: Final[str] = "smithy.api#streaming"
    HTTP_HEADER: Final[str] = "smithy.api#httpHeader"
    HTTP_LABEL: Final[str] = "smithy.api#httpLabel"
    HTTP_PAYLOAD: Final[str] = "smithy.api#httpPayload"
    HTTP_PREFIX_HEADERS: Final[str] = "smithy.api#httpPrefixHeaders"
    HTTP_QUERY: Final[str] = "smithy.api#httpQuery"
    HTTP_QUERY_PARAMS: Final[str] = "smithy.api#httpQueryParams"
    HTTP_RESPONSE_CODE: Final[str] = "smithy.api#httpResponseCode"
    HOST_LABEL: Final[str] = "smithy.api#hostLabel"
    CONTEXT_PARAM: Final[str] = "smithy.rules#contextParam"
    AWS_QUERY_ERROR: Final[str] = "aws.protocols#awsQueryError"

    # Traits that affect symbols and types but have no schema renderer
    ERROR: Final[str] = "smithy.api#error"
    REQUIRED: Final[str] = "smithy.api#required"
    DOCUMENTATION: Final[str] = "smithy.api#documentation"
    ENUM_VALUE: Final[str] = "smithy.api#enumValue"
    SPARSE: Final[str] = "smithy.api#sparse"


@runtime_checkable
class TraitLike(Protocol):
    """Structural type shared by all trait representations."""

    @property
    def trait_id(self) -> str:
        """The trait id, e.g. ``smithy.api#jsonName``."""
        ...

    @property
    def value(self) -> Any:
        """The trait's JSON-like value."""
        ...

    def to_node(self) -> Any:
        """Return the value as a JSON-compatible node."""
        ...


@dataclass(frozen=True)
class Trait:
    """A generic trait instance as found in a model document.

    Attributes:
        trait_id (str): Absolute trait id.
        value (Any): JSON-like value. Annotation traits use an empty dict.
    """

    trait_id: str
    value: Any = field(default_factory=lambda: {})

    def to_node(self) -> Any:
        """Return the value as a JSON-compatible node."""
        return self.value


@dataclass(frozen=True)
class SyntheticCloneTrait:
    """Provenance tag on a shape produced by cloning.

    Attributes:
        archetype (ShapeId): Id of the shape this clone was produced from. Cloning a
            clone records the immediate original, never an earlier ancestor.
    """

    archetype: ShapeId

    trait_id: ClassVar[str] = SYNTHETIC_CLONE_TRAIT_ID

    @property
    def value(self) -> dict[str, str]:
        """The trait value, ``{"archetype": "<shape id>"}``."""
        return {"archetype": str(self.archetype)}

    def to_node(self) -> dict[str, str]:
        """Return the value as a JSON-compatible node."""
        return self.value


@dataclass(frozen=True)
class SyntheticTrait:
    """Runtime-only marker for shapes invented by the generator.

    Attributes:
        archetype (ShapeId | None): Optional shape the synthetic shape stands in for.
    """

    archetype: ShapeId | None = None

    trait_id: ClassVar[str] = SYNTHETIC_TRAIT_ID

    @property
    def value(self) -> dict[str, str]:
        """The trait value; empty when no archetype is recorded."""
        return {} if self.archetype is None else {"archetype": str(self.archetype)}

    def to_node(self) -> Any:
        """Synthetic traits only exist at generation time.

        Raises:
            CodegenError: Always.
        """
        raise CodegenError("attempted to serialize runtime only trait")
