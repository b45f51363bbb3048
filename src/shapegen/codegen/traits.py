# topmark:header:start
#
#   project      : ShapeGen
#   file         : traits.py
#   file_relpath : src/shapegen/codegen/traits.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Trait renderers: trait instance -> Go literal for schema descriptors.

`TRAIT_RENDERERS` is built once at import time and is read-only. Its iteration
order is the order in which traits appear in generated schemas. Traits without a
registered renderer are dropped silently; they carry no generated-code effect.

Example:
    ```python
    render_trait(writer, Trait("smithy.api#jsonName", "temp"))
    # '&traits.JSONName{Name: "temp",}'
    ```
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Protocol

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.config.logging import get_logger
from shapegen.model.traits import TraitIds

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shapegen.codegen.writer import GoWriter
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.traits import TraitLike

logger: ShapegenLogger = get_logger(__name__)


class TraitRenderer(Protocol):
    """Renders one trait kind as a Go expression."""

    def render(self, writer: GoWriter, trait: TraitLike) -> str:
        """Return the Go expression for ``trait``, registering imports on ``writer``."""
        ...


def go_literal(value: Any) -> str:
    """Render a JSON-like scalar as a Go literal.

    Strings are quoted; booleans become ``true``/``false``; anything else uses its
    natural literal form.
    """
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "nil"
    return str(value)


@dataclass(frozen=True)
class SimpleTraitRenderer:
    """Renders ``&traits.<struct>{Field: value, ...}``.

    Attributes:
        struct (str): Name of the Go struct in the runtime traits package.
        fields (tuple[tuple[str, str | None], ...]): ``(GoField, key)`` pairs. A
            key of None selects the trait value itself (string-valued traits);
            otherwise the key is looked up in the trait's object value. Missing
            keys are omitted.
    """

    struct: str
    fields: tuple[tuple[str, str | None], ...] = ()

    def render(self, writer: GoWriter, trait: TraitLike) -> str:
        type_name = writer.qualify(SmithyGoDependency.SMITHY_TRAITS.symbol(self.struct))
        value: Any = trait.value
        parts: list[str] = []
        for go_field, key in self.fields:
            if key is None:
                field_value = value
            elif isinstance(value, dict):
                field_value = value.get(key)
            else:
                field_value = None
            if field_value is None:
                continue
            parts.append(f"{go_field}: {go_literal(field_value)},")
        return f"&{type_name}{{{' '.join(parts)}}}"


def _build_trait_renderers() -> Mapping[str, TraitRenderer]:
    renderers: dict[str, TraitRenderer] = {
        # documentation
        TraitIds.SENSITIVE: SimpleTraitRenderer("Sensitive"),
        # serialization and protocol
        TraitIds.JSON_NAME: SimpleTraitRenderer("JSONName", (("Name", None),)),
        TraitIds.MEDIA_TYPE: SimpleTraitRenderer("MediaType", (("Type", None),)),
        TraitIds.TIMESTAMP_FORMAT: SimpleTraitRenderer("TimestampFormat", (("Format", None),)),
        TraitIds.XML_ATTRIBUTE: SimpleTraitRenderer("XMLAttribute"),
        TraitIds.XML_FLATTENED: SimpleTraitRenderer("XMLFlattened"),
        TraitIds.XML_NAME: SimpleTraitRenderer("XMLName", (("Name", None),)),
        TraitIds.XML_NAMESPACE: SimpleTraitRenderer(
            "XMLNamespace", (("URI", "uri"), ("Prefix", "prefix"))
        ),
        # streaming
        TraitIds.EVENT_HEADER: SimpleTraitRenderer("EventHeader"),
        TraitIds.EVENT_PAYLOAD: SimpleTraitRenderer("EventPayload"),
        TraitIds.STREAMING: SimpleTraitRenderer("Streaming"),
        # http bindings
        TraitIds.HTTP_HEADER: SimpleTraitRenderer("HTTPHeader", (("Name", None),)),
        TraitIds.HTTP_LABEL: SimpleTraitRenderer("HTTPLabel"),
        TraitIds.HTTP_PAYLOAD: SimpleTraitRenderer("HTTPPayload"),
        TraitIds.HTTP_PREFIX_HEADERS: SimpleTraitRenderer("HTTPPrefixHeaders", (("Prefix", None),)),
        TraitIds.HTTP_QUERY: SimpleTraitRenderer("HTTPQuery", (("Name", None),)),
        TraitIds.HTTP_QUERY_PARAMS: SimpleTraitRenderer("HTTPQueryParams"),
        TraitIds.HTTP_RESPONSE_CODE: SimpleTraitRenderer("HTTPResponseCode"),
        # endpoints
        TraitIds.HOST_LABEL: SimpleTraitRenderer("HostLabel"),
        # other
        TraitIds.CONTEXT_PARAM: SimpleTraitRenderer("ContextParam"),
        TraitIds.AWS_QUERY_ERROR: SimpleTraitRenderer(
            "AWSQueryError", (("ErrorCode", "code"), ("StatusCode", "httpResponseCode"))
        ),
    }
    return MappingProxyType(renderers)


TRAIT_RENDERERS: Final[Mapping[str, TraitRenderer]] = _build_trait_renderers()


def render_trait(writer: GoWriter, trait: TraitLike) -> str | None:
    """Render ``trait``, or return None when no renderer is registered for it."""
    renderer = TRAIT_RENDERERS.get(trait.trait_id)
    if renderer is None:
        logger.trace("No renderer for trait %s; skipped", trait.trait_id)
        return None
    return renderer.render(writer, trait)


def render_traits(writer: GoWriter, traits: Mapping[str, TraitLike]) -> list[tuple[str, str]]:
    """Render every renderable trait of ``traits`` in registry order.

    Returns:
        list[tuple[str, str]]: ``(trait_id, go_expression)`` pairs.
    """
    rendered: list[tuple[str, str]] = []
    for trait_id in _ordered(traits):
        expr = render_trait(writer, traits[trait_id])
        if expr is not None:
            rendered.append((trait_id, expr))
    return rendered


def _ordered(traits: Mapping[str, TraitLike]) -> Iterable[str]:
    return (trait_id for trait_id in TRAIT_RENDERERS if trait_id in traits)
