# topmark:header:start
#
#   project      : ShapeGen
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ShapeGen test suite.

This file sets up global fixtures, customizes the logging configuration for test
runs and provides small builders for hand-written models.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `shapegen.config.model.MutableConfig` (mutable), then
      `freeze()` into a `shapegen.config.model.Config` before calling
      `shapegen.engine.generate`.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from shapegen.codegen.context import CodegenContext
from shapegen.codegen.delegator import WriterDelegator
from shapegen.codegen.manifest import MemoryManifest
from shapegen.codegen.symbol_provider import SymbolProvider
from shapegen.config import logging
from shapegen.config.model import MutableConfig
from shapegen.constants import PRELUDE_NAMESPACE
from shapegen.model.model import Model
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import MemberShape, Shape, ShapeType
from shapegen.model.traits import Trait

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shapegen.config.model import Config

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

NAMESPACE: str = "example.weather"
MODULE_NAME: str = "example.com/weather"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.codegen`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_codegen: DecoratorType[Any] = as_typed_mark(pytest.mark.codegen)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_model: DecoratorType[Any] = as_typed_mark(pytest.mark.model)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_shapegen_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ShapeGen's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the log level to TRACE for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- model builders ---


def sid(name: str, namespace: str = NAMESPACE) -> ShapeId:
    """Return the id of ``name`` in the test namespace."""
    return ShapeId(namespace, name)


def prelude(name: str) -> ShapeId:
    """Return the id of the prelude shape ``name``."""
    return ShapeId(PRELUDE_NAMESPACE, name)


def traits_of(raw: Mapping[str, Any] | None) -> dict[str, Trait]:
    """Build generic traits from ``{"smithy.api#x": value}``; relative ids use the prelude."""
    out: dict[str, Trait] = {}
    for key, value in (raw or {}).items():
        trait_id = key if "#" in key else f"{PRELUDE_NAMESPACE}#{key}"
        out[trait_id] = Trait(trait_id, value)
    return out


def make_shape(
    name: str,
    shape_type: ShapeType,
    members: Mapping[str, ShapeId] | None = None,
    *,
    traits: Mapping[str, Any] | None = None,
    member_traits: Mapping[str, Mapping[str, Any]] | None = None,
    namespace: str = NAMESPACE,
    **kwargs: Any,
) -> Shape:
    """Build a shape with members ``{member name: target id}``.

    Args:
        name (str): Shape name.
        shape_type (ShapeType): Shape kind.
        members (Mapping[str, ShapeId] | None): Member targets in declaration order.
        traits (Mapping[str, Any] | None): Shape traits.
        member_traits (Mapping[str, Mapping[str, Any]] | None): Traits per member name.
        namespace (str): Shape namespace.
        **kwargs (Any): Other `Shape` fields (``input``, ``operations``...).

    Returns:
        Shape: The new shape.
    """
    shape_id = ShapeId(namespace, name)
    built = tuple(
        MemberShape(
            id=shape_id.with_member(member_name),
            target=target,
            traits=traits_of((member_traits or {}).get(member_name)),
        )
        for member_name, target in (members or {}).items()
    )
    return Shape(id=shape_id, type=shape_type, members=built, traits=traits_of(traits), **kwargs)


def weather_shapes() -> list[Shape]:
    """A small service touching every generated kind."""
    return [
        make_shape(
            "Weather",
            ShapeType.SERVICE,
            operations=(sid("GetForecast"),),
            version="2025-01-01",
        ),
        make_shape(
            "GetForecast",
            ShapeType.OPERATION,
            input=sid("GetForecastRequest"),
            output=sid("Forecast"),
            errors=(sid("NoSuchCity"),),
        ),
        make_shape(
            "GetForecastRequest",
            ShapeType.STRUCTURE,
            {"city": prelude("String"), "days": prelude("Integer")},
            member_traits={"city": {"required": {}, "httpLabel": {}}},
        ),
        make_shape(
            "Forecast",
            ShapeType.STRUCTURE,
            {
                "chance": prelude("Float"),
                "color": sid("Color"),
                "detail": sid("Detail"),
                "tags": sid("Names"),
            },
            traits={"documentation": "A weather forecast."},
            member_traits={"chance": {"jsonName": "c"}},
        ),
        make_shape("Names", ShapeType.LIST, {"member": prelude("String")}),
        make_shape(
            "Color",
            ShapeType.ENUM,
            {"RED": prelude("Unit"), "GREEN": prelude("Unit")},
            member_traits={"RED": {"enumValue": "red"}, "GREEN": {"enumValue": "green"}},
        ),
        make_shape("Detail", ShapeType.UNION, {"text": prelude("String"), "level": prelude("Integer")}),
        make_shape(
            "NoSuchCity",
            ShapeType.STRUCTURE,
            {"message": prelude("String")},
            traits={"error": "client"},
        ),
    ]


def make_model(*shapes: Shape) -> Model:
    """Return a model made of ``shapes`` (the prelude is always included)."""
    return Model(shapes)


def make_context(model: Model, module_name: str = MODULE_NAME) -> tuple[CodegenContext, MemoryManifest]:
    """Return a fresh generation context over ``model`` writing to a `MemoryManifest`."""
    manifest = MemoryManifest()
    provider = SymbolProvider(model, module_name)
    delegator = WriterDelegator(manifest, provider, module_name)
    return CodegenContext(model, module_name, provider, delegator), manifest


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): `MutableConfig` field values.

    Returns:
        Config: The frozen configuration.
    """
    draft = MutableConfig.from_defaults()
    draft.module_name = MODULE_NAME
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft.freeze()


@fixture()
def weather_model() -> Model:
    """The weather service model."""
    return make_model(*weather_shapes())


@fixture()
def weather_document() -> dict[str, Any]:
    """The weather service as a Smithy JSON AST document."""
    return {
        "smithy": "2.0",
        "metadata": {"suppressions": []},
        "shapes": {
            "example.weather#Weather": {
                "type": "service",
                "version": "2025-01-01",
                "operations": [{"target": "example.weather#GetForecast"}],
            },
            "example.weather#GetForecast": {
                "type": "operation",
                "input": {"target": "example.weather#GetForecastRequest"},
                "output": {"target": "example.weather#Forecast"},
            },
            "example.weather#GetForecastRequest": {
                "type": "structure",
                "members": {
                    "city": {"target": "smithy.api#String", "traits": {"smithy.api#required": {}}},
                },
            },
            "example.weather#Forecast": {
                "type": "structure",
                "members": {
                    "chance": {"target": "smithy.api#Float"},
                    "tags": {"target": "example.weather#Names"},
                },
                "traits": {"smithy.api#documentation": "A weather forecast."},
            },
            "example.weather#Names": {
                "type": "list",
                "member": {"target": "smithy.api#String"},
            },
        },
    }
