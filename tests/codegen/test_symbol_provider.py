# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_symbol_provider.py
#   file_relpath : tests/codegen/test_symbol_provider.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for shape to symbol mapping in `shapegen.codegen.symbol_provider`."""

from __future__ import annotations

import pytest

from shapegen.codegen.symbol_provider import SymbolProvider, operation_name
from shapegen.constants import SYNTHETIC_NAMESPACE
from shapegen.core.errors import CodegenError, SymbolCollisionError
from shapegen.model.model import Model
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import ShapeType
from shapegen.model.traits import SyntheticCloneTrait
from tests.conftest import MODULE_NAME, make_shape, mark_codegen, parametrize, prelude, sid

TYPES = f"{MODULE_NAME}/types"


@mark_codegen
def test_symbols_are_memoized(weather_model: Model) -> None:
    provider = SymbolProvider(weather_model, MODULE_NAME)
    forecast = weather_model.expect_shape(sid("Forecast"))

    first = provider.to_symbol(forecast)
    assert provider.to_symbol(forecast) is first
    assert provider.symbols()[sid("Forecast")] is first


@mark_codegen
@parametrize(
    "shape_id, name, namespace, pointable",
    [
        (prelude("String"), "string", "", True),
        (prelude("Integer"), "int32", "", True),
        (prelude("Long"), "int64", "", True),
        (prelude("Boolean"), "bool", "", True),
        (prelude("Blob"), "[]byte", "", False),
        (prelude("Timestamp"), "Time", "time", True),
        (prelude("BigInteger"), "Int", "math/big", True),
        (prelude("Document"), "Document", "github.com/aws/smithy-go", False),
        (sid("Forecast"), "Forecast", TYPES, True),
        (sid("Color"), "Color", TYPES, False),
        (sid("Detail"), "Detail", TYPES, False),
        (sid("Names"), "[]string", "", False),
        (sid("Weather"), "Client", MODULE_NAME, False),
        (sid("GetForecast"), "GetForecast", MODULE_NAME, False),
    ],
)
def test_kind_mapping(
    weather_model: Model, shape_id: ShapeId, name: str, namespace: str, pointable: bool
) -> None:
    provider = SymbolProvider(weather_model, MODULE_NAME)
    symbol = provider.to_symbol(weather_model.expect_shape(shape_id))

    assert (symbol.name, symbol.namespace, symbol.pointable) == (name, namespace, pointable)


@mark_codegen
def test_definition_files(weather_model: Model) -> None:
    provider = SymbolProvider(weather_model, MODULE_NAME)

    def file_of(name: str) -> str:
        return provider.to_symbol(weather_model.expect_shape(sid(name))).definition_file

    assert file_of("Forecast") == "./types/types.go"
    assert file_of("NoSuchCity") == "./types/errors.go"
    assert file_of("Color") == "./types/enums.go"
    assert file_of("GetForecast") == "./api_op_GetForecast.go"
    assert file_of("Weather") == "./api_client.go"


@mark_codegen
def test_members_resolve_to_their_targets(weather_model: Model) -> None:
    provider = SymbolProvider(weather_model, MODULE_NAME)
    member = weather_model.expect_member(sid("Forecast").with_member("color"))
    assert provider.to_symbol(member) is provider.to_symbol(weather_model.expect_shape(sid("Color")))


@mark_codegen
def test_collections_keep_their_element_symbols(weather_model: Model) -> None:
    provider = SymbolProvider(weather_model, MODULE_NAME)
    names = provider.to_symbol(weather_model.expect_shape(sid("Names")))

    assert names.is_slice and names.element is not None
    assert names.element.name == "string"
    assert names.shape == sid("Names")


@mark_codegen
def test_distinct_shapes_with_one_identity_collide() -> None:
    """Same name in two namespaces maps to one Go type name in ``types``."""
    first = make_shape("Forecast", ShapeType.STRUCTURE)
    second = make_shape("Forecast", ShapeType.STRUCTURE, namespace="example.other")
    provider = SymbolProvider(Model([first, second]), MODULE_NAME)

    provider.to_symbol(first)
    with pytest.raises(SymbolCollisionError) as excinfo:
        provider.to_symbol(second)
    assert (excinfo.value.first, excinfo.value.second) == (first.id, second.id)


@mark_codegen
def test_union_variant_names_are_reserved() -> None:
    """A shape named like a union variant is escaped instead of colliding."""
    union = make_shape("Detail", ShapeType.UNION, {"text": prelude("String")})
    clash = make_shape("DetailMemberText", ShapeType.STRUCTURE)
    unknown = make_shape("UnknownUnionMember", ShapeType.STRUCTURE)
    provider = SymbolProvider(Model([union, clash, unknown]), MODULE_NAME)

    assert provider.to_symbol(clash).name == "DetailMemberText_"
    assert provider.to_symbol(unknown).name == "UnknownUnionMember_"
    variant = provider.variant_symbol(union, union.members[0])
    assert (variant.name, variant.namespace, variant.pointable) == ("DetailMemberText", TYPES, True)


@mark_codegen
def test_member_names_are_capitalized_and_escaped() -> None:
    plain = make_shape("Plain", ShapeType.STRUCTURE, {"string": prelude("String"), "city": prelude("String")})
    failure = make_shape(
        "Failure",
        ShapeType.STRUCTURE,
        {"errorCode": prelude("String"), "message": prelude("String")},
        traits={"error": "server"},
    )
    provider = SymbolProvider(Model([plain, failure]), MODULE_NAME)

    assert provider.to_member_name(plain.expect_member("string")) == "String_"
    assert provider.to_member_name(plain.expect_member("city")) == "City"
    assert provider.to_member_name(failure.expect_member("errorCode")) == "ErrorCode_"
    assert provider.to_member_name(failure.expect_member("message")) == "Message"


@mark_codegen
def test_clones_record_their_archetype() -> None:
    original = make_shape("Forecast", ShapeType.STRUCTURE)
    clone = make_shape("GetForecastOutput", ShapeType.STRUCTURE, namespace=SYNTHETIC_NAMESPACE).with_trait(
        SyntheticCloneTrait(original.id)
    )
    provider = SymbolProvider(Model([original, clone]), MODULE_NAME)

    symbol = provider.to_symbol(clone)
    assert symbol.archetype == original.id
    assert symbol.namespace == MODULE_NAME
    assert symbol.definition_file == "./api_op_GetForecast.go"
    assert provider.to_symbol(original).archetype is None


@mark_codegen
def test_collection_containing_itself_is_a_fault() -> None:
    looped = make_shape("Loop", ShapeType.LIST, {"member": sid("Loop")})
    provider = SymbolProvider(Model([looped]), MODULE_NAME)
    with pytest.raises(CodegenError, match="contains itself"):
        provider.to_symbol(looped)


@mark_codegen
@parametrize(
    "name, expected",
    [("GetForecastInput", "GetForecast"), ("GetForecastOutput", "GetForecast"), ("Input", "Input")],
)
def test_operation_name(name: str, expected: str) -> None:
    shape = make_shape(name, ShapeType.STRUCTURE, namespace=SYNTHETIC_NAMESPACE)
    assert operation_name(shape) == expected
