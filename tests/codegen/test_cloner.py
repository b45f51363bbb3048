# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_cloner.py
#   file_relpath : tests/codegen/test_cloner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `shapegen.codegen.cloner`."""

from __future__ import annotations

import pytest

from shapegen.codegen.cloner import ShapeCloner, clone_operation_io
from shapegen.constants import SYNTHETIC_NAMESPACE
from shapegen.core.errors import CodegenError
from shapegen.model.model import Model
from shapegen.model.shape_id import ShapeId
from shapegen.model.shapes import Shape, ShapeType
from shapegen.model.traits import SyntheticCloneTrait, SyntheticTrait
from tests.conftest import make_shape, mark_codegen, prelude, sid


def _suffix_two(shape_id: ShapeId) -> ShapeId:
    return ShapeId(shape_id.namespace, f"{shape_id.name}2", shape_id.member)


@mark_codegen
def test_clone_renames_shape_and_members() -> None:
    foo = make_shape(
        "Foo",
        ShapeType.STRUCTURE,
        {"a": prelude("String"), "b": prelude("Integer")},
        traits={"sensitive": {}},
    )
    clone = ShapeCloner(_suffix_two).clone(foo)

    assert clone.id == sid("Foo2")
    assert [str(m.id) for m in clone.members] == ["example.weather#Foo2$a", "example.weather#Foo2$b"]
    assert [m.target for m in clone.members] == [prelude("String"), prelude("Integer")]
    assert clone.has_trait("smithy.api#sensitive")

    provenance = clone.get_trait(SyntheticCloneTrait.trait_id)
    assert isinstance(provenance, SyntheticCloneTrait)
    assert provenance.archetype == sid("Foo")
    assert not foo.has_trait(SyntheticCloneTrait.trait_id)


@mark_codegen
def test_clone_of_a_clone_records_the_immediate_original() -> None:
    foo = make_shape("Foo", ShapeType.STRUCTURE, {"a": prelude("String")})
    cloner = ShapeCloner(_suffix_two)
    second = cloner.clone(cloner.clone(foo))

    assert second.id == sid("Foo22")
    provenance = second.get_trait(SyntheticCloneTrait.trait_id)
    assert isinstance(provenance, SyntheticCloneTrait)
    assert provenance.archetype == sid("Foo2")


@mark_codegen
def test_clone_member_keeps_target_and_tags_provenance() -> None:
    foo = make_shape("Foo", ShapeType.STRUCTURE, {"a": prelude("String")})
    member = ShapeCloner(_suffix_two).clone_member(foo.members[0])

    assert member.id == sid("Foo2").with_member("a")
    assert member.target == prelude("String")
    provenance = member.get_trait(SyntheticCloneTrait.trait_id)
    assert isinstance(provenance, SyntheticCloneTrait)
    assert provenance.archetype == sid("Foo").with_member("a")


@mark_codegen
def test_reparented_members_drop_their_own_provenance() -> None:
    foo = make_shape("Foo", ShapeType.STRUCTURE, {"a": prelude("String")})
    cloner = ShapeCloner(_suffix_two)
    tagged = cloner.clone_member(foo.members[0])
    holder = Shape(id=sid("Foo2"), type=ShapeType.STRUCTURE, members=(tagged,))

    clone = cloner.clone(holder)

    assert clone.members[0].id == sid("Foo22").with_member("a")
    assert not clone.members[0].has_trait(SyntheticCloneTrait.trait_id)
    provenance = clone.get_trait(SyntheticCloneTrait.trait_id)
    assert isinstance(provenance, SyntheticCloneTrait)
    assert provenance.archetype == sid("Foo2")


@mark_codegen
def test_scalars_and_aggregates_clone_alike() -> None:
    cloner = ShapeCloner(_suffix_two)
    for shape in (
        make_shape("City", ShapeType.STRING),
        make_shape("Names", ShapeType.LIST, {"member": prelude("String")}),
        make_shape("Index", ShapeType.MAP, {"key": prelude("String"), "value": prelude("Integer")}),
        make_shape("Detail", ShapeType.UNION, {"text": prelude("String")}),
    ):
        clone = cloner.clone(shape)
        assert clone.id.name == f"{shape.id.name}2"
        assert clone.type is shape.type
        assert clone.member_names == shape.member_names


@mark_codegen
def test_naming_strategy_must_not_return_member_ids() -> None:
    cloner = ShapeCloner(lambda shape_id: shape_id.with_member("oops"))
    with pytest.raises(CodegenError, match="member id"):
        cloner.clone(make_shape("Foo", ShapeType.STRUCTURE))


@mark_codegen
def test_operation_io_is_cloned_per_operation(weather_model: Model) -> None:
    model = clone_operation_io(weather_model, sid("Weather"))

    operation = model.expect_shape(sid("GetForecast"))
    assert operation.input == ShapeId(SYNTHETIC_NAMESPACE, "GetForecastInput")
    assert operation.output == ShapeId(SYNTHETIC_NAMESPACE, "GetForecastOutput")

    output = model.expect_shape(operation.output)
    assert output.member_names == ("chance", "color", "detail", "tags")
    provenance = output.get_trait(SyntheticCloneTrait.trait_id)
    assert isinstance(provenance, SyntheticCloneTrait)
    assert provenance.archetype == sid("Forecast")

    # the originals are untouched
    assert sid("Forecast") in model
    assert weather_model.expect_shape(sid("GetForecast")).input == sid("GetForecastRequest")


@mark_codegen
def test_missing_operation_io_becomes_an_empty_structure() -> None:
    ping = make_shape("Ping", ShapeType.OPERATION, output=prelude("Unit"))
    model = clone_operation_io(Model([ping]))

    for name in ("PingInput", "PingOutput"):
        shape = model.expect_shape(ShapeId(SYNTHETIC_NAMESPACE, name))
        assert shape.type is ShapeType.STRUCTURE
        assert shape.members == ()
        assert shape.has_trait(SyntheticTrait.trait_id)


@mark_codegen
def test_non_structure_io_is_a_fault() -> None:
    bad = make_shape("Bad", ShapeType.OPERATION, input=prelude("String"))
    with pytest.raises(CodegenError, match="is not a structure"):
        clone_operation_io(Model([bad]))
