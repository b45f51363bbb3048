# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_engine.py
#   file_relpath : tests/engine/test_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `shapegen.engine.generate`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shapegen.codegen.manifest import DirectoryManifest, MemoryManifest
from shapegen.constants import GENERATED_BANNER
from shapegen.core.errors import ShapeNotFoundError, UnsupportedShapeError
from shapegen.engine import generate, generation_closure
from shapegen.model.model import Model
from shapegen.model.shapes import ShapeType
from tests.conftest import make_config, make_shape, mark_codegen, prelude, sid

if TYPE_CHECKING:
    from pathlib import Path

SERVICE = "example.weather#Weather"


@mark_codegen
def test_service_pass_writes_every_unit(weather_model: Model) -> None:
    manifest = MemoryManifest()
    result = generate(weather_model, make_config(service=SERVICE), manifest)

    assert set(result.files) == {
        "api_op_GetForecast.go",
        "types/enums.go",
        "types/types.go",
        "types/errors.go",
        "schemas/schemas.go",
        "serializers.go",
        "deserializers.go",
        "types/serializers.go",
        "types/deserializers.go",
    }
    assert result.manifest is manifest
    assert manifest.files == list(result.files)
    for path in result.files:
        assert (manifest.get(path) or "").startswith(GENERATED_BANNER + "\n\npackage ")


@mark_codegen
def test_operation_io_lands_in_its_operation_file(weather_model: Model) -> None:
    manifest = MemoryManifest()
    generate(weather_model, make_config(service=SERVICE), manifest)
    text = manifest.get("api_op_GetForecast.go") or ""

    assert "package weather\n" in text
    assert "type GetForecastInput struct {\n" in text
    assert "type GetForecastOutput struct {\n" in text
    assert "\tColor types.Color\n" in text
    # the originals are outside the service closure once cloned
    assert "type Forecast struct" not in (manifest.get("types/types.go") or "")


@mark_codegen
def test_dependencies_are_sorted_and_unique(weather_model: Model) -> None:
    result = generate(weather_model, make_config(service=SERVICE), MemoryManifest())

    assert list(result.dependencies) == sorted(set(result.dependencies))
    for path in (
        "example.com/weather/schemas",
        "example.com/weather/types",
        "fmt",
        "github.com/aws/smithy-go",
        "github.com/aws/smithy-go/prelude",
        "github.com/aws/smithy-go/traits",
    ):
        assert path in result.dependencies


@mark_codegen
def test_without_cloning_the_original_structures_are_generated(weather_model: Model) -> None:
    manifest = MemoryManifest()
    result = generate(weather_model, make_config(service=SERVICE, clone_operation_io=False), manifest)

    assert "api_op_GetForecast.go" not in result.files
    types_text = manifest.get("types/types.go") or ""
    assert "type Forecast struct {\n" in types_text
    assert "type GetForecastRequest struct {\n" in types_text


@mark_codegen
def test_whole_model_pass_includes_unreachable_shapes(weather_model: Model) -> None:
    orphan = make_shape("Orphan", ShapeType.STRUCTURE, {"name": prelude("String")})
    manifest = MemoryManifest()
    generate(weather_model.with_shapes(orphan), make_config(clone_operation_io=False), manifest)

    assert "type Orphan struct {\n" in (manifest.get("types/types.go") or "")


@mark_codegen
def test_disabled_outputs_are_skipped(weather_model: Model) -> None:
    config = make_config(service=SERVICE, types=False, schemas=False)
    result = generate(weather_model, config, MemoryManifest())

    assert set(result.files) == {
        "serializers.go",
        "deserializers.go",
        "types/serializers.go",
        "types/deserializers.go",
    }


@mark_codegen
def test_fault_writes_nothing(tmp_path: Path) -> None:
    ledger = make_shape("Ledger", ShapeType.STRUCTURE, {"total": prelude("BigInteger")})
    manifest = DirectoryManifest(tmp_path)

    with pytest.raises(UnsupportedShapeError):
        generate(Model([ledger]), make_config(), manifest)
    assert manifest.files == []
    assert list(tmp_path.iterdir()) == []


@mark_codegen
def test_default_manifest_writes_to_the_output_directory(weather_model: Model, tmp_path: Path) -> None:
    result = generate(weather_model, make_config(service=SERVICE, output_dir=tmp_path))

    assert isinstance(result.manifest, DirectoryManifest)
    enums = tmp_path / "types" / "enums.go"
    assert enums.is_file()
    assert "type Color string\n" in enums.read_text(encoding="utf-8")


@mark_codegen
def test_dry_run_keeps_files_in_memory(weather_model: Model, tmp_path: Path) -> None:
    result = generate(weather_model, make_config(service=SERVICE, output_dir=tmp_path, dry_run=True))

    assert isinstance(result.manifest, MemoryManifest)
    assert result.files
    assert list(tmp_path.iterdir()) == []


@mark_codegen
def test_generation_closure(weather_model: Model) -> None:
    closure = generation_closure(weather_model, sid("Weather"))

    assert [s.id for s in closure] == sorted(s.id for s in closure)
    assert all(s.id.namespace == "example.weather" for s in closure)
    with pytest.raises(ShapeNotFoundError):
        generation_closure(weather_model, sid("Nope"))


@mark_codegen
def test_string_list_alone_gets_a_decoder_and_a_schema() -> None:
    names = make_shape("Names", ShapeType.LIST, {"member": prelude("String")})
    manifest = MemoryManifest()
    result = generate(Model([names]), make_config(), manifest)

    assert set(result.files) == {"schemas/schemas.go", "types/serializers.go", "types/deserializers.go"}
    decoders = manifest.get("types/deserializers.go") or ""
    assert "func deserializeNames(" in decoders
    assert "\t\t*v = append(*v, vv)\n" in decoders
    assert "(vv)" not in decoders
    schemas = manifest.get("schemas/schemas.go") or ""
    assert "\tType: smithy.ShapeTypeList,\n" in schemas
    assert '\t\t"member": smithy.NewMember("member", prelude.String),\n' in schemas
