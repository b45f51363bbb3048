# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_writer.py
#   file_relpath : tests/codegen/test_writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `shapegen.codegen.writer.GoWriter`."""

from __future__ import annotations

from shapegen.codegen.dependencies import SmithyGoDependency
from shapegen.codegen.symbols import (
    map_of,
    namespace_reference,
    reference_symbol,
    slice_of,
    universe,
    value_symbol,
)
from shapegen.codegen.writer import GoWriter
from shapegen.constants import GENERATED_BANNER
from tests.conftest import mark_codegen, sid

TYPES = "example.com/weather/types"


@mark_codegen
def test_blocks_indent_with_tabs() -> None:
    writer = GoWriter("example.com/weather")
    with writer.block("func f() {"):
        with writer.block("if ok {"):
            writer.write("return")
        writer.write()

    assert writer.body == "func f() {\n\tif ok {\n\t\treturn\n\t}\n\n}\n"


@mark_codegen
def test_write_lines_indents_each_line() -> None:
    writer = GoWriter("example.com/weather")
    with writer.block("const (", ")"):
        writer.write_lines(['A = "a"', 'B = "b"'])

    assert writer.body == 'const (\n\tA = "a"\n\tB = "b"\n)\n'


@mark_codegen
def test_render_has_banner_package_and_imports() -> None:
    writer = GoWriter(TYPES)
    assert writer.is_empty
    writer.write(f"var t {writer.type_ref(SmithyGoDependency.TIME.symbol('Time'))}")

    text = writer.render()
    assert text.startswith(f"{GENERATED_BANNER}\n\npackage types\n\nimport (\n\t\"time\"\n)\n\n")
    assert text.endswith("var t time.Time\n")


@mark_codegen
def test_qualify_local_universe_and_foreign_symbols() -> None:
    writer = GoWriter(TYPES)
    local = reference_symbol("Forecast", TYPES)
    foreign = namespace_reference("github.com/aws/smithy-go", "Schema", alias="smithy")

    assert writer.qualify(local) == "Forecast"
    assert writer.qualify(universe("string")) == "string"
    assert writer.qualify(foreign) == "smithy.Schema"
    assert writer.imports.alias_for("github.com/aws/smithy-go") == "smithy"


@mark_codegen
def test_pointer_ref_follows_symbol_semantics() -> None:
    writer = GoWriter("example.com/weather")
    forecast = reference_symbol("Forecast", TYPES)
    color = value_symbol("Color", TYPES)

    assert writer.pointer_ref(forecast) == "*types.Forecast"
    assert writer.pointer_ref(color) == "types.Color"
    assert writer.pointer_ref(universe("int32").with_shape(sid("Count"), pointable=True)) == "*int32"


@mark_codegen
def test_collections_import_their_element_packages() -> None:
    writer = GoWriter("example.com/weather")
    forecasts = slice_of(reference_symbol("Forecast", TYPES))
    index = map_of(value_symbol("Color", TYPES))

    assert writer.type_ref(forecasts) == "[]types.Forecast"
    assert writer.pointer_ref(index) == "map[string]types.Color"
    assert TYPES in writer.imports


@mark_codegen
def test_add_dependency_returns_the_alias() -> None:
    writer = GoWriter(TYPES)
    assert writer.add_dependency(SmithyGoDependency.SMITHY) == "smithy"
    assert writer.add_dependency(SmithyGoDependency.MATH_BIG) == "big"
    assert len(writer.imports) == 2
