# topmark:header:start
#
#   project      : ShapeGen
#   file         : test_cli_commands.py
#   file_relpath : tests/cli/test_cli_commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: group help, `version` and `traits`."""

from __future__ import annotations

import pytest

from shapegen.cli.errors import (
    ShapegenConfigError,
    ShapegenGenerationError,
    ShapegenModelError,
    ShapegenUnsupportedShapeError,
    from_codegen_error,
)
from shapegen.cli.exit_codes import ExitCode
from shapegen.codegen.traits import TRAIT_RENDERERS
from shapegen.constants import SHAPEGEN_VERSION
from shapegen.core.errors import (
    CodegenError,
    MissingStateError,
    ModelLoadError,
    ShapeNotFoundError,
    SymbolCollisionError,
    UnsupportedShapeError,
)
from shapegen.model.model import Model
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli, parametrize, sid


@mark_cli
def test_version_outputs_the_installed_version() -> None:
    result = run_cli(["--no-color", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == SHAPEGEN_VERSION


@mark_cli
def test_group_without_command_prints_hint_and_help() -> None:
    result = run_cli(["--no-color"])

    assert_SUCCESS(result)
    assert "Hint: use 'shapegen generate MODEL --module NAME'" in result.output
    assert "generate" in result.output
    assert "traits" in result.output


@mark_cli
def test_traits_lists_renderers_in_order() -> None:
    result = run_cli(["--no-color", "traits"])

    assert_SUCCESS(result)
    assert result.output.splitlines() == list(TRAIT_RENDERERS)


@mark_cli
def test_verbose_traits_show_go_types() -> None:
    result = run_cli(["--no-color", "-v", "traits"])

    assert_SUCCESS(result)
    first = result.output.splitlines()[0]
    assert first.startswith("smithy.api#sensitive")
    assert first.endswith("traits.Sensitive")


@mark_cli
def test_generate_help() -> None:
    result = run_cli(["generate", "--help"])

    assert_SUCCESS(result)
    for option in ("--module", "--service", "--output", "--dry-run", "--config", "--no-config"):
        assert option in result.output


@mark_cli
@parametrize(
    "error, expected, code",
    [
        (ModelLoadError("bad"), ShapegenModelError, ExitCode.MODEL_ERROR),
        (ShapeNotFoundError("a#B"), ShapegenModelError, ExitCode.MODEL_ERROR),
        (UnsupportedShapeError("bigInteger"), ShapegenUnsupportedShapeError, ExitCode.UNSUPPORTED_SHAPE),
        (MissingStateError("module_name", "Config"), ShapegenConfigError, ExitCode.CONFIG_ERROR),
        (
            SymbolCollisionError("ns", "X", sid("A"), sid("B")),
            ShapegenGenerationError,
            ExitCode.GENERATION_ERROR,
        ),
        (CodegenError("boom"), ShapegenGenerationError, ExitCode.GENERATION_ERROR),
    ],
)
def test_codegen_errors_map_to_exit_codes(error: CodegenError, expected: type, code: ExitCode) -> None:
    translated = from_codegen_error(error)

    assert isinstance(translated, expected)
    assert translated.exit_code == code
    assert translated.format_message() == str(error)


@mark_cli
def test_model_lookup_errors_carry_the_shape_id() -> None:
    with pytest.raises(ShapeNotFoundError) as excinfo:
        Model().expect_shape(sid("Nope"))
    assert "example.weather#Nope" in from_codegen_error(excinfo.value).format_message()
