# topmark:header:start
#
#   project      : ShapeGen
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running ShapeGen in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so config discovery and relative output
directories resolve against the temporary test directory instead of the
repository checkout.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from shapegen.cli.exit_codes import ExitCode
from shapegen.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(tmp_path: Path, argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["--no-color", "generate", "model.json"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv)
    finally:
        os.chdir(cwd)


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI without changing the working directory.

    Use for commands that do not touch the filesystem (``--help``, ``version``).
    """
    return CliRunner().invoke(cli, argv)


def write_model(tmp_path: Path, document: dict[str, Any], name: str = "model.json") -> Path:
    """Write ``document`` as JSON below ``tmp_path`` and return its path."""
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``.

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
        code (ExitCode): Expected exit code.
    """
    assert result.exit_code == code, result.output
