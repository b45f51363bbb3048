# topmark:header:start
#
#   project      : ShapeGen
#   file         : generate.py
#   file_relpath : src/shapegen/cli/commands/generate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `generate` command.

Loads a Smithy JSON AST model, resolves the configuration (defaults, config
files, CLI overrides) and runs one generation pass.

Examples:
    Generate into the configured output directory:

        $ shapegen generate model.json --module example.com/weather

    List the files a run would write, without writing them:

        $ shapegen generate model.json --module example.com/weather --dry-run
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from shapegen.cli.errors import (
    ShapegenConfigError,
    ShapegenFileNotFoundError,
    ShapegenIOError,
    ShapegenPermissionDeniedError,
    from_codegen_error,
)
from shapegen.config.logging import get_logger
from shapegen.config.model import MutableConfig
from shapegen.core.errors import CodegenError, MissingStateError, ShapeIdError
from shapegen.engine import generate
from shapegen.model.loader import load_model

if TYPE_CHECKING:
    from shapegen.cli.console import ClickConsole
    from shapegen.config.logging import ShapegenLogger
    from shapegen.config.model import Config
    from shapegen.engine import GenerationResult

logger: ShapegenLogger = get_logger(__name__)


def resolve_config(
    *,
    config_files: tuple[Path, ...],
    no_config: bool,
    module_name: str | None,
    service: str | None,
    output_dir: Path | None,
    dry_run: bool,
) -> Config:
    """Merge config layers and CLI overrides into a frozen `Config`.

    Raises:
        ShapegenFileNotFoundError: If an explicit config file does not exist.
        ShapegenConfigError: If the merged configuration is incomplete or invalid.
    """
    for path in config_files:
        if not path.is_file():
            raise ShapegenFileNotFoundError(f"Config file not found: {path}")

    draft = MutableConfig.load_merged(extra_config_files=config_files, no_config=no_config)
    draft.apply_cli_args(
        {
            "module_name": module_name,
            "service": service,
            "output_dir": output_dir,
            "dry_run": True if dry_run else None,
        }
    )
    try:
        return draft.freeze()
    except MissingStateError as exc:
        raise ShapegenConfigError(
            "No module name configured: set [module] name in shapegen.toml or pass --module"
        ) from exc
    except ShapeIdError as exc:
        raise ShapegenConfigError(f"Invalid service id: {exc}") from exc


@click.command(
    name="generate",
    help="Generate Go code for a Smithy JSON AST model.",
)
@click.argument("model_path", metavar="MODEL", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--config",
    "config_files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Additional config file(s), merged after the discovered one.",
)
@click.option("--no-config", is_flag=True, default=False, help="Do not discover config files.")
@click.option("--module", "module_name", default=None, help="Go module path of the output.")
@click.option("--service", default=None, help="Only generate the closure of this service id.")
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory.",
)
@click.option("--dry-run", is_flag=True, default=False, help="Generate without writing files.")
def generate_command(
    *,
    model_path: Path,
    config_files: tuple[Path, ...],
    no_config: bool,
    module_name: str | None,
    service: str | None,
    output_dir: Path | None,
    dry_run: bool,
) -> None:
    """Generate Go code for MODEL.

    Args:
        model_path (Path): Smithy JSON AST document.
        config_files (tuple[Path, ...]): Explicit config files.
        no_config (bool): Skip config discovery.
        module_name (str | None): ``--module`` override.
        service (str | None): ``--service`` override.
        output_dir (Path | None): ``--output`` override.
        dry_run (bool): Do not write files.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    if not model_path.exists():
        raise ShapegenFileNotFoundError(f"Model file not found: {model_path}")

    config = resolve_config(
        config_files=config_files,
        no_config=no_config,
        module_name=module_name,
        service=service,
        output_dir=output_dir,
        dry_run=dry_run,
    )
    logger.debug("Resolved config: %s", config)

    try:
        model = load_model(model_path)
        result = generate(model, config)
    except CodegenError as exc:
        raise from_codegen_error(exc) from exc
    except PermissionError as exc:
        raise ShapegenPermissionDeniedError(f"Permission denied: {exc}") from exc
    except OSError as exc:
        raise ShapegenIOError(f"Cannot write generated files: {exc}") from exc

    _report(console, config, result, vlevel)


def _report(console: ClickConsole, config: Config, result: GenerationResult, vlevel: int) -> None:
    if vlevel < 0:
        return
    verb = "Would write" if config.dry_run else "Wrote"
    if vlevel > 0:
        for path in result.files:
            console.print(f"  {path}")
        for dependency in result.dependencies:
            console.print(console.styled(f"  import {dependency}", dim=True))
    target = "" if config.dry_run else f" to {config.output_dir}"
    console.print(console.styled(f"{verb} {len(result.files)} file(s){target}", fg="green"))
