# topmark:header:start
#
#   project      : ShapeGen
#   file         : main.py
#   file_relpath : src/shapegen/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen command line interface.

Group-level options are initialized once and placed into ``ctx.obj``:

* ``verbosity_level``: program-output verbosity from ``-v`` / ``-q``;
* ``log_level``: internal logging level from ``SHAPEGEN_LOG_LEVEL``;
* ``console``: the `ClickConsole` used for all user-facing output.
"""

from __future__ import annotations

import click

from shapegen.cli.commands.generate import generate_command
from shapegen.cli.commands.traits import traits_command
from shapegen.cli.commands.version import version_command
from shapegen.cli.console import ClickConsole
from shapegen.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int, no_color: bool) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}
    ctx.obj["verbosity_level"] = verbose - quiet

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ShapeGen: generate Go types, schemas and serializers from Smithy models.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity. Specify up to twice for more detail.",
)
@click.option(
    "-q",
    "--quiet",
    count=True,
    help="Suppress output. Specify up to twice for even less.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int, no_color: bool) -> None:
    """Entry point for the ShapeGen CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'shapegen generate MODEL --module NAME' to generate code.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(generate_command)

cli.add_command(traits_command)

if __name__ == "__main__":
    cli()
