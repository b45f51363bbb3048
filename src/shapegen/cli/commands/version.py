# topmark:header:start
#
#   project      : ShapeGen
#   file         : version.py
#   file_relpath : src/shapegen/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `version` command.

Prints the current ShapeGen version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapegen.constants import SHAPEGEN_VERSION

if TYPE_CHECKING:
    from shapegen.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of ShapeGen.",
)
def version_command() -> None:
    """Show the current version of ShapeGen."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    console.print(SHAPEGEN_VERSION)
