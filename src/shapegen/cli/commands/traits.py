# topmark:header:start
#
#   project      : ShapeGen
#   file         : traits.py
#   file_relpath : src/shapegen/cli/commands/traits.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen `traits` command.

Lists the traits that are rendered into schemas, in rendering order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shapegen.codegen.traits import TRAIT_RENDERERS

if TYPE_CHECKING:
    from shapegen.cli.console import ClickConsole


@click.command(
    name="traits",
    help="List the traits rendered into schemas, in rendering order.",
)
def traits_command() -> None:
    """List registered trait renderers.

    With ``-v`` the Go type each trait is rendered as is shown too.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    width = max(len(trait_id) for trait_id in TRAIT_RENDERERS)
    for trait_id, renderer in TRAIT_RENDERERS.items():
        if vlevel > 0:
            struct = getattr(renderer, "struct", type(renderer).__name__)
            console.print(f"{trait_id:<{width}}  {console.styled('traits.' + struct, dim=True)}")
        else:
            console.print(trait_id)
