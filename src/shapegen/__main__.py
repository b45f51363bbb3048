# topmark:header:start
#
#   project      : ShapeGen
#   file         : __main__.py
#   file_relpath : src/shapegen/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ShapeGen via ``python -m shapegen``.

It delegates directly to `shapegen.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how ShapeGen is launched.

Examples:
    Generate a module from a JSON AST model::

        python -m shapegen generate model.json --module example.com/weather
"""

from __future__ import annotations

from shapegen.cli.main import cli

if __name__ == "__main__":
    cli()
