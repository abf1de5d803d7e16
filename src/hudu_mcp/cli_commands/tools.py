"""``hudu-mcp tools`` — inspect the tool registry."""

from __future__ import annotations

import json

import click

from hudu_mcp.cli_commands._output import print_tools_table
from hudu_mcp.tools.registry import build_registry


@click.group()
def tools() -> None:
    """Inspect the tools this server exposes."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print descriptors as JSON.")
def list_tools(as_json: bool) -> None:
    """List every registered tool. Needs no backend configuration."""
    descriptors = build_registry().descriptors()
    if as_json:
        click.echo(json.dumps([d.to_wire() for d in descriptors], indent=2))
        return
    print_tools_table(descriptors)
