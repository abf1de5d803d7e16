"""``hudu-mcp resources`` — inspect the static resource list."""

from __future__ import annotations

import click

from hudu_mcp.cli_commands._output import print_resources_table
from hudu_mcp.protocol.resources import resource_descriptors


@click.group()
def resources() -> None:
    """Inspect the resources this server exposes."""


@resources.command("list")
def list_resources() -> None:
    """List the readable resource URIs."""
    print_resources_table(resource_descriptors())
