"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from hudu_mcp.protocol.resources import ResourceDescriptor  # noqa: TC001
from hudu_mcp.tools.models import ToolDescriptor  # noqa: TC001

console = Console()
# stdout may carry the stdio protocol stream
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Hudu Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Actions")
    table.add_column("Description")

    for tool in tools:
        action = tool.input_schema.get("properties", {}).get("action", {})
        actions = ", ".join(action.get("enum", [])) or "-"
        table.add_row(tool.name, actions, _truncate(tool.description))

    console.print(table)
    console.print(f"{len(tools)} tools")


def print_resources_table(resources: list[ResourceDescriptor]) -> None:
    """Pretty-print resource descriptors as a table."""
    table = Table(title="Hudu Resources")
    table.add_column("URI", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description")

    for resource in resources:
        table.add_row(resource.uri, resource.name, _truncate(resource.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
