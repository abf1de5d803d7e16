"""hudu-mcp CLI entrypoint."""

from __future__ import annotations

import sys

import click

from hudu_mcp import __version__
from hudu_mcp.config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="hudu-mcp")
@click.option(
    "--log-level",
    default=None,
    help="Log level for stderr output (default: $HUDU_MCP_LOG_LEVEL or WARNING).",
)
@click.option("--otel", is_flag=True, help="Export OpenTelemetry spans to stderr.")
def main(log_level: str | None, otel: bool) -> None:
    """hudu-mcp — Hudu documentation platform as an MCP server."""
    configure_logging(log_level)
    if otel:
        from hudu_mcp.cli_commands._output import err_console
        from hudu_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry()
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)


# Register subcommands
from hudu_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
