"""``hudu-mcp serve`` — run the server over stdio or HTTP."""

from __future__ import annotations

import asyncio
import sys

import click
import uvicorn
from pydantic import ValidationError

from hudu_mcp.cli_commands._output import err_console
from hudu_mcp.config import (
    DEFAULT_KEEPALIVE,
    ConfigError,
    HuduConfig,
    ServerConfig,
    default_port,
    load_config,
)
from hudu_mcp.gateway.client import HuduClient
from hudu_mcp.protocol.dispatcher import Dispatcher
from hudu_mcp.tools.registry import build_registry
from hudu_mcp.transports.http import create_app
from hudu_mcp.transports.stdio import StdioServer


@click.group()
def serve() -> None:
    """Run the MCP server."""


def _load_config() -> HuduConfig:
    try:
        return load_config()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


@serve.command("stdio")
def serve_stdio() -> None:
    """Serve newline-delimited JSON-RPC on stdin/stdout."""
    config = _load_config()

    async def _run() -> None:
        async with HuduClient(config) as gateway:
            dispatcher = Dispatcher(build_registry(), gateway)
            await StdioServer(dispatcher).serve()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@serve.command("http")
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port (default: $MCP_SERVER_PORT or 3000).")
@click.option(
    "--keepalive",
    type=float,
    default=DEFAULT_KEEPALIVE,
    show_default=True,
    help="Seconds between SSE keep-alive pings.",
)
def serve_http(host: str, port: int | None, keepalive: float) -> None:
    """Serve JSON-RPC over HTTP with an SSE keep-alive stream."""
    config = _load_config()
    try:
        server = ServerConfig(
            host=host,
            port=port if port is not None else default_port(),
            keepalive_interval=keepalive,
        )
    except (ConfigError, ValidationError) as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    gateway = HuduClient(config)
    app = create_app(
        Dispatcher(build_registry(), gateway),
        gateway=gateway,
        keepalive_interval=server.keepalive_interval,
    )
    err_console.print(f"Hudu MCP server listening on http://{server.host}:{server.port}/mcp")
    uvicorn.run(app, host=server.host, port=server.port, log_level="warning")
