"""Stdio transport — newline-delimited JSON over stdin/stdout.

Lines are handled one at a time, in receipt order. Stdout carries only
protocol responses; logging goes to stderr.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

from hudu_mcp.protocol.errors import InvalidRequestError, ParseError
from hudu_mcp.protocol.models import JsonRpcResponse

if TYPE_CHECKING:
    from hudu_mcp.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class StdioServer:
    """Reads JSON-RPC envelopes line by line and writes one line per response."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    async def handle_line(self, line: str) -> dict[str, Any] | list[dict[str, Any]] | None:
        """Decode and dispatch one line; ``None`` means nothing to write."""
        line = line.strip()
        if not line:
            return None
        try:
            raw = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.debug("Unparsable line: %s", exc)
            return JsonRpcResponse.failure(None, ParseError()).to_wire()

        if isinstance(raw, list):
            if not raw:
                return JsonRpcResponse.failure(None, InvalidRequestError()).to_wire()
            responses = await self._dispatcher.handle_batch(raw)
            return responses or None
        return await self._dispatcher.handle(raw)

    def write(self, payload: dict[str, Any] | list[dict[str, Any]]) -> None:
        self._stdout.write(json.dumps(payload) + "\n")
        self._stdout.flush()

    async def serve(self) -> None:
        """Run until stdin reaches EOF."""
        loop = asyncio.get_running_loop()
        logger.info("Serving MCP over stdio")
        while True:
            line = await loop.run_in_executor(None, self._stdin.readline)
            if not line:
                break
            response = await self.handle_line(line)
            if response is not None:
                self.write(response)
        logger.info("Stdin closed, stopping")
