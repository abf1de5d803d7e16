"""HTTP transport — FastAPI app exposing the dispatcher over ``/mcp``.

Routes::

    POST /mcp, POST /      one envelope in, one envelope out (204 for notifications)
    POST /mcp/batch        array in, array out, input order preserved
    POST /initialize       shortcut for the ``initialize`` method
    GET  /mcp              discovery document
    GET  /                 server info
    GET  /health           liveness probe
    GET  /keepalive        uptime probe
    GET  /sse              server-sent keep-alive stream
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from hudu_mcp import SERVER_NAME, __version__
from hudu_mcp.config import DEFAULT_KEEPALIVE
from hudu_mcp.protocol.dispatcher import SUPPORTED_METHODS
from hudu_mcp.protocol.errors import INVALID_REQUEST, InvalidRequestError, ParseError
from hudu_mcp.protocol.models import DEFAULT_PROTOCOL_VERSION, JsonRpcResponse

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient
    from hudu_mcp.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

CONNECTION_FRAME = 'data: {"type":"connection","status":"ready"}\n\n'
PING_FRAME = 'data: {"type":"ping"}\n\n'


def _capabilities() -> dict[str, Any]:
    return {"resources": {}, "tools": {}}


def _error_payload(exc: InvalidRequestError | ParseError) -> dict[str, Any]:
    return JsonRpcResponse.failure(None, exc).to_wire()


def _envelope_response(response: dict[str, Any] | None) -> Response:
    """Map a dispatcher reply to HTTP: 204 when silent, 400 for an invalid request."""
    if response is None:
        return Response(status_code=204)
    error = response.get("error")
    status_code = 400 if error and error.get("code") == INVALID_REQUEST else 200
    return JSONResponse(status_code=status_code, content=response)


async def event_stream(
    is_disconnected: Callable[[], Awaitable[bool]],
    interval: float = DEFAULT_KEEPALIVE,
) -> AsyncIterator[str]:
    """Yield one connection frame, then a ping every *interval* seconds.

    Stops as soon as *is_disconnected* reports the client has gone; closing
    the generator from outside also ends the loop.
    """
    yield CONNECTION_FRAME
    try:
        while True:
            await asyncio.sleep(interval)
            if await is_disconnected():
                break
            yield PING_FRAME
    finally:
        logger.debug("SSE stream closed")


def create_app(
    dispatcher: Dispatcher,
    *,
    gateway: HuduClient | None = None,
    keepalive_interval: float = DEFAULT_KEEPALIVE,
) -> FastAPI:
    """Build the FastAPI app; *gateway*, when given, is opened and closed with it."""
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if gateway is not None:
            await gateway.open()
        yield
        if gateway is not None:
            await gateway.aclose()

    app = FastAPI(
        title="Hudu MCP Server",
        description="Hudu documentation platform exposed as MCP tools and resources.",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.time()
        response = await call_next(request)
        logger.debug(
            "%s %s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            (time.time() - start) * 1000,
        )
        return response

    async def _single(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content=_error_payload(ParseError()))

        return _envelope_response(await dispatcher.handle(body))

    @app.post("/mcp")
    async def mcp_endpoint(request: Request) -> Response:
        return await _single(request)

    @app.post("/")
    async def root_endpoint(request: Request) -> Response:
        return await _single(request)

    @app.post("/mcp/batch")
    async def batch_endpoint(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content=_error_payload(ParseError()))
        if not isinstance(body, list) or not body:
            return JSONResponse(status_code=400, content=_error_payload(InvalidRequestError()))

        responses = await dispatcher.handle_batch(body)
        if not responses:
            return Response(status_code=204)
        return JSONResponse(content=responses)

    @app.post("/initialize")
    async def initialize_endpoint(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            body = {}
        params = body.get("params") if isinstance(body, dict) else None
        request_id = body.get("id") if isinstance(body, dict) else None
        response = await dispatcher.handle(
            {"jsonrpc": "2.0", "id": request_id, "method": "initialize", "params": params}
        )
        return _envelope_response(response)

    @app.get("/mcp")
    async def discovery() -> JSONResponse:
        return JSONResponse(
            content={
                "name": SERVER_NAME,
                "version": __version__,
                "protocolVersion": DEFAULT_PROTOCOL_VERSION,
                "transport": {"type": "http", "endpoint": "/mcp"},
                "capabilities": _capabilities(),
                "methods": ["POST"],
                "supportedMethods": [
                    m for m in SUPPORTED_METHODS if not m.startswith("notifications/")
                ],
            }
        )

    @app.get("/")
    async def server_info() -> JSONResponse:
        return JSONResponse(
            content={
                "name": SERVER_NAME,
                "version": __version__,
                "protocolVersion": DEFAULT_PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": _capabilities(),
            }
        )

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse(
            content={"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
        )

    @app.get("/keepalive")
    async def keepalive() -> JSONResponse:
        return JSONResponse(content={"alive": True, "uptime": time.monotonic() - started})

    @app.get("/sse")
    async def sse(request: Request) -> StreamingResponse:
        return StreamingResponse(
            event_stream(request.is_disconnected, keepalive_interval),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    return app
