"""Dispatcher — routes decoded JSON-RPC envelopes to protocol handlers.

Errors are shaped once, in :meth:`Dispatcher.handle`: handlers raise
:class:`~hudu_mcp.protocol.errors.ProtocolError` subclasses and any other
exception becomes ``-32603``. A per-request failure never escapes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from hudu_mcp import SERVER_NAME, __version__
from hudu_mcp.gateway.errors import GatewayError
from hudu_mcp.protocol.errors import (
    InternalError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ToolNotFoundError,
)
from hudu_mcp.protocol.models import (
    DEFAULT_PROTOCOL_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    parse_request,
)
from hudu_mcp.protocol.resources import read_resource, resource_descriptors
from hudu_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_RESOURCE_URI,
    ATTR_TOOL_NAME,
    ATTR_TOOL_SUCCESS,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from hudu_mcp.gateway.client import HuduClient
    from hudu_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[JsonRpcRequest, "Span"], Awaitable[dict[str, Any]]]

SUPPORTED_METHODS = (
    "initialize",
    "tools/list",
    "tools/call",
    "resources/list",
    "resources/read",
    "ping",
    "notifications/initialized",
)


class Dispatcher:
    """Validates envelopes and routes ``method`` to the matching handler.

    Usage::

        dispatcher = Dispatcher(build_registry(), hudu_client)
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 1, "method": "ping"})
        responses = await dispatcher.handle_batch([...])
    """

    def __init__(self, registry: ToolRegistry, gateway: HuduClient) -> None:
        self._registry = registry
        self._gateway = gateway
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/read": self._read_resource,
            "ping": self._ping,
            "notifications/initialized": self._initialized,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def handle(self, raw: Any) -> dict[str, Any] | None:
        """Process one decoded envelope; ``None`` means send nothing."""
        with _tracer.start_as_current_span("mcp.request") as span:
            try:
                request = parse_request(raw)
            except InvalidRequestError as exc:
                logger.debug("Rejected envelope: %s", exc.data)
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                return JsonRpcResponse.failure(exc.request_id, exc).to_wire()

            span.set_attribute(ATTR_METHOD, request.method)
            try:
                response = JsonRpcResponse.success(request.id, await self._dispatch(request, span))
            except ProtocolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                response = JsonRpcResponse.failure(request.id, exc)
            except Exception as exc:
                logger.exception("Unhandled error in %s", request.method)
                internal = InternalError(data=str(exc))
                span.set_attribute(ATTR_ERROR_CODE, internal.code)
                response = JsonRpcResponse.failure(request.id, internal)

            if request.is_notification:
                if response.error is not None:
                    logger.warning(
                        "Notification %s failed: %s", request.method, response.error.message
                    )
                return None
            return response.to_wire()

    async def handle_batch(self, items: list[Any]) -> list[dict[str, Any]]:
        """Dispatch every entry concurrently; responses keep input order."""
        responses = await asyncio.gather(*(self.handle(item) for item in items))
        return [response for response in responses if response is not None]

    async def _dispatch(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        handler = self._handlers.get(request.method)
        if handler is None:
            raise MethodNotFoundError(f"Method not found: {request.method}")
        return await handler(request, span)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        version = request.arguments.get("protocolVersion")
        if not isinstance(version, str) or not version:
            version = DEFAULT_PROTOCOL_VERSION
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    async def _list_tools(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        return {"tools": [d.to_wire() for d in self._registry.descriptors()]}

    async def _call_tool(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        params = request.arguments
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise MethodNotFoundError("Tool name is required")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidRequestError(data="params.arguments must be an object")

        tool = self._registry.get(name)
        if tool is None:
            raise ToolNotFoundError(name)

        span.set_attribute(ATTR_TOOL_NAME, name)
        try:
            result = await tool.executor(arguments, self._gateway)
        except Exception as exc:
            logger.exception("Tool %s raised", name)
            raise InternalError(data=str(exc)) from exc

        span.set_attribute(ATTR_TOOL_SUCCESS, result.success)
        if not result.success:
            raise InternalError(result.error)
        return {"content": [{"type": "text", "text": result.to_text()}]}

    async def _list_resources(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        return {"resources": [d.to_wire() for d in resource_descriptors()]}

    async def _read_resource(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        uri = request.arguments.get("uri")
        span.set_attribute(ATTR_RESOURCE_URI, str(uri))
        try:
            return await read_resource(uri, self._gateway)
        except GatewayError as exc:
            raise InternalError(f"Failed to read resource {uri}: {exc}") from exc

    async def _ping(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        return {}

    async def _initialized(self, request: JsonRpcRequest, span: Span) -> dict[str, Any]:
        return {}
