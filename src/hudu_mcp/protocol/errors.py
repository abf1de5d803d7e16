"""Error types for the protocol layer, each carrying its JSON-RPC code."""

from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR
    default_message: str = "Internal error"

    def __init__(
        self,
        message: str | None = None,
        *,
        data: Any = None,
        request_id: Any = None,
    ) -> None:
        self.message = message or self.default_message
        self.data = data
        self.request_id = request_id
        super().__init__(self.message)


class ParseError(ProtocolError):
    """The transport received bytes that are not valid JSON."""

    code = PARSE_ERROR
    default_message = "Parse error"


class InvalidRequestError(ProtocolError):
    """The envelope or its params are malformed."""

    code = INVALID_REQUEST
    default_message = "Invalid Request"


class MethodNotFoundError(ProtocolError):
    """Unknown method, or ``tools/call`` without a tool name."""

    code = METHOD_NOT_FOUND
    default_message = "Method not found"


class InternalError(ProtocolError):
    """A handler or tool failed."""


class ToolNotFoundError(InternalError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")
