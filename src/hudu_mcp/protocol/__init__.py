"""Protocol — JSON-RPC envelopes, resources and the method dispatcher."""

from hudu_mcp.protocol.dispatcher import SUPPORTED_METHODS, Dispatcher
from hudu_mcp.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InternalError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
)
from hudu_mcp.protocol.models import (
    DEFAULT_PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    parse_request,
)

__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "INTERNAL_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "SUPPORTED_METHODS",
    "Dispatcher",
    "InternalError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ParseError",
    "ProtocolError",
    "ToolNotFoundError",
    "parse_request",
]
