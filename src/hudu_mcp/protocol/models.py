"""MCP models — JSON-RPC 2.0 envelopes.

Implements the message format used by the Model Context Protocol. A request
whose ``id`` key is absent is a notification; ``"id": null`` is still a call.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, model_validator

from hudu_mcp.protocol.errors import InvalidRequestError, ProtocolError

JSONRPC_VERSION = "2.0"
DEFAULT_PROTOCOL_VERSION = "2025-06-18"

RequestId = str | int | float | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    id: RequestId = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set

    @property
    def arguments(self) -> dict[str, Any]:
        return self.params or {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_exception(cls, exc: ProtocolError) -> JsonRpcError:
        return cls(code=exc.code, message=exc.message, data=exc.data)


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message; exactly one of result/error."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "a response carries exactly one of result or error"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, exc: ProtocolError) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError.from_exception(exc))

    def to_wire(self) -> dict[str, Any]:
        """Serialise for the wire; ``id`` is always present, ``data`` only when set."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload


# ---------------------------------------------------------------------------
# Envelope validation
# ---------------------------------------------------------------------------


def _valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int, float))


def parse_request(raw: Any) -> JsonRpcRequest:
    """Validate a decoded envelope and build a :class:`JsonRpcRequest`.

    Raises :class:`InvalidRequestError` carrying the request's ``id`` when it
    was itself well-formed, ``None`` otherwise.
    """
    if not isinstance(raw, dict):
        raise InvalidRequestError(data="Request must be a JSON object")

    id_ok = "id" not in raw or _valid_id(raw["id"])
    echo_id = raw.get("id") if id_ok else None

    if raw.get("jsonrpc") != JSONRPC_VERSION:
        raise InvalidRequestError(data='jsonrpc must be "2.0"', request_id=echo_id)
    if not isinstance(raw.get("method"), str):
        raise InvalidRequestError(data="method must be a string", request_id=echo_id)
    if not id_ok:
        raise InvalidRequestError(data="id must be a string, number or null")
    params = raw.get("params")
    if params is not None and not isinstance(params, dict):
        raise InvalidRequestError(data="params must be an object", request_id=echo_id)

    fields = {key: raw[key] for key in ("jsonrpc", "method", "id", "params") if key in raw}
    return JsonRpcRequest.model_validate(fields)
