"""Tool models — descriptors advertised by ``tools/list`` and executor results."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient


class ToolResult(BaseModel):
    """Uniform outcome of a tool executor.

    ``success=True`` never carries an ``error``; ``success=False`` always
    carries one and never carries ``data``.
    """

    success: bool
    data: Any = None
    message: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> ToolResult:
        if self.success and self.error is not None:
            msg = "a successful ToolResult must not carry an error"
            raise ValueError(msg)
        if not self.success:
            if not self.error:
                msg = "a failed ToolResult must carry an error"
                raise ValueError(msg)
            if self.data is not None:
                msg = "a failed ToolResult must not carry data"
                raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> ToolResult:
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str) -> ToolResult:
        return cls(success=False, error=error)

    def to_text(self) -> str:
        """Pretty-printed JSON used as the ``tools/call`` text content."""
        payload = self.model_dump(exclude_none=True)
        if self.success:
            payload.setdefault("data", None)
        return json.dumps(payload, indent=2, default=str)


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


Executor = Callable[[dict[str, Any], "HuduClient"], Awaitable[ToolResult]]
