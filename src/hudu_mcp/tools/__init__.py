"""Tools — the resource/action surface exposed through ``tools/call``."""

from hudu_mcp.tools.models import Executor, ToolDescriptor, ToolResult
from hudu_mcp.tools.registry import RegisteredTool, ToolRegistry, build_registry

__all__ = [
    "Executor",
    "RegisteredTool",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolResult",
    "build_registry",
]
