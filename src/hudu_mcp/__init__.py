"""hudu-mcp — Hudu documentation platform exposed as MCP tools and resources."""

from __future__ import annotations

__version__ = "1.0.0"

SERVER_NAME = "hudu-mcp-server"
