"""Transports — stdio and HTTP front-ends for the dispatcher."""

from hudu_mcp.transports.http import create_app, event_stream
from hudu_mcp.transports.stdio import StdioServer

__all__ = ["StdioServer", "create_app", "event_stream"]
