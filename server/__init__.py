"""MCP tool server exposing the agents."""

from server.app import build_server, serve
from server.tools import ToolServer, ToolSpec

__all__ = ["ToolServer", "ToolSpec", "build_server", "serve"]
