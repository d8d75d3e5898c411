"""MCP server over stdio."""

from typing import Any, List, Optional

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from core.config import Settings, get_settings
from plugins import create_engine
from server.tools import ToolServer

logger = structlog.get_logger(__name__)


def build_server(settings: Optional[Settings] = None, tools: Optional[ToolServer] = None) -> Server:
    settings = settings or get_settings()
    tools = tools or ToolServer.from_engine(create_engine(settings), settings)

    app = Server(settings.app_name)

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        return tools.list_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: Any) -> List[TextContent]:
        return await tools.call_tool(name, arguments)

    return app


async def serve(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    app = build_server(settings)

    logger.info("mcp_server_starting", name=settings.app_name, version=settings.app_version)

    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )
