"""
Research Sources MCP Server

Exposes the tool registry as MCP tools over stdio:

    research-sources serve
"""
from __future__ import annotations

from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from . import __version__
from .cache import close_match_cache, install_shutdown_handlers
from .config import Settings, load_settings
from .logging import configure_logging, get_logger
from .tools import ToolContext, ToolRegistry, create_registry

_logger = get_logger(__name__)

SERVER_NAME = "research-sources-mcp"


class ToolCallFailed(Exception):
    """Carries an error payload back to the MCP runtime.

    The runtime turns an exception raised by a tool handler into a result
    with ``isError`` set and the exception text as content.
    """


def create_server(
    registry: ToolRegistry | None = None,
    ctx: ToolContext | None = None,
    settings: Settings | None = None,
) -> tuple[Server, ToolContext]:
    """Create and configure the MCP server backed by the tool registry."""
    settings = settings or load_settings()
    registry = registry or create_registry()
    ctx = ctx or ToolContext.from_settings(settings)

    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
            for tool in registry.tools.values()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        result = await registry.call(name, arguments, ctx)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=result.text)]

    return server, ctx


async def run_stdio(settings: Settings | None = None) -> None:
    """Run the MCP server over stdio transport."""
    from mcp.server.stdio import stdio_server

    settings = settings or load_settings()
    configure_logging(settings.log_level)  # type: ignore[arg-type]
    install_shutdown_handlers()

    server, ctx = create_server(settings=settings)
    _logger.info("mcp_server_starting", transport="stdio", name=SERVER_NAME)

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await ctx.close()
        close_match_cache()
