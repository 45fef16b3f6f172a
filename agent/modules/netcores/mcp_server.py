"""MCP stdio server exposing the NetCores tools.

The MCP SDK owns the wire protocol. This module only lists the registry's
definitions and forwards calls to the dispatcher, so every call answers
with a single text block.
"""

from __future__ import annotations

from typing import Any

import mcp.types as types
import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server

from modules.netcores.dispatcher import Dispatcher
from modules.netcores.registry import ToolRegistry

logger = structlog.get_logger()

SERVER_NAME = "netcores-mcp"


def list_mcp_tools(registry: ToolRegistry) -> list[types.Tool]:
    """Registry definitions in MCP form, declaration order preserved."""
    return [
        types.Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.input_schema(),
        )
        for definition in registry
    ]


async def call_mcp_tool(
    dispatcher: Dispatcher, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    text = await dispatcher.execute(name, arguments or {})
    return [types.TextContent(type="text", text=text)]


def build_server(dispatcher: Dispatcher) -> Server:
    """Create an MCP server wired to ``dispatcher``."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_mcp_tools(dispatcher.registry)

    # The dispatcher owns argument validation
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        return await call_mcp_tool(dispatcher, name, arguments)

    return server


async def serve_stdio(dispatcher: Dispatcher) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info(
            "netcores_mcp_server_started",
            tools=len(dispatcher.registry),
        )
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
    logger.info("netcores_mcp_server_stopped")
