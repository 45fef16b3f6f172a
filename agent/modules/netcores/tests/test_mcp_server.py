"""Tests for the MCP server adapter."""

from __future__ import annotations

import mcp.types as types
import pytest

from modules.netcores.errors import ERROR_MARKER
from modules.netcores.mcp_server import (
    SERVER_NAME,
    build_server,
    call_mcp_tool,
    list_mcp_tools,
)
from modules.netcores.tests.fixtures import TREND_RESPONSE_312


def test_list_tools_mirrors_registry(dispatcher):
    tools = list_mcp_tools(dispatcher.registry)

    assert [t.name for t in tools] == list(dispatcher.registry.names())
    asn_trend = tools[2]
    assert asn_trend.inputSchema["required"] == ["asn"]
    assert asn_trend.inputSchema["properties"]["limit"]["default"] == 20
    assert all(t.description for t in tools)


@pytest.mark.asyncio
async def test_call_returns_single_text_block(dispatcher, fake_api):
    fake_api.add("GET", "/api/trends/15169", TREND_RESPONSE_312)

    content = await call_mcp_tool(dispatcher, "netcores_asn_trend", {"asn": 15169, "limit": 5})

    assert len(content) == 1
    assert content[0].type == "text"
    assert "Most recent 5 of 312" in content[0].text


@pytest.mark.asyncio
async def test_call_unknown_tool_is_text_not_exception(dispatcher, fake_api):
    content = await call_mcp_tool(dispatcher, "netcores_nope", None)

    assert content[0].text == f"{ERROR_MARKER} Unknown tool: netcores_nope"
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_call_with_missing_arguments(dispatcher):
    content = await call_mcp_tool(dispatcher, "netcores_asn_trend", None)

    assert content[0].text.startswith(f"{ERROR_MARKER} Invalid arguments for netcores_asn_trend")


def test_build_server_registers_handlers(dispatcher):
    server = build_server(dispatcher)

    assert server.name == SERVER_NAME
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


@pytest.mark.asyncio
async def test_server_lists_tools(dispatcher):
    server = build_server(dispatcher)
    handler = server.request_handlers[types.ListToolsRequest]

    result = await handler(types.ListToolsRequest(method="tools/list"))

    assert len(result.root.tools) == 8


async def _call_through_server(server, name, arguments):
    # List first so the server caches the published input schemas
    await server.request_handlers[types.ListToolsRequest](
        types.ListToolsRequest(method="tools/list")
    )
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await server.request_handlers[types.CallToolRequest](request)
    return result.root


@pytest.mark.asyncio
async def test_server_invalid_arguments_reach_dispatcher(dispatcher, fake_api):
    server = build_server(dispatcher)

    result = await _call_through_server(server, "netcores_asn_trend", {"asn": "abc"})

    assert len(result.content) == 1
    text = result.content[0].text
    assert text.startswith(f"{ERROR_MARKER} Invalid arguments for netcores_asn_trend")
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_server_call_returns_dispatcher_text(dispatcher, fake_api):
    fake_api.add("GET", "/api/trends/15169", TREND_RESPONSE_312)
    server = build_server(dispatcher)

    result = await _call_through_server(
        server, "netcores_asn_trend", {"asn": 15169, "limit": 5}
    )

    assert not result.isError
    assert "Most recent 5 of 312" in result.content[0].text
