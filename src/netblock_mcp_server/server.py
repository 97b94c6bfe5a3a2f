"""MCP server for netblock IP range lookups."""

import asyncio
import json
import logging
import os
from dataclasses import asdict
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from netblock_mcp_server.errors import NetblockError
from netblock_mcp_server.ranges import (
    DEFAULT_RANGE_TYPE,
    RANGE_TYPES,
    RangeTypeDispatcher,
    describe_range_types,
    netblock_id,
)
from netblock_mcp_server.resolver import DEFAULT_DNS_ENDPOINT, NetblockResolver
from netblock_mcp_server.types import ErrorResponse, NetblockRangesResponse

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Default configuration from environment
DNS_ENDPOINT = os.getenv("NETBLOCK_DNS_ENDPOINT", DEFAULT_DNS_ENDPOINT)


def _text(payload: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


async def run_tool(
    dispatcher: RangeTypeDispatcher,
    name: str,
    arguments: dict[str, Any],
) -> list[TextContent]:
    """Run a tool by name and return its JSON result."""
    logger.info(f"Tool call: {name} with arguments: {arguments}")

    if name == "netblock_range_types":
        return _text(describe_range_types())

    if name != "netblock_ip_ranges":
        error_response = {"error": f"Unknown tool: {name}", "success": False}
        return _text(error_response)

    range_type = arguments.get("range_type") or DEFAULT_RANGE_TYPE
    if not isinstance(range_type, str):
        logger.error(f"Tool {name} failed: invalid range_type {range_type!r}")
        return _text(asdict(ErrorResponse(
            error=f"range_type must be a string, got {type(range_type).__name__}",
        )))

    try:
        result = await dispatcher.lookup(range_type)
    except NetblockError as e:
        logger.error(f"Tool {name} failed: {e}")
        return _text(asdict(ErrorResponse(error=str(e), range_type=range_type)))

    response = NetblockRangesResponse(
        id=netblock_id(range_type),
        range_type=range_type,
        cidr_blocks=result.all,
        cidr_blocks_ipv4=result.ipv4,
        cidr_blocks_ipv6=result.ipv6,
    )
    return _text(asdict(response))


def create_server(dispatcher: Optional[RangeTypeDispatcher] = None) -> Server:
    """Create and configure the MCP server."""
    server = Server("netblock-mcp-server")
    if dispatcher is None:
        dispatcher = RangeTypeDispatcher(NetblockResolver(endpoint=DNS_ENDPOINT))

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available netblock tools."""
        return [
            Tool(
                name="netblock_ip_ranges",
                description=(
                    "Get IPv4 and IPv6 CIDR blocks for a netblock range type. "
                    "DNS-backed types are expanded from SPF-style TXT records."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "range_type": {
                            "type": "string",
                            "description": f"Range type to look up. One of: {', '.join(RANGE_TYPES)}",
                            "default": DEFAULT_RANGE_TYPE,
                        },
                    },
                },
            ),
            Tool(
                name="netblock_range_types",
                description="List the recognized range types and where their blocks come from.",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        return await run_tool(dispatcher, name, arguments or {})

    return server


def main():
    """Run the MCP server."""
    server = create_server()

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(run())


if __name__ == "__main__":
    main()
