"""HTTP server for MCP with Streamable HTTP transport."""

import json
import logging
import os
from typing import Callable

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from netblock_mcp_server.ranges import RANGE_TYPES
from netblock_mcp_server.server import DNS_ENDPOINT, create_server

logger = logging.getLogger(__name__)


async def _json_response(send, status: int, payload: dict) -> None:
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [[b"content-type", b"application/json"]],
    })
    await send({
        "type": "http.response.body",
        "body": json.dumps(payload).encode(),
    })


def create_http_server() -> Callable:
    """Create HTTP server wrapping the MCP server.

    Returns an ASGI application serving ``/mcp`` over Streamable HTTP
    and a ``/health`` probe.
    """
    session_manager = StreamableHTTPSessionManager(
        app=create_server(),
        json_response=False,  # SSE streaming
        stateless=False,
    )
    session_manager_context = None

    async def handle_lifespan(receive, send):
        nonlocal session_manager_context

        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    session_manager_context = session_manager.run()
                    await session_manager_context.__aenter__()
                    logger.info("MCP session manager started")
                    await send({"type": "lifespan.startup.complete"})
                except Exception as e:
                    logger.error(f"Startup failed: {e}")
                    await send({"type": "lifespan.startup.failed", "message": str(e)})
            elif message["type"] == "lifespan.shutdown":
                if session_manager_context:
                    await session_manager_context.__aexit__(None, None, None)
                    logger.info("MCP session manager stopped")
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def app(scope, receive, send):
        """ASGI application entry point."""
        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        path = scope["path"]
        if path == "/health":
            await _json_response(send, 200, {
                "status": "healthy",
                "dns_endpoint": DNS_ENDPOINT,
                "range_types": list(RANGE_TYPES),
            })
        elif path == "/mcp":
            await session_manager.handle_request(scope, receive, send)
        else:
            await _json_response(send, 404, {"error": "Not found"})

    return app


def main():
    """Run the HTTP server."""
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    logger.info(f"Starting Netblock MCP Server on http://{host}:{port}/mcp")

    uvicorn.run(
        create_http_server(),
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
