"""MCP server exposing the Wealthbox operation catalog over stdio."""

import json
import logging
from typing import Any

from anyio import to_thread
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from wealthbox_mcp.core.dispatcher import Dispatcher
from wealthbox_mcp.core.models import OperationDescriptor

logger = logging.getLogger(__name__)

SERVER_NAME = "wealthbox-mcp"


def build_tool(operation: OperationDescriptor) -> Tool:
    """Describe an operation as an MCP tool."""
    return Tool(
        name=operation.name,
        description=operation.description,
        inputSchema=operation.input_schema,
    )


def render_result(payload: Any) -> list[TextContent]:
    """
    Render an upstream payload as tool content.

    Raw text is returned verbatim; anything else is pretty-printed JSON.
    """
    if isinstance(payload, str):
        text = payload
    else:
        text = json.dumps(payload, indent=2)
    return [TextContent(type="text", text=text)]


def create_server(dispatcher: Dispatcher) -> Server:
    """
    Build an MCP server whose tools are the dispatcher's operations.

    Errors raised by the dispatcher propagate out of the call handler,
    where the MCP runtime reports them as error results.
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [build_tool(operation) for operation in dispatcher.list_operations()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        logger.info(f"Tool call: {name}")
        # bridge calls block, run them off the event loop
        payload = await to_thread.run_sync(dispatcher.invoke, name, arguments or {})
        return render_result(payload)

    return server


async def serve(dispatcher: Dispatcher) -> None:
    """Run the MCP server on stdin/stdout until the host disconnects."""
    server = create_server(dispatcher)
    logger.info(f"Starting {SERVER_NAME} with {len(dispatcher.list_operations())} tools")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
