"""MongoDB MCP Server using FastMCP.

This module implements a Model Context Protocol (MCP) server that exposes
MongoDB CRUD and administrative operations as tools. Each entry of the tool
catalog is registered with FastMCP using the catalog's own JSON schema, and
every call is routed through the ToolDispatcher so that validation,
ObjectId normalization, and error envelopes behave the same for all tools.

Available tools:
    - list_databases, list_collections
    - find_documents, count_documents
    - insert_document, update_documents, delete_documents
    - drop_collection

Lifecycle:
    The MongoDB connection is opened before the transport starts and closed
    when the server stops. Exit status is 0 after an interrupt and 1 when the
    configuration is invalid or the startup connection fails.

Usage:
    mongodb-mcp-server                    # installed console script
    python -m src.mongodb_mcp.server      # from a source checkout
"""

import asyncio
import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field

from src.config.settings import settings

from .database.connection import ConnectionManager
from .exceptions import ConfigurationError, DatabaseConnectionError
from .tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "You are connected to a MongoDB deployment. Use list_databases and list_collections "
    "to discover data before querying it. Every tool except list_databases needs an "
    "explicit database name. Identifier fields ('_id' and fields ending in 'Id') given as "
    "24-character hex strings are converted to ObjectIds automatically. "
    "drop_collection and delete_documents are irreversible; confirm intent first."
)


class CatalogTool(Tool):
    """FastMCP tool that forwards calls to the ToolDispatcher.

    The advertised input schema is the catalog descriptor's schema; argument
    validation happens in the dispatcher so error messages are the same
    whichever transport delivers the call.
    """

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        envelope = await self.dispatcher.call_tool(self.name, arguments)
        if envelope.is_error:
            # FastMCP reports ToolError as an isError result carrying this text
            raise ToolError(envelope.text)
        return ToolResult(
            content=[TextContent(type="text", text=item.text) for item in envelope.content]
        )


def create_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Create the FastMCP server and register every catalog tool.

    Args:
        dispatcher: Dispatcher bound to an open ConnectionManager

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP(name=settings.server_name, instructions=SERVER_INSTRUCTIONS)

    for descriptor in dispatcher.list_tools():
        server.add_tool(
            CatalogTool(
                name=descriptor.name,
                description=descriptor.description,
                parameters=descriptor.parameter_schema,
                dispatcher=dispatcher,
            )
        )
        logger.debug(f"Registered tool {descriptor.name}")

    return server


async def serve() -> None:
    """Connect to MongoDB, then serve MCP over stdio until interrupted.

    The connection is closed on every exit path, including cancellation.

    Raises:
        DatabaseConnectionError: If MongoDB is unreachable at startup
    """
    async with ConnectionManager.from_settings(settings) as manager:
        dispatcher = ToolDispatcher(manager)
        server = create_server(dispatcher)

        tool_names = ", ".join(descriptor.name for descriptor in dispatcher.list_tools())
        logger.info(f"MongoDB MCP Server is running with tools: {tool_names}")

        await server.run_async(transport="stdio")


def configure_logging() -> None:
    """Send logs to stderr; stdout carries the MCP stream."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main entry point for the MCP server."""
    configure_logging()
    logger.info("Starting MongoDB MCP Server...")

    try:
        settings.validate_configuration()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        sys.exit(1)

    logger.info(f"MongoDB URI: {settings.masked_connection_string}")

    try:
        asyncio.run(serve())

    except DatabaseConnectionError as e:
        logger.error(f"Failed to start server: {e.message}")
        sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")

    sys.exit(0)


if __name__ == "__main__":
    main()
