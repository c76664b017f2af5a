"""Database connection lifecycle for the MongoDB MCP Server."""

from .connection import ConnectionManager, ConnectionState

__all__ = ["ConnectionManager", "ConnectionState"]
