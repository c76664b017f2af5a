"""MongoDB connection manager with an explicit, scoped lifecycle.

The server owns exactly one ConnectionManager. It is opened once at startup,
handed to the tool dispatcher, and closed on shutdown:

    uninitialized -> connecting -> connected -> closed
                          |
                          +-> failed

Motor's client is shared across all tool calls and never rebuilt per call;
connection pooling, timeouts and retryable reads/writes are left to the
driver. A failed startup connection is fatal and is not retried.

Example:
    >>> from src.mongodb_mcp.database.connection import ConnectionManager
    >>> async with ConnectionManager("mongodb://localhost:27017") as manager:
    ...     db = manager.client["testdb"]
    ...     count = await db["users"].count_documents({})
"""

import logging
from enum import Enum

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from src.config.settings import Settings

from ..exceptions import DatabaseConnectionError, NotConnectedError

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """Lifecycle states of the shared MongoDB client."""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"
    CLOSED = "closed"


class ConnectionManager:
    """Owns the process-wide Motor client and its connection state.

    Attributes:
        uri: MongoDB connection string (may contain credentials; never logged)
        timeout_seconds: Server selection and connect timeout
        min_pool_size / max_pool_size: Driver connection pool bounds
    """

    def __init__(
        self,
        uri: str,
        timeout_seconds: int = 5,
        min_pool_size: int = 0,
        max_pool_size: int = 50,
    ) -> None:
        self.uri = uri
        self.timeout_seconds = timeout_seconds
        self.min_pool_size = min_pool_size
        self.max_pool_size = max_pool_size

        self._client: AsyncIOMotorClient | None = None
        self._state = ConnectionState.UNINITIALIZED

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionManager":
        """Build a manager from application settings."""
        return cls(
            settings.mongodb_connection_string,
            timeout_seconds=settings.mongodb_timeout,
            min_pool_size=settings.mongodb_min_pool_size,
            max_pool_size=settings.mongodb_max_pool_size,
        )

    @property
    def state(self) -> ConnectionState:
        return self._state

    def is_connected(self) -> bool:
        """Check if the shared client is connected and usable."""
        return self._state is ConnectionState.CONNECTED and self._client is not None

    async def connect(self) -> None:
        """Create the client and verify the server answers a ping.

        Raises:
            DatabaseConnectionError: If the server is unreachable or rejects
                the credentials. The manager is left in the FAILED state.
        """
        if self.is_connected():
            logger.debug("Already connected to MongoDB")
            return

        self._state = ConnectionState.CONNECTING
        logger.info("Connecting to MongoDB...")

        client = None
        try:
            client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_seconds * 1000,
                connectTimeoutMS=self.timeout_seconds * 1000,
                minPoolSize=self.min_pool_size,
                maxPoolSize=self.max_pool_size,
            )
            await client.admin.command("ping")

        except (PyMongoError, ValueError) as e:
            # ValueError covers malformed URIs and options
            self._state = ConnectionState.FAILED
            if client is not None:
                client.close()
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise DatabaseConnectionError(
                message=f"Failed to connect to MongoDB: {e}",
                details={"timeout_s": self.timeout_seconds},
                original_exception=e,
            ) from e

        self._client = client
        self._state = ConnectionState.CONNECTED
        logger.info("Connected to MongoDB successfully")

    async def close(self) -> None:
        """Close the client. Safe to call more than once."""
        if self._client is None:
            logger.debug("Not connected to MongoDB, nothing to close")
            return

        logger.info("Closing MongoDB connection...")
        self._client.close()
        self._client = None
        self._state = ConnectionState.CLOSED
        logger.info("MongoDB connection closed")

    async def __aenter__(self) -> "ConnectionManager":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def client(self) -> AsyncIOMotorClient:
        """The shared Motor client.

        Raises:
            NotConnectedError: If connect() has not succeeded or close() was called
        """
        if not self.is_connected():
            raise NotConnectedError(details={"state": self._state.value})
        return self._client


if __name__ == "__main__":
    # Script: Test database connectivity with the configured settings
    import asyncio
    import sys

    from src.config.settings import settings

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    async def _check() -> None:
        async with ConnectionManager.from_settings(settings) as manager:
            names = await manager.client.list_database_names()
            logger.info(f"Databases visible at {settings.masked_connection_string}: {names}")

    try:
        asyncio.run(_check())
    except DatabaseConnectionError as e:
        logger.error(f"Connection test failed: {e.message}")
        sys.exit(1)
