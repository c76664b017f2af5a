"""Pytest configuration and shared fixtures for MongoDB MCP Server tests.

Test Organization:
-------------------
tests/
├── unit/                    # Fast, isolated tests; Motor is mocked
│   ├── test_normalizer.py
│   ├── test_dispatcher.py
│   └── ...
├── integration/             # Real MongoDB (TEST_MONGODB_URI), skipped if absent
│   └── test_mongodb_tools.py
└── conftest.py              # This file - shared fixtures

Unit tests never touch a real database. The ``mock_motor_client`` fixture
returns a MagicMock shaped like AsyncIOMotorClient where every database and
collection lookup returns the same mocked objects, so tests configure a
return value once and assert on the calls afterwards.
"""

import os
import time
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from src.mongodb_mcp.database.connection import ConnectionManager
from src.mongodb_mcp.tools.dispatcher import ToolDispatcher

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers.

    - @pytest.mark.unit: Fast, isolated unit tests
    - @pytest.mark.integration: Tests requiring a real MongoDB
    """
    config.addinivalue_line("markers", "unit: Fast unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests with real dependencies")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath)

        if "unit" in test_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in test_path.parts:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# MOCK DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def mock_collection() -> MagicMock:
    """Mocked Motor collection with the async methods the tools use."""
    collection = MagicMock()

    cursor = collection.find.return_value.skip.return_value.limit.return_value
    cursor.to_list = AsyncMock(return_value=[])

    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.update_many = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.delete_many = AsyncMock()
    return collection


@pytest.fixture
def mock_database(mock_collection: MagicMock) -> MagicMock:
    """Mocked Motor database; every collection lookup returns mock_collection."""
    database = MagicMock()
    database.__getitem__.return_value = mock_collection

    collections_cursor = MagicMock()
    collections_cursor.to_list = AsyncMock(return_value=[])
    database.list_collections = AsyncMock(return_value=collections_cursor)
    database.list_collection_names = AsyncMock(return_value=[])
    database.drop_collection = AsyncMock()
    return database


@pytest.fixture
def mock_motor_client(mock_database: MagicMock) -> MagicMock:
    """Mocked AsyncIOMotorClient; every database lookup returns mock_database.

    ``admin.command`` answers the startup ping with ``{"ok": 1.0}``.
    """
    client = MagicMock()
    client.__getitem__.return_value = mock_database
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    return client


@pytest.fixture
async def connected_manager(mock_motor_client: MagicMock) -> AsyncGenerator[ConnectionManager, None]:
    """ConnectionManager connected to the mocked client."""
    manager = ConnectionManager("mongodb://localhost:27017")
    with patch(
        "src.mongodb_mcp.database.connection.AsyncIOMotorClient",
        return_value=mock_motor_client,
    ):
        await manager.connect()

    yield manager

    await manager.close()


@pytest.fixture
def dispatcher(connected_manager: ConnectionManager) -> ToolDispatcher:
    """Dispatcher bound to the mocked, connected manager."""
    return ToolDispatcher(connected_manager)


# =============================================================================
# TEST DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_user_document() -> dict:
    """A user document as an MCP client would send it (identifiers as hex strings)."""
    return {
        "_id": "507f1f77bcf86cd799439011",
        "name": "Alice Johnson",
        "age": 28,
        "email": "alice@example.com",
        "department": "Engineering",
        "managerId": "507f1f77bcf86cd799439012",
        "projects": [
            {"projectId": "507f1f77bcf86cd799439013", "role": "lead"},
            {"projectId": "not-an-object-id", "role": "reviewer"},
        ],
    }


@pytest.fixture
def sample_users() -> list[dict]:
    """Sample users used to seed integration databases."""
    return [
        {"name": "Alice Johnson", "age": 28, "department": "Engineering", "salary": 75000},
        {"name": "Bob Smith", "age": 35, "department": "Marketing", "salary": 65000},
        {"name": "Carol Davis", "age": 42, "department": "Engineering", "salary": 85000},
        {"name": "David Wilson", "age": 29, "department": "Sales", "salary": 60000},
        {"name": "Eva Brown", "age": 31, "department": "Engineering", "salary": 80000},
    ]


# =============================================================================
# INTEGRATION TEST FIXTURES
# =============================================================================


@pytest.fixture
def test_mongodb_uri() -> str:
    """MongoDB URI for integration tests (TEST_MONGODB_URI)."""
    return os.getenv("TEST_MONGODB_URI", "mongodb://localhost:27017")


@pytest.fixture
async def live_manager(test_mongodb_uri: str) -> AsyncGenerator[ConnectionManager, None]:
    """ConnectionManager against a real MongoDB; skips when none is reachable."""
    from src.mongodb_mcp.exceptions import DatabaseConnectionError

    manager = ConnectionManager(test_mongodb_uri, timeout_seconds=2)
    try:
        await manager.connect()
    except DatabaseConnectionError as e:
        pytest.skip(f"MongoDB not available for integration tests: {e.message}")

    yield manager

    await manager.close()


@pytest.fixture
async def test_database(
    live_manager: ConnectionManager,
) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """A uniquely named database, dropped after the test."""
    db_name = f"test_mongodb_mcp_{int(time.time() * 1000)}"
    client: AsyncIOMotorClient = live_manager.client

    yield client[db_name]

    await client.drop_database(db_name)
