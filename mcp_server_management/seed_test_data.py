#!/usr/bin/env python3
"""Seed a MongoDB server with sample data for trying the MCP tools.

Replaces the contents of ``testdb.users`` (five users) and ``testdb.products``
(three products), then prints a few prompts to try from an MCP client.

Usage:
    python mcp_server_management/seed_test_data.py
    MONGODB_URI=mongodb://db:27017 python mcp_server_management/seed_test_data.py
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

from pymongo import MongoClient
from pymongo.errors import PyMongoError

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config.settings import settings  # noqa: E402

TEST_DATABASE = "testdb"

SAMPLE_USERS = [
    {
        "name": "Alice Johnson",
        "age": 28,
        "email": "alice@example.com",
        "department": "Engineering",
        "salary": 75000,
        "joinDate": datetime(2022, 3, 15, tzinfo=timezone.utc),
    },
    {
        "name": "Bob Smith",
        "age": 35,
        "email": "bob@example.com",
        "department": "Marketing",
        "salary": 65000,
        "joinDate": datetime(2021, 7, 22, tzinfo=timezone.utc),
    },
    {
        "name": "Carol Davis",
        "age": 42,
        "email": "carol@example.com",
        "department": "Engineering",
        "salary": 85000,
        "joinDate": datetime(2020, 1, 10, tzinfo=timezone.utc),
    },
    {
        "name": "David Wilson",
        "age": 29,
        "email": "david@example.com",
        "department": "Sales",
        "salary": 60000,
        "joinDate": datetime(2023, 5, 3, tzinfo=timezone.utc),
    },
    {
        "name": "Eva Brown",
        "age": 31,
        "email": "eva@example.com",
        "department": "Engineering",
        "salary": 80000,
        "joinDate": datetime(2022, 9, 18, tzinfo=timezone.utc),
    },
]

SAMPLE_PRODUCTS = [
    {
        "name": "Laptop Pro",
        "category": "Electronics",
        "price": 1299.99,
        "inStock": 25,
        "tags": ["computer", "laptop", "professional"],
    },
    {
        "name": "Wireless Mouse",
        "category": "Electronics",
        "price": 29.99,
        "inStock": 150,
        "tags": ["mouse", "wireless", "accessory"],
    },
    {
        "name": "Office Chair",
        "category": "Furniture",
        "price": 299.99,
        "inStock": 12,
        "tags": ["chair", "office", "ergonomic"],
    },
]

SAMPLE_PROMPTS = [
    "Show me all users in the Engineering department",
    "Find users older than 30",
    "Count how many products are in stock",
    "Show me the average salary by department",
    "List all collections in the testdb database",
]


def replace_collection(db, name: str, documents: list[dict]) -> int:
    """Clear a collection and insert fresh copies of the sample documents."""
    collection = db[name]
    collection.delete_many({})
    result = collection.insert_many([dict(doc) for doc in documents])
    return len(result.inserted_ids)


def main():
    print("Setting up test data...")
    print(f"MongoDB URI: {settings.masked_connection_string}")

    client = MongoClient(
        settings.mongodb_connection_string,
        serverSelectionTimeoutMS=settings.mongodb_timeout * 1000,
    )
    try:
        client.admin.command("ping")
        print("[PASS] Connected to MongoDB")

        db = client[TEST_DATABASE]
        print(f"[PASS] Inserted {replace_collection(db, 'users', SAMPLE_USERS)} test users")
        print(
            f"[PASS] Inserted {replace_collection(db, 'products', SAMPLE_PRODUCTS)} test products"
        )

    except PyMongoError as e:
        print(f"[FAIL] Error setting up test data: {e}")
        return 1

    finally:
        client.close()

    print("Test data setup complete!")
    print("\nSample queries you can try:")
    for prompt in SAMPLE_PROMPTS:
        print(f"- '{prompt}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
