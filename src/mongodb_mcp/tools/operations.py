"""Database operations behind each catalog tool.

Each operation receives the shared Motor client and a validated, normalized
request model, performs exactly one logical database operation, and returns
a JSON-serializable result. Driver errors propagate to the dispatcher, which
turns them into error envelopes.
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient

from ..exceptions import CollectionNotFoundError
from .models import (
    CountDocumentsRequest,
    DeleteDocumentsRequest,
    DropCollectionRequest,
    FindDocumentsRequest,
    InsertDocumentRequest,
    ListCollectionsRequest,
    ListDatabasesRequest,
    UpdateDocumentsRequest,
)

logger = logging.getLogger(__name__)


async def list_databases(
    client: AsyncIOMotorClient, request: ListDatabasesRequest
) -> list[dict[str, Any]]:
    result = await client.admin.command("listDatabases")
    return result["databases"]


async def list_collections(
    client: AsyncIOMotorClient, request: ListCollectionsRequest
) -> list[dict[str, Any]]:
    cursor = await client[request.database].list_collections()
    return await cursor.to_list(length=None)


async def find_documents(
    client: AsyncIOMotorClient, request: FindDocumentsRequest
) -> list[dict[str, Any]]:
    collection = client[request.database][request.collection]
    cursor = collection.find(request.query).skip(request.skip).limit(request.limit)
    return await cursor.to_list(length=None)


async def count_documents(
    client: AsyncIOMotorClient, request: CountDocumentsRequest
) -> dict[str, int]:
    collection = client[request.database][request.collection]
    count = await collection.count_documents(request.filter)
    return {"count": count}


async def insert_document(
    client: AsyncIOMotorClient, request: InsertDocumentRequest
) -> dict[str, Any]:
    collection = client[request.database][request.collection]
    result = await collection.insert_one(request.document)
    logger.debug(
        f"Inserted document {result.inserted_id} into {request.database}.{request.collection}"
    )
    return {
        "acknowledged": result.acknowledged,
        "insertedId": str(result.inserted_id),
        "message": f"Successfully inserted document into {request.database}.{request.collection}",
    }


async def update_documents(
    client: AsyncIOMotorClient, request: UpdateDocumentsRequest
) -> dict[str, Any]:
    collection = client[request.database][request.collection]
    if request.update_many:
        result = await collection.update_many(request.filter, request.update)
    else:
        result = await collection.update_one(request.filter, request.update)

    response = {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
    }
    if result.upserted_id is not None:
        response["upsertedId"] = str(result.upserted_id)
    return response


async def delete_documents(
    client: AsyncIOMotorClient, request: DeleteDocumentsRequest
) -> dict[str, Any]:
    collection = client[request.database][request.collection]
    if request.delete_many:
        result = await collection.delete_many(request.filter)
    else:
        result = await collection.delete_one(request.filter)

    logger.debug(
        f"Deleted {result.deleted_count} document(s) from {request.database}.{request.collection}"
    )
    return {
        "acknowledged": result.acknowledged,
        "deletedCount": result.deleted_count,
        "message": (
            f"Successfully deleted {result.deleted_count} document(s) "
            f"from {request.database}.{request.collection}"
        ),
    }


async def drop_collection(
    client: AsyncIOMotorClient, request: DropCollectionRequest
) -> dict[str, Any]:
    database = client[request.database]

    # Recent servers treat dropping a missing collection as a no-op
    existing = await database.list_collection_names(filter={"name": request.collection})
    if request.collection not in existing:
        raise CollectionNotFoundError(
            message=f"Collection {request.collection} not found in database {request.database}",
            details={"database": request.database, "collection": request.collection},
        )

    await database.drop_collection(request.collection)
    return {
        "success": True,
        "message": (
            f"Successfully dropped collection {request.collection} "
            f"from database {request.database}"
        ),
    }
