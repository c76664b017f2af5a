"""The fixed, ordered catalog of MongoDB tools.

Each ToolSpec binds a tool name to its description, its request model (which
doubles as the advertised parameter schema), and the database operation that
executes it. Adding a tool means adding one entry to TOOL_CATALOG.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient

from . import operations
from .models import (
    CountDocumentsRequest,
    DeleteDocumentsRequest,
    DropCollectionRequest,
    FindDocumentsRequest,
    InsertDocumentRequest,
    ListCollectionsRequest,
    ListDatabasesRequest,
    ToolDescriptor,
    ToolRequest,
    UpdateDocumentsRequest,
)

Operation = Callable[[AsyncIOMotorClient, Any], Awaitable[Any]]


def build_parameter_schema(request_model: type[ToolRequest]) -> dict[str, Any]:
    """JSON schema for a request model, without pydantic's generated titles."""
    schema = request_model.model_json_schema(by_alias=True)
    schema.pop("title", None)
    schema.pop("description", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


@dataclass(frozen=True)
class ToolSpec:
    """One catalog entry: what the tool is and how it runs."""

    name: str
    description: str
    request_model: type[ToolRequest]
    operation: Operation

    @property
    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            parameter_schema=build_parameter_schema(self.request_model),
        )


TOOL_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="list_databases",
        description="List all databases in MongoDB",
        request_model=ListDatabasesRequest,
        operation=operations.list_databases,
    ),
    ToolSpec(
        name="list_collections",
        description="List all collections in a database",
        request_model=ListCollectionsRequest,
        operation=operations.list_collections,
    ),
    ToolSpec(
        name="find_documents",
        description="Find documents in a collection",
        request_model=FindDocumentsRequest,
        operation=operations.find_documents,
    ),
    ToolSpec(
        name="count_documents",
        description="Count documents in a collection",
        request_model=CountDocumentsRequest,
        operation=operations.count_documents,
    ),
    ToolSpec(
        name="insert_document",
        description="Insert a document into a collection",
        request_model=InsertDocumentRequest,
        operation=operations.insert_document,
    ),
    ToolSpec(
        name="update_documents",
        description="Update documents in a collection",
        request_model=UpdateDocumentsRequest,
        operation=operations.update_documents,
    ),
    ToolSpec(
        name="delete_documents",
        description="Delete documents from a collection",
        request_model=DeleteDocumentsRequest,
        operation=operations.delete_documents,
    ),
    ToolSpec(
        name="drop_collection",
        description="Drop (delete) an entire collection",
        request_model=DropCollectionRequest,
        operation=operations.drop_collection,
    ),
)
