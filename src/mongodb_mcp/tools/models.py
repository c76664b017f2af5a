"""Pydantic models for MCP tool descriptors, requests, and responses.

Key Components:
    - TextContent / ResponseEnvelope: the only shape returned to the transport
    - ToolDescriptor: name, description, and JSON schema advertised per tool
    - Request models: one per tool, validating and defaulting raw arguments

Request models use the camelCase argument names clients send (``updateMany``,
``deleteMany``) as aliases. Their JSON schema is what ``list_tools`` advertises,
so schema and validation cannot drift apart.
"""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

# =============================================================================
# RESPONSE ENVELOPE
# =============================================================================


class TextContent(BaseModel):
    """A single text block of a response envelope."""

    type: Literal["text"] = "text"
    text: str


class ResponseEnvelope(BaseModel):
    """Uniform success/error wrapper returned for every tool call."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(..., min_length=1)
    is_error: bool | None = Field(None, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined with newlines."""
        return "\n".join(item.text for item in self.content)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation: ``{"content": [...], "isError": true}``."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# TOOL DESCRIPTORS
# =============================================================================


class ToolDescriptor(BaseModel):
    """Immutable description of one catalog entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameter_schema: dict[str, Any]


# =============================================================================
# TOOL REQUEST MODELS
# =============================================================================


class ToolRequest(BaseModel):
    """Base class for tool arguments.

    ``document_fields`` names the arguments that carry document-shaped
    payloads; the dispatcher runs those through ObjectId normalization.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    document_fields: ClassVar[tuple[str, ...]] = ()


class ListDatabasesRequest(ToolRequest):
    pass


class DatabaseRequest(ToolRequest):
    database: str = Field(..., min_length=1, description="Database name")


class CollectionRequest(DatabaseRequest):
    collection: str = Field(..., min_length=1, description="Collection name")


class ListCollectionsRequest(DatabaseRequest):
    pass


class FindDocumentsRequest(CollectionRequest):
    document_fields: ClassVar[tuple[str, ...]] = ("query",)

    query: dict[str, Any] = Field(default_factory=dict, description="MongoDB query filter")
    limit: StrictInt = Field(
        10, ge=0, description="Maximum number of documents to return (0 means the default)"
    )
    skip: StrictInt = Field(0, ge=0, description="Number of documents to skip")

    @field_validator("query", mode="before")
    @classmethod
    def default_query(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("limit", mode="before")
    @classmethod
    def default_limit(cls, value: Any) -> Any:
        # bool is an int subclass; false must still fail the strict check
        if value is None or (type(value) is int and value == 0):
            return 10
        return value

    @field_validator("skip", mode="before")
    @classmethod
    def default_skip(cls, value: Any) -> Any:
        return 0 if value is None else value


class CountDocumentsRequest(CollectionRequest):
    document_fields: ClassVar[tuple[str, ...]] = ("filter",)

    filter: dict[str, Any] = Field(default_factory=dict, description="MongoDB query filter")

    @field_validator("filter", mode="before")
    @classmethod
    def default_filter(cls, value: Any) -> Any:
        return {} if value is None else value


class InsertDocumentRequest(CollectionRequest):
    document_fields: ClassVar[tuple[str, ...]] = ("document",)

    document: dict[str, Any] = Field(..., description="Document to insert")


class UpdateDocumentsRequest(CollectionRequest):
    document_fields: ClassVar[tuple[str, ...]] = ("filter", "update")

    filter: dict[str, Any] = Field(..., description="MongoDB query filter")
    update: dict[str, Any] = Field(..., description="MongoDB update operation")
    update_many: bool = Field(
        False, alias="updateMany", description="Update multiple documents"
    )

    @field_validator("update_many", mode="before")
    @classmethod
    def default_update_many(cls, value: Any) -> Any:
        return False if value is None else value


class DeleteDocumentsRequest(CollectionRequest):
    document_fields: ClassVar[tuple[str, ...]] = ("filter",)

    filter: dict[str, Any] = Field(
        ..., description="MongoDB query filter to match documents to delete"
    )
    delete_many: bool = Field(
        False,
        alias="deleteMany",
        description="Delete multiple documents (true) or just one (false)",
    )

    @field_validator("delete_many", mode="before")
    @classmethod
    def default_delete_many(cls, value: Any) -> Any:
        return False if value is None else value


class DropCollectionRequest(DatabaseRequest):
    collection: str = Field(..., min_length=1, description="Collection name to drop")
