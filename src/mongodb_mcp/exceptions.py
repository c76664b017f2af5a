"""Exception hierarchy for the MongoDB MCP Server.

All server exceptions inherit from MCPServerError and carry structured context:

- error_code: Machine-readable identifier (e.g., "UNKNOWN_TOOL")
- message: Human-readable description, surfaced to MCP clients in error envelopes
- details: Additional context (tool, database, collection, parameter, ...)
- timestamp / request_id: For correlating log lines with client-visible errors
- original_exception: The underlying driver exception, when there is one

Failure domains:

- DatabaseError: connection lifecycle and driver operation failures
- ValidationError: tool arguments that fail the tool's parameter schema
- UnknownToolError: calls naming a tool outside the catalog
- ConfigurationError: invalid settings at startup

Only DatabaseConnectionError raised during startup is fatal. The tool
dispatcher converts every other error into an error envelope.

Usage Example:
--------------
```python
try:
    await collection.insert_one(document)
except pymongo.errors.PyMongoError as e:
    raise convert_to_mcp_exception(
        e, context={"database": "testdb", "collection": "users"}
    )
```
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

# =============================================================================
# BASE EXCEPTION CLASS
# =============================================================================


@dataclass(frozen=True)
class MCPServerError(Exception):
    """Base exception for all MCP server errors.

    Attributes:
    -----------
    message : str
        Human-readable error description for clients and logs
    error_code : str
        Machine-readable error identifier (e.g., "VALIDATION_ERROR")
    details : dict
        Additional context about the error (tool name, parameter, ...)
    timestamp : str
        ISO 8601 timestamp when error occurred
    request_id : str
        Unique identifier for correlating logs
    original_exception : Optional[Exception]
        The underlying exception that caused this error

    Example:
    --------
    >>> try:
    ...     raise ValueError("Invalid input")
    ... except ValueError as e:
    ...     raise MCPServerError(
    ...         message="Request validation failed",
    ...         error_code="VALIDATION_ERROR",
    ...         details={"parameter": "database"},
    ...         original_exception=e
    ...     )
    """

    message: str
    error_code: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = field(default_factory=lambda: str(uuid4()))
    original_exception: Exception | None = None

    def __str__(self) -> str:
        """Human-readable error representation for logs."""
        error_msg = f"[{self.error_code}] {self.message}"
        if self.details:
            error_msg += f" | Details: {self.details}"
        if self.original_exception:
            error_msg += (
                f" | Caused by: {type(self.original_exception).__name__}: {self.original_exception}"
            )
        return error_msg

    def __repr__(self) -> str:
        """Developer-friendly representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}', "
            f"request_id='{self.request_id}', "
            f"timestamp='{self.timestamp}'"
            f")"
        )


# =============================================================================
# DATABASE EXCEPTIONS
# =============================================================================


@dataclass(frozen=True)
class DatabaseError(MCPServerError):
    """Base class for all database-related errors."""

    error_code: str = "DATABASE_ERROR"


@dataclass(frozen=True)
class DatabaseConnectionError(DatabaseError):
    """The database could not be reached at startup.

    Use Case:
    ---------
    - MongoDB server unreachable
    - Server selection timeout
    - Authentication failure

    The server does not retry: the process exits with status 1 and the
    operator fixes the configuration.

    Example:
    --------
    >>> raise DatabaseConnectionError(
    ...     message="Failed to connect to MongoDB",
    ...     details={"uri": "mongodb://localhost:27017", "timeout_s": 5}
    ... )
    """

    error_code: str = "DB_CONNECTION_FAILED"


@dataclass(frozen=True)
class NotConnectedError(DatabaseError):
    """A tool call arrived while no live connection exists.

    Use Case:
    ---------
    - Call dispatched before startup finished connecting
    - Call dispatched after shutdown closed the client
    """

    message: str = "MongoDB connection not established"
    error_code: str = "DB_NOT_CONNECTED"


@dataclass(frozen=True)
class OperationError(DatabaseError):
    """A database operation failed after a valid call was dispatched.

    Use Case:
    ---------
    - Invalid query operator or update document
    - Write conflicts
    - Server-side command errors
    """

    error_code: str = "DB_OPERATION_FAILED"


@dataclass(frozen=True)
class DatabaseTimeoutError(OperationError):
    """Database operation exceeded a driver or server time limit."""

    error_code: str = "DB_TIMEOUT"


@dataclass(frozen=True)
class DatabaseIntegrityError(OperationError):
    """Data integrity violations.

    Use Case:
    ---------
    - Duplicate _id on insert
    - Unique index violation on update
    - Document validation failure

    Example:
    --------
    >>> raise DatabaseIntegrityError(
    ...     message="Duplicate key error",
    ...     details={"collection": "users", "field": "_id"}
    ... )
    """

    error_code: str = "DB_INTEGRITY_ERROR"


@dataclass(frozen=True)
class CollectionNotFoundError(OperationError):
    """The named collection does not exist in the named database."""

    error_code: str = "COLLECTION_NOT_FOUND"


# =============================================================================
# REQUEST EXCEPTIONS
# =============================================================================


@dataclass(frozen=True)
class ValidationError(MCPServerError):
    """Tool arguments failed validation.

    The offending argument name is stored in details["parameter"]. These
    errors never reach the database.

    Example:
    --------
    >>> raise ValidationError(
    ...     message="Invalid argument 'database': Field required",
    ...     details={"tool": "list_collections", "parameter": "database"}
    ... )
    """

    error_code: str = "VALIDATION_ERROR"


@dataclass(frozen=True)
class UnknownToolError(MCPServerError):
    """The call names a tool that is not in the catalog."""

    error_code: str = "UNKNOWN_TOOL"


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================


@dataclass(frozen=True)
class ConfigurationError(MCPServerError):
    """Configuration or initialization errors.

    These should crash the application at startup rather than being caught
    and handled.

    Example:
    --------
    >>> raise ConfigurationError(
    ...     message="MongoDB connection string not configured",
    ...     details={"env_var": "MONGODB_URI"}
    ... )
    """

    error_code: str = "CONFIGURATION_ERROR"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def convert_to_mcp_exception(
    exception: Exception,
    default_message: str = "An unexpected error occurred",
    context: dict[str, Any] | None = None,
) -> MCPServerError:
    """Convert any exception to an appropriate MCP exception.

    Used at the dispatcher boundary so that every failure reaches the client
    as a structured error with the driver's message preserved.

    Args:
    -----
    exception : Exception
        The original exception to convert
    default_message : str
        Prefix for errors of unknown type
    context : dict, optional
        Additional context to include in error details

    Returns:
    --------
    MCPServerError or subclass
        Appropriate MCP exception for the given error

    Example:
    --------
    >>> try:
    ...     await collection.count_documents({"$bogus": 1})
    ... except Exception as e:
    ...     raise convert_to_mcp_exception(e, context={"collection": "users"})
    """
    import pymongo.errors

    context = context or {}

    # Already an MCP exception - return as-is
    if isinstance(exception, MCPServerError):
        return exception

    if isinstance(exception, pymongo.errors.ConnectionFailure):
        return DatabaseConnectionError(
            message=f"Lost connection to MongoDB: {exception}",
            details={**context, "error": str(exception)},
            original_exception=exception,
        )

    # Check timeouts BEFORE OperationFailure since ExecutionTimeout inherits from it
    if isinstance(exception, (pymongo.errors.ExecutionTimeout, pymongo.errors.WTimeoutError)):
        return DatabaseTimeoutError(
            message=f"Database operation timed out: {exception}",
            details={**context, "error": str(exception)},
            original_exception=exception,
        )

    if isinstance(exception, pymongo.errors.DuplicateKeyError):
        return DatabaseIntegrityError(
            message=f"Duplicate key error: {exception}",
            details={**context, "error": str(exception)},
            original_exception=exception,
        )

    if isinstance(exception, pymongo.errors.PyMongoError):
        return OperationError(
            message=f"Database operation failed: {exception}",
            details={**context, "error": str(exception)},
            original_exception=exception,
        )

    # Generic fallback
    return MCPServerError(
        message=f"{default_message}: {exception}",
        error_code="INTERNAL_ERROR",
        details={**context, "error_type": type(exception).__name__, "error": str(exception)},
        original_exception=exception,
    )
