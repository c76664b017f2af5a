"""Tool dispatcher: validates calls, runs them, and wraps every outcome.

The dispatcher is the boundary between the MCP transport and MongoDB. For a
call it:

1. looks the tool up in the catalog,
2. validates arguments with the tool's request model,
3. checks the shared connection is live,
4. normalizes ObjectId fields in document-shaped arguments,
5. runs the database operation,
6. returns a ResponseEnvelope.

Nothing raised past step 1 escapes: unknown tools, invalid arguments, a
missing connection, and driver failures all become envelopes with
``isError: true``, and each is logged before the response is built.
"""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..database.connection import ConnectionManager
from ..exceptions import (
    MCPServerError,
    UnknownToolError,
    ValidationError,
    convert_to_mcp_exception,
)
from .catalog import TOOL_CATALOG, ToolSpec
from .models import ResponseEnvelope, ToolDescriptor, ToolRequest
from .normalizer import normalize_identifiers
from .result_serialization import serialize_mongodb_result

logger = logging.getLogger(__name__)


def _validation_error(tool_name: str, exc: PydanticValidationError) -> ValidationError:
    """Name the first offending argument and why it failed."""
    first = exc.errors()[0]
    parameter = ".".join(str(part) for part in first["loc"]) or "arguments"
    return ValidationError(
        message=f"Invalid argument '{parameter}' for tool {tool_name}: {first['msg']}",
        details={"tool": tool_name, "parameter": parameter, "errors": exc.errors()},
        original_exception=exc,
    )


class ToolDispatcher:
    """Maps tool names to catalog entries and executes calls against MongoDB.

    The dispatcher holds no per-call state; the connection manager is owned by
    the caller and shared across calls.

    Example:
        >>> dispatcher = ToolDispatcher(manager)
        >>> envelope = await dispatcher.call_tool(
        ...     "count_documents", {"database": "testdb", "collection": "users"}
        ... )
        >>> envelope.text
        '{\\n  "count": 5\\n}'
    """

    def __init__(
        self, connection: ConnectionManager, catalog: Iterable[ToolSpec] = TOOL_CATALOG
    ) -> None:
        self.connection = connection
        self._tools: dict[str, ToolSpec] = {}
        for spec in catalog:
            if spec.name in self._tools:
                raise ValueError(f"Duplicate tool name in catalog: {spec.name}")
            self._tools[spec.name] = spec
        self._descriptors = tuple(spec.descriptor for spec in self._tools.values())

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        """Return the static catalog in its fixed order."""
        return self._descriptors

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ResponseEnvelope:
        """Run one tool call and wrap the outcome in a ResponseEnvelope."""
        try:
            spec = self._lookup(name)
            request = self._validate(spec, arguments or {})
            client = self.connection.client
            request = self._normalize(request)

            logger.debug(f"Dispatching {name} with {request.model_dump(by_alias=True)}")
            result = await spec.operation(client, request)
            return ResponseEnvelope.success(serialize_mongodb_result(result))

        except MCPServerError as e:
            logger.error(f"Tool {name} failed: {e}")
            return ResponseEnvelope.error(e.message)

        except Exception as e:
            error = convert_to_mcp_exception(
                e, default_message=f"Tool {name} failed", context=self._context(name, arguments)
            )
            logger.error(f"Tool {name} failed: {error}", exc_info=True)
            return ResponseEnvelope.error(error.message)

    def _lookup(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(message=f"Unknown tool: {name}", details={"tool": name})
        return spec

    @staticmethod
    def _validate(spec: ToolSpec, arguments: dict[str, Any]) -> ToolRequest:
        try:
            return spec.request_model.model_validate(arguments)
        except PydanticValidationError as e:
            raise _validation_error(spec.name, e) from e

    @staticmethod
    def _normalize(request: ToolRequest) -> ToolRequest:
        if not request.document_fields:
            return request
        return request.model_copy(
            update={
                field: normalize_identifiers(getattr(request, field))
                for field in request.document_fields
            }
        )

    @staticmethod
    def _context(name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        arguments = arguments or {}
        context = {"tool": name}
        for key in ("database", "collection"):
            if isinstance(arguments.get(key), str):
                context[key] = arguments[key]
        return context
