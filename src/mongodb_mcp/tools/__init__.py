"""MongoDB MCP Tools Package.

This package contains the tool catalog and everything needed to execute it:

    - catalog: the fixed, ordered list of tools and their request models
    - dispatcher: validation, connection checks, and envelope wrapping
    - normalizer: ObjectId coercion for identifier fields
    - operations: one coroutine per tool performing the database call
"""

from .catalog import TOOL_CATALOG, ToolSpec
from .dispatcher import ToolDispatcher
from .models import ResponseEnvelope, ToolDescriptor
from .normalizer import normalize_identifiers

__all__ = [
    "TOOL_CATALOG",
    "ToolSpec",
    "ToolDispatcher",
    "ResponseEnvelope",
    "ToolDescriptor",
    "normalize_identifiers",
]
