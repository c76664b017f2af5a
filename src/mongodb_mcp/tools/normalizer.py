"""ObjectId normalization for tool arguments.

MCP clients can only send JSON, so identifiers arrive as 24-character hex
strings. Before a query, filter, update, or document reaches MongoDB, values
stored under identifier-like keys are converted to ``bson.ObjectId``:

- the key is exactly ``"_id"``, or
- the key ends with ``"Id"`` (``userId``, ``orderId``, ...).

The key heuristic matches what tool consumers already rely on. It can
convert fields that only look like identifiers (``buildId``) and misses
identifier fields named otherwise (``ref``).

Example:
    >>> normalize_identifiers({"_id": "507f1f77bcf86cd799439011", "name": "Alice"})
    {'_id': ObjectId('507f1f77bcf86cd799439011'), 'name': 'Alice'}
"""

import re
from typing import Any

from bson import ObjectId

OBJECT_ID_PATTERN = re.compile(r"[0-9a-f]{24}")


def is_identifier_key(key: str) -> bool:
    """Return True for keys whose values are coerced to ObjectId."""
    return key == "_id" or key.endswith("Id")


def coerce_identifier(value: Any) -> Any:
    """Convert a 24-character lowercase hex string to an ObjectId.

    Anything else, including existing ObjectIds, lists, and malformed
    strings, is returned unchanged.
    """
    if isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value):
        return ObjectId(value)
    return value


def normalize_identifiers(value: Any) -> Any:
    """Recursively coerce identifier fields in a JSON-like structure.

    Returns a new structure of the same shape; the input is never mutated.
    Values under identifier keys are coerced but not descended into, other
    dicts and lists are walked, and scalars pass through. Never raises.
    """
    if value is None:
        return value

    if isinstance(value, list):
        return [normalize_identifiers(item) for item in value]

    if isinstance(value, dict):
        normalized = {}
        for key, item in value.items():
            if isinstance(key, str) and is_identifier_key(key):
                normalized[key] = coerce_identifier(item)
            elif isinstance(item, (dict, list)):
                normalized[key] = normalize_identifiers(item)
            else:
                normalized[key] = item
        return normalized

    return value
