"""Result serialization for converting MongoDB results to envelope text.

Tool results are rendered as indented JSON so AI assistants can read them
directly. ObjectIds become their hex string and datetimes ISO-8601 strings;
other BSON types (Decimal128, Binary, Timestamp, ...) fall back to their
MongoDB Extended JSON form via bson.json_util.
"""

import json
import logging
from datetime import datetime
from typing import Any

from bson import ObjectId, json_util

logger = logging.getLogger(__name__)


def _bson_default(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return json_util.default(value)


def serialize_mongodb_result(data: Any) -> str:
    """Serialize MongoDB query results to a JSON string with BSON type support.

    Args:
        data: MongoDB result data (can be dict, list, or BSON types)

    Returns:
        JSON formatted string representation of the data with 2-space indentation

    Raises:
        TypeError: If data contains non-serializable types

    Example:
        >>> serialize_mongodb_result({"_id": ObjectId("507f1f77bcf86cd799439011")})
        '{\\n  "_id": "507f1f77bcf86cd799439011"\\n}'
    """
    try:
        return json.dumps(data, default=_bson_default, indent=2)

    except TypeError as e:
        logger.error(f"Failed to serialize MongoDB result: {e}")
        raise
