"""Unit tests for rendering MongoDB results as envelope text."""

import json
from datetime import datetime, timezone

import pytest
from bson import Decimal128, ObjectId, json_util

from src.mongodb_mcp.tools.result_serialization import serialize_mongodb_result


@pytest.mark.unit
class TestSerializeMongoDBResult:
    def test_object_id_as_hex_string(self):
        text = serialize_mongodb_result({"_id": ObjectId("507f1f77bcf86cd799439011")})

        assert json.loads(text) == {"_id": "507f1f77bcf86cd799439011"}

    def test_datetime_as_iso_string(self):
        joined = datetime(2022, 3, 15, tzinfo=timezone.utc)

        text = serialize_mongodb_result([{"joinDate": joined}])

        assert json.loads(text) == [{"joinDate": "2022-03-15T00:00:00+00:00"}]

    def test_pretty_printed(self):
        assert serialize_mongodb_result({"count": 1}) == '{\n  "count": 1\n}'

    def test_other_bson_types_use_extended_json(self):
        text = serialize_mongodb_result({"price": Decimal128("1299.99")})

        assert json.loads(text) == {"price": {"$numberDecimal": "1299.99"}}
        assert json_util.loads(text) == {"price": Decimal128("1299.99")}

    def test_unserializable_value_raises(self):
        with pytest.raises(TypeError):
            serialize_mongodb_result({"value": object()})
