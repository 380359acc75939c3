"""
Tests for ServiceDAO and the base DAO helpers.

WHY: The DAO is where ObjectIds are parsed and serialized and where driver
errors become DatabaseError; handlers rely on both.
"""

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from car_doctor.core.exceptions import DatabaseError, MalformedIdentifierError
from car_doctor.dao.base import parse_object_id, serialize_document
from car_doctor.dao.service import ServiceDAO


class TestHelpers:
    def test_parse_object_id(self):
        assert parse_object_id("6627a6c4f1c2a9b3e4d5f601") == ObjectId("6627a6c4f1c2a9b3e4d5f601")

    @pytest.mark.parametrize("value", ["", "abc", "6627a6c4f1c2a9b3e4d5f60z", "1" * 25])
    def test_parse_object_id_rejects_malformed(self, value):
        with pytest.raises(MalformedIdentifierError):
            parse_object_id(value)

    def test_serialize_document_renders_object_ids(self):
        oid = ObjectId("6627a6c4f1c2a9b3e4d5f601")
        document = {"_id": oid, "items": [{"serviceId": oid}], "price": 10}

        assert serialize_document(document) == {
            "_id": "6627a6c4f1c2a9b3e4d5f601",
            "items": [{"serviceId": "6627a6c4f1c2a9b3e4d5f601"}],
            "price": 10,
        }


class TestServiceDAO:
    @pytest.mark.asyncio
    async def test_list_services_returns_full_documents(self, services_collection):
        dao = ServiceDAO(services_collection)

        services = await dao.list_services()

        assert [s["title"] for s in services] == ["Engine Diagnostic", "Brake Repair"]
        assert services[0]["_id"] == "6627a6c4f1c2a9b3e4d5f601"
        assert services[0]["description"] == "Full engine health check"

    @pytest.mark.asyncio
    async def test_get_summary_projects_title_and_price(self, services_collection):
        dao = ServiceDAO(services_collection)

        summary = await dao.get_summary("6627a6c4f1c2a9b3e4d5f602")

        assert summary == {"title": "Brake Repair", "price": 89.5}

    @pytest.mark.asyncio
    async def test_get_summary_not_found(self, services_collection):
        dao = ServiceDAO(services_collection)

        assert await dao.get_summary(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_database(self, services_collection):
        dao = ServiceDAO(services_collection)

        with pytest.raises(MalformedIdentifierError):
            await dao.get_summary("not-an-object-id")

        assert services_collection.calls == 0

    @pytest.mark.asyncio
    async def test_driver_error_becomes_database_error(self, services_collection, caplog):
        services_collection.fail_with = PyMongoError("connection reset")
        dao = ServiceDAO(services_collection)

        with pytest.raises(DatabaseError) as exc_info:
            await dao.list_services()

        assert exc_info.value.status_code == 500
        assert "connection reset" not in exc_info.value.message
        assert "connection reset" in caplog.text
