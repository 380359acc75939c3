"""
Integration tests for application-level wiring: root greeting, health,
CORS and the error envelope for unknown routes.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from pymongo.errors import PyMongoError

from car_doctor.core.config import settings
from car_doctor.main import create_app
from tests.fakes import FakeMongoClient


class TestRoot:
    @pytest.mark.asyncio
    async def test_greeting(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == "Hello from Car Doctor"
        assert response.headers["content-type"].startswith("text/plain")


class TestHealth:
    @pytest.mark.asyncio
    async def test_database_connected(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_unavailable(self, client: AsyncClient, fake_db):
        fake_db.reachable = False

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "unavailable"


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_routes_registered_when_database_unreachable(self, fake_db):
        """An unreachable database at startup must not drop the API routes."""
        fake_db.reachable = False
        app = create_app(mongo_client=FakeMongoClient(fake_db))

        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as ac:
                services = await ac.get("/api/services")
                checkouts = await ac.get("/api/checkouts/u1")

        assert services.status_code == 200
        assert checkouts.status_code == 401

    @pytest.mark.asyncio
    async def test_startup_logs_unreachable_database(self, fake_db, caplog):
        fake_db.reachable = False
        app = create_app(mongo_client=FakeMongoClient(fake_db))

        async with app.router.lifespan_context(app):
            pass

        assert "MongoDB is unreachable" in caplog.text

    @pytest.mark.asyncio
    async def test_shutdown_closes_client(self, fake_db):
        mongo_client = FakeMongoClient(fake_db)
        app = create_app(mongo_client=mongo_client)

        async with app.router.lifespan_context(app):
            assert mongo_client.closed is False

        assert mongo_client.closed is True


class TestCors:
    @pytest.mark.asyncio
    async def test_allowed_origin_with_credentials(self, client: AsyncClient):
        origin = settings.cors_origins_list[0]

        response = await client.options(
            "/api/services",
            headers={"Origin": origin, "Access-Control-Request-Method": "GET"},
        )

        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_unlisted_origin(self, client: AsyncClient):
        response = await client.get("/", headers={"Origin": "https://evil.example"})

        assert "access-control-allow-origin" not in response.headers


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTPException"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/")

        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_server_error_log_carries_request_id(
        self, client: AsyncClient, services_collection, caplog
    ):
        services_collection.fail_with = PyMongoError("boom")

        response = await client.get("/api/services")

        handler_logs = [
            record.getMessage()
            for record in caplog.records
            if record.name == "car_doctor.core.exception_handlers"
        ]
        assert response.status_code == 500
        assert any(response.headers["x-request-id"] in line for line in handler_logs)
