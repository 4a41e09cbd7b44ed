"""Health & Error Handlers — verifies health checks and the uniform error envelope.

Tests:
    - Liveness always 200; readiness 200 with a reachable database
    - Unknown paths use the {success: false, message} envelope
    - Unhandled exceptions become a generic 500 without internal details
    - Validation messages are deduplicated and joined with ". "
    - Missing top-level fields read as blank inputs; missing nested fields are named
"""

import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from routesaver.api.error_handlers import build_validation_message
from routesaver.core import messages
from routesaver.core.errors import InternalError
from routesaver.main import app


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_unknown_path_uses_envelope(client):
    res = await client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["success"] is False


@pytest.fixture
def exploding_app():
    router = APIRouter()

    @router.get("/api/_explode")
    async def explode():
        raise RuntimeError("secret connection string")

    app.include_router(router)
    yield app
    app.router.routes[:] = [
        r for r in app.router.routes if getattr(r, "path", None) != "/api/_explode"
    ]


async def test_unhandled_exception_500(exploding_app):
    transport = ASGITransport(app=exploding_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/api/_explode")
    assert res.status_code == 500
    assert res.json() == InternalError().to_response()
    assert res.json() == {"success": False, "message": messages.INTERNAL_ERROR}
    assert "secret" not in res.text


def test_validation_message_missing_fields_collapse():
    errors = [
        {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
        {"type": "missing", "loc": ("body", "email"), "msg": "Field required"},
    ]
    assert build_validation_message(errors) == messages.FILL_ALL_FIELDS


def test_validation_message_names_fields():
    errors = [
        {"type": "float_parsing", "loc": ("body", "coordinates", 0, "lat"), "msg": "bad"},
        {"type": "missing", "loc": ("body", "name"), "msg": "Field required"},
    ]
    assert build_validation_message(errors) == (
        f"coordinates.0.lat: bad. {messages.FILL_ALL_FIELDS}"
    )


def test_validation_message_empty():
    assert build_validation_message([]) == messages.UNKNOWN_ERROR


def test_validation_message_names_missing_nested_field():
    errors = [
        {"type": "missing", "loc": ("body", "coordinates", 0, "lng"), "msg": "Field required"},
    ]
    assert build_validation_message(errors) == "coordinates.0.lng: Field required"


def test_validation_message_missing_body():
    errors = [{"type": "missing", "loc": ("body",), "msg": "Field required"}]
    assert build_validation_message(errors) == messages.FILL_ALL_FIELDS
