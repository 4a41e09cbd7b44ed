"""API Client — verifies session handling against the real app and a fake server.

Tests:
    - register/login persist token and user; later calls carry the bearer header
    - Route CRUD round-trips through the running FastAPI app
    - A 401 clears storage, fires on_logout and raises SessionExpired
    - success=false bodies and non-JSON bodies become ApiError
    - Transport failures become ApiError with status 0; the session is kept
"""

import httpx
import pytest
from httpx import ASGITransport

from routesaver.client.api_client import ApiError, RouteSaverClient, SessionExpired
from routesaver.client.token_storage import TOKEN_KEY, MemoryBackend, TokenStorage
from routesaver.core import messages
from routesaver.core.domain_types import Point
from routesaver.main import app

A = Point(-15.78, -47.93)
B = Point(-15.80, -47.95)


@pytest.fixture
async def api(client):
    """RouteSaverClient talking to the app through ASGITransport (DB from `client`)."""
    http = httpx.AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test/api",
    )
    yield RouteSaverClient(http, TokenStorage(MemoryBackend()))
    await http.aclose()


def _fake(handler) -> tuple[RouteSaverClient, list]:
    logouts = []
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test/api",
    )
    storage = TokenStorage(MemoryBackend())
    storage.set_token("old-token")
    storage.set_user({"id": "u1", "name": "Ana", "email": "a@x.com"})
    return RouteSaverClient(http, storage, on_logout=lambda: logouts.append(1)), logouts


async def test_register_persists_session(api):
    await api.register("Ana", "a@x.com", "secret1")
    assert api.is_authenticated
    assert api.get_user()["email"] == "a@x.com"


async def test_login_then_me(api):
    await api.register("Ana", "a@x.com", "secret1")
    api.logout()
    assert not api.is_authenticated
    await api.login("A@X.com", "secret1")
    assert (await api.me())["name"] == "Ana"


async def test_route_crud_round_trip(api):
    await api.register("Ana", "a@x.com", "secret1")
    created = await api.create_route("Casa", [A, B])
    assert created.points == (A, B)
    assert created.created_at is not None

    listed = await api.list_routes()
    assert [r.id for r in listed] == [created.id]

    updated = await api.update_route(created.id, "Casa 2", [B, A])
    assert updated["data"]["name"] == "Casa 2"

    await api.delete_route(created.id)
    assert await api.list_routes() == []


async def test_missing_route_raises_api_error(api):
    await api.register("Ana", "a@x.com", "secret1")
    with pytest.raises(ApiError) as exc:
        await api.delete_route("00000000-0000-0000-0000-000000000000")
    assert exc.value.status_code == 404
    assert exc.value.message == messages.ROUTE_NOT_FOUND


async def test_failed_login_keeps_server_message(api):
    with pytest.raises(SessionExpired) as exc:
        await api.login("ghost@x.com", "secret1")
    assert exc.value.message == messages.INVALID_CREDENTIALS


async def test_bearer_header_sent():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "count": 0, "data": []})

    rs, _ = _fake(handler)
    assert await rs.list_routes() == []
    assert seen["auth"] == "Bearer old-token"


async def test_401_clears_session_and_notifies():
    rs, logouts = _fake(lambda r: httpx.Response(401, json={"success": False, "message": messages.TOKEN_INVALID}))
    with pytest.raises(SessionExpired) as exc:
        await rs.list_routes()
    assert exc.value.status_code == 401
    assert exc.value.message == messages.TOKEN_INVALID
    assert rs.storage.backend.get(TOKEN_KEY) is None
    assert rs.get_user() is None
    assert logouts == [1]


async def test_401_without_body_uses_session_expired():
    rs, _ = _fake(lambda r: httpx.Response(401, text=""))
    with pytest.raises(SessionExpired) as exc:
        await rs.list_routes()
    assert exc.value.message == messages.SESSION_EXPIRED


async def test_unsuccessful_body_raises_api_error():
    rs, logouts = _fake(lambda r: httpx.Response(400, json={"success": False, "message": "ruim"}))
    with pytest.raises(ApiError) as exc:
        await rs.create_route("x", [A, B])
    assert not isinstance(exc.value, SessionExpired)
    assert exc.value.message == "ruim"
    assert rs.is_authenticated
    assert logouts == []


async def test_non_json_body_unknown_error():
    rs, _ = _fake(lambda r: httpx.Response(502, text="<html>bad gateway</html>"))
    with pytest.raises(ApiError) as exc:
        await rs.list_routes()
    assert exc.value.message == messages.UNKNOWN_ERROR


def _refuse(request):
    raise httpx.ConnectError("connection refused", request=request)


async def test_unreachable_server_raises_api_error():
    rs, logouts = _fake(_refuse)
    with pytest.raises(ApiError) as exc:
        await rs.list_routes()
    assert not isinstance(exc.value, SessionExpired)
    assert exc.value.status_code == 0
    assert exc.value.message == messages.CONNECTION_FAILED
    assert rs.is_authenticated
    assert logouts == []


async def test_timeout_raises_api_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    rs, _ = _fake(handler)
    with pytest.raises(ApiError) as exc:
        await rs.create_route("x", [A, B])
    assert exc.value.message == messages.CONNECTION_FAILED
