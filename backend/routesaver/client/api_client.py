"""API Client — async wrapper over the RouteSaver HTTP API.

Invariants:
    - Every request carries "Authorization: Bearer <token>" when a token is stored
    - A 401 from any endpoint clears stored token/user, fires on_logout, and raises
      SessionExpired — before any other error handling
    - A body with success=false raises ApiError with the server's message
    - Transport failures (refused connection, timeout) raise ApiError with status 0
    - register/login persist token and user summary
    - No retries

Design Decisions:
    - httpx.AsyncClient injected with base_url pointing at /api: tests run the
      real FastAPI app through ASGITransport or fake the server with MockTransport
    - Implements RoutesGateway so the map controller depends only on the protocol
"""

import logging
from collections.abc import Callable, Sequence

import httpx

from routesaver.client.token_storage import TokenStorage
from routesaver.core import messages
from routesaver.core.domain_types import Point, SavedRoute

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Request failed; message is what the user should see."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SessionExpired(ApiError):
    """Server answered 401; local session already cleared."""

    def __init__(self, message: str = messages.SESSION_EXPIRED):
        super().__init__(401, message)


class RouteSaverClient:
    """HTTP calls + local session handling."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        storage: TokenStorage | None = None,
        on_logout: Callable[[], None] | None = None,
    ):
        self.http = http
        self.storage = storage or TokenStorage()
        self.on_logout = on_logout

    # --- Session -------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self.storage.is_authenticated

    def get_user(self) -> dict | None:
        return self.storage.get_user()

    def logout(self) -> None:
        self.storage.clear()
        if self.on_logout:
            self.on_logout()

    # --- Auth ----------------------------------------------------------------

    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/register",
            {"name": name, "email": email, "password": password},
        )
        self._remember(data)
        return data

    async def login(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/login", {"email": email, "password": password},
        )
        self._remember(data)
        return data

    async def me(self) -> dict:
        data = await self._request("GET", "/auth/me")
        return data["user"]

    # --- Routes --------------------------------------------------------------

    async def get_routes(self) -> dict:
        return await self._request("GET", "/routes")

    async def get_route(self, route_id: str) -> dict:
        return await self._request("GET", f"/routes/{route_id}")

    async def update_route(
        self, route_id: str, name: str, points: Sequence[Point],
    ) -> dict:
        return await self._request(
            "PUT", f"/routes/{route_id}",
            {"name": name, "coordinates": [p.to_dict() for p in points]},
        )

    async def list_routes(self) -> list[SavedRoute]:
        data = await self.get_routes()
        return [SavedRoute.from_api(r) for r in data["data"]]

    async def create_route(
        self, name: str, points: Sequence[Point],
    ) -> SavedRoute:
        data = await self._request(
            "POST", "/routes",
            {"name": name, "coordinates": [p.to_dict() for p in points]},
        )
        return SavedRoute.from_api(data["data"])

    async def delete_route(self, route_id: str) -> None:
        await self._request("DELETE", f"/routes/{route_id}")

    # --- Internals -----------------------------------------------------------

    def _remember(self, data: dict) -> None:
        self.storage.set_token(data["token"])
        self.storage.set_user(data["user"])

    async def _request(
        self, method: str, path: str, body: dict | None = None,
    ) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self.storage.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self.http.request(
                method, path, json=body, headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(0, messages.CONNECTION_FAILED) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 401:
            logger.info(f"401 on {method} {path}; clearing session")
            self.logout()
            # login failures carry "Credenciais inválidas", keep it for the form
            server_message = data.get("message") if isinstance(data, dict) else None
            raise SessionExpired(server_message or messages.SESSION_EXPIRED)

        if data is None:
            raise ApiError(response.status_code, messages.UNKNOWN_ERROR)

        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or messages.UNKNOWN_ERROR)
        return data
