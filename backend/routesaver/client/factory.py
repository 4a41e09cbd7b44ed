"""Client Factory — wires settings into the API client, collaborators and controller.

Invariants:
    - One httpx.AsyncClient for the API, one for external services
    - The caller closes the API client; the external client is closed by
      controller.aclose() unless the caller passed its own
    - Token storage is the on-disk file from settings unless a backend is given
"""

from collections.abc import Callable

import httpx

from routesaver.client.api_client import RouteSaverClient
from routesaver.client.map_controller import MapController
from routesaver.client.token_storage import FileBackend, KeyValueBackend, TokenStorage
from routesaver.config import ClientSettings, get_client_settings
from routesaver.core.domain_types import UserId, UserSummary
from routesaver.core.editor_view import EditorView
from routesaver.core.repository_protocols import Geolocator
from routesaver.infrastructure.nominatim_client import NominatimPlaceSearch
from routesaver.infrastructure.osrm_client import OSRMRoadRouter


def build_api_client(
    settings: ClientSettings | None = None,
    backend: KeyValueBackend | None = None,
    on_logout: Callable[[], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RouteSaverClient:
    settings = settings or get_client_settings()
    http = httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )
    storage = TokenStorage(backend or FileBackend(settings.storage_path))
    return RouteSaverClient(http, storage, on_logout=on_logout)


def build_controller(
    api: RouteSaverClient,
    settings: ClientSettings | None = None,
    geolocator: Geolocator | None = None,
    on_change: Callable[[EditorView], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    external: httpx.AsyncClient | None = None,
) -> MapController:
    """Controller for the logged-in user stored in `api`."""
    settings = settings or get_client_settings()
    owned = []
    if external is None:
        external = httpx.AsyncClient(
            timeout=settings.http_timeout_seconds, transport=transport,
        )
        owned.append(external)
    stored = api.get_user()
    user = (
        UserSummary(id=UserId(stored["id"]), name=stored["name"], email=stored["email"])
        if stored else None
    )
    return MapController(
        routes=api,
        road_router=OSRMRoadRouter(
            external, settings.osrm_base_url, settings.osrm_profile,
        ),
        places=NominatimPlaceSearch(
            external,
            settings.nominatim_base_url,
            language=settings.nominatim_language,
            limit=settings.nominatim_limit,
        ),
        geolocator=geolocator,
        user=user,
        on_change=on_change,
        owned_clients=owned,
    )
