"""Map Controller — async orchestration of the route editor.

Invariants:
    - The controller is the only writer of its EditorModel; every change ends in one
      on_change(render(model)) notification
    - busy is set for the whole duration of save/delete/load; a second save or
      delete while busy is ignored
    - While busy the draft cannot be edited or cancelled
    - Road-path responses are applied only if their generation is still current
    - SessionExpired overrides every other error: model.logged_out is set, error cleared
    - Failures become model.error; nothing is retried, nothing swallowed, except
      geolocation which falls back to the default viewport

Design Decisions:
    - Collaborators (routes gateway, road router, place search, geolocator) injected
      as Protocols: tests pass fakes, production passes the httpx-backed clients
    - Invalid transitions (selecting while creating) are logged and ignored:
      they are UI races, not user errors
    - HTTP clients created for the controller are handed to it and released by
      aclose(); clients supplied by the caller stay the caller's
"""

import logging
from collections.abc import Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from routesaver.client.api_client import ApiError, SessionExpired
from routesaver.core import messages
from routesaver.core.domain_types import Place, Point, UserSummary
from routesaver.core.editor_model import (
    GEOLOCATED_ZOOM, PLACE_ZOOM, EditorModel, MapViewport,
)
from routesaver.core.editor_state import (
    Creating,
    InvalidTransition,
    forget_route,
    handle_map_click,
    is_current_generation,
    leave_creation,
    record_distance,
    rename_draft,
    selected_route_id,
    start_creation,
    toggle_selection,
    undo_point,
)
from routesaver.core.editor_view import EditorView, render
from routesaver.core.errors import ExternalServiceError
from routesaver.core.repository_protocols import (
    Geolocator, PlaceSearch, RoadRouter, RoutesGateway,
)

logger = logging.getLogger(__name__)


@dataclass
class _Call:
    ok: bool = False


class MapController:
    """Drives the dashboard: routes list, creation, selection, search."""

    def __init__(
        self,
        routes: RoutesGateway,
        road_router: RoadRouter,
        places: PlaceSearch,
        geolocator: Geolocator | None = None,
        user: UserSummary | None = None,
        on_change: Callable[[EditorView], None] | None = None,
        owned_clients: Sequence[httpx.AsyncClient] = (),
    ):
        self.routes = routes
        self.road_router = road_router
        self.places = places
        self.geolocator = geolocator
        self.on_change = on_change
        self.model = EditorModel(user=user)
        self._owned_clients = list(owned_clients)

    @property
    def view(self) -> EditorView:
        return render(self.model)

    # --- Bootstrap -----------------------------------------------------------

    async def start(self) -> None:
        await self.locate()
        await self.load_routes()

    async def aclose(self) -> None:
        """Close the HTTP clients this controller was built with."""
        for client in self._owned_clients:
            await client.aclose()
        self._owned_clients = []

    async def locate(self) -> None:
        """Center on the user's position when available; otherwise keep the default."""
        if self.geolocator is None:
            return
        try:
            position = await self.geolocator.locate()
        except Exception as e:
            logger.info(f"Geolocation unavailable: {e}")
            return
        if position is not None:
            self.model.viewport = MapViewport(center=position, zoom=GEOLOCATED_ZOOM)
            self._emit()

    async def load_routes(self) -> None:
        async with self._request(messages.LOAD_ROUTES_FAILED):
            self.model.routes = await self.routes.list_routes()

    # --- Creation ------------------------------------------------------------

    def start_creation(self) -> None:
        try:
            self.model.mode = start_creation(self.model.mode)
        except InvalidTransition as e:
            logger.debug(str(e))
            return
        self.model.road_path = ()
        self.model.error = None
        self._emit()

    def map_click(self, lat: float, lng: float) -> None:
        self.model.mode = handle_map_click(self.model.mode, Point(lat, lng))
        self._emit()

    # the draft is frozen while it is being saved
    def undo_point(self) -> None:
        if not self.model.busy:
            self._transition(undo_point)

    def rename_draft(self, name: str) -> None:
        if not self.model.busy:
            self._transition(lambda mode: rename_draft(mode, name))

    def cancel_creation(self) -> None:
        if not self.model.busy:
            self._transition(leave_creation)

    async def save_route(self) -> None:
        draft = self.model.mode
        if self.model.busy or not isinstance(draft, Creating) or not draft.can_save:
            return
        async with self._request(messages.SAVE_ROUTE_FAILED) as call:
            await self.routes.create_route(draft.name.strip(), draft.points)
            call.ok = True
        if call.ok:
            if isinstance(self.model.mode, Creating):
                self.model.mode = leave_creation(self.model.mode)
            await self.load_routes()

    # --- Selection -----------------------------------------------------------

    async def toggle_route(self, route_id: str) -> None:
        """Select a route and fetch its road path; the same route again deselects."""
        generation = self.model.next_generation()
        try:
            self.model.mode = toggle_selection(self.model.mode, route_id, generation)
        except InvalidTransition as e:
            logger.debug(str(e))
            return
        self.model.road_path = ()

        route = self.model.selected_route
        if route is None:
            self._emit()
            return
        self.model.viewport = MapViewport(
            center=self.model.viewport.center,
            zoom=self.model.viewport.zoom,
            fit_to=route.points,
        )
        self._emit()

        try:
            road = await self.road_router.compute_road_path(route.points)
        except ExternalServiceError as e:
            if is_current_generation(self.model.mode, generation):
                self.model.error = messages.ROUTING_FAILED.format(detail=e.message)
                self._emit()
            return

        if not is_current_generation(self.model.mode, generation):
            logger.debug(f"Discarding stale road path (generation {generation})")
            return
        self.model.road_path = road.path
        self.model.mode = record_distance(self.model.mode, generation, road.distance)
        self.model.distances[route_id] = road.distance
        self._emit()

    def filter_routes(self, query: str) -> None:
        self.model.route_filter = query
        self._emit()

    # --- Delete (two-step) ---------------------------------------------------

    def request_delete(self, route_id: str) -> None:
        self.model.pending_delete = route_id
        self._emit()

    def dismiss_delete(self) -> None:
        self.model.pending_delete = None
        self._emit()

    async def confirm_delete(self) -> None:
        route_id = self.model.pending_delete
        if route_id is None or self.model.busy:
            self.dismiss_delete()
            return
        self.model.pending_delete = None
        async with self._request(messages.DELETE_ROUTE_FAILED) as call:
            await self.routes.delete_route(route_id)
            call.ok = True
        if call.ok:
            if selected_route_id(self.model.mode) == route_id:
                self.model.road_path = ()
            self.model.mode = forget_route(self.model.mode, route_id)
            self.model.distances.pop(route_id, None)
            await self.load_routes()

    # --- Place search --------------------------------------------------------

    async def search(self, query: str) -> None:
        query = query.strip()
        if not query:
            return
        search = self.model.search
        search.query = query
        search.results = []
        search.status = messages.SEARCHING
        self._emit()
        try:
            search.results = await self.places.search_places(query)
        except ExternalServiceError as e:
            logger.warning(f"Place search failed: {e.message}")
            search.status = messages.SEARCH_FAILED
        else:
            search.status = None if search.results else messages.SEARCH_NO_RESULTS
        self._emit()

    def choose_place(self, index: int) -> Place:
        search = self.model.search
        place = search.results[index]
        self.model.viewport = MapViewport(center=place.point, zoom=PLACE_ZOOM)
        search.marker = place
        search.query = place.name
        search.results = []
        search.status = None
        self._emit()
        return place

    def close_search_results(self) -> None:
        self.model.search.results = []
        self.model.search.status = None
        self._emit()

    # --- Internals -----------------------------------------------------------

    def _transition(self, fn) -> None:
        try:
            self.model.mode = fn(self.model.mode)
        except InvalidTransition as e:
            logger.debug(str(e))
            return
        self._emit()

    @asynccontextmanager
    async def _request(self, failure_template: str):
        """Mark busy around an API call and turn failures into model.error.

        The body sets call.ok once the call went through, so callers can tell
        whether to continue after the block.
        """
        call = _Call()
        self.model.busy = True
        self.model.error = None
        self._emit()
        try:
            yield call
        except SessionExpired:
            self.model.logged_out = True
            self.model.error = None
        except ApiError as e:
            self.model.error = failure_template.format(detail=e.message)
        finally:
            self.model.busy = False
            self._emit()

    def _emit(self) -> None:
        if self.on_change:
            self.on_change(render(self.model))
