"""Boundary Protocols — contracts between the editor core and its collaborators.

Invariants:
    - Core NEVER imports from client/ or infrastructure/ — dependency arrows point inward
    - Road routing, geocoding and the routes API are reached only through these types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: every implementation does network IO, while the
      state/view functions that consume the results stay synchronous and pure
"""

from collections.abc import Sequence
from typing import Protocol

from routesaver.core.domain_types import Place, Point, RoadPath, SavedRoute


class RoadRouter(Protocol):
    """Computes a road-following path and its travel distance."""
    async def compute_road_path(self, points: Sequence[Point]) -> RoadPath: ...


class PlaceSearch(Protocol):
    """Resolves free-text queries to places."""
    async def search_places(self, query: str) -> list[Place]: ...


class Geolocator(Protocol):
    """Best-effort current position; None when unavailable."""
    async def locate(self) -> Point | None: ...


class RoutesGateway(Protocol):
    """Route CRUD as seen from the editor."""
    async def list_routes(self) -> list[SavedRoute]: ...
    async def create_route(
        self, name: str, points: Sequence[Point],
    ) -> SavedRoute: ...
    async def delete_route(self, route_id: str) -> None: ...
