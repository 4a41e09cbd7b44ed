"""Editor Model — the single client-side state object owned by the map controller.

Invariants:
    - One EditorModel per dashboard; the controller is its only writer
    - mode is the only place that knows whether we are viewing, creating or selected
    - generation only ever increases
    - distances cache survives reselection; entries are removed with their route

Design Decisions:
    - Mutable dataclass holding immutable parts: the controller
      swaps whole values in, the view reads a consistent snapshot
"""

from dataclasses import dataclass, field

from routesaver.core.domain_types import (
    Meters, Place, Point, SavedRoute, UserSummary,
)
from routesaver.core.editor_state import EditorMode, Viewing, selected_route_id

DEFAULT_CENTER = Point(-15.78, -47.93)
DEFAULT_ZOOM = 5
GEOLOCATED_ZOOM = 13
PLACE_ZOOM = 15


@dataclass(frozen=True)
class MapViewport:
    center: Point = DEFAULT_CENTER
    zoom: int = DEFAULT_ZOOM
    # route bounds the map should fit, takes precedence over center/zoom
    fit_to: tuple[Point, ...] | None = None


@dataclass
class SearchPanel:
    query: str = ""
    results: list[Place] = field(default_factory=list)
    status: str | None = None
    marker: Place | None = None


@dataclass
class EditorModel:
    """Everything the dashboard renders, in one place."""

    user: UserSummary | None = None
    routes: list[SavedRoute] = field(default_factory=list)
    mode: EditorMode = field(default_factory=Viewing)
    generation: int = 0

    # road-following overlay for the selected route
    road_path: tuple[Point, ...] = ()
    distances: dict[str, Meters] = field(default_factory=dict)

    route_filter: str = ""
    pending_delete: str | None = None
    busy: bool = False
    error: str | None = None
    # set on a 401: the UI must drop everything and go to the login page
    logged_out: bool = False

    viewport: MapViewport = field(default_factory=MapViewport)
    search: SearchPanel = field(default_factory=SearchPanel)

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def find_route(self, route_id: str) -> SavedRoute | None:
        return next((r for r in self.routes if r.id == route_id), None)

    @property
    def selected_route(self) -> SavedRoute | None:
        route_id = selected_route_id(self.mode)
        return self.find_route(route_id) if route_id else None
