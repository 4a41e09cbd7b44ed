"""Editor View — pure projection of EditorModel into render-ready shapes.

Invariants:
    - render() never mutates the model and performs no IO
    - The selected route has no background polyline: the road overlay replaces it,
      only its start/end markers are drawn
    - Save is enabled only when the draft can be saved and nothing is in flight
    - Undo and cancel are disabled while a request is in flight
    - Route list filtering is case-insensitive on the name

Design Decisions:
    - Plain frozen dataclasses as view nodes: a UI layer (or a test) walks them
      without knowing anything about the editor's state machine
"""

from dataclasses import dataclass

from routesaver.core import messages
from routesaver.core.domain_types import Place, Point, SavedRoute
from routesaver.core.editor_model import EditorModel, MapViewport
from routesaver.core.editor_state import (
    Creating, Selected, Viewing, selected_route_id,
)
from routesaver.core.waypoints import directions_url, format_distance

# Polyline styles
STYLE_BACKGROUND = {"color": "#4f46e5", "weight": 4, "opacity": 0.45}
STYLE_SELECTED = {"color": "#22c55e", "weight": 5, "opacity": 0.8}
STYLE_CREATION = {"color": "#4f46e5", "weight": 4, "dashArray": "8 6"}

_MONTHS_PT_BR = (
    "jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
    "jul.", "ago.", "set.", "out.", "nov.", "dez.",
)


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    style: dict
    # clicking a polyline with a route_id selects that route
    route_id: str | None = None


@dataclass(frozen=True)
class Marker:
    point: Point
    kind: str  # "start" | "end" | "draft" | "place"
    label: str | None = None


@dataclass(frozen=True)
class RouteListItem:
    route_id: str
    name: str
    meta: str
    active: bool
    distance_label: str | None
    directions_url: str | None


@dataclass(frozen=True)
class CreationBar:
    name: str
    point_count_label: str
    undo_enabled: bool
    save_enabled: bool
    save_label: str
    cancel_enabled: bool


@dataclass(frozen=True)
class EditorView:
    greeting: str | None
    viewport: MapViewport
    polylines: tuple[Polyline, ...]
    markers: tuple[Marker, ...]
    route_list: tuple[RouteListItem, ...]
    empty_state: bool
    creation_bar: CreationBar | None
    new_route_enabled: bool
    crosshair_cursor: bool
    delete_modal_open: bool
    search_results: tuple[str, ...]
    search_status: str | None
    busy: bool
    error: str | None
    redirect_to_login: bool


def render(model: EditorModel) -> EditorView:
    """Project the whole model. Exhaustive over editor modes."""
    match model.mode:
        case Viewing():
            polylines, markers = _background(model.routes, None), ()
            creation_bar = None
        case Selected(route_id=route_id):
            polylines = _background(model.routes, route_id)
            if model.road_path:
                polylines += (Polyline(model.road_path, STYLE_SELECTED),)
            markers = _endpoint_markers(model.find_route(route_id))
            creation_bar = None
        case Creating() as draft:
            polylines = _background(model.routes, None)
            polylines += (Polyline(draft.points, STYLE_CREATION),)
            markers = tuple(Marker(p, "draft") for p in draft.points)
            creation_bar = _creation_bar(draft, model.busy)

    if model.search.marker:
        markers += (_place_marker(model.search.marker),)

    items = _route_list(model)
    creating = isinstance(model.mode, Creating)
    return EditorView(
        greeting=(
            messages.GREETING.format(name=model.user.name) if model.user else None
        ),
        viewport=model.viewport,
        polylines=polylines,
        markers=markers,
        route_list=items,
        empty_state=not items,
        creation_bar=creation_bar,
        new_route_enabled=not creating and not model.busy,
        crosshair_cursor=creating,
        delete_modal_open=model.pending_delete is not None,
        search_results=tuple(p.name for p in model.search.results),
        search_status=model.search.status,
        busy=model.busy,
        error=None if model.logged_out else model.error,
        redirect_to_login=model.logged_out,
    )


def filter_routes(routes: list[SavedRoute], query: str) -> list[SavedRoute]:
    needle = query.strip().lower()
    if not needle:
        return list(routes)
    return [r for r in routes if needle in r.name.lower()]


def format_date(route: SavedRoute) -> str:
    """'05 mar. 2026' — day, abbreviated pt-BR month, year."""
    if route.created_at is None:
        return ""
    d = route.created_at
    return f"{d.day:02d} {_MONTHS_PT_BR[d.month - 1]} {d.year}"


# --- Helpers -----------------------------------------------------------------

def _background(
    routes: list[SavedRoute], selected_id: str | None,
) -> tuple[Polyline, ...]:
    return tuple(
        Polyline(r.points, STYLE_BACKGROUND, route_id=r.id)
        for r in routes if r.id != selected_id
    )


def _endpoint_markers(route: SavedRoute | None) -> tuple[Marker, ...]:
    if route is None or not route.points:
        return ()
    markers = (Marker(route.points[0], "start"),)
    if len(route.points) > 1:
        markers += (Marker(route.points[-1], "end"),)
    return markers


def _place_marker(place: Place) -> Marker:
    return Marker(place.point, "place", label=place.name)


def _creation_bar(draft: Creating, busy: bool) -> CreationBar:
    count = len(draft.points)
    return CreationBar(
        name=draft.name,
        point_count_label=messages.point_count_label(count),
        undo_enabled=count > 0 and not busy,
        save_enabled=draft.can_save and not busy,
        save_label=messages.SAVING if busy else messages.SAVE,
        cancel_enabled=not busy,
    )


def _route_list(model: EditorModel) -> tuple[RouteListItem, ...]:
    selected = selected_route_id(model.mode)
    items = []
    for route in filter_routes(model.routes, model.route_filter):
        meta = messages.point_count_label(len(route.points))
        date = format_date(route)
        if date:
            meta = f"{meta} · {date}"
        distance = model.distances.get(route.id)
        items.append(RouteListItem(
            route_id=route.id,
            name=route.name,
            meta=meta,
            active=route.id == selected,
            distance_label=format_distance(distance) if distance is not None else None,
            directions_url=directions_url(route.points),
        ))
    return tuple(items)
