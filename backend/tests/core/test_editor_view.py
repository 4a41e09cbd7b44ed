"""Editor View — verifies the render projection for each editor mode.

Tests:
    - Viewing draws every route as a clickable background path
    - Selected replaces its own background path with the road overlay + endpoints
    - Creating shows the draft, the creation bar and the crosshair cursor
    - Logged-out models hide errors and ask for a redirect
"""

from datetime import datetime, timezone

from routesaver.core import messages
from routesaver.core.domain_types import Place, Point, SavedRoute, UserId, UserSummary
from routesaver.core.editor_model import EditorModel
from routesaver.core.editor_state import Creating, Selected
from routesaver.core.editor_view import (
    STYLE_BACKGROUND, STYLE_CREATION, STYLE_SELECTED,
    filter_routes, format_date, render,
)

A = Point(-15.78, -47.93)
B = Point(-15.80, -47.95)
C = Point(-15.82, -47.97)


def _route(route_id: str, name: str, points=(A, B), created=None) -> SavedRoute:
    return SavedRoute(
        id=route_id, name=name, points=tuple(points),
        created_at=created or datetime(2026, 3, 5, tzinfo=timezone.utc),
    )


def _model(**kwargs) -> EditorModel:
    return EditorModel(
        routes=[_route("r1", "Casa-Trabalho"), _route("r2", "Academia", (A, B, C))],
        **kwargs,
    )


def test_viewing_draws_all_routes_in_background():
    view = render(_model())
    assert [p.route_id for p in view.polylines] == ["r1", "r2"]
    assert all(p.style == STYLE_BACKGROUND for p in view.polylines)
    assert view.markers == ()
    assert view.creation_bar is None
    assert view.new_route_enabled
    assert not view.crosshair_cursor


def test_selected_route_replaced_by_road_overlay():
    model = _model(mode=Selected("r2", 1), road_path=(A, C))
    view = render(model)
    background = [p for p in view.polylines if p.style == STYLE_BACKGROUND]
    overlay = [p for p in view.polylines if p.style == STYLE_SELECTED]
    assert [p.route_id for p in background] == ["r1"]
    assert overlay[0].points == (A, C)
    assert [(m.kind, m.point) for m in view.markers] == [("start", A), ("end", C)]


def test_selected_without_road_path_yet_draws_only_markers():
    view = render(_model(mode=Selected("r1", 1)))
    assert [p.route_id for p in view.polylines] == ["r2"]
    assert len(view.markers) == 2


def test_creating_shows_draft_and_bar():
    model = _model(mode=Creating(name="Nova", points=(A, B)))
    view = render(model)
    draft = [p for p in view.polylines if p.style == STYLE_CREATION]
    assert draft[0].points == (A, B)
    assert [m.kind for m in view.markers] == ["draft", "draft"]
    assert view.creation_bar.point_count_label == "2 pontos"
    assert view.creation_bar.save_enabled
    assert view.creation_bar.save_label == messages.SAVE
    assert view.creation_bar.cancel_enabled
    assert view.crosshair_cursor
    assert not view.new_route_enabled


def test_creation_bar_disabled_while_busy():
    model = _model(mode=Creating(name="Nova", points=(A, B)), busy=True)
    bar = render(model).creation_bar
    assert not bar.save_enabled
    assert not bar.undo_enabled
    assert bar.save_label == messages.SAVING
    assert not bar.cancel_enabled


def test_creation_bar_single_point_label():
    bar = render(_model(mode=Creating(points=(A,)))).creation_bar
    assert bar.point_count_label == "1 ponto"
    assert not bar.save_enabled


def test_route_list_meta_and_active_flag():
    model = _model(mode=Selected("r2", 1))
    model.distances["r2"] = 1500.0
    items = render(model).route_list
    assert items[0].meta == "2 pontos · 05 mar. 2026"
    assert not items[0].active
    assert items[0].distance_label is None
    assert items[1].active
    assert items[1].distance_label == "1.5 km"
    assert items[1].directions_url.startswith("https://www.google.com/maps/dir/")


def test_route_list_filtered_case_insensitively():
    model = _model(route_filter="ACAD")
    items = render(model).route_list
    assert [i.route_id for i in items] == ["r2"]


def test_empty_state_when_nothing_matches():
    view = render(_model(route_filter="zzz"))
    assert view.route_list == ()
    assert view.empty_state


def test_greeting_uses_user_name():
    user = UserSummary(id=UserId("u1"), name="Ana", email="a@x.com")
    assert render(EditorModel(user=user)).greeting == "Olá, Ana"


def test_place_marker_added():
    model = _model()
    model.search.marker = Place(name="Brasília", lat=-15.79, lng=-47.88)
    markers = render(model).markers
    assert markers[-1].kind == "place"
    assert markers[-1].label == "Brasília"


def test_logged_out_hides_error_and_redirects():
    view = render(_model(error="boom", logged_out=True))
    assert view.error is None
    assert view.redirect_to_login


def test_delete_modal_open_when_pending():
    assert render(_model(pending_delete="r1")).delete_modal_open


def test_filter_routes_blank_query_returns_all():
    routes = [_route("r1", "A"), _route("r2", "B")]
    assert filter_routes(routes, "  ") == routes


def test_format_date_pt_br():
    route = _route("r1", "x", created=datetime(2026, 12, 1))
    assert format_date(route) == "01 dez. 2026"
