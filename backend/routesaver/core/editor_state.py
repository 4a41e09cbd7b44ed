"""Editor State — explicit state machine for the map/route editor.

Invariants:
    - Exactly one mode at a time: Viewing, Creating or Selected
    - Creating and Selected are mutually exclusive
    - Only Creating can grow a point list; map clicks in other modes leave state untouched
    - Selected carries the generation it was entered with; distances from older
      generations are discarded
    - All transition functions are PURE: they return a new mode, never mutate

Design Decisions:
    - Frozen dataclasses + structural match over boolean flags: invalid combinations
      (creating AND selected) are unrepresentable
    - Invalid transitions raise InvalidTransition; the controller decides whether to
      surface or ignore them
"""

from dataclasses import dataclass, replace

from routesaver.core.domain_types import MIN_ROUTE_POINTS, Meters, Point


class InvalidTransition(Exception):
    """Operation is not defined for the current editor mode."""

    def __init__(self, operation: str, mode: "EditorMode"):
        super().__init__(f"{operation} not allowed while {type(mode).__name__}")
        self.operation = operation
        self.mode = mode


@dataclass(frozen=True)
class Viewing:
    """Default mode: every saved route drawn as a background path."""


@dataclass(frozen=True)
class Creating:
    """Draft route being built by map clicks."""
    name: str = ""
    points: tuple[Point, ...] = ()

    @property
    def can_save(self) -> bool:
        return bool(self.name.strip()) and len(self.points) >= MIN_ROUTE_POINTS

    def with_point(self, point: Point) -> "Creating":
        return replace(self, points=(*self.points, point))

    def without_last_point(self) -> "Creating":
        return replace(self, points=self.points[:-1])

    def renamed(self, name: str) -> "Creating":
        return replace(self, name=name)


@dataclass(frozen=True)
class Selected:
    """A saved route highlighted and handed to the road router."""
    route_id: str
    generation: int
    distance: Meters | None = None


EditorMode = Viewing | Creating | Selected


# --- Creation ----------------------------------------------------------------

def start_creation(mode: EditorMode) -> Creating:
    """Viewing/Selected -> Creating. Any selection is dropped."""
    match mode:
        case Creating():
            raise InvalidTransition("start_creation", mode)
        case Viewing() | Selected():
            return Creating()


def handle_map_click(mode: EditorMode, point: Point) -> EditorMode:
    """Append a point while creating; other modes have nothing to append to."""
    match mode:
        case Creating():
            return mode.with_point(point)
        case Viewing() | Selected():
            return mode


def undo_point(mode: EditorMode) -> EditorMode:
    match mode:
        case Creating():
            return mode.without_last_point()
        case _:
            raise InvalidTransition("undo_point", mode)


def rename_draft(mode: EditorMode, name: str) -> Creating:
    match mode:
        case Creating():
            return mode.renamed(name)
        case _:
            raise InvalidTransition("rename_draft", mode)


def leave_creation(mode: EditorMode) -> Viewing:
    """Creating -> Viewing, used both by cancel and after a successful save."""
    match mode:
        case Creating():
            return Viewing()
        case _:
            raise InvalidTransition("leave_creation", mode)


# --- Selection ---------------------------------------------------------------

def toggle_selection(
    mode: EditorMode, route_id: str, generation: int,
) -> EditorMode:
    """Select a route, or deselect it when it is already the selected one.

    `generation` must be fresh (strictly greater than any previous one) so that
    road-path responses for an earlier selection can be told apart.
    """
    match mode:
        case Creating():
            raise InvalidTransition("toggle_selection", mode)
        case Selected(route_id=current) if current == route_id:
            return Viewing()
        case Viewing() | Selected():
            return Selected(route_id=route_id, generation=generation)


def record_distance(
    mode: EditorMode, generation: int, meters: Meters,
) -> EditorMode:
    """Attach a computed distance if it belongs to the current selection."""
    match mode:
        case Selected(generation=current) if current == generation:
            return replace(mode, distance=meters)
        case _:
            return mode


def is_current_generation(mode: EditorMode, generation: int) -> bool:
    match mode:
        case Selected(generation=current):
            return current == generation
        case _:
            return False


def forget_route(mode: EditorMode, route_id: str) -> EditorMode:
    """Drop the selection if it points at a route that no longer exists."""
    match mode:
        case Selected(route_id=current) if current == route_id:
            return Viewing()
        case _:
            return mode


def selected_route_id(mode: EditorMode) -> str | None:
    match mode:
        case Selected(route_id=route_id):
            return route_id
        case _:
            return None
