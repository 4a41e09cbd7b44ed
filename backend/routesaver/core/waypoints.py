"""Waypoints — sampling and formatting helpers for route hand-off to external maps.

Invariants:
    - sample_points keeps the first and last point and never reorders
    - Sampling is a no-op when the route already fits the limit
    - All functions are pure

Design Decisions:
    - Evenly spaced indices with rounding: public routing/directions services cap
      waypoints around 25, and even spacing keeps the overall shape
"""

import math
from collections.abc import Sequence

from routesaver.core.domain_types import MAX_WAYPOINTS, Point

GOOGLE_MAPS_DIR_URL = "https://www.google.com/maps/dir/"


def sample_points(points: Sequence[Point], limit: int = MAX_WAYPOINTS) -> list[Point]:
    """Reduce points to at most `limit` representatives, keeping both ends."""
    if limit < 2:
        raise ValueError("limit must be at least 2")
    n = len(points)
    if n <= limit:
        return list(points)
    step = (n - 1) / (limit - 1)
    # half-up rounding, round() would bank to even
    middle = [points[math.floor(i * step + 0.5)] for i in range(1, limit - 1)]
    return [points[0], *middle, points[-1]]


def format_distance(meters: float) -> str:
    """'850 m' below one kilometer, '1.2 km' from there on."""
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{round(meters)} m"


def directions_url(points: Sequence[Point]) -> str | None:
    """Google Maps directions link for a route, sampled to the waypoint limit."""
    if len(points) < 2:
        return None
    path = "/".join(f"{p.lat},{p.lng}" for p in sample_points(points))
    return f"{GOOGLE_MAPS_DIR_URL}{path}"
