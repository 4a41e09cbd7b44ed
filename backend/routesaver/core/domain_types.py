"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUIDs — never use bare UUID in domain logic
    - Point is immutable; lat in [-90, 90], lng in [-180, 180]
    - Route names are 1–200 chars after strip; routes have >= 2 points

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Point as frozen dataclass: hashable, comparable, usable in pure core functions
"""

from dataclasses import dataclass
from datetime import datetime
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)

Meters = NewType("Meters", float)


# ─── Limits ──────────────────────────────────────────────────────

ROUTE_NAME_MAX_LENGTH = 200
USER_NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
MIN_ROUTE_POINTS = 2
MAX_WAYPOINTS = 25


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Point:
    """A (latitude, longitude) pair. Identity comes from its position in a route."""
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True)
class UserSummary:
    """Outward view of a user. Never carries the password hash."""
    id: UserId
    name: str
    email: str

    def to_dict(self) -> dict:
        return {"id": str(self.id), "name": self.name, "email": self.email}


@dataclass(frozen=True)
class SavedRoute:
    """Client-side view of a persisted route as returned by the API."""
    id: str
    name: str
    points: tuple[Point, ...]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict) -> "SavedRoute":
        return cls(
            id=data["id"],
            name=data["name"],
            points=tuple(Point.from_dict(c) for c in data["coordinates"]),
            created_at=_parse_timestamp(data.get("createdAt")),
            updated_at=_parse_timestamp(data.get("updatedAt")),
        )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Place:
    """A geocoding result the map can be recentered on."""
    name: str
    lat: float
    lng: float

    @property
    def point(self) -> Point:
        return Point(self.lat, self.lng)


@dataclass(frozen=True)
class RoadPath:
    """Road-following geometry for a route plus its travel distance."""
    path: tuple[Point, ...]
    distance: Meters
