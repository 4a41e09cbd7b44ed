"""Route Schemas — route payloads and envelopes.

Invariants:
    - RouteWrite is the body of both POST and PUT (update is a full replace)
    - RouteOut exposes camelCase timestamps and the owner id as `user`
    - Coordinates keep their input order
"""

from datetime import datetime

from pydantic import BaseModel

from routesaver.core.domain_types import Point
from routesaver.models.route import Route


class Coordinate(BaseModel):
    lat: float
    lng: float

    def to_point(self) -> Point:
        return Point(lat=self.lat, lng=self.lng)


class RouteWrite(BaseModel):
    name: str | None = None
    coordinates: list[Coordinate] | None = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Casa-Trabalho",
                "coordinates": [
                    {"lat": -15.78, "lng": -47.93},
                    {"lat": -15.80, "lng": -47.95},
                ],
            }
        }
    }

    def points(self) -> list[Point] | None:
        if self.coordinates is None:
            return None
        return [c.to_point() for c in self.coordinates]


class RouteOut(BaseModel):
    id: str
    name: str
    coordinates: list[Coordinate]
    user: str
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_model(cls, route: Route) -> "RouteOut":
        return cls(
            id=str(route.id),
            name=route.name,
            coordinates=[Coordinate(**c) for c in route.coordinates],
            user=str(route.user_id),
            createdAt=route.created_at,
            updatedAt=route.updated_at,
        )


class RouteEnvelope(BaseModel):
    success: bool = True
    data: RouteOut


class RouteListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[RouteOut]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
