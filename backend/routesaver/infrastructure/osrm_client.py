"""OSRM Client — road-following path and distance from an OSRM /route service.

Invariants:
    - Internal coordinates are (lat, lng); OSRM wants "lng,lat;lng,lat"
    - Routes longer than the waypoint limit are sampled before the call
    - Any transport failure or non-"Ok" OSRM code becomes ExternalServiceError
    - No retries: failures surface to the editor as-is

Design Decisions:
    - geometries=geojson + overview=full: the returned line follows the roads,
      no polyline decoding needed
    - httpx.AsyncClient injected: tests pass a MockTransport-backed client
"""

import logging
from collections.abc import Sequence

import httpx

from routesaver.core.domain_types import Meters, Point, RoadPath
from routesaver.core.errors import ExternalServiceError
from routesaver.core.waypoints import sample_points

logger = logging.getLogger(__name__)


class OSRMRoadRouter:
    """RoadRouter backed by an OSRM HTTP server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        profile: str = "driving",
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.profile = profile

    @staticmethod
    def format_coordinates(points: Sequence[Point]) -> str:
        return ";".join(f"{p.lng},{p.lat}" for p in points)

    async def compute_road_path(self, points: Sequence[Point]) -> RoadPath:
        if len(points) < 2:
            raise ValueError("At least two points are required to compute a route.")
        waypoints = sample_points(points)
        url = (
            f"{self.base_url}/route/v1/{self.profile}/"
            f"{self.format_coordinates(waypoints)}"
        )
        try:
            response = await self.client.get(
                url, params={"overview": "full", "geometries": "geojson"},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"OSRM request failed: {e}")
            raise ExternalServiceError("OSRM", str(e)) from e

        if data.get("code") != "Ok" or not data.get("routes"):
            raise ExternalServiceError(
                "OSRM", data.get("message", data.get("code", "Unknown error")),
            )

        route = data["routes"][0]
        path = tuple(
            Point(lat=lat, lng=lng)
            for lng, lat in route["geometry"]["coordinates"]
        )
        return RoadPath(path=path, distance=Meters(float(route["distance"])))
