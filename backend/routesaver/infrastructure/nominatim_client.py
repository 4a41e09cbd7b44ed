"""Nominatim Client — free-text place search against OpenStreetMap's geocoder.

Invariants:
    - Blank queries return [] without a network call
    - Results keep Nominatim's ranking order, capped at `limit`
    - Transport or decoding failures become ExternalServiceError
"""

import logging

import httpx

from routesaver.core.domain_types import Place
from routesaver.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class NominatimPlaceSearch:
    """PlaceSearch backed by a Nominatim /search endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        language: str = "pt-BR",
        limit: int = 5,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.limit = limit

    async def search_places(self, query: str) -> list[Place]:
        query = query.strip()
        if not query:
            return []
        try:
            response = await self.client.get(
                f"{self.base_url}/search",
                params={"format": "json", "limit": self.limit, "q": query},
                headers={"Accept-Language": self.language},
            )
            response.raise_for_status()
            results = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Nominatim search failed: {e}")
            raise ExternalServiceError("Nominatim", str(e)) from e

        return [
            Place(
                name=item["display_name"],
                lat=float(item["lat"]),
                lng=float(item["lon"]),
            )
            for item in results[: self.limit]
        ]
