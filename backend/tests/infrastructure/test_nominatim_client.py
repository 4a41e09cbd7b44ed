"""Nominatim Client — verifies search parameters and result mapping."""

import httpx
import pytest

from routesaver.core.errors import ExternalServiceError
from routesaver.infrastructure.nominatim_client import NominatimPlaceSearch

RESULTS = [
    {"display_name": "Brasília, Distrito Federal, Brasil", "lat": "-15.79", "lon": "-47.88"},
    {"display_name": "Brasília de Minas, Minas Gerais, Brasil", "lat": "-16.20", "lon": "-44.43"},
]


def _search(handler, limit=5) -> NominatimPlaceSearch:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NominatimPlaceSearch(client, "https://nominatim.test", "pt-BR", limit)


async def test_query_parameters_and_language():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json=RESULTS)

    await _search(handler).search_places("  Brasília ")
    request = seen["request"]
    assert request.url.path == "/search"
    assert request.url.params["q"] == "Brasília"
    assert request.url.params["format"] == "json"
    assert request.url.params["limit"] == "5"
    assert request.headers["Accept-Language"] == "pt-BR"


async def test_results_mapped_in_order():
    places = await _search(lambda r: httpx.Response(200, json=RESULTS)).search_places("Brasília")
    assert [p.name for p in places] == [r["display_name"] for r in RESULTS]
    assert places[0].lat == -15.79
    assert places[0].lng == -47.88


async def test_results_capped_at_limit():
    places = await _search(
        lambda r: httpx.Response(200, json=RESULTS), limit=1,
    ).search_places("Brasília")
    assert len(places) == 1


async def test_blank_query_skips_network():
    def handler(request):
        raise AssertionError("no request expected")

    assert await _search(handler).search_places("   ") == []


async def test_http_error_raises():
    with pytest.raises(ExternalServiceError) as exc:
        await _search(lambda r: httpx.Response(503)).search_places("x")
    assert exc.value.service == "Nominatim"
