from __future__ import annotations

import asyncio

import httpx
import pytest

from adapters.pokeapi import PokeApiFetcher
from core.config import AppSettings
from core.domain.errors import DecodeError, FetchTimeoutError, HttpStatusError, TransportError
from core.domain.session import Phase
from core.services.navigation import NavigationController

pytestmark = pytest.mark.anyio

PIKACHU = {
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "sprites": {"front_default": "https://img.example/25.png"},
}


def _fetcher(handler, **overrides) -> PokeApiFetcher:
    settings = AppSettings(**overrides)
    return PokeApiFetcher(settings, transport=httpx.MockTransport(handler))


async def test_fetch_decodes_entity() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=PIKACHU)

    pokemon = await _fetcher(handler).fetch(25)

    assert pokemon.name == "pikachu"
    assert pokemon.image_ref == "https://img.example/25.png"
    assert str(seen[0].url) == "https://pokeapi.co/api/v2/pokemon/25"
    assert seen[0].headers["user-agent"].startswith("dexnav/")


async def test_base_url_trailing_slash_is_normalized() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=PIKACHU)

    await _fetcher(handler, base_url="https://dex.example/api/").fetch(25)

    assert seen == ["https://dex.example/api/25"]


async def test_non_200_maps_to_http_status_error() -> None:
    fetcher = _fetcher(lambda request: httpx.Response(404, text="Not Found"))

    with pytest.raises(HttpStatusError) as excinfo:
        await fetcher.fetch(9990)

    assert excinfo.value.status_code == 404
    assert excinfo.value.entity_id == 9990


async def test_connect_error_maps_to_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused"):
        await _fetcher(handler).fetch(1)


async def test_httpx_timeout_maps_to_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(FetchTimeoutError):
        await _fetcher(handler).fetch(1)


async def test_overall_deadline_maps_to_timeout_error() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json=PIKACHU)

    with pytest.raises(FetchTimeoutError) as excinfo:
        await _fetcher(handler, http_timeout_seconds=0.05).fetch(1)

    assert excinfo.value.seconds == 0.05


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json=[1, 2, 3]),
        httpx.Response(200, json={"id": 1, "height": 7}),
    ],
)
async def test_bad_body_maps_to_decode_error(response: httpx.Response) -> None:
    with pytest.raises(DecodeError):
        await _fetcher(lambda request: response).fetch(1)


async def test_controller_with_http_fetcher_reports_404() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        entity_id = int(request.url.path.rsplit("/", 1)[-1])
        if entity_id > 151:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, json={**PIKACHU, "id": entity_id})

    controller = NavigationController(_fetcher(handler))
    await controller.initialize()
    assert controller.state.last_entity.id == 1

    await controller.force_invalid(9990)

    assert controller.phase is Phase.FAILED
    assert controller.state.last_error == "Failed to load pokemon (HTTP 404)"


async def test_payload_for_another_id_maps_to_decode_error() -> None:
    fetcher = _fetcher(lambda request: httpx.Response(200, json=PIKACHU))

    with pytest.raises(DecodeError, match="describes id 25"):
        await fetcher.fetch(1)
