"""Fetcher HTTP: PokeAPI.

- GET `<base_url>/<id>` con timeout total acotado.
- Traduce cada fallo de httpx/JSON/pydantic a la taxonomía de `core.domain.errors`.
"""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import DecodeError, FetchTimeoutError, HttpStatusError, TransportError
from core.domain.models import Pokemon
from core.interfaces.fetcher import EntityFetcher

logger = logging.getLogger(__name__)


class PokeApiFetcher(EntityFetcher):
    """Recupera un `Pokemon` por id desde la API REST."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def url_for(self, entity_id: int) -> str:
        return f"{self._settings.base_url.rstrip('/')}/{entity_id}"

    async def fetch(self, entity_id: int) -> Pokemon:
        timeout = self._settings.http_timeout_seconds
        try:
            response = await asyncio.wait_for(self._get(entity_id), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise FetchTimeoutError(entity_id, timeout) from exc
        except httpx.HTTPError as exc:
            raise TransportError(entity_id, str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            logger.debug("http_status | id=%s | status=%s", entity_id, response.status_code)
            raise HttpStatusError(entity_id, response.status_code)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(entity_id, "response body is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise DecodeError(entity_id, f"expected a JSON object, got {type(payload).__name__}")

        try:
            pokemon = Pokemon.from_api(payload)
        except ValidationError as exc:
            raise DecodeError(entity_id, f"{exc.error_count()} invalid field(s)") from exc
        if pokemon.id != entity_id:
            raise DecodeError(entity_id, f"response describes id {pokemon.id}")
        return pokemon

    async def _get(self, entity_id: int) -> httpx.Response:
        async with build_async_client(self._settings, transport=self._transport) as client:
            return await client.get(self.url_for(entity_id))
