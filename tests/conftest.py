from __future__ import annotations

import asyncio

import pytest

from core.domain.errors import FetchError
from core.domain.models import Pokemon


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_pokemon(entity_id: int, name: str | None = None) -> Pokemon:
    return Pokemon(
        id=entity_id,
        name=name or f"mon-{entity_id}",
        height=entity_id * 2,
        weight=entity_id * 10,
        image_ref=f"https://img.example/{entity_id}.png",
    )


class ScriptedFetcher:
    """Fake fetcher whose calls block until the test settles them.

    Each call to `fetch` gets its own future; tests resolve calls in whatever
    order they need to reproduce out-of-order arrivals.
    """

    def __init__(self) -> None:
        self.calls: list[int] = []
        self._pending: list[asyncio.Future[Pokemon]] = []

    async def fetch(self, entity_id: int) -> Pokemon:
        future: asyncio.Future[Pokemon] = asyncio.get_running_loop().create_future()
        self.calls.append(entity_id)
        self._pending.append(future)
        return await future

    def succeed(self, call_index: int, entity: Pokemon | None = None) -> None:
        entity_id = self.calls[call_index]
        self._pending[call_index].set_result(entity or make_pokemon(entity_id))

    def fail(self, call_index: int, error: Exception) -> None:
        self._pending[call_index].set_exception(error)


class InstantFetcher:
    """Fake fetcher that answers immediately; ids in `missing` raise."""

    def __init__(self, missing: dict[int, FetchError] | None = None) -> None:
        self.calls: list[int] = []
        self._missing = missing or {}

    async def fetch(self, entity_id: int) -> Pokemon:
        self.calls.append(entity_id)
        if entity_id in self._missing:
            raise self._missing[entity_id]
        return make_pokemon(entity_id)


@pytest.fixture
def scripted_fetcher() -> ScriptedFetcher:
    return ScriptedFetcher()


@pytest.fixture
def instant_fetcher() -> InstantFetcher:
    return InstantFetcher()
