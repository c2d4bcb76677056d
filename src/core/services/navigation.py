"""Navigation orchestration.

The controller owns the session state and turns every navigation command into
at most one fetch. Fetches run as asyncio tasks on the caller's event loop, so
all state mutation happens on a single writer and needs no locking.

Nothing cancels an in-flight request when a newer command arrives. Each fetch
is tagged with a generation number instead, and only the response carrying the
latest generation may touch the state; older responses are dropped on arrival.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from core.domain.errors import FetchError
from core.domain.models import IdRange, Pokemon
from core.domain.session import Phase, SessionState, SessionView
from core.interfaces.fetcher import EntityFetcher
from core.services.sequencer import Direction, step

logger = logging.getLogger(__name__)

Observer = Callable[[SessionView], None]

DEFAULT_INVALID_ID = 9990


class NavigationController:
    """Browse one entity at a time over a fixed id range.

    Commands (`go_next`, `go_previous`, `reload`, `force_invalid`, `go_home`)
    return the scheduled fetch task, or `None` when they were suppressed
    because a fetch is already loading.
    """

    def __init__(
        self,
        fetcher: EntityFetcher,
        id_range: IdRange | None = None,
        *,
        invalid_id: int = DEFAULT_INVALID_ID,
        gate_while_loading: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._range = id_range or IdRange()
        self._invalid_id = invalid_id
        self._gate = gate_while_loading
        self._state = SessionState(current_id=self._range.min_id)
        self._observers: list[Observer] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._initialized = False

    # ------------------------------------------------------------------
    # Observation

    @property
    def id_range(self) -> IdRange:
        return self._range

    @property
    def state(self) -> SessionView:
        return self._state.snapshot()

    @property
    def current_id(self) -> int:
        return self._state.current_id

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def outstanding(self) -> int:
        """Number of fetch tasks still running, stale ones included."""

        return len(self._tasks)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register `observer`; returns a callable that unregisters it."""

        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Commands

    def initialize(self) -> asyncio.Task[None]:
        if self._initialized:
            raise RuntimeError("NavigationController.initialize() called twice")
        task = self.load(self._range.min_id)
        self._initialized = True
        return task

    def go_next(self) -> asyncio.Task[None] | None:
        if self._suppressed("next"):
            return None
        return self.load(step(self._state.current_id, Direction.FORWARD, self._range))

    def go_previous(self) -> asyncio.Task[None] | None:
        if self._suppressed("previous"):
            return None
        return self.load(step(self._state.current_id, Direction.BACKWARD, self._range))

    def reload(self) -> asyncio.Task[None] | None:
        if self._suppressed("reload"):
            return None
        return self.load(self._state.current_id)

    def go_home(self) -> asyncio.Task[None] | None:
        if self._suppressed("home"):
            return None
        return self.load(self._range.min_id)

    def force_invalid(self, entity_id: int | None = None) -> asyncio.Task[None] | None:
        """Load an id outside the range to exercise the failure path.

        The id is not validated: whether it exists is the fetcher's call.
        """

        if self._suppressed("force_invalid"):
            return None
        return self.load(self._invalid_id if entity_id is None else entity_id)

    async def refresh(self) -> SessionView:
        """Pull-to-refresh: reload the current id regardless of the loading gate."""

        task = self.load(self._state.current_id)
        await task
        return self.state

    def load(self, entity_id: int) -> asyncio.Task[None]:
        # Raises before any state change when called outside an event loop.
        loop = asyncio.get_running_loop()
        generation = self._state.begin(entity_id)
        logger.debug("load | id=%s | generation=%s", entity_id, generation)
        self._notify()

        task = loop.create_task(
            self._run_fetch(generation, entity_id),
            name=f"fetch-{entity_id}-g{generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        """End of session: cancel whatever is still in flight."""

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._observers.clear()

    # ------------------------------------------------------------------
    # Internals

    def _suppressed(self, command: str) -> bool:
        if self._gate and self._state.phase is Phase.LOADING:
            logger.debug("command_suppressed | command=%s | id=%s", command, self._state.current_id)
            return True
        return False

    def _is_current(self, generation: int) -> bool:
        return generation == self._state.generation

    async def _run_fetch(self, generation: int, entity_id: int) -> None:
        try:
            entity = await self._fetcher.fetch(entity_id)
        except FetchError as exc:
            self._settle_failure(generation, entity_id, str(exc))
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("fetch_unexpected_error | id=%s", entity_id)
            self._settle_failure(generation, entity_id, f"Unexpected error: {exc}")
        else:
            self._settle_success(generation, entity)

    def _settle_success(self, generation: int, entity: Pokemon) -> None:
        if not self._is_current(generation):
            logger.debug("stale_discarded | id=%s | generation=%s", entity.id, generation)
            return
        self._state.succeed(entity)
        logger.info("loaded | id=%s | name=%s", entity.id, entity.name)
        self._notify()

    def _settle_failure(self, generation: int, entity_id: int, message: str) -> None:
        if not self._is_current(generation):
            logger.debug("stale_discarded | id=%s | generation=%s", entity_id, generation)
            return
        self._state.fail(message)
        logger.warning("failed | id=%s | error=%s", entity_id, message)
        self._notify()

    def _notify(self) -> None:
        view = self._state.snapshot()
        for observer in list(self._observers):
            try:
                observer(view)
            except Exception:
                logger.exception("observer_failed | observer=%r", observer)
