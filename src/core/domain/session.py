"""Estado de sesión de navegación.

`SessionState` es el único registro mutable; solo lo modifica el controlador.
Los observadores reciben `SessionView`, una copia congelada.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.domain.models import Pokemon


class Phase(str, Enum):
    """Modo de presentación de la sesión."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionView:
    """Snapshot inmutable del estado, pensado para la capa de presentación."""

    current_id: int
    phase: Phase
    generation: int
    last_entity: Pokemon | None = None
    last_error: str | None = None


@dataclass
class SessionState:
    """Registro mutable de la sesión.

    Las transiciones pasan por `begin`/`succeed`/`fail` para que `last_entity`
    y `last_error` nunca convivan con una fase incompatible.
    """

    current_id: int
    phase: Phase = Phase.IDLE
    generation: int = 0
    last_entity: Pokemon | None = None
    last_error: str | None = None

    def begin(self, entity_id: int) -> int:
        self.current_id = entity_id
        self.phase = Phase.LOADING
        self.last_entity = None
        self.last_error = None
        self.generation += 1
        return self.generation

    def succeed(self, entity: Pokemon) -> None:
        self.phase = Phase.LOADED
        self.last_entity = entity
        self.last_error = None

    def fail(self, message: str) -> None:
        self.phase = Phase.FAILED
        self.last_entity = None
        self.last_error = message

    def snapshot(self) -> SessionView:
        return SessionView(
            current_id=self.current_id,
            phase=self.phase,
            generation=self.generation,
            last_entity=self.last_entity,
            last_error=self.last_error,
        )
