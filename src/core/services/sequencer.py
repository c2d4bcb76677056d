"""Aritmética de identificadores con wraparound.

Funciones puras: sin estado, sin I/O, totales sobre entradas bien formadas.
"""

from __future__ import annotations

from enum import Enum

from core.domain.models import IdRange


class Direction(str, Enum):
    """Sentido de navegación."""

    FORWARD = "forward"
    BACKWARD = "backward"


def next_id(current: int, direction: Direction, min_id: int, max_id: int) -> int:
    """Devuelve el id vecino de `current`, envolviendo en ambos extremos."""

    if direction is Direction.FORWARD:
        candidate = current + 1
        return candidate if candidate <= max_id else min_id
    candidate = current - 1
    return candidate if candidate >= min_id else max_id


def step(current: int, direction: Direction, id_range: IdRange) -> int:
    return next_id(current, direction, id_range.min_id, id_range.max_id)
