"""Contrato del Resource Fetcher.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el adaptador HTTP y los fakes de test sean intercambiables
  sin acoplar el controlador a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Pokemon


@runtime_checkable
class EntityFetcher(Protocol):
    """Contrato mínimo para recuperar una entidad por id.

    Reglas de diseño:
    - `fetch` es asíncrono porque típicamente hará I/O (HTTP).
    - Devuelve la entidad completa o lanza una subclase de
      `core.domain.errors.FetchError`.
    """

    async def fetch(self, entity_id: int) -> Pokemon:
        """Recupera la entidad `entity_id` o lanza `FetchError`."""

        ...
