"""Taxonomía de errores del fetcher.

Por qué en el dominio:
- El controlador consume estos errores sin conocer httpx.
- Los adaptadores traducen sus excepciones de I/O a estas cuatro clases.

El controlador no distingue entre ellas para decidir el flujo; solo usa
`str(error)` como texto a mostrar.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base de todos los fallos al recuperar una entidad."""

    def __init__(self, entity_id: int, message: str) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class FetchTimeoutError(FetchError):
    """El fetch no terminó dentro del tiempo límite."""

    def __init__(self, entity_id: int, seconds: float) -> None:
        super().__init__(entity_id, f"Timed out after {seconds:g}s loading pokemon {entity_id}")
        self.seconds = seconds


class HttpStatusError(FetchError):
    """El endpoint respondió con un status distinto de 200."""

    def __init__(self, entity_id: int, status_code: int) -> None:
        super().__init__(entity_id, f"Failed to load pokemon (HTTP {status_code})")
        self.status_code = status_code


class TransportError(FetchError):
    """Fallo de red: DNS, conexión rechazada/reseteada, protocolo."""

    def __init__(self, entity_id: int, detail: str) -> None:
        super().__init__(entity_id, f"Network error loading pokemon {entity_id}: {detail}")
        self.detail = detail


class DecodeError(FetchError):
    """El cuerpo no es JSON o no describe una entidad válida."""

    def __init__(self, entity_id: int, detail: str) -> None:
        super().__init__(entity_id, f"Could not decode pokemon {entity_id}: {detail}")
        self.detail = detail
