"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Un payload que no encaja en el modelo se detecta en un único punto.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class Pokemon(BaseModel):
    """Entidad navegable: un registro completo por identificador.

    Inmutable: un fetch produce la entidad entera o no produce nada.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(
        ...,
        description="Identificador (clave primaria), igual al id solicitado.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre de la entidad.",
    )
    height: int = Field(
        ...,
        description="Altura tal como la publica la API.",
    )
    weight: int = Field(
        ...,
        description="Peso tal como lo publica la API.",
    )
    image_ref: str | None = Field(
        default=None,
        description="URL del sprite frontal, si existe.",
    )

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Pokemon":
        """Construye la entidad desde el JSON de la API.

        `image_ref` sale de `sprites.front_default`; su ausencia (o `null`)
        significa "sin imagen".
        """

        sprites = payload.get("sprites")
        image_ref = sprites.get("front_default") if isinstance(sprites, dict) else None
        return cls.model_validate(
            {
                "id": payload.get("id"),
                "name": payload.get("name"),
                "height": payload.get("height"),
                "weight": payload.get("weight"),
                "image_ref": image_ref,
            }
        )


class IdRange(BaseModel):
    """Rango cerrado `[min_id, max_id]`, fijo durante toda la sesión."""

    model_config = ConfigDict(frozen=True)

    min_id: int = Field(default=1, description="Primer id válido (inclusive).")
    max_id: int = Field(default=151, description="Último id válido (inclusive).")

    @model_validator(mode="after")
    def _check_bounds(self) -> "IdRange":
        if self.min_id > self.max_id:
            raise ValueError(f"min_id ({self.min_id}) must be <= max_id ({self.max_id})")
        return self

    def contains(self, entity_id: int) -> bool:
        return self.min_id <= entity_id <= self.max_id
