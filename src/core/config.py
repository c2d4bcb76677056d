"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y el controlador lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import IdRange


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "dexnav"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "dexnav"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "dexnav"
    return Path.home() / ".config" / "dexnav"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# dexnav user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEXNAV_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://pokeapi.co/api/v2/pokemon",
        min_length=8,
        description="URL base del recurso; cada entidad vive en `<base_url>/<id>`.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout total por fetch (segundos).",
    )
    user_agent: str = Field(
        default="dexnav/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )

    min_id: int = Field(
        default=1,
        description="Primer identificador navegable (inclusive).",
    )
    max_id: int = Field(
        default=151,
        description="Último identificador navegable (inclusive).",
    )
    invalid_id: int = Field(
        default=9990,
        description="Identificador fuera de rango usado por `force_invalid` para forzar un error.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def id_range(self) -> IdRange:
        """Rango fijo de navegación construido desde `min_id`/`max_id`."""

        return IdRange(min_id=self.min_id, max_id=self.max_id)
