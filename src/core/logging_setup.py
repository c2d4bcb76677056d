"""Logging de la aplicación.

Un único `RichHandler` sobre stderr para no mezclar logs con los paneles que
la CLI imprime en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "dexnav-rich"


def setup_logging(level: str = "WARNING") -> None:
    """Configura el logger raíz (idempotente: solo cambia el nivel si ya existe)."""

    lvl = getattr(logging, str(level).upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(lvl)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(lvl)
            return

    handler = RichHandler(
        console=Console(stderr=True),
        level=lvl,
        show_path=False,
        show_time=True,
        omit_repeated_times=True,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    root.addHandler(handler)

    # httpx loguea cada request a INFO; solo interesa en DEBUG.
    logging.getLogger("httpx").setLevel(lvl if lvl <= logging.DEBUG else logging.WARNING)
