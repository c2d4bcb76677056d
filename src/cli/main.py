"""CLI principal (Typer).

Por qué Typer:
- Comandos tipados con ayuda generada automáticamente.
- La lógica vive en `core`; aquí solo se cablean settings, fetcher y consola.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.pokeapi import PokeApiFetcher
from cli import doctor
from cli.browser import ConsoleBrowser
from cli.ui_components import print_banner, render_view
from core.config import AppSettings
from core.domain.session import Phase, SessionView
from core.logging_setup import setup_logging
from core.services.navigation import NavigationController

app = typer.Typer(no_args_is_help=True, help="Browse a numbered remote collection one entry at a time.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_controller(settings: AppSettings, fetcher: PokeApiFetcher | None = None) -> NavigationController:
    return NavigationController(
        fetcher or PokeApiFetcher(settings),
        settings.id_range(),
        invalid_id=settings.invalid_id,
    )


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override DEXNAV_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    settings = AppSettings()
    setup_logging(log_level or settings.log_level)


@app.command()
def browse(
    start_invalid: bool = typer.Option(
        False,
        "--start-invalid",
        help="Force an out-of-range fetch right after the first load.",
    ),
) -> None:
    """Interactive browser: prev / reload / next with wraparound."""

    settings = AppSettings()
    print_banner(_console)
    browser = ConsoleBrowser(build_controller(settings), _console)
    asyncio.run(browser.run(start_invalid=start_invalid))


async def _show(controller: NavigationController, entity_id: int) -> SessionView:
    try:
        await controller.load(entity_id)
        return controller.state
    finally:
        await controller.close()


@app.command()
def show(entity_id: int = typer.Argument(..., help="Identifier to fetch.")) -> None:
    """Fetch a single entry and print it."""

    settings = AppSettings()
    view = asyncio.run(_show(build_controller(settings), entity_id))
    _console.print(render_view(view))
    if view.phase is not Phase.LOADED:
        raise typer.Exit(code=1)


def run() -> None:
    app()
