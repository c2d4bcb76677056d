"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.pokeapi import PokeApiFetcher
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import FetchError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_fetch(settings: AppSettings) -> tuple[bool, str]:
    fetcher = PokeApiFetcher(settings)
    try:
        entity = await fetcher.fetch(settings.min_id)
    except FetchError as exc:
        return False, str(exc)
    return True, f"#{entity.id} {entity.name}"


@app.command()
def run() -> None:
    """Show the effective configuration and check the remote endpoint."""

    settings = AppSettings()

    table = Table(title="dexnav Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    try:
        id_range = settings.id_range()
        table.add_row("ID range", "OK", f"{id_range.min_id}..{id_range.max_id}")
    except ValueError as exc:
        id_range = None
        table.add_row("ID range", "FAIL", str(exc))
    if id_range is not None and id_range.contains(settings.invalid_id):
        table.add_row("Invalid id", "WARN", f"{settings.invalid_id} is inside the range")
    else:
        table.add_row("Invalid id", "OK", str(settings.invalid_id))

    ok_fetch, detail_fetch = asyncio.run(_check_fetch(settings))
    table.add_row("Fetch first id", "OK" if ok_fetch else "FAIL", detail_fetch)

    _console.print(table)
    if not ok_fetch:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    base_url = typer.prompt("Base URL", default=settings.base_url, show_default=True).strip()
    min_id = typer.prompt("First id", default=settings.min_id, type=int)
    max_id = typer.prompt("Last id", default=settings.max_id, type=int)

    if not base_url:
        raise typer.BadParameter("base_url is required")
    if min_id > max_id:
        raise typer.BadParameter("first id must be <= last id")

    env_path = write_user_env_vars(
        {
            "DEXNAV_BASE_URL": base_url,
            "DEXNAV_MIN_ID": str(min_id),
            "DEXNAV_MAX_ID": str(max_id),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
