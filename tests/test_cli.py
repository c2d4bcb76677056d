from __future__ import annotations

import io

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from adapters.pokeapi import PokeApiFetcher
from cli import main as cli_main
from cli.browser import ConsoleBrowser
from conftest import InstantFetcher
from core.domain.errors import HttpStatusError
from core.domain.models import IdRange
from core.domain.session import Phase
from core.services.navigation import NavigationController

runner = CliRunner()


def _handler(request: httpx.Request) -> httpx.Response:
    entity_id = int(request.url.path.rsplit("/", 1)[-1])
    if entity_id > 151:
        return httpx.Response(404, text="Not Found")
    return httpx.Response(
        200,
        json={"id": entity_id, "name": "pikachu", "height": 4, "weight": 60, "sprites": {}},
    )


@pytest.fixture
def mocked_http(monkeypatch: pytest.MonkeyPatch) -> None:
    def factory(settings):
        return PokeApiFetcher(settings, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr(cli_main, "PokeApiFetcher", factory)


def test_show_prints_entity(mocked_http) -> None:
    result = runner.invoke(cli_main.app, ["show", "25"])

    assert result.exit_code == 0, result.output
    assert "PIKACHU" in result.output
    assert "Height" in result.output


def test_show_out_of_range_exits_non_zero(mocked_http) -> None:
    result = runner.invoke(cli_main.app, ["show", "9990"])

    assert result.exit_code == 1
    assert "HTTP 404" in result.output


def _scripted_reader(commands: list[str]):
    pending = list(commands)

    async def read() -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


@pytest.mark.anyio
async def test_browser_maps_keys_to_commands() -> None:
    fetcher = InstantFetcher(missing={9990: HttpStatusError(9990, 404)})
    controller = NavigationController(fetcher, IdRange(min_id=1, max_id=151))
    console = Console(file=io.StringIO(), width=100)
    browser = ConsoleBrowser(controller, console, read_command=_scripted_reader(["p", "n", "n", "r", "x", "h", "?", "q"]))

    view = await browser.run()

    assert fetcher.calls == [1, 151, 1, 2, 2, 9990, 1]
    assert view.phase is Phase.LOADED
    assert view.current_id == 1
    output = console.file.getvalue()
    assert "HTTP 404" in output
    assert "Retry" in output


@pytest.mark.anyio
async def test_browser_stops_on_end_of_input() -> None:
    fetcher = InstantFetcher()
    controller = NavigationController(fetcher)
    console = Console(file=io.StringIO(), width=100)
    browser = ConsoleBrowser(controller, console, read_command=_scripted_reader([]))

    view = await browser.run(start_invalid=False)

    assert fetcher.calls == [1]
    assert view.phase is Phase.LOADED


@pytest.mark.anyio
async def test_browser_refresh_key_reloads_current_id() -> None:
    fetcher = InstantFetcher()
    controller = NavigationController(fetcher)
    console = Console(file=io.StringIO(), width=100)
    browser = ConsoleBrowser(controller, console, read_command=_scripted_reader(["n", "f", "q"]))

    view = await browser.run()

    assert fetcher.calls == [1, 2, 2]
    assert view.current_id == 2
    assert view.phase is Phase.LOADED
    assert view.generation == 3


def test_doctor_warns_when_invalid_id_is_inside_range(monkeypatch: pytest.MonkeyPatch) -> None:
    from cli import doctor

    def factory(settings):
        return PokeApiFetcher(settings, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr(doctor, "PokeApiFetcher", factory)
    monkeypatch.setenv("DEXNAV_INVALID_ID", "5")

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "WARN" in result.output
