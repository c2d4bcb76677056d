"""Interactive browsing session.

Binds the navigation controller to the terminal: every state change is
rendered as a Rich panel, and single-letter commands are mapped back to
controller commands. Input is read off the event loop so in-flight fetches
keep resolving while the prompt waits.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from rich.console import Console

from cli.ui_components import build_help_line, render_view
from core.domain.session import SessionView
from core.services.navigation import NavigationController

CommandReader = Callable[[], Awaitable[str]]

_QUIT = {"q", "quit", "exit"}


class ConsoleBrowser:
    """Presentation binder for a `NavigationController`."""

    def __init__(
        self,
        controller: NavigationController,
        console: Console,
        *,
        read_command: CommandReader | None = None,
    ) -> None:
        self._controller = controller
        self._console = console
        self._read = read_command or self._prompt
        self._actions = {
            "n": controller.go_next,
            "p": controller.go_previous,
            "r": controller.reload,
            "x": controller.force_invalid,
            "h": controller.go_home,
            "f": self._refresh,
        }
        self._unsubscribe = controller.subscribe(self._render)

    def _refresh(self) -> asyncio.Future[SessionView]:
        # Pull-to-refresh: not gated by a fetch in progress.
        return asyncio.ensure_future(self._controller.refresh())

    def _render(self, view: SessionView) -> None:
        self._console.print(render_view(view))

    async def _prompt(self) -> str:
        return await asyncio.to_thread(self._console.input, "[bold red]>[/bold red] ")

    async def run(self, *, start_invalid: bool = False) -> SessionView:
        """Run until the user quits or input ends; returns the final state."""

        try:
            await self._controller.initialize()
            if start_invalid:
                task = self._controller.force_invalid()
                if task is not None:
                    await task
            self._console.print(build_help_line())

            while True:
                try:
                    command = (await self._read()).strip().lower()
                except EOFError:
                    break
                if command in _QUIT:
                    break
                action = self._actions.get(command[:1]) if command else None
                if action is None:
                    self._console.print(build_help_line())
                    continue
                task = action()
                if task is None:
                    self._console.print("[dim]Still loading, command ignored.[/dim]")
                    continue
                await task
            return self._controller.state
        finally:
            self._unsubscribe()
            await self._controller.close()
