"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `browse` y `show`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from core.domain.models import Pokemon
from core.domain.session import Phase, SessionView


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("DEXNAV", style="bold red")
    subtitle = Text("Prev • Reload • Next", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="red", padding=(1, 4)))


def build_entity_panel(entity: Pokemon) -> Panel:
    """Tarjeta con los datos de la entidad cargada."""

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold white", no_wrap=True)
    table.add_column(style="white")
    table.add_row("id", str(entity.id))
    table.add_row("Height", str(entity.height))
    table.add_row("Weight", str(entity.weight))
    if entity.image_ref:
        table.add_row("Sprite", Text(entity.image_ref, style="link " + entity.image_ref))
    else:
        table.add_row("Sprite", Text("(no image)", style="dim"))

    title = Text(entity.name.upper(), style="bold white")
    return Panel(table, title=title, border_style="red", padding=(1, 4))


def build_error_panel(message: str) -> Panel:
    """Tarjeta de error con las acciones de recuperación."""

    body = Text()
    body.append(f"Error: {message}\n\n", style="bold white")
    body.append("[r] Retry   [h] Go back to the start", style="dim")
    return Panel(body, title=Text("✖", style="bold white"), border_style="bright_red", style="on red")


def build_loading_panel(entity_id: int) -> Panel:
    return Panel(Spinner("dots", text=f"Loading #{entity_id}…"), border_style="dim")


def build_help_line() -> Text:
    return Text("[p] Prev  [r] Reload  [n] Next  [x] Break  [h] Home  [f] Refresh  [q] Quit", style="dim")


def render_view(view: SessionView) -> RenderableType:
    """Traduce el snapshot de sesión al panel que corresponde a su fase."""

    if view.phase is Phase.LOADED and view.last_entity is not None:
        return build_entity_panel(view.last_entity)
    if view.phase is Phase.FAILED and view.last_error is not None:
        return build_error_panel(view.last_error)
    if view.phase is Phase.LOADING:
        return build_loading_panel(view.current_id)
    return Text("Idle", style="dim")
