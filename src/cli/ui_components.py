"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `run`, `select-query` y `check-config`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import ChallengeSettings
from core.domain.errors import ChallengeError, IntegrationError
from core.services.challenge_runner import RunResult
from core.services.sql_selector import QuerySelection


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("HealthRx Challenge", style="bold cyan")
    subtitle = Text("Webhook • SQL • Submit", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_selection_table(selection: QuerySelection) -> Table:
    table = Table(title="SQL Selection")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("RegNo", selection.reg_no)
    table.add_row("Digits", selection.digits)
    table.add_row("Last two", f"{selection.last_two:02d}")
    table.add_row("Parity", selection.parity)
    table.add_row("Query", selection.query)
    return table


def build_result_table(result: RunResult) -> Table:
    """Resumen de una ejecución exitosa (sin token)."""

    table = build_selection_table(result.selection)
    table.title = "Challenge Result"
    table.add_row("Stage", result.stage.label())
    table.add_row("Webhook", result.webhook_url)
    table.add_row("Response", result.response_text or "(empty)")
    return table


def build_settings_table(settings: ChallengeSettings) -> Table:
    table = Table(title="Resolved Settings")
    table.add_column("Key", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("user.name", settings.name)
    table.add_row("user.regNo", settings.reg_no)
    table.add_row("user.email", settings.email)
    table.add_row("api.url.generate", settings.generate_url)
    table.add_row("http timeout (s)", f"{settings.http_timeout_seconds:g}")
    table.add_row("log level", settings.log_level)
    return table


def build_error_panel(exc: ChallengeError) -> Panel:
    """Panel único de error para el reporte de nivel superior."""

    body = Text()
    body.append(exc.message + "\n", style="bold")
    if exc.step:
        body.append(f"\nStep: {exc.step}")
    if exc.stage is not None:
        body.append(f"\nStage reached: {exc.stage.label()}")
    if isinstance(exc, IntegrationError):
        if exc.status_code is not None:
            body.append(f"\nHTTP status: {exc.status_code}")
        if exc.body:
            body.append(f"\nBody: {exc.body}", style="dim")

    title = Text(type(exc).__name__, style="bold red")
    return Panel(body, title=title, border_style="red")
