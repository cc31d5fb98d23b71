"""Configuración de logging (Rich).

Por qué en la CLI:
- El Core solo usa `logging.getLogger(__name__)`; decidir handlers y
  niveles es responsabilidad del entry-point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Instala un único `RichHandler` en el logger raíz (idempotente)."""

    handler = RichHandler(
        console=console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx anuncia cada request en INFO; el runner ya registra los pasos.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
