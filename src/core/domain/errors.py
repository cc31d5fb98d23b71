"""Errores del dominio.

Dos familias, ambas fatales para la ejecución:
- `ValidationError`: entrada local inválida (config, regNo sin dígitos).
- `IntegrationError`: cualquier fallo de las llamadas HTTP (status no 2xx,
  cuerpo ausente/malformado, error de red).
"""

from __future__ import annotations

from core.domain.stage import RunStage

MAX_BODY_CHARS = 500


def truncate_body(body: str | None, limit: int = MAX_BODY_CHARS) -> str | None:
    if body is None or len(body) <= limit:
        return body
    return body[:limit] + "..."


class ChallengeError(Exception):
    """Base de los errores del reto.

    `step` identifica la operación que falló; `stage` lo rellena el
    orquestador con la última etapa alcanzada.
    """

    def __init__(self, message: str, *, step: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.step = step
        self.stage: RunStage | None = None


class ValidationError(ChallengeError):
    """Entrada local inválida."""


class IntegrationError(ChallengeError):
    """Fallo en una llamada HTTP saliente."""

    def __init__(
        self,
        message: str,
        *,
        step: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, step=step)
        self.status_code = status_code
        self.body = truncate_body(body)

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.body:
            parts.append(f"body={self.body}")
        return " | ".join(parts)
