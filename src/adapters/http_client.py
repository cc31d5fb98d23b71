"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para las dos llamadas del reto.
- Facilita testeo: se puede pasar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import ChallengeSettings


def build_client(
    settings: ChallengeSettings,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué síncrono:
    - El flujo es estrictamente secuencial; no hay nada que solapar.
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        # Un 3xx en un POST es un fallo, no se reenvía como GET.
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
