"""Contrato de las dos integraciones HTTP del reto.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite inyectar un gateway falso en tests sin levantar red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import WebhookRequest, WebhookResponse


@runtime_checkable
class ChallengeGateway(Protocol):
    """Contrato mínimo para hablar con el servidor del reto.

    Reglas de diseño:
    - Síncrono: el flujo es secuencial y solo hay dos llamadas.
    - Cualquier fallo se expresa como `IntegrationError`.
    """

    def generate_webhook(self, generate_url: str, request: WebhookRequest) -> WebhookResponse:
        """Registra la identidad y devuelve webhook + token."""

        ...

    def submit_solution(self, *, webhook_url: str, access_token: str, final_query: str) -> str:
        """Envía la consulta final y devuelve el cuerpo de la respuesta como texto."""

        ...
