"""Adaptador HTTP del reto (httpx).

Implementa `core.interfaces.gateway.ChallengeGateway`:
- `generate_webhook`: POST de identidad -> `WebhookResponse`.
- `submit_solution`: POST de `{finalQuery}` con `Authorization: Bearer`.

Todo fallo (status no 2xx, cuerpo vacío/malformado, error de red) sale
como `IntegrationError` con el paso, el status y el cuerpo.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from core.domain.errors import IntegrationError
from core.domain.models import SolutionRequest, WebhookRequest, WebhookResponse
from core.interfaces.gateway import ChallengeGateway

logger = logging.getLogger(__name__)

STEP_GENERATE = "generate_webhook"
STEP_SUBMIT = "submit_solution"


class HttpChallengeGateway(ChallengeGateway):
    """Habla con el servidor del reto usando un `httpx.Client` inyectado."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def _post(self, url: str, *, step: str, **kwargs: object) -> httpx.Response:
        try:
            response = self._client.post(url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise IntegrationError(f"{step}: request to {url} failed: {exc}", step=step) from exc
        except httpx.InvalidURL as exc:
            raise IntegrationError(f"{step}: invalid URL {url!r}: {exc}", step=step) from exc
        except ValueError as exc:
            # UnicodeEncodeError de headers incluido; sin str(exc), puede llevar el token.
            raise IntegrationError(
                f"{step}: could not build request to {url!r} ({type(exc).__name__})",
                step=step,
            ) from exc

        logger.debug("%s: POST %s -> HTTP %s", step, url, response.status_code)
        if not response.is_success:
            raise IntegrationError(
                f"{step}: server responded with HTTP {response.status_code}",
                step=step,
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def generate_webhook(self, generate_url: str, request: WebhookRequest) -> WebhookResponse:
        response = self._post(generate_url, step=STEP_GENERATE, json=request.to_payload())

        if not response.content.strip():
            raise IntegrationError(
                f"{STEP_GENERATE}: empty response body",
                step=STEP_GENERATE,
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise IntegrationError(
                f"{STEP_GENERATE}: response body is not JSON",
                step=STEP_GENERATE,
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(payload, dict):
            raise IntegrationError(
                f"{STEP_GENERATE}: expected a JSON object",
                step=STEP_GENERATE,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return WebhookResponse.model_validate(payload)
        except PydanticValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in error.get("loc", ())) or "body" for error in exc.errors()
            )
            raise IntegrationError(
                f"{STEP_GENERATE}: malformed webhook response ({fields})",
                step=STEP_GENERATE,
                status_code=response.status_code,
            ) from exc

    def submit_solution(self, *, webhook_url: str, access_token: str, final_query: str) -> str:
        if not webhook_url or not webhook_url.strip():
            raise IntegrationError(f"{STEP_SUBMIT}: missing webhook URL", step=STEP_SUBMIT)
        if not access_token or not access_token.strip():
            raise IntegrationError(f"{STEP_SUBMIT}: missing access token", step=STEP_SUBMIT)

        body = SolutionRequest(final_query=final_query)
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        response = self._post(webhook_url, step=STEP_SUBMIT, json=body.to_payload(), headers=headers)
        return response.text
