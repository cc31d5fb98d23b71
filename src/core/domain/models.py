"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida los contratos HTTP del reto en el borde, con alias que respetan
  los nombres JSON (`regNo`, `accessToken`, `finalQuery`).
- Un cuerpo malformado se detecta antes de construir cualquier header.

Nota:
- Estos modelos describen *qué* se envía/recibe, no *cómo*.
"""

from __future__ import annotations

from pydantic import AliasChoices, AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def check_http_url(value: str) -> str:
    """Valida `value` como URL http(s) con host y devuelve el texto original.

    Se parsea la URL completa (no solo el prefijo): `http://` o
    `http://[::1/x` se rechazan aquí y no al construir la petición.
    """

    try:
        url = _HTTP_URL.validate_python(value)
    except PydanticValidationError as exc:
        reason = exc.errors()[0].get("msg", "invalid URL") if exc.errors() else "invalid URL"
        raise ValueError(f"must be an http(s) URL ({reason})") from exc
    if not url.host:
        raise ValueError("must be an http(s) URL with a host")
    return value


class WebhookRequest(BaseModel):
    """Cuerpo de la primera llamada: identidad del participante."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del participante.",
    )
    reg_no: str = Field(
        ...,
        alias="regNo",
        min_length=1,
        description="Número de registro tal cual está configurado.",
    )
    email: str = Field(
        ...,
        min_length=1,
        description="Correo del participante.",
    )

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class WebhookResponse(BaseModel):
    """Respuesta del endpoint de generación.

    Por qué varios alias para el token:
    - El contrato documentado usa `accessToken`, pero se aceptan
      `access_token` y `token` para no depender de la grafía exacta.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    webhook: str = Field(
        ...,
        min_length=1,
        description="URL a la que se envía la consulta final.",
    )
    access_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("accessToken", "access_token", "token"),
        description="Credencial bearer para el envío.",
        repr=False,
    )

    @field_validator("webhook")
    @classmethod
    def _check_webhook(cls, value: str) -> str:
        return check_http_url(value)

    @field_validator("access_token")
    @classmethod
    def _check_token(cls, value: str) -> str:
        # Debe poder ir tal cual en un header HTTP.
        if not value.isascii() or any(ch.isspace() or not ch.isprintable() for ch in value):
            raise ValueError("access token must be printable ASCII without whitespace")
        return value


class SolutionRequest(BaseModel):
    """Cuerpo de la segunda llamada."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    final_query: str = Field(
        ...,
        alias="finalQuery",
        min_length=1,
        description="Consulta SQL seleccionada.",
    )

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
