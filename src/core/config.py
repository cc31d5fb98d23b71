"""Configuración del Core.

Por qué aquí:
- Centraliza la identidad del participante y el endpoint (pydantic-settings)
  sin contaminar la CLI.
- Permite que adaptadores (HTTP) lean timeouts/headers de forma consistente.

Mapa de claves externas:
- `user.name`        -> `HEALTHRX_NAME`
- `user.regNo`       -> `HEALTHRX_REG_NO`
- `user.email`       -> `HEALTHRX_EMAIL`
- `api.url.generate` -> `HEALTHRX_GENERATE_URL`
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ValidationError
from core.domain.models import check_http_url

ENV_PREFIX = "HEALTHRX_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "healthrx-challenge"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "healthrx-challenge"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "healthrx-challenge"
    return Path.home() / ".config" / "healthrx-challenge"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# healthrx-challenge user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ChallengeSettings(BaseSettings):
    """Identidad del participante + parámetros de red.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars / .env) antes de tocar la red.
    - Inmutable (`frozen`): se construye una vez por ejecución.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    name: str = Field(
        ...,
        description="Nombre del participante (`user.name`).",
    )
    reg_no: str = Field(
        ...,
        description="Número de registro; sus dígitos deciden la consulta SQL (`user.regNo`).",
    )
    email: str = Field(
        ...,
        description="Correo del participante (`user.email`).",
    )
    generate_url: str = Field(
        ...,
        description="Endpoint que genera el webhook (`api.url.generate`).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="healthrx-challenge/0.1",
        min_length=1,
        description="User-Agent para las peticiones salientes.",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Nivel de logging de la CLI.",
    )

    @field_validator("name", "reg_no", "email", "generate_url", mode="before")
    @classmethod
    def _reject_blank(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("must be an email address")
        return value

    @field_validator("generate_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return check_http_url(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


def load_settings(**overrides: Any) -> ChallengeSettings:
    """Construye `ChallengeSettings` con overrides explícitos (p.ej. flags CLI).

    Los overrides `None` se ignoran para que gane la siguiente fuente
    (env vars, `.env`). Cualquier fallo se traduce a `ValidationError`.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ChallengeSettings(**values)
    except PydanticValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "settings"
            problems.append(f"{field}: {error.get('msg', 'invalid')}")
        raise ValidationError(
            "Invalid configuration: " + "; ".join(problems),
            step="load_settings",
        ) from exc
