from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.config import (
    ChallengeSettings,
    get_user_env_file,
    load_settings,
    write_user_env_vars,
)
from core.domain.errors import ValidationError

from conftest import GENERATE_URL


def test_load_settings_from_environment(env_identity: None) -> None:
    settings = load_settings()

    assert settings.name == "John Doe"
    assert settings.reg_no == "REG12347"
    assert settings.email == "john@example.com"
    assert settings.generate_url == GENERATE_URL
    assert settings.http_timeout_seconds == 10.0
    assert settings.log_level == "INFO"


def test_overrides_win_and_none_is_ignored(env_identity: None) -> None:
    settings = load_settings(reg_no="REG00", name=None, log_level="debug")

    assert settings.reg_no == "REG00"
    assert settings.name == "John Doe"
    assert settings.log_level == "DEBUG"


def test_project_dotenv_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text(
        "HEALTHRX_NAME=Jane\n"
        "HEALTHRX_REG_NO=REG2\n"
        "HEALTHRX_EMAIL=jane@example.com\n"
        f"HEALTHRX_GENERATE_URL={GENERATE_URL}\n",
        encoding="utf-8",
    )

    settings = load_settings(reg_no="REG10")

    assert settings.name == "Jane"
    assert settings.reg_no == "REG10"


def test_missing_fields_raise_validation_error() -> None:
    with pytest.raises(ValidationError) as info:
        load_settings()

    message = str(info.value)
    for field in ("name", "reg_no", "email", "generate_url"):
        assert field in message
    assert info.value.step == "load_settings"


@pytest.mark.parametrize("field", ["name", "reg_no", "email", "generate_url"])
def test_blank_field_is_rejected(env_identity: None, field: str) -> None:
    with pytest.raises(ValidationError) as info:
        load_settings(**{field: "   "})

    assert field in str(info.value)


@pytest.mark.parametrize(
    "url", ["ftp://example.com/generate", "http://", "http://[::1/gen", "example.com/generate"]
)
def test_generate_url_must_be_a_parseable_http_url(env_identity: None, url: str) -> None:
    with pytest.raises(ValidationError) as info:
        load_settings(generate_url=url)

    assert "generate_url" in str(info.value)


def test_settings_are_immutable(settings: ChallengeSettings) -> None:
    with pytest.raises(PydanticValidationError):
        settings.reg_no = "REG00"  # type: ignore[misc]


def test_write_user_env_vars_merges_existing() -> None:
    path = write_user_env_vars({"HEALTHRX_NAME": "Jane", "HEALTHRX_EMAIL": "jane@example.com"})
    write_user_env_vars({"HEALTHRX_NAME": "Janet", "HEALTHRX_REG_NO": None})

    assert path == get_user_env_file()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "HEALTHRX_NAME=Janet" in lines
    assert "HEALTHRX_EMAIL=jane@example.com" in lines
    assert not any(line.startswith("HEALTHRX_REG_NO") for line in lines)
