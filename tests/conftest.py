from __future__ import annotations

import json
import os
from typing import Callable

import httpx
import pytest

from core.config import ChallengeSettings

GENERATE_URL = "https://challenge.test/hiring/generateWebhook/PYTHON"
WEBHOOK_URL = "https://challenge.test/hiring/testWebhook/PYTHON"
TOKEN = "tok-secret-123"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep real env vars and .env files out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("HEALTHRX_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ChallengeSettings:
    return ChallengeSettings(
        name="John Doe",
        reg_no="REG12347",
        email="john@example.com",
        generate_url=GENERATE_URL,
        _env_file=None,
    )


@pytest.fixture
def env_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEALTHRX_NAME", "John Doe")
    monkeypatch.setenv("HEALTHRX_REG_NO", "REG12347")
    monkeypatch.setenv("HEALTHRX_EMAIL", "john@example.com")
    monkeypatch.setenv("HEALTHRX_GENERATE_URL", GENERATE_URL)


class ChallengeServer:
    """In-memory stand-in for the challenge API, served through MockTransport."""

    def __init__(
        self,
        *,
        generate_status: int = 200,
        generate_body: object | None = None,
        submit_status: int = 200,
        submit_body: str = '{"success": true}',
    ) -> None:
        self.generate_status = generate_status
        self.generate_body = (
            {"webhook": WEBHOOK_URL, "accessToken": TOKEN} if generate_body is None else generate_body
        )
        self.submit_status = submit_status
        self.submit_body = submit_body
        self.requests: list[httpx.Request] = []

    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == GENERATE_URL:
            body = self.generate_body
            if isinstance(body, (bytes, str)):
                return httpx.Response(self.generate_status, content=body)
            return httpx.Response(self.generate_status, json=body)
        if str(request.url) == WEBHOOK_URL:
            return httpx.Response(self.submit_status, text=self.submit_body)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def server_factory() -> Callable[..., ChallengeServer]:
    return ChallengeServer


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
