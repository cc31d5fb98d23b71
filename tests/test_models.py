from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.domain.models import SolutionRequest, WebhookRequest, WebhookResponse


def test_webhook_request_uses_contract_keys() -> None:
    request = WebhookRequest(name="John Doe", reg_no="REG12347", email="john@example.com")

    assert request.to_payload() == {
        "name": "John Doe",
        "regNo": "REG12347",
        "email": "john@example.com",
    }


@pytest.mark.parametrize("token_key", ["accessToken", "access_token", "token"])
def test_webhook_response_accepts_token_spellings(token_key: str) -> None:
    response = WebhookResponse.model_validate(
        {"webhook": "https://x.test/hook", token_key: "abc", "extra": 1}
    )

    assert response.webhook == "https://x.test/hook"
    assert response.access_token == "abc"


def test_webhook_response_token_not_in_repr() -> None:
    response = WebhookResponse.model_validate({"webhook": "https://x.test/hook", "accessToken": "abc"})

    assert "abc" not in repr(response)


@pytest.mark.parametrize(
    "payload",
    [
        {"accessToken": "abc"},
        {"webhook": "https://x.test/hook"},
        {"webhook": "  ", "accessToken": "abc"},
        {"webhook": "https://x.test/hook", "accessToken": "   "},
        {"webhook": "not-a-url", "accessToken": "abc"},
        {"webhook": "http://", "accessToken": "abc"},
        {"webhook": "http://[::1/hook", "accessToken": "abc"},
        {"webhook": "ftp://x.test/hook", "accessToken": "abc"},
        {"webhook": "https://x.test/hook", "accessToken": "t\u00f6k\u00e9n"},
        {"webhook": "https://x.test/hook", "accessToken": "to ken"},
    ],
)
def test_webhook_response_rejects_malformed(payload: dict) -> None:
    with pytest.raises(PydanticValidationError):
        WebhookResponse.model_validate(payload)


def test_solution_request_payload() -> None:
    assert SolutionRequest(final_query="SELECT 1;").to_payload() == {"finalQuery": "SELECT 1;"}
