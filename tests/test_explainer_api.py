from __future__ import annotations

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from code_explainer.api.routes import get_completion_provider
from code_explainer.main import create_app
from code_explainer.services.completion import CompletionProvider


class FakeProvider:
    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def _client(provider: object) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_completion_provider] = lambda: provider
    return TestClient(app)


STRUCTURED_REPLY = (
    "**EXPLANATION:**\nPrints hi.\n\n"
    "**SUGGESTIONS:**\nNone.\n\n"
    "**REFACTORED CODE:**\n```python\nprint('hi')\n```"
)


def test_explanation_returns_provider_text_verbatim() -> None:
    provider = FakeProvider(reply=STRUCTURED_REPLY)
    response = _client(provider).post(
        "/api/code-explainer", json={"code": "print('hi')", "language": "python"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload == {"explanation": STRUCTURED_REPLY}
    for marker in ("**EXPLANATION:**", "**SUGGESTIONS:**", "**REFACTORED CODE:**"):
        assert marker in payload["explanation"]

    assert len(provider.prompts) == 1
    assert "```python\nprint('hi')\n```" in provider.prompts[0]


def test_unstructured_provider_text_is_not_validated() -> None:
    provider = FakeProvider(reply="just some prose")
    response = _client(provider).post("/api/code-explainer", json={"code": "x = 1"})

    assert response.status_code == 200
    assert response.json() == {"explanation": "just some prose"}


def test_missing_language_uses_generic_label() -> None:
    provider = FakeProvider(reply="ok")
    _client(provider).post("/api/code-explainer", json={"code": "x = 1"})

    assert "You are an expert general programming software engineer." in provider.prompts[0]
    assert "```general programming\nx = 1\n```" in provider.prompts[0]


@pytest.mark.parametrize(
    "body",
    [
        {"code": "", "language": "python"},
        {"code": "   \n\t", "language": "python"},
        {"language": "python"},
        {"code": None},
        {},
    ],
)
def test_empty_code_is_rejected_without_provider_call(body: dict) -> None:
    provider = FakeProvider(reply="unused")
    response = _client(provider).post("/api/code-explainer", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "No code provided"}
    assert provider.prompts == []


def test_malformed_body_is_a_client_error() -> None:
    provider = FakeProvider(reply="unused")
    client = _client(provider)

    not_json = client.post(
        "/api/code-explainer",
        content="not json",
        headers={"content-type": "application/json"},
    )
    wrong_type = client.post("/api/code-explainer", json={"code": 42})

    for response in (not_json, wrong_type):
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
    assert provider.prompts == []


def test_provider_failure_becomes_server_error() -> None:
    provider = FakeProvider(error=RuntimeError("quota exceeded"))
    response = _client(provider).post(
        "/api/code-explainer", json={"code": "print('hi')", "language": "python"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "quota exceeded"}


def test_provider_error_message_attribute_is_preferred() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    provider = FakeProvider(error=openai.APIConnectionError(request=request))
    response = _client(provider).post("/api/code-explainer", json={"code": "x = 1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Connection error."}


def test_provider_failure_without_message_is_unknown_error() -> None:
    provider = FakeProvider(error=RuntimeError())
    response = _client(provider).post("/api/code-explainer", json={"code": "x = 1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Unknown error"}


def test_missing_api_key_fails_at_call_time(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    provider = CompletionProvider(api_key=None, model="gpt-4.1")
    response = _client(provider).post("/api/code-explainer", json={"code": "x = 1"})

    assert response.status_code == 500
    error = response.json()["error"]
    assert isinstance(error, str) and error


def test_healthz() -> None:
    response = TestClient(create_app()).get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
