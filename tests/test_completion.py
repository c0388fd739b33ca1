"""Tests for the completion client in :mod:`referent.services.completion`."""

from __future__ import annotations

import json

import httpx
import pytest
from openai import OpenAI

from referent.config import PipelineConfig
from referent.errors import (
    ConfigurationError,
    NetworkError,
    UpstreamFormatError,
    UpstreamHttpError,
    UpstreamTimeout,
)
from referent.models import PromptConfig
from referent.services.completion import CompletionClient

PROMPT = PromptConfig(
    system_instruction="You summarise articles.",
    user_instruction="Summarise this.",
    temperature=0.5,
    max_output_tokens=2000,
)


def make_client(handler, config: PipelineConfig | None = None) -> CompletionClient:
    config = config or PipelineConfig(api_key="test-key", model="test/model")
    openai_client = OpenAI(
        api_key="test-key",
        base_url="https://llm.test/api/v1",
        max_retries=0,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    return CompletionClient(config, client=openai_client)


def test_complete_sends_prompt_and_returns_first_choice() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["authorization"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "X"}}]})

    result = make_client(handler).complete(PROMPT)

    assert result.text == "X"
    assert captured["url"] == "https://llm.test/api/v1/chat/completions"
    assert captured["authorization"] == "Bearer test-key"
    body = captured["body"]
    assert body["model"] == "test/model"
    assert body["messages"] == [
        {"role": "system", "content": "You summarise articles."},
        {"role": "user", "content": "Summarise this."},
    ]
    assert body["temperature"] == 0.5
    assert body["max_tokens"] == 2000


def test_complete_returns_empty_text_for_null_content() -> None:
    client = make_client(
        lambda request: httpx.Response(200, json={"choices": [{"message": {"content": None}}]})
    )

    assert client.complete(PROMPT).text == ""


@pytest.mark.parametrize("payload", [{"choices": []}, {"id": "abc"}, {"choices": [{"index": 0}]}])
def test_complete_rejects_unexpected_shapes(payload: dict) -> None:
    client = make_client(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(UpstreamFormatError) as excinfo:
        client.complete(PROMPT)

    assert excinfo.value.code == "NO_RESULT"


def test_structured_error_message_is_surfaced() -> None:
    client = make_client(lambda request: httpx.Response(500, json={"error": {"message": "boom"}}))

    with pytest.raises(UpstreamHttpError) as excinfo:
        client.complete(PROMPT)

    assert "boom" in excinfo.value.message
    assert excinfo.value.status_code == 500
    assert excinfo.value.code == "SERVER_ERROR"


def test_raw_error_body_is_truncated() -> None:
    raw = "<html>" + "gateway exploded " * 50 + "</html>"
    client = make_client(lambda request: httpx.Response(429, text=raw))

    with pytest.raises(UpstreamHttpError) as excinfo:
        client.complete(PROMPT)

    assert excinfo.value.message == f"Completion API error: {raw[:200]}"
    assert excinfo.value.code == "LOAD_ERROR"


def test_timeout_becomes_upstream_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamTimeout):
        make_client(handler).complete(PROMPT, timeout=0.01)


def test_connection_failure_becomes_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        make_client(handler).complete(PROMPT)


def test_missing_api_key_is_a_configuration_error() -> None:
    client = CompletionClient(PipelineConfig(api_key=None))

    with pytest.raises(ConfigurationError):
        client.complete(PROMPT)
