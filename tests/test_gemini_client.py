from __future__ import annotations

import json

import httpx
import pytest

from feedback_ai.services.failure_classifier import FailureKind, classify_exception
from feedback_ai.services.llm_providers import (
    AttemptTimeoutError,
    GeminiClient,
    ProviderError,
    ResponseParseError,
)

ENDPOINT = "https://generativelanguage.test/v1beta/models"


def _client(handler, **kwargs) -> GeminiClient:
    return GeminiClient(endpoint=ENDPOINT, transport=httpx.MockTransport(handler), **kwargs)


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.mark.asyncio
async def test_generate_posts_prompt_and_joins_parts() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        body = {"candidates": [{"content": {"parts": [{"text": "Posi"}, {"text": "tive"}]}}]}
        return httpx.Response(200, json=body)

    client = _client(handler, temperature=0.1)

    text = await client.generate("key-1", "gemini-2.0-flash", "Classify this")

    assert text == "Positive"
    assert seen["url"] == f"{ENDPOINT}/gemini-2.0-flash:generateContent"
    assert seen["key"] == "key-1"
    assert "key-1" not in seen["url"]
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "Classify this"
    assert seen["body"]["generationConfig"]["temperature"] == 0.1


@pytest.mark.asyncio
async def test_quota_error_envelope_is_credential_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        error = {"error": {"code": 429, "message": "Quota exceeded for metric", "status": "RESOURCE_EXHAUSTED"}}
        return httpx.Response(429, json=error)

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).generate("key-1", "gemini-2.0-flash", "prompt")

    error = exc_info.value
    assert error.status_code == 429
    assert error.provider_status == "RESOURCE_EXHAUSTED"
    assert error.message == "Quota exceeded for metric"
    assert classify_exception(error) is FailureKind.CREDENTIAL_EXHAUSTED


@pytest.mark.asyncio
async def test_missing_model_is_model_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        error = {
            "error": {
                "code": 404,
                "message": "models/gemini-pro is not found for API version v1beta",
                "status": "NOT_FOUND",
            }
        }
        return httpx.Response(404, json=error)

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).generate("key-1", "gemini-pro", "prompt")

    assert classify_exception(exc_info.value) is FailureKind.MODEL_UNAVAILABLE


@pytest.mark.asyncio
async def test_plain_text_error_body_is_kept() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="upstream exploded")

    with pytest.raises(ProviderError) as exc_info:
        await _client(handler).generate("key-1", "gemini-2.0-flash", "prompt")

    assert exc_info.value.message == "upstream exploded"
    assert classify_exception(exc_info.value) is FailureKind.UNCLASSIFIED


@pytest.mark.asyncio
async def test_blocked_prompt_without_candidates_is_parse_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(ResponseParseError):
        await _client(handler).generate("key-1", "gemini-2.0-flash", "prompt")


@pytest.mark.asyncio
async def test_empty_candidate_text_is_parse_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_candidate("   "))

    with pytest.raises(ResponseParseError):
        await _client(handler).generate("key-1", "gemini-2.0-flash", "prompt")


@pytest.mark.asyncio
async def test_timeout_surfaces_as_attempt_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(AttemptTimeoutError):
        await _client(handler).generate("key-1", "gemini-2.0-flash", "prompt")


@pytest.mark.asyncio
async def test_transient_connect_errors_are_retried() -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=_candidate("Neutral"))

    text = await _client(handler, transport_retries=2).generate("key-1", "gemini-2.0-flash", "prompt")

    assert text == "Neutral"
    assert attempts["count"] == 2


@pytest.mark.asyncio
async def test_persistent_connect_errors_become_provider_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        await _client(handler, transport_retries=1).generate("key-1", "gemini-2.0-flash", "prompt")
