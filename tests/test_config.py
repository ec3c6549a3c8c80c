from __future__ import annotations

import pytest

from feedback_ai.core.config import DEFAULT_GEMINI_MODELS, Settings, get_settings


def test_key_list_parses_comma_separated_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEYS", " key-a, key-b ,,")
    monkeypatch.setenv("GEMINI_API_KEY", "key-c")

    settings = get_settings()

    assert settings.gemini_api_keys == ["key-a", "key-b"]
    assert settings.configured_api_keys == ["key-a", "key-b", "key-c"]


def test_key_list_parses_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEYS", '["key-a", "key-b"]')

    assert get_settings().gemini_api_keys == ["key-a", "key-b"]


def test_models_default_and_deduplicate(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_settings().gemini_models == DEFAULT_GEMINI_MODELS

    get_settings.cache_clear()
    monkeypatch.setenv("GEMINI_MODELS", "gemini-2.0-flash,gemini-2.0-flash,gemini-1.5-pro")
    assert get_settings().gemini_models == ["gemini-2.0-flash", "gemini-1.5-pro"]

    get_settings.cache_clear()
    monkeypatch.setenv("GEMINI_MODELS", "  ")
    assert get_settings().gemini_models == DEFAULT_GEMINI_MODELS


def test_no_embedded_credentials() -> None:
    settings = Settings()

    assert settings.gemini_api_keys == []
    assert settings.gemini_api_key is None
    assert settings.configured_api_keys == []


def test_field_names_accepted_in_constructor() -> None:
    settings = Settings(secrets_provider=" AWS ", insight_feedback_limit=10)

    assert settings.secrets_provider == "aws"
    assert settings.insight_feedback_limit == 10
