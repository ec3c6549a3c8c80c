from __future__ import annotations

from typing import Callable, Union

import pytest

from feedback_ai.core.config import get_settings
from feedback_ai.services.feedback_analyzer import reset_feedback_analyzer
from feedback_ai.services.llm_providers.base import BaseTextGenerator
from feedback_ai.services.secrets import get_secrets_manager

Outcome = Union[str, BaseException]

CONFIG_ENV_VARS = (
    "GEMINI_API_KEYS",
    "GEMINI_API_KEY",
    "GEMINI_MODELS",
    "GEMINI_ENDPOINT",
    "SECRETS_PROVIDER",
    "LOG_LEVEL",
    "ENV_FILE",
)


class ScriptedGenerator(BaseTextGenerator):
    """Fake generator answering from a handler and recording every attempt."""

    provider_name = "scripted"

    def __init__(self, handler: Callable[[str, str, str], Outcome]) -> None:
        self.handler = handler
        self.calls: list[tuple[str, str]] = []
        self.prompts: list[str] = []

    async def generate(self, credential: str, model: str, prompt: str) -> str:
        self.calls.append((credential, model))
        self.prompts.append(prompt)
        outcome = self.handler(credential, model, prompt)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_secrets_manager.cache_clear()
    reset_feedback_analyzer()
    yield
    get_settings.cache_clear()
    get_secrets_manager.cache_clear()
    reset_feedback_analyzer()


@pytest.fixture()
def scripted() -> Callable[[Callable[[str, str, str], Outcome]], ScriptedGenerator]:
    return ScriptedGenerator
