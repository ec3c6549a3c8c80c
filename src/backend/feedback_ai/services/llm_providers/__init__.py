"""Remote text-generation clients"""

from .base import (
    AttemptTimeoutError,
    BaseTextGenerator,
    LLMProviderError,
    ProviderError,
    ResponseParseError,
)
from .gemini_client import GeminiClient

__all__ = [
    "AttemptTimeoutError",
    "BaseTextGenerator",
    "GeminiClient",
    "LLMProviderError",
    "ProviderError",
    "ResponseParseError",
]
