"""Base text-generation client interface"""
from abc import ABC, abstractmethod
from typing import Optional


class LLMProviderError(Exception):
    """Base class for failures raised by text-generation clients"""


class ProviderError(LLMProviderError):
    """Remote service rejected the request"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        provider_status: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider_status = provider_status

    def __str__(self) -> str:
        parts = []
        if self.status_code is not None:
            parts.append(str(self.status_code))
        if self.provider_status:
            parts.append(self.provider_status)
        prefix = " ".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message


class ResponseParseError(LLMProviderError):
    """Remote call succeeded but the body held no usable answer"""


class AttemptTimeoutError(LLMProviderError):
    """A single attempt exceeded its time budget"""


class BaseTextGenerator(ABC):
    """Abstract base class for remote text generators"""

    provider_name: str = "base"

    @abstractmethod
    async def generate(self, credential: str, model: str, prompt: str) -> str:
        """
        Generate text for a prompt

        Args:
            credential: API key used for this attempt
            model: Model identifier used for this attempt
            prompt: Full prompt text

        Returns:
            Raw response text

        Raises:
            ProviderError: When the remote service rejects the request
            ResponseParseError: When the response carries no text
            AttemptTimeoutError: When the request times out
        """
        pass
