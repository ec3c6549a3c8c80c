"""Google Gemini text-generation client"""
import json
import logging
from typing import Any, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base import AttemptTimeoutError, BaseTextGenerator, ProviderError, ResponseParseError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"

# Connection-level faults worth retrying against the same model and key.
TRANSIENT_ERRORS = (httpx.ConnectError, httpx.RemoteProtocolError)


class GeminiClient(BaseTextGenerator):
    """Google Gemini ``generateContent`` client"""

    provider_name = "gemini"

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: float = 30.0,
        temperature: float = 0.3,
        transport_retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client

        Args:
            endpoint: Base models URL (default: public v1beta endpoint)
            timeout: Per-request timeout in seconds
            temperature: Sampling temperature sent with every request
            transport_retries: Attempts for transient connection faults
            transport: Optional httpx transport (used by tests)
        """
        self.endpoint = (endpoint or DEFAULT_ENDPOINT).rstrip("/")
        self.timeout = timeout
        self.temperature = temperature
        self.transport_retries = max(1, transport_retries)
        self._transport = transport

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": prompt}
                    ]
                }
            ],
            "generationConfig": {
                "temperature": self.temperature,
            },
        }

    async def _post(self, url: str, credential: str, payload: dict[str, Any]) -> httpx.Response:
        """Make API call, retrying transient connection faults"""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.transport_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    return await client.post(
                        url,
                        headers={
                            "Content-Type": "application/json",
                            "x-goog-api-key": credential,
                        },
                        json=payload,
                    )

    async def generate(self, credential: str, model: str, prompt: str) -> str:
        """Generate text with Google Gemini"""
        url = f"{self.endpoint}/{model}:generateContent"

        try:
            response = await self._post(url, credential, self._build_payload(prompt))
        except httpx.TimeoutException as e:
            raise AttemptTimeoutError(f"Gemini request to {model} timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Gemini request error: {e}")
            raise ProviderError(f"request error: {e}") from e

        if response.is_error:
            error = self._error_from_response(response)
            logger.debug(f"Gemini HTTP error for {model}: {error}")
            raise error

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ResponseParseError("Gemini returned a non-JSON body") from e

        return self._extract_text(data)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ProviderError:
        """Build a ProviderError from Gemini's error envelope"""
        message = response.text.strip() or response.reason_phrase
        provider_status = None
        try:
            data = response.json()
        except json.JSONDecodeError:
            data = None

        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            error = data["error"]
            message = str(error.get("message") or message)
            provider_status = error.get("status")

        return ProviderError(
            message,
            status_code=response.status_code,
            provider_status=provider_status,
        )

    @staticmethod
    def _extract_text(data: Any) -> str:
        """Join the text parts of the first candidate"""
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            raise ResponseParseError(f"Gemini response had no candidate content (promptFeedback={feedback})") from e

        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            raise ResponseParseError("Gemini candidate contained no text")
        return text
