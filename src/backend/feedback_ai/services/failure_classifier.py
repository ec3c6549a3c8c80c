"""Failure classification for remote model calls

Maps a normalized error description onto the action the orchestrator takes:
rotate the credential, rotate the model, or give up and fall back.
"""
from __future__ import annotations

import asyncio
from enum import Enum

import httpx

from feedback_ai.services.llm_providers.base import AttemptTimeoutError, ResponseParseError


class FailureKind(str, Enum):
    CREDENTIAL_EXHAUSTED = "credential_exhausted"
    MODEL_UNAVAILABLE = "model_unavailable"
    UNCLASSIFIED = "unclassified"


CREDENTIAL_MARKERS: tuple[str, ...] = (
    "quota",
    "resource_exhausted",
    "resource exhausted",
    "resource-exhausted",
    "429",
    "rate limit",
    "permission",
    "403",
    "unauthorized",
    "invalid api key",
    "api key not valid",
)
MODEL_MARKERS: tuple[str, ...] = (
    "not found",
    "404",
    "not supported",
    "does not exist",
)

TIMEOUT_ERRORS = (asyncio.TimeoutError, httpx.TimeoutException, AttemptTimeoutError)


def classify_failure(description: str) -> FailureKind:
    """Classify a lower-cased error description.

    Credential markers are checked before model markers.
    """
    text = (description or "").lower()
    if any(marker in text for marker in CREDENTIAL_MARKERS):
        return FailureKind.CREDENTIAL_EXHAUSTED
    if any(marker in text for marker in MODEL_MARKERS):
        return FailureKind.MODEL_UNAVAILABLE
    return FailureKind.UNCLASSIFIED


def describe_exception(exc: BaseException) -> str:
    """Build the normalized, lower-cased description of an exception."""
    parts: list[str] = []
    status_code = getattr(exc, "status_code", None)
    if status_code is None and isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
    if status_code is not None:
        parts.append(str(status_code))
    provider_status = getattr(exc, "provider_status", None)
    if provider_status:
        parts.append(str(provider_status))
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    parts.append(str(message))
    return " ".join(parts).lower()


def classify_exception(exc: BaseException) -> FailureKind:
    if isinstance(exc, TIMEOUT_ERRORS):
        return FailureKind.MODEL_UNAVAILABLE
    if isinstance(exc, ResponseParseError):
        return FailureKind.UNCLASSIFIED
    return classify_failure(describe_exception(exc))
