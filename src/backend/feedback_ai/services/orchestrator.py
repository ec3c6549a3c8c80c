"""Remote call orchestration

Searches credential x model pairs in priority order for one logical request,
rotating on classified failures and degrading to a local fallback when the
search space is exhausted. Never raises to its caller.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Sequence, TypeVar

from feedback_ai.services.failure_classifier import FailureKind, classify_exception
from feedback_ai.services.llm_providers.base import AttemptTimeoutError, BaseTextGenerator
from feedback_ai.services.rotation import CredentialPool, fingerprint

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteCallOrchestrator:
    """Credential and model rotation around a text generator"""

    def __init__(
        self,
        generator: BaseTextGenerator,
        pool: CredentialPool,
        models: Sequence[str],
        attempt_timeout: Optional[float] = 30.0,
    ):
        """
        Initialize orchestrator

        Args:
            generator: Client issuing one remote call per attempt
            pool: Shared credential pool (exhausted set is process-wide)
            models: Model identifiers in preference order
            attempt_timeout: Seconds allowed per attempt, None to wait indefinitely
        """
        if not models:
            raise ValueError("At least one model identifier is required")
        self.generator = generator
        self.pool = pool
        self.models: tuple[str, ...] = tuple(models)
        self.attempt_timeout = attempt_timeout

    async def _attempt(self, credential: str, model: str, prompt: str) -> str:
        call = self.generator.generate(credential, model, prompt)
        if self.attempt_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.attempt_timeout)
        except asyncio.TimeoutError as e:
            raise AttemptTimeoutError(f"{model} gave no answer within {self.attempt_timeout}s") from e

    async def call(
        self,
        prompt: str,
        parse: Callable[[str], T],
        fallback: Callable[[], T],
        operation: str = "analysis",
    ) -> T:
        """
        Run one logical request

        Args:
            prompt: Prompt text sent with every attempt
            parse: Turns raw response text into a result; raising marks the
                attempt as an unclassified failure
            fallback: Produces the local result when the search ends
            operation: Label used in log messages

        Returns:
            Parsed remote result, or the fallback result
        """
        cursor = self.pool.open_cursor()
        if cursor is None:
            logger.info(f"{operation}: no usable credential, using lexical fallback")
            return fallback()

        for _ in range(len(self.pool)):
            credential = self.pool[cursor.credential_index]
            key_id = fingerprint(credential)
            cursor.attempted.add(cursor.credential_index)
            cursor.model_index = 0

            while cursor.model_index < len(self.models):
                # Another request may have exhausted this credential mid-search.
                if self.pool.is_exhausted(credential):
                    logger.info(f"{operation}: credential {key_id} exhausted elsewhere, rotating")
                    break
                model = self.models[cursor.model_index]
                logger.debug(f"{operation}: attempting {model} with {key_id}")
                try:
                    result = parse(await self._attempt(credential, model, prompt))
                except Exception as exc:
                    error = exc
                    kind = classify_exception(exc)
                else:
                    logger.info(f"{operation}: answered by {model} with {key_id}")
                    return result

                if kind is FailureKind.MODEL_UNAVAILABLE:
                    logger.warning(f"{operation}: model {model} unavailable ({error}), trying next model")
                    cursor.model_index += 1
                    continue

                if kind is FailureKind.CREDENTIAL_EXHAUSTED:
                    if self.pool.mark_exhausted(credential):
                        logger.warning(f"{operation}: credential {key_id} exhausted ({error}), disabled for this process")
                    break

                logger.warning(f"{operation}: unclassified failure from {model} ({error}), using lexical fallback")
                return fallback()

            next_index = self.pool.next_available(cursor.credential_index, skip=cursor.attempted)
            if next_index is None:
                break
            cursor.credential_index = next_index

        logger.info(f"{operation}: credential and model options exhausted, using lexical fallback")
        return fallback()
