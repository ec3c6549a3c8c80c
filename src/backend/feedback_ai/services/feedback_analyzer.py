"""Feedback Analyzer

Caller-facing operations for student feedback:
- Single-text sentiment (Positive/Neutral/Negative)
- Aggregate subject insights (strengths, improvements, suggestions)
- Aggregate staff insights (strengths, areas of concern, actionable suggestions)

Every operation returns a well-formed result. Remote failures degrade to the
lexical fallback; nothing is raised to the caller.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Sequence

from feedback_ai.core.config import Settings, get_settings
from feedback_ai.services import lexical_fallback
from feedback_ai.services.analysis_results import (
    AnalyzerStatus,
    InsightResult,
    Sentiment,
    empty_staff_insights,
    empty_subject_insights,
)
from feedback_ai.services.credentials import build_credential_pool
from feedback_ai.services.llm_providers import BaseTextGenerator, GeminiClient, ResponseParseError
from feedback_ai.services.orchestrator import RemoteCallOrchestrator
from feedback_ai.services.rotation import CredentialPool

logger = logging.getLogger(__name__)

MIN_SENTIMENT_TEXT_LENGTH = 3
DEFAULT_FEEDBACK_LIMIT = 50

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return []


def extract_json_object(raw: str) -> dict[str, Any]:
    """Pull the outermost ``{...}`` block out of a model reply"""
    match = _JSON_OBJECT.search(raw or "")
    if match is None:
        raise ResponseParseError("Could not parse response: no JSON object present")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Could not parse response: {e.msg}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("Could not parse response: JSON payload is not an object")
    return data


def parse_sentiment(raw: str) -> Sentiment:
    """Map a one-word reply to a label; anything unexpected is Neutral."""
    reply = (raw or "").strip()
    for label in Sentiment:
        if reply == label.value:
            return label
    return Sentiment.NEUTRAL


def parse_subject_insights(raw: str) -> InsightResult:
    data = extract_json_object(raw)
    return InsightResult(
        strengths=_string_list(data.get("strengths")),
        improvements=_string_list(data.get("improvements")),
        suggestions=_string_list(data.get("suggestions")),
    )


def parse_staff_insights(raw: str) -> InsightResult:
    data = extract_json_object(raw)
    return InsightResult(
        strengths=_string_list(data.get("strengths")),
        areas_of_concern=_string_list(data.get("areas_of_concern")),
        actionable_suggestions=_string_list(data.get("actionable_suggestions")),
    )


class FeedbackAnalyzer:
    """AI-backed feedback analysis with credential/model rotation and lexical fallback"""

    def __init__(
        self,
        generator: BaseTextGenerator,
        pool: CredentialPool,
        models: Sequence[str],
        attempt_timeout: Optional[float] = 30.0,
        feedback_limit: int = DEFAULT_FEEDBACK_LIMIT,
    ):
        self.pool = pool
        self.models = list(models)
        self.feedback_limit = max(1, feedback_limit)
        self.orchestrator = RemoteCallOrchestrator(
            generator,
            pool,
            self.models,
            attempt_timeout=attempt_timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings, generator: Optional[BaseTextGenerator] = None) -> "FeedbackAnalyzer":
        if generator is None:
            generator = GeminiClient(
                endpoint=settings.gemini_endpoint,
                timeout=settings.llm_attempt_timeout_seconds,
                temperature=settings.llm_temperature,
                transport_retries=settings.llm_transport_retries,
            )
        return cls(
            generator,
            build_credential_pool(settings),
            settings.gemini_models,
            attempt_timeout=settings.llm_attempt_timeout_seconds,
            feedback_limit=settings.insight_feedback_limit,
        )

    def _combine(self, texts: Sequence[str]) -> str:
        return "\n- ".join(texts[: self.feedback_limit])

    def _sentiment_prompt(self, text: str) -> str:
        return (
            f'Analyze the sentiment of this student feedback regarding a course: "{text}".\n'
            "Respond with exactly one word: Positive, Neutral, or Negative."
        )

    def _subject_prompt(self, subject_label: str, texts: Sequence[str]) -> str:
        return f"""Analyze the following student feedback for the subject "{subject_label}".
Provide a structured analysis in JSON format with three arrays: "strengths", "improvements", and "suggestions".
Each array should contain 2-4 brief, actionable items.

Feedback data:
- {self._combine(texts)}

Respond ONLY with valid JSON in this exact format:
{{"strengths": ["..."], "improvements": ["..."], "suggestions": ["..."]}}"""

    def _staff_prompt(self, staff_label: str, texts: Sequence[str]) -> str:
        return f"""Analyze the following aggregated student feedback for the staff member "{staff_label}".
Identify teaching strengths, areas of concern, and actionable suggestions.

Feedback data:
- {self._combine(texts)}

Respond ONLY with valid JSON in this exact format:
{{"strengths": ["..."], "areas_of_concern": ["..."], "actionable_suggestions": ["..."]}}"""

    async def analyze_sentiment(self, text: Optional[str]) -> Sentiment:
        """
        Classify one feedback text

        Args:
            text: Free-text feedback

        Returns:
            Sentiment label; Neutral for texts shorter than three characters
        """
        if not text or len(text.strip()) < MIN_SENTIMENT_TEXT_LENGTH:
            return Sentiment.NEUTRAL

        return await self.orchestrator.call(
            self._sentiment_prompt(text),
            parse_sentiment,
            lambda: lexical_fallback.classify_sentiment(text),
            operation="sentiment",
        )

    async def generate_subject_insights(self, subject_label: str, texts: Sequence[str]) -> InsightResult:
        """
        Summarize feedback for one subject

        Args:
            subject_label: Subject name shown to the model
            texts: Feedback texts; only the first ``feedback_limit`` go into the prompt

        Returns:
            InsightResult with strengths, improvements and suggestions
        """
        texts = list(texts or [])
        if not texts:
            logger.debug(f"subject_insights: no feedback for {subject_label}")
            return empty_subject_insights()

        return await self.orchestrator.call(
            self._subject_prompt(subject_label, texts),
            parse_subject_insights,
            lambda: lexical_fallback.summarize_subject(texts),
            operation="subject_insights",
        )

    async def generate_staff_insights(self, staff_label: str, texts: Sequence[str]) -> InsightResult:
        """
        Summarize feedback for one staff member

        Args:
            staff_label: Staff name shown to the model
            texts: Feedback texts; only the first ``feedback_limit`` go into the prompt

        Returns:
            InsightResult with strengths, areas of concern and actionable suggestions
        """
        texts = list(texts or [])
        if not texts:
            logger.debug(f"staff_insights: no feedback for {staff_label}")
            return empty_staff_insights()

        return await self.orchestrator.call(
            self._staff_prompt(staff_label, texts),
            parse_staff_insights,
            lambda: lexical_fallback.summarize_staff(texts),
            operation="staff_insights",
        )

    def status(self) -> AnalyzerStatus:
        return AnalyzerStatus(
            has_credentials=len(self.pool) > 0,
            configured_credentials=len(self.pool),
            available_credentials=self.pool.available_count,
            exhausted_credentials=self.pool.exhausted_count,
            models=list(self.models),
            preferred_model=self.models[0] if self.models else None,
        )


# Global singleton instance
_analyzer: Optional[FeedbackAnalyzer] = None


def get_feedback_analyzer() -> FeedbackAnalyzer:
    """Get or create feedback analyzer singleton"""
    global _analyzer
    if _analyzer is None:
        _analyzer = FeedbackAnalyzer.from_settings(get_settings())
    return _analyzer


def reset_feedback_analyzer() -> None:
    """Drop the singleton so the next call rebuilds it from settings"""
    global _analyzer
    _analyzer = None
