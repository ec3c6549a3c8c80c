"""Result types returned by the feedback analysis operations"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


@dataclass(slots=True)
class InsightResult:
    """Structured insights, shape-uniform across subject and staff analyses.

    Subject analyses fill ``strengths``/``improvements``/``suggestions``; staff
    analyses fill ``strengths``/``areas_of_concern``/``actionable_suggestions``.
    The unused fields stay empty lists, never ``None``.
    """

    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    areas_of_concern: list[str] = field(default_factory=list)
    actionable_suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to dictionary"""
        return {
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "suggestions": list(self.suggestions),
            "areas_of_concern": list(self.areas_of_concern),
            "actionable_suggestions": list(self.actionable_suggestions),
        }


@dataclass(slots=True)
class AnalyzerStatus:
    """Read-only snapshot of the credential pool and model preferences"""

    has_credentials: bool
    configured_credentials: int
    available_credentials: int
    exhausted_credentials: int
    models: list[str]
    preferred_model: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_credentials": self.has_credentials,
            "configured_credentials": self.configured_credentials,
            "available_credentials": self.available_credentials,
            "exhausted_credentials": self.exhausted_credentials,
            "models": list(self.models),
            "preferred_model": self.preferred_model,
        }


NO_SUBJECT_FEEDBACK_MESSAGE = "No textual feedback available for analysis."
NO_STAFF_FEEDBACK_MESSAGE = "No textual feedback available."


def empty_subject_insights() -> InsightResult:
    return InsightResult(suggestions=[NO_SUBJECT_FEEDBACK_MESSAGE])


def empty_staff_insights() -> InsightResult:
    return InsightResult(actionable_suggestions=[NO_STAFF_FEEDBACK_MESSAGE])
