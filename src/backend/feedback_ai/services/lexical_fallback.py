"""Lexical fallback analysis

Deterministic word-list heuristics used whenever the remote model cannot
answer. No I/O and no failure modes.
"""
from __future__ import annotations

from collections import Counter
from typing import Sequence

from feedback_ai.services.analysis_results import (
    InsightResult,
    Sentiment,
    empty_staff_insights,
    empty_subject_insights,
)

POSITIVE_WORDS: tuple[str, ...] = (
    "good",
    "great",
    "excellent",
    "amazing",
    "wonderful",
    "helpful",
    "best",
    "love",
    "fantastic",
    "awesome",
    "clear",
    "understand",
    "well",
    "nice",
    "thank",
)
NEGATIVE_WORDS: tuple[str, ...] = (
    "bad",
    "poor",
    "terrible",
    "horrible",
    "worst",
    "hate",
    "boring",
    "confusing",
    "difficult",
    "slow",
    "hard",
    "unclear",
    "problem",
    "issue",
    "fast",
)


def classify_sentiment(text: str) -> Sentiment:
    """Label text by counting substring hits against the word lists.

    Each listed word counts once regardless of repetitions; ties are Neutral.
    """
    lowered = (text or "").lower()
    positive_count = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative_count = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    if positive_count > negative_count:
        return Sentiment.POSITIVE
    if negative_count > positive_count:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def _tally(texts: Sequence[str]) -> Counter[Sentiment]:
    return Counter(classify_sentiment(text) for text in texts)


def summarize_subject(texts: Sequence[str]) -> InsightResult:
    total = len(texts)
    if total == 0:
        return empty_subject_insights()

    counts = _tally(texts)
    positive_count = counts[Sentiment.POSITIVE]
    negative_count = counts[Sentiment.NEGATIVE]
    result = InsightResult()

    if positive_count > total / 2:
        result.strengths.append("Majority of students expressed positive feedback about this subject")
        result.strengths.append("Students appear satisfied with the course content and delivery")
    elif positive_count > 0:
        result.strengths.append("Some students expressed positive feedback")

    if negative_count > 0:
        result.improvements.append("Some students reported concerns that should be addressed")
        result.suggestions.append("Review individual feedback entries for specific improvement areas")

    if positive_count == 0 and negative_count == 0:
        result.suggestions.append("Encourage more detailed feedback from students")

    result.suggestions.append(f"Analysis based on {total} feedback entries")
    return result


def summarize_staff(texts: Sequence[str]) -> InsightResult:
    total = len(texts)
    if total == 0:
        return empty_staff_insights()

    counts = _tally(texts)
    positive_count = counts[Sentiment.POSITIVE]
    negative_count = counts[Sentiment.NEGATIVE]
    neutral_count = counts[Sentiment.NEUTRAL]
    result = InsightResult()

    if positive_count > total / 2:
        result.strengths.append("Majority of student feedback is positive")
        result.strengths.append("Students appreciate the teaching approach")
    elif positive_count > 0:
        result.strengths.append("Some students expressed satisfaction with the teaching")

    if negative_count > total / 3:
        result.areas_of_concern.append("Notable portion of students expressed concerns")
        result.actionable_suggestions.append("Review specific feedback entries for detailed improvement areas")
    elif negative_count > 0:
        result.areas_of_concern.append("A few students mentioned areas for improvement")

    if neutral_count > total / 2:
        result.actionable_suggestions.append(
            "Encourage more engaging interactions to generate stronger student responses"
        )

    result.actionable_suggestions.append(f"Analysis based on {total} feedback entries")
    return result
