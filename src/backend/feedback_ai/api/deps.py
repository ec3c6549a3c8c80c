from __future__ import annotations

from feedback_ai.services.feedback_analyzer import FeedbackAnalyzer, get_feedback_analyzer


def get_analyzer() -> FeedbackAnalyzer:
    return get_feedback_analyzer()
