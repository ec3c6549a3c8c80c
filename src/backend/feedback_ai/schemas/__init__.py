from feedback_ai.schemas.analysis import (
    AnalyzerStatusResponse,
    InsightRequest,
    InsightResponse,
    SentimentRequest,
    SentimentResponse,
)

__all__ = [
    "AnalyzerStatusResponse",
    "InsightRequest",
    "InsightResponse",
    "SentimentRequest",
    "SentimentResponse",
]
