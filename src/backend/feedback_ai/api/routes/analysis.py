"""Feedback Analysis API Routes

Thin HTTP surface over the feedback analyzer. Responses are always
well-formed; remote failures surface as lexical-fallback results.
"""
from fastapi import APIRouter, Depends

from feedback_ai.api.deps import get_analyzer
from feedback_ai.schemas.analysis import (
    AnalyzerStatusResponse,
    InsightRequest,
    InsightResponse,
    SentimentRequest,
    SentimentResponse,
)
from feedback_ai.services.feedback_analyzer import FeedbackAnalyzer

router = APIRouter()


@router.post("/sentiment", response_model=SentimentResponse)
async def analyze_sentiment(
    payload: SentimentRequest,
    analyzer: FeedbackAnalyzer = Depends(get_analyzer),
) -> SentimentResponse:
    """Classify a single feedback text"""
    sentiment = await analyzer.analyze_sentiment(payload.text)
    return SentimentResponse(sentiment=sentiment)


@router.post("/subject-insights", response_model=InsightResponse)
async def subject_insights(
    payload: InsightRequest,
    analyzer: FeedbackAnalyzer = Depends(get_analyzer),
) -> InsightResponse:
    """Summarize feedback for one subject"""
    result = await analyzer.generate_subject_insights(payload.label, payload.feedbacks)
    return InsightResponse.from_result(result)


@router.post("/staff-insights", response_model=InsightResponse)
async def staff_insights(
    payload: InsightRequest,
    analyzer: FeedbackAnalyzer = Depends(get_analyzer),
) -> InsightResponse:
    """Summarize feedback for one staff member"""
    result = await analyzer.generate_staff_insights(payload.label, payload.feedbacks)
    return InsightResponse.from_result(result)


@router.get("/status", response_model=AnalyzerStatusResponse)
async def analyzer_status(analyzer: FeedbackAnalyzer = Depends(get_analyzer)) -> AnalyzerStatusResponse:
    """Credential pool and model preference snapshot"""
    return AnalyzerStatusResponse.from_status(analyzer.status())
