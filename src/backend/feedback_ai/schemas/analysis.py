from __future__ import annotations

from pydantic import BaseModel, Field

from feedback_ai.services.analysis_results import AnalyzerStatus, InsightResult, Sentiment


class SentimentRequest(BaseModel):
    text: str = ""


class SentimentResponse(BaseModel):
    sentiment: Sentiment


class InsightRequest(BaseModel):
    label: str
    feedbacks: list[str] = Field(default_factory=list)


class InsightResponse(BaseModel):
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    areas_of_concern: list[str] = Field(default_factory=list)
    actionable_suggestions: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: InsightResult) -> "InsightResponse":
        return cls(**result.to_dict())


class AnalyzerStatusResponse(BaseModel):
    has_credentials: bool
    configured_credentials: int = 0
    available_credentials: int = 0
    exhausted_credentials: int = 0
    models: list[str] = Field(default_factory=list)
    preferred_model: str | None = None

    @classmethod
    def from_status(cls, status: AnalyzerStatus) -> "AnalyzerStatusResponse":
        return cls(**status.to_dict())
