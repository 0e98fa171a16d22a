# model/api.py
from pydantic import BaseModel, Field
from model.outcome import AnswerSource


class AskRequest(BaseModel):
    # Blank/missing questions are rejected by the service, not by validation.
    question: str | None = None


class AskResponse(BaseModel):
    answer: str
    confidence: float
    category: str
    source: AnswerSource


class HealthResponse(BaseModel):
    ok: bool
    ready: bool


class Recommendation(BaseModel):
    type: str
    priority: str
    title: str
    description: str


class AnalyticsSummary(BaseModel):
    totalQuestions: int
    sourceBreakdown: dict[str, int] = Field(default_factory=dict)
    questionTypes: dict[str, int] = Field(default_factory=dict)
    averageLatencyMs: int = 0
    averageConfidence: float = 0.0
    fallbackRate: float = 0.0
    databaseEfficiency: float = 0.0
    providerUsageRate: float = 0.0
    firstTimestamp: str | None = None
    lastTimestamp: str | None = None


class AnalyticsResponse(BaseModel):
    summary: AnalyticsSummary
    insights: list[str] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
