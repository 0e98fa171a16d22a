# model/outcome.py
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field


class Tier(str, Enum):
    database = "database"
    provider_primary = "provider_primary"
    provider_secondary = "provider_secondary"
    disclaimer_fallback = "disclaimer_fallback"


class AnswerSource(str, Enum):
    database = "database"
    provider_primary = "provider_primary"
    provider_secondary = "provider_secondary"
    database_fallback = "database_fallback"


# Caller-facing source label for each terminal tier.
SOURCE_FOR_TIER: dict[Tier, AnswerSource] = {
    Tier.database: AnswerSource.database,
    Tier.provider_primary: AnswerSource.provider_primary,
    Tier.provider_secondary: AnswerSource.provider_secondary,
    Tier.disclaimer_fallback: AnswerSource.database_fallback,
}


class ProviderAttempt(BaseModel):
    provider: str
    succeeded: bool
    error: str | None = None


class QueryOutcome(BaseModel):
    """
    One record per answered query. The raw question never leaves the process:
    `questionHash` takes the place of the query text, alongside its length and
    coarse type.
    """

    questionHash: str
    questionLength: int
    questionType: str = "other"
    normalizedConfidence: float
    matchedQuestionId: int | None = None
    category: str
    chosenTier: Tier
    latencyMs: int
    providerAttempts: list[ProviderAttempt] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
