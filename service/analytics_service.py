# service/analytics_service.py
import logging
from collections import Counter
from typing import List, Sequence
from model.api import AnalyticsResponse, AnalyticsSummary, Recommendation
from model.outcome import AnswerSource, QueryOutcome, SOURCE_FOR_TIER, Tier
from repository.outcome_repository import OutcomeRepository
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

DB_EFFICIENCY_TARGET = 80.0
SLOW_LATENCY_MS = 300
PROVIDER_TIERS = (Tier.provider_primary, Tier.provider_secondary)


def _pct(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def summarize(outcomes: Sequence[QueryOutcome]) -> AnalyticsSummary:
    total = len(outcomes)
    if total == 0:
        return AnalyticsSummary(totalQuestions=0)

    tiers = Counter(o.chosenTier for o in outcomes)
    sources = {SOURCE_FOR_TIER[t].value: n for t, n in tiers.items()}
    provider_answers = sum(tiers.get(t, 0) for t in PROVIDER_TIERS)
    escalated = total - tiers.get(Tier.database, 0)

    return AnalyticsSummary(
        totalQuestions=total,
        sourceBreakdown=sources,
        questionTypes=dict(Counter(o.questionType for o in outcomes)),
        averageLatencyMs=round(sum(o.latencyMs for o in outcomes) / total),
        averageConfidence=round(sum(o.normalizedConfidence for o in outcomes) / total, 2),
        fallbackRate=_pct(escalated, total),
        databaseEfficiency=_pct(tiers.get(Tier.database, 0), total),
        providerUsageRate=_pct(provider_answers, total),
        firstTimestamp=min(o.timestamp for o in outcomes).isoformat(),
        lastTimestamp=max(o.timestamp for o in outcomes).isoformat(),
    )


def insights(summary: AnalyticsSummary) -> List[str]:
    if summary.totalQuestions == 0:
        return ["No data available yet."]
    out = [
        f"Database handles {summary.databaseEfficiency}% of questions "
        f"(target: >{DB_EFFICIENCY_TARGET:.0f}%)",
        f"AI consultation rate: {summary.providerUsageRate}% (affects cost)",
        f"Average response time: {summary.averageLatencyMs}ms",
    ]
    disclaimers = summary.sourceBreakdown.get(AnswerSource.database_fallback.value, 0)
    if disclaimers:
        out.append(f"{disclaimers} answers fell back to the database with a disclaimer")
    return out


def recommendations(summary: AnalyticsSummary) -> List[Recommendation]:
    if summary.totalQuestions == 0:
        return []
    recs: List[Recommendation] = []
    if summary.databaseEfficiency < DB_EFFICIENCY_TARGET:
        recs.append(
            Recommendation(
                type="database",
                priority="high",
                title="Improve Database Coverage",
                description="Add Q&A pairs for commonly asked questions that are "
                "triggering provider fallbacks.",
            )
        )
    if summary.averageLatencyMs > SLOW_LATENCY_MS:
        recs.append(
            Recommendation(
                type="performance",
                priority="medium",
                title="Optimize Response Times",
                description="High response times usually mean frequent provider "
                "fallbacks or slow provider calls.",
            )
        )
    known = {k: v for k, v in summary.questionTypes.items() if k != "other"}
    if known:
        top = max(known, key=lambda k: (known[k], k))
        recs.append(
            Recommendation(
                type="content",
                priority="low",
                title=f"Focus on {top} Questions",
                description=f"Most questions are about {top}. Ensure this category "
                "has comprehensive coverage.",
            )
        )
    return recs


def build_report(outcomes: Sequence[QueryOutcome]) -> AnalyticsResponse:
    summary = summarize(outcomes)
    return AnalyticsResponse(
        summary=summary,
        insights=insights(summary),
        recommendations=recommendations(summary),
    )


class AnalyticsService:
    def __init__(self, outcomes: OutcomeRepository) -> None:
        self._outcomes = outcomes

    async def report(self) -> AnalyticsResponse:
        try:
            rows = await self._outcomes.all()
        except Exception as e:
            logger.error("analytics.read.error err=%s", type(e).__name__)
            raise AppError.of(ErrorMessage.ANALYTICS_UNAVAILABLE) from e
        logger.info("analytics.report rows=%d", len(rows))
        return build_report(rows)
