# core/orchestrator.py
import asyncio
import logging
import time
from typing import List, Optional, Sequence
from config.settings import settings
from core.entities import AnswerResult, MatchResult
from core.escalation import (
    PROVIDER_SLOT,
    TIER_FOR_TERMINAL,
    State,
    is_terminal,
    transition,
)
from core.interfaces import CompletionProvider, DocumentSource, OutcomeRecorder
from core.matcher import select_best
from core.profiles import COMPOSITE_V2, ScoringProfile
from model.corpus import Corpus
from model.outcome import SOURCE_FOR_TIER, ProviderAttempt, QueryOutcome, Tier
from util import functions
from util.errors import GroundingUnavailable, ProviderFailure
from util.timing import elapsed_ms

logger = logging.getLogger(__name__)


class FallbackOrchestrator:
    """
    Answer one question by walking the escalation states:
    corpus match -> primary provider -> secondary provider -> disclaimer.

    Each provider tier gets exactly one attempt. Any failure inside a tier
    (grounding fetch, provider error, timeout) is logged and moves on to the
    next tier. Every answered query emits one QueryOutcome to the recorder.
    """

    def __init__(
        self,
        *,
        corpus: Corpus,
        providers: Sequence[CompletionProvider],
        document_source: DocumentSource,
        recorder: OutcomeRecorder,
        profile: ScoringProfile = COMPOSITE_V2,
        disclaimer: str = settings.DISCLAIMER_SUFFIX,
        call_timeout: Optional[float] = None,
    ) -> None:
        if len(providers) != len(PROVIDER_SLOT):
            raise ValueError(f"expected {len(PROVIDER_SLOT)} providers, got {len(providers)}")
        self._corpus = corpus
        self._providers = tuple(providers)
        self._source = document_source
        self._recorder = recorder
        self._profile = profile
        self._disclaimer = disclaimer
        self._call_timeout = call_timeout

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def threshold(self) -> float:
        return self._profile.threshold

    async def _call(self, awaitable):
        if self._call_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._call_timeout)

    async def _try_tier(
        self, provider: CompletionProvider, question: str, attempts: List[ProviderAttempt]
    ) -> Optional[str]:
        t0 = time.perf_counter()
        try:
            grounding = await self._call(self._source.fetch_grounding_document())
            if not grounding:
                raise GroundingUnavailable("document unavailable")
            reply = await self._call(provider.complete(grounding, question))
            if not reply or not reply.strip():
                raise ProviderFailure(provider.name, "empty completion")
        except GroundingUnavailable:
            reason = "grounding_unavailable"
        except ProviderFailure as e:
            reason = e.reason
        except asyncio.TimeoutError:
            reason = "timeout"
        except Exception as e:
            # Tier isolation: an unexpected provider bug must not abort the query.
            logger.exception("tier.unexpected provider=%s", provider.name)
            reason = f"unexpected:{type(e).__name__}"
        else:
            attempts.append(ProviderAttempt(provider=provider.name, succeeded=True))
            logger.info("tier.ok provider=%s ms=%d", provider.name, elapsed_ms(t0))
            return reply.strip()

        attempts.append(ProviderAttempt(provider=provider.name, succeeded=False, error=reason))
        logger.warning(
            "tier.failed provider=%s reason=%s ms=%d", provider.name, reason, elapsed_ms(t0)
        )
        return None

    async def answer(self, question: str) -> AnswerResult:
        t0 = time.perf_counter()
        attempts: List[ProviderAttempt] = []
        # Every terminal state answers from, or falls back to, this match.
        match = select_best(question, self._corpus, self._profile)
        reply: Optional[str] = None

        state = State.START
        while not is_terminal(state):
            if state is State.START:
                succeeded = True
            elif state is State.DB_CHECK:
                succeeded = match.confidence >= self._profile.threshold
            else:
                provider = self._providers[PROVIDER_SLOT[state]]
                reply = await self._try_tier(provider, question, attempts)
                succeeded = reply is not None
            state = transition(state, succeeded)

        tier = TIER_FOR_TERMINAL[state]
        if tier is Tier.database:
            text = match.answer
        elif tier is Tier.disclaimer_fallback:
            text = match.answer + self._disclaimer
        else:
            text = reply or ""

        result = AnswerResult(
            answer=text,
            confidence=match.confidence,
            category=match.category,
            source=SOURCE_FOR_TIER[tier].value,
        )
        self._emit(question, match, tier, attempts, elapsed_ms(t0))
        return result

    def _emit(
        self,
        question: str,
        match: MatchResult,
        tier: Tier,
        attempts: List[ProviderAttempt],
        latency_ms: int,
    ) -> None:
        outcome = QueryOutcome(
            questionHash=functions.hash_question(question),
            questionLength=len(question),
            questionType=functions.categorize_question(question),
            normalizedConfidence=match.confidence,
            matchedQuestionId=match.matched_question_id,
            category=match.category,
            chosenTier=tier,
            latencyMs=latency_ms,
            providerAttempts=attempts,
        )
        try:
            self._recorder.record(outcome)
        except Exception:
            logger.exception("outcome.record.error hash=%s", outcome.questionHash)
        logger.info(
            "ask.done hash=%s tier=%s conf=%.3f attempts=%d ms=%d",
            outcome.questionHash,
            tier.value,
            match.confidence,
            len(attempts),
            latency_ms,
        )
