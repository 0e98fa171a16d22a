# core/matcher.py
import logging
from config.settings import settings
from core.entities import MatchResult
from core.normalizer import extract_keywords, normalize
from core.profiles import COMPOSITE_V2, ScoringProfile
from core.scorer import explain
from model.corpus import Corpus

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "fallback"


def empty_match() -> MatchResult:
    return MatchResult(
        answer=settings.EMPTY_CORPUS_ANSWER,
        confidence=0.0,
        category=FALLBACK_CATEGORY,
        matched_question_id=None,
    )


def select_best(
    query: str, corpus: Corpus, profile: ScoringProfile = COMPOSITE_V2
) -> MatchResult:
    """
    Score every corpus entry and return the highest. Only a strictly greater
    score replaces the current best, so ties go to the entry earlier in the
    corpus. Never raises; an empty corpus yields a zero-confidence fallback.
    """
    normalized = normalize(query)
    keywords = extract_keywords(normalized)

    best = None
    best_scores = None
    for entry in corpus.qaPairs:
        scores = explain(keywords, normalized, entry, profile)
        if best_scores is None or scores.total > best_scores.total:
            best, best_scores = entry, scores

    if best is None or best_scores is None:
        logger.info("match.empty_corpus")
        return empty_match()

    logger.debug(
        "match.best id=%d conf=%.3f intent=%.2f keyword=%.2f semantic=%.2f category=%.2f",
        best.id,
        best_scores.total,
        best_scores.intent,
        best_scores.keyword,
        best_scores.semantic,
        best_scores.category,
    )
    return MatchResult(
        answer=best.answer,
        confidence=best_scores.total,
        category=best.category,
        matched_question_id=best.id,
    )
