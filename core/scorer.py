# core/scorer.py
from typing import Sequence
from core.entities import SubScores
from core.intents import matches_intent, mentions_category
from core.normalizer import normalize
from core.profiles import COMPOSITE_V2, ScoringProfile
from model.corpus import QAEntry

ALTERNATE_CREDIT = 0.5
_ZERO = SubScores(intent=0.0, keyword=0.0, semantic=0.0, category=0.0)


def intent_score(normalized_query: str, entry: QAEntry) -> float:
    return 1.0 if matches_intent(entry.category, normalized_query) else 0.0


def keyword_score(normalized_query: str, keywords: Sequence[str]) -> float:
    """Fraction of the entry's keywords found inside the query."""
    if not keywords:
        return 0.0
    matches = 0
    for keyword in keywords:
        needle = normalize(keyword)
        if needle and needle in normalized_query:
            matches += 1
    return matches / len(keywords)


def semantic_score(query_keywords: Sequence[str], entry: QAEntry) -> float:
    """
    Fraction of query keywords found in the entry's question; a keyword found
    only in one of the alternate phrasings earns partial credit.
    """
    if not query_keywords:
        return 0.0
    question = normalize(entry.question)
    alternates = [normalize(alt) for alt in entry.alternateQuestions]
    credit = 0.0
    for word in query_keywords:
        if word in question:
            credit += 1.0
        elif any(word in alt for alt in alternates):
            credit += ALTERNATE_CREDIT
    return credit / len(query_keywords)


def category_bonus(normalized_query: str, entry: QAEntry) -> float:
    return 1.0 if mentions_category(entry.category, normalized_query) else 0.0


def explain(
    query_keywords: Sequence[str],
    normalized_query: str,
    entry: QAEntry,
    profile: ScoringProfile = COMPOSITE_V2,
) -> SubScores:
    """Weighted sub-scores of `entry` against an already-normalized query."""
    if not query_keywords:
        return _ZERO
    return SubScores(
        intent=profile.intent * intent_score(normalized_query, entry),
        keyword=profile.keyword * keyword_score(normalized_query, entry.keywords),
        semantic=profile.semantic * semantic_score(query_keywords, entry),
        category=profile.category * category_bonus(normalized_query, entry),
    )


def score(
    query_keywords: Sequence[str],
    normalized_query: str,
    entry: QAEntry,
    profile: ScoringProfile = COMPOSITE_V2,
) -> float:
    return explain(query_keywords, normalized_query, entry, profile).total
