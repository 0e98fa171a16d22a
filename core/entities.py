# core/entities.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SubScores:
    """Weighted contributions of one corpus entry; `total` is clamped to [0, 1]."""

    intent: float
    keyword: float
    semantic: float
    category: float

    @property
    def total(self) -> float:
        raw = self.intent + self.keyword + self.semantic + self.category
        return max(0.0, min(raw, 1.0))


@dataclass(frozen=True)
class MatchResult:
    answer: str
    confidence: float  # in [0, 1]
    category: str
    matched_question_id: Optional[int] = None


@dataclass(frozen=True)
class AnswerResult:
    answer: str
    confidence: float
    category: str
    source: str
