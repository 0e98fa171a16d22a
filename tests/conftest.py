# tests/conftest.py
import asyncio
from typing import List, Optional

import pytest

from core.orchestrator import FallbackOrchestrator
from core.profiles import COMPOSITE_V2
from model.corpus import Corpus, CourseInfo, QAEntry
from model.outcome import QueryOutcome, Tier
from util.errors import ProviderFailure


def make_entry(
    id: int,
    category: str,
    question: str,
    answer: str,
    keywords=(),
    alternates=(),
) -> QAEntry:
    return QAEntry(
        id=id,
        category=category,
        keywords=tuple(keywords),
        question=question,
        alternateQuestions=tuple(alternates),
        answer=answer,
    )


def make_outcome(
    tier: Tier = Tier.database,
    confidence: float = 0.5,
    latency_ms: int = 10,
    question_type: str = "other",
) -> QueryOutcome:
    return QueryOutcome(
        questionHash="0" * 16,
        questionLength=20,
        questionType=question_type,
        normalizedConfidence=confidence,
        category="grade",
        chosenTier=tier,
        latencyMs=latency_ms,
    )


class FakeProvider:
    """Completion provider that returns a canned reply or raises."""

    def __init__(
        self,
        name: str,
        reply: Optional[str] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        self._reply = reply
        self._error = error
        self._delay = delay
        self.calls: List[tuple] = []

    async def complete(self, grounding_text: str, question: str) -> str:
        self.calls.append((grounding_text, question))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._reply or ""


class FakeSource:
    def __init__(self, text: Optional[str] = "Syllabus: late work loses 10% per day.") -> None:
        self._text = text
        self.calls = 0

    async def fetch_grounding_document(self) -> Optional[str]:
        self.calls += 1
        return self._text


class ListRecorder:
    def __init__(self) -> None:
        self.outcomes: List[QueryOutcome] = []

    def record(self, outcome: QueryOutcome) -> None:
        self.outcomes.append(outcome)


class MemorySink:
    def __init__(self) -> None:
        self.items: List[QueryOutcome] = []

    async def append(self, outcome: QueryOutcome) -> None:
        self.items.append(outcome)

    async def all(self) -> List[QueryOutcome]:
        return list(self.items)


@pytest.fixture
def course_corpus() -> Corpus:
    """Small corpus; entry 2 is the grading entry used by the grading scenarios."""
    return Corpus(
        courseInfo=CourseInfo(
            courseName="Survey of Hawaiian Music",
            courseCode="MUS 176",
            semester="Fall",
            year="2025",
            instructor="Dr. Keola Donaghy",
        ),
        qaPairs=(
            make_entry(
                1,
                "contact",
                "Who is the instructor?",
                "Dr. Donaghy teaches this course.",
                keywords=["instructor", "email"],
                alternates=["How do I contact the professor?"],
            ),
            make_entry(
                2,
                "grade",
                "What is the late work policy?",
                "Grades: discussions 30%, quizzes 20%, paper 25%, final 25%.",
                keywords=["grading", "policy"],
            ),
            make_entry(
                3,
                "policy",
                "Can I turn in work late?",
                "Late work loses 10% per day.",
                keywords=["late", "work"],
                alternates=["What happens if I miss a deadline?"],
            ),
        ),
    )


@pytest.fixture
def recorder() -> ListRecorder:
    return ListRecorder()


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def make_orchestrator(course_corpus, source, recorder):
    def _make(
        primary: FakeProvider,
        secondary: FakeProvider,
        corpus: Optional[Corpus] = None,
        profile=COMPOSITE_V2,
        document_source=None,
        call_timeout: Optional[float] = None,
    ) -> FallbackOrchestrator:
        return FallbackOrchestrator(
            corpus=course_corpus if corpus is None else corpus,
            providers=[primary, secondary],
            document_source=document_source or source,
            recorder=recorder,
            profile=profile,
            disclaimer=" [DISCLAIMER]",
            call_timeout=call_timeout,
        )

    return _make


def failing(name: str) -> FakeProvider:
    return FakeProvider(name, error=ProviderFailure(name, "status:500"))
