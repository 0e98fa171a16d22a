# tests/test_orchestrator.py
import pytest

from conftest import FakeProvider, FakeSource, failing
from config.settings import settings
from core.matcher import select_best
from core.orchestrator import FallbackOrchestrator
from core.profiles import get_profile
from model.corpus import Corpus
from model.outcome import Tier


LOW_QUERY = "Tell me about the weather in Hawaii"


@pytest.mark.asyncio
async def test_confident_match_answers_from_database(make_orchestrator, recorder):
    primary, secondary = FakeProvider("anthropic", "x"), FakeProvider("gemini", "y")
    orch = make_orchestrator(primary, secondary)

    result = await orch.answer("What is the grading policy?")

    assert result.source == "database"
    assert result.confidence >= 0.25
    assert result.category == "grade"
    assert result.answer.startswith("Grades:")
    assert primary.calls == [] and secondary.calls == []
    assert len(recorder.outcomes) == 1
    assert recorder.outcomes[0].chosenTier is Tier.database
    assert recorder.outcomes[0].providerAttempts == []
    assert recorder.outcomes[0].matchedQuestionId == 2


@pytest.mark.asyncio
async def test_confidence_equal_to_threshold_stays_in_database(
    make_orchestrator, course_corpus
):
    query = "Is late work accepted?"
    exact = select_best(query, course_corpus).confidence
    assert 0 < exact < 1
    primary = FakeProvider("anthropic", "from provider")
    orch = make_orchestrator(
        primary, FakeProvider("gemini", "y"), profile=get_profile("composite-v2", exact)
    )

    result = await orch.answer(query)

    assert result.source == "database"
    assert primary.calls == []


@pytest.mark.asyncio
async def test_confidence_just_below_threshold_escalates(make_orchestrator, course_corpus):
    query = "Is late work accepted?"
    exact = select_best(query, course_corpus).confidence
    orch = make_orchestrator(
        FakeProvider("anthropic", "from provider"),
        FakeProvider("gemini", "y"),
        profile=get_profile("composite-v2", min(1.0, exact + 1e-9)),
    )

    result = await orch.answer(query)

    assert result.source == "provider_primary"
    assert result.answer == "from provider"


@pytest.mark.asyncio
async def test_low_confidence_uses_primary_provider_with_grounding(
    make_orchestrator, source, recorder
):
    primary = FakeProvider("anthropic", "  Not in the syllabus.  ")
    secondary = FakeProvider("gemini", "unused")
    orch = make_orchestrator(primary, secondary)

    result = await orch.answer(LOW_QUERY)

    assert result.source == "provider_primary"
    assert result.answer == "Not in the syllabus."
    assert result.confidence < 0.25
    assert primary.calls == [("Syllabus: late work loses 10% per day.", LOW_QUERY)]
    assert secondary.calls == []
    assert source.calls == 1
    [outcome] = recorder.outcomes
    assert outcome.chosenTier is Tier.provider_primary
    assert [(a.provider, a.succeeded) for a in outcome.providerAttempts] == [
        ("anthropic", True)
    ]


@pytest.mark.asyncio
async def test_all_tiers_failing_returns_database_answer_with_disclaimer(
    make_orchestrator, recorder
):
    orch = make_orchestrator(failing("anthropic"), failing("gemini"))

    result = await orch.answer(LOW_QUERY)

    assert result.source == "database_fallback"
    assert result.answer == "Dr. Donaghy teaches this course. [DISCLAIMER]"
    assert result.confidence < orch.threshold
    assert result.category == "contact"
    [outcome] = recorder.outcomes
    assert outcome.chosenTier is Tier.disclaimer_fallback
    assert [a.succeeded for a in outcome.providerAttempts] == [False, False]
    assert outcome.providerAttempts[0].error == "status:500"


@pytest.mark.asyncio
async def test_primary_throws_secondary_succeeds(make_orchestrator, recorder):
    primary = FakeProvider("anthropic", error=RuntimeError("boom"))
    secondary = FakeProvider("gemini", "Gemini answer")
    orch = make_orchestrator(primary, secondary)

    result = await orch.answer(LOW_QUERY)

    assert result.source == "provider_secondary"
    assert result.answer == "Gemini answer"
    assert len(primary.calls) == 1
    assert len(secondary.calls) == 1
    assert len(recorder.outcomes) == 1
    attempts = recorder.outcomes[0].providerAttempts
    assert [(a.provider, a.succeeded) for a in attempts] == [
        ("anthropic", False),
        ("gemini", True),
    ]
    assert attempts[0].error == "unexpected:RuntimeError"


@pytest.mark.asyncio
async def test_empty_provider_reply_counts_as_failure(make_orchestrator):
    orch = make_orchestrator(FakeProvider("anthropic", "   "), FakeProvider("gemini", "ok"))
    result = await orch.answer(LOW_QUERY)
    assert result.source == "provider_secondary"


@pytest.mark.asyncio
async def test_grounding_unavailable_skips_provider_calls(make_orchestrator, recorder):
    primary, secondary = FakeProvider("anthropic", "x"), FakeProvider("gemini", "y")
    orch = make_orchestrator(primary, secondary, document_source=FakeSource(None))

    result = await orch.answer(LOW_QUERY)

    assert result.source == "database_fallback"
    assert primary.calls == [] and secondary.calls == []
    errors = [a.error for a in recorder.outcomes[0].providerAttempts]
    assert errors == ["grounding_unavailable", "grounding_unavailable"]


@pytest.mark.asyncio
async def test_slow_provider_times_out_and_falls_through(make_orchestrator, recorder):
    slow = FakeProvider("anthropic", "late", delay=1.0)
    orch = make_orchestrator(slow, FakeProvider("gemini", "quick"), call_timeout=0.05)

    result = await orch.answer(LOW_QUERY)

    assert result.source == "provider_secondary"
    assert recorder.outcomes[0].providerAttempts[0].error == "timeout"


@pytest.mark.asyncio
async def test_empty_corpus_answers_with_zero_confidence_and_escalates(
    make_orchestrator, recorder
):
    primary = failing("anthropic")
    secondary = failing("gemini")
    orch = make_orchestrator(primary, secondary, corpus=Corpus())

    result = await orch.answer("What is the grading policy?")

    assert result.confidence == 0.0
    assert result.source == "database_fallback"
    assert result.answer == settings.EMPTY_CORPUS_ANSWER + " [DISCLAIMER]"
    assert len(primary.calls) == 1 and len(secondary.calls) == 1
    assert recorder.outcomes[0].matchedQuestionId is None


@pytest.mark.asyncio
async def test_empty_corpus_can_still_be_answered_by_a_provider(make_orchestrator):
    orch = make_orchestrator(
        FakeProvider("anthropic", "From the live syllabus"),
        failing("gemini"),
        corpus=Corpus(),
    )
    result = await orch.answer("What is the grading policy?")
    assert result.source == "provider_primary"
    assert result.confidence == 0.0


@pytest.mark.asyncio
async def test_recorder_failure_does_not_affect_answer(course_corpus, source):
    class ExplodingRecorder:
        def record(self, outcome):
            raise RuntimeError("sink down")

    orch = FallbackOrchestrator(
        corpus=course_corpus,
        providers=[failing("anthropic"), failing("gemini")],
        document_source=source,
        recorder=ExplodingRecorder(),
    )
    result = await orch.answer("What is the grading policy?")
    assert result.source == "database"


@pytest.mark.asyncio
async def test_outcome_never_contains_raw_question(make_orchestrator, recorder):
    orch = make_orchestrator(failing("anthropic"), failing("gemini"))
    await orch.answer("What is the grading policy?")
    dumped = recorder.outcomes[0].model_dump_json()
    assert "grading policy" not in dumped
    assert recorder.outcomes[0].questionType == "grading"
    assert len(recorder.outcomes[0].questionHash) == 16


def test_requires_exactly_two_providers(course_corpus, source, recorder):
    with pytest.raises(ValueError):
        FallbackOrchestrator(
            corpus=course_corpus,
            providers=[failing("anthropic")],
            document_source=source,
            recorder=recorder,
        )
