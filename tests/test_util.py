# tests/test_util.py
import logging

import pytest

from util.functions import categorize_question, clip_chars, hash_question
from util.timing import timed


def test_hash_question_is_stable_and_case_insensitive():
    h = hash_question("When is the Final Exam?")
    assert h == hash_question("  when is the final exam?  ")
    assert len(h) == 16
    assert int(h, 16) >= 0


@pytest.mark.parametrize(
    "question, expected",
    [
        ("How is my grade calculated?", "grading"),
        ("When is the paper due?", "deadline"),
        ("Who is the professor?", "instructor"),
        ("What is the final project?", "assignment"),
        ("What is the attendance rule?", "policy"),
        ("Which textbook do I need?", "logistics"),
        ("What's your email?", "contact"),
        ("What's the weather like?", "other"),
    ],
)
def test_categorize_question(question, expected):
    assert categorize_question(question) == expected


def test_clip_chars_leaves_short_text_alone():
    assert clip_chars("short", 10) == "short"
    assert clip_chars("anything", 0) == "anything"


def test_clip_chars_cuts_at_word_boundary():
    assert clip_chars("alpha beta gamma delta", 14) == "alpha beta …"


def test_timed_logs_success(caplog):
    log = logging.getLogger("test.timed")
    with caplog.at_level(logging.INFO, logger="test.timed"):
        with timed(log, "corpus.load", path="qa.json"):
            pass
    [rec] = caplog.records
    assert rec.levelno == logging.INFO
    assert rec.getMessage().startswith("corpus.load.done ms=")
    assert "ok=true path=qa.json" in rec.getMessage()


def test_timed_logs_failure_and_reraises(caplog):
    log = logging.getLogger("test.timed")
    with caplog.at_level(logging.INFO, logger="test.timed"):
        with pytest.raises(RuntimeError):
            with timed(log, "ai.gemini"):
                raise RuntimeError("boom")
    [rec] = caplog.records
    assert rec.levelno == logging.WARNING
    assert "ok=false" in rec.getMessage()
