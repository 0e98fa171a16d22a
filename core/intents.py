# core/intents.py
"""
Category tables for the intent and category-bonus sub-scores.

Both tables are keyed by the corpus `category` tag. Patterns and indicators are
matched against the normalized query (lowercase, punctuation replaced by spaces),
so they are written without punctuation.
"""
import re
from typing import Final, Mapping, Pattern, Sequence


def _compile(*patterns: str) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


INTENT_PATTERNS: Final[Mapping[str, Sequence[Pattern[str]]]] = {
    "contact": _compile(
        r"who is (the )?(instructor|teacher|professor)",
        r"contact (info|information|details)",
        r"email|phone|office",
        r"(instructor|teacher|professor) (email|phone|contact)",
    ),
    "grade": _compile(
        r"how.*(grades?|grading).*(calculated|determined|done|work)",
        r"grading.*(scale|system|breakdown|policy)",
        r"what.*(grading|grade).*(policy|breakdown|scale|system)",
        r"what (percent|percentage).*(grade|grading)",
        r"(grade|grading).*(distribution|policy|breakdown)",
        r"grades?.*(calculated|determined|weighted)",
        r"grade.*breakdown",
        r"how.*graded",
        r"what.*grading",
    ),
    "deadline": _compile(
        r"when (are|is).*(due|deadline)",
        r"(due|deadline) (date|dates)",
        r"assignment.*(due|deadline)",
        r"when.*(submit|turn in)",
    ),
    "policy": _compile(
        r"late (work|assignment|submission) policy",
        r"(can i|is it possible).*(late|after)",
        r"what happens if.*(late|miss)",
        r"(makeup|make up).*(work|assignment|exam)",
    ),
    "logistics": _compile(
        r"(need|require).*(textbook|book|materials)",
        r"(where|how).*(find|access|get).*(materials|content)",
        r"what.*(technology|equipment|software)",
        r"(online|in person|hybrid|format)",
    ),
    "assignment": _compile(
        r"research (paper|project)",
        r"(midterm|final) (exam|test)",
        r"assignment.*(format|requirements|length)",
        r"(quiz|test|exam).*(when|how many)",
    ),
}


CATEGORY_INDICATORS: Final[Mapping[str, Sequence[str]]] = {
    "contact": ("email", "phone", "office", "instructor", "teacher", "professor", "contact"),
    "grade": (
        "grade", "grading", "graded", "percent", "percentage", "points",
        "score", "weighted", "breakdown", "calculated", "policy",
    ),
    "deadline": ("due", "deadline", "when", "submit", "turn in"),
    "policy": ("policy", "rule", "allowed", "permitted", "can i", "may i", "late"),
    "logistics": ("need", "require", "materials", "textbook", "technology", "equipment"),
    "assignment": ("assignment", "project", "paper", "exam", "quiz", "test", "midterm", "final"),
}


def matches_intent(category: str, normalized_query: str) -> bool:
    return any(p.search(normalized_query) for p in INTENT_PATTERNS.get(category, ()))


def mentions_category(category: str, normalized_query: str) -> bool:
    return any(word in normalized_query for word in CATEGORY_INDICATORS.get(category, ()))
