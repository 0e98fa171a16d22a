# core/normalizer.py
import re
from functools import lru_cache
from typing import Final, List

_NON_ALNUM = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")

MIN_KEYWORD_LEN: Final[int] = 3

STOP_WORDS: Final[frozenset[str]] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "will", "with", "what", "when", "where", "who", "why",
        "how", "do", "does", "did", "can", "could", "should", "would",
        "i", "me", "my", "we", "us", "our", "you", "your",
    }
)


@lru_cache(maxsize=4096)
def normalize(text: str) -> str:
    """
    Lowercase, turn every non-alphanumeric, non-whitespace character into a
    space, collapse whitespace runs and trim. Idempotent.
    """
    lowered = text.lower()
    spaced = _NON_ALNUM.sub(" ", lowered)
    return _WHITESPACE.sub(" ", spaced).strip()


def extract_keywords(normalized_text: str) -> List[str]:
    """Significant words of an already-normalized text, in order of appearance."""
    return [
        word
        for word in normalized_text.split()
        if len(word) >= MIN_KEYWORD_LEN and word not in STOP_WORDS
    ]
