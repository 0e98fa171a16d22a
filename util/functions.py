# util/functions.py
import hashlib


def clip_chars(text: str, max_chars: int) -> str:
    """
    - Trim 'text' to at most `max_chars` characters, cutting at the last whitespace.
    - Adds an ellipsis when trimming occurs.
    """
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    space = cut.rfind(" ")
    if space > max_chars // 2:
        cut = cut[:space]
    return cut + " …"


def hash_question(question: str) -> str:
    # Anonymized, stable key for pattern analysis without storing the question.
    digest = hashlib.sha256(question.lower().strip().encode("utf-8")).hexdigest()
    return digest[:16]


def categorize_question(question: str) -> str:
    q = question.lower()
    if "grade" in q or "grading" in q:
        return "grading"
    if "due" in q or "deadline" in q:
        return "deadline"
    if "instructor" in q or "teacher" in q or "professor" in q:
        return "instructor"
    if "assignment" in q or "project" in q:
        return "assignment"
    if "policy" in q or "rule" in q:
        return "policy"
    if "textbook" in q or "materials" in q:
        return "logistics"
    if "email" in q or "contact" in q or "phone" in q:
        return "contact"
    return "other"
