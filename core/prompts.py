# core/prompts.py


def syllabus_user_message(grounding_text: str, question: str) -> str:
    """
    Build the user message for a completion tier: the syllabus first, then the
    student's question.
    """
    return f"Syllabus:\n{grounding_text}\n\nStudent's question:\n{question}\n\nYour answer:"
