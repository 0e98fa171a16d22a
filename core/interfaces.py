# core/interfaces.py
from typing import Optional, Protocol
from model.outcome import QueryOutcome


class CompletionProvider(Protocol):
    """A generative provider that answers strictly from a grounding text."""

    name: str

    async def complete(self, grounding_text: str, question: str) -> str: ...


class DocumentSource(Protocol):
    """Remote syllabus text; None means it is currently unavailable."""

    async def fetch_grounding_document(self) -> Optional[str]: ...


class OutcomeRecorder(Protocol):
    """Fire-and-forget receiver of per-query outcomes. Must not raise."""

    def record(self, outcome: QueryOutcome) -> None: ...


class OutcomeSink(Protocol):
    """Durable, append-only storage the recorder drains into."""

    async def append(self, outcome: QueryOutcome) -> None: ...
