# util/errors.py
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, error: ErrorMessage) -> "AppError":
        return cls(error.value.message, error.value.http_status)


class ProviderFailure(Exception):
    """
    A fallback tier could not produce an answer (transport, timeout, quota,
    malformed response, missing credentials). Caught by the orchestrator only.
    """

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class GroundingUnavailable(ProviderFailure):
    """The syllabus document could not be fetched for a tier."""

    def __init__(self, reason: str, provider: str = "syllabus_doc") -> None:
        super().__init__(provider, reason)
