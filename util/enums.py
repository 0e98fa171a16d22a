# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    NOT_READY = ErrorInfo(
        "Mr. Syllabus is initializing. Please try again in a moment.",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    INVALID_INPUT = ErrorInfo("Please provide a question.", status.HTTP_400_BAD_REQUEST)
    ANALYTICS_UNAVAILABLE = ErrorInfo(
        "Analytics store is unavailable.", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    INTERNAL_ERROR = ErrorInfo(
        "An error occurred while processing your request.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
