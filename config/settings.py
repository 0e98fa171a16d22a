# config/settings.py
import os
import sys
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.constants import ExternalURIs
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")

    # Corpus
    CORPUS_PATH: str = Field(default="qa-database.json", validation_alias="CORPUS_PATH")

    # Matching
    MATCHING_PROFILE: str = Field(
        default="composite-v2", validation_alias="MATCHING_PROFILE"
    )
    CONFIDENCE_THRESHOLD: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, validation_alias="CONFIDENCE_THRESHOLD"
    )

    # Anthropic Settings (primary tier)
    ANTHROPIC_API_KEY: Optional[str] = Field(
        default=None, validation_alias="ANTHROPIC_API_KEY"
    )
    ANTHROPIC_API_URL: str = Field(
        default=ExternalURIs.ANTHROPIC_MESSAGES, validation_alias="ANTHROPIC_API_URL"
    )
    ANTHROPIC_MODEL: str = Field(
        default="claude-3-haiku-20240307", validation_alias="ANTHROPIC_MODEL"
    )
    ANTHROPIC_VERSION: str = Field(
        default="2023-06-01", validation_alias="ANTHROPIC_VERSION"
    )
    ANTHROPIC_MAX_TOKENS: int = Field(default=500, validation_alias="ANTHROPIC_MAX_TOKENS")

    # Gemini Settings (secondary tier)
    GEMINI_API_KEY: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")
    GEMINI_API_URL: str = Field(
        default=ExternalURIs.GEMINI_GENERATE, validation_alias="GEMINI_API_URL"
    )
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash", validation_alias="GEMINI_MODEL")
    GEMINI_MAX_TOKENS: int = Field(default=500, validation_alias="GEMINI_MAX_TOKENS")

    # Provider transport
    PROVIDER_TIMEOUT_SECONDS: float = Field(
        default=45.0, gt=0, validation_alias="PROVIDER_TIMEOUT_SECONDS"
    )
    PROVIDER_MAX_RETRIES: int = Field(
        default=2, ge=0, le=2, validation_alias="PROVIDER_MAX_RETRIES"
    )

    # Grounding document (live syllabus)
    SYLLABUS_DOC_ID: Optional[str] = Field(default=None, validation_alias="SYLLABUS_DOC_ID")
    SYLLABUS_DOC_EXPORT_URL: str = Field(
        default=ExternalURIs.GOOGLE_DOC_EXPORT, validation_alias="SYLLABUS_DOC_EXPORT_URL"
    )
    SYLLABUS_DOCS_API_URL: str = Field(
        default=ExternalURIs.GOOGLE_DOCS_API, validation_alias="SYLLABUS_DOCS_API_URL"
    )
    GOOGLE_DOCS_ACCESS_TOKEN: Optional[str] = Field(
        default=None, validation_alias="GOOGLE_DOCS_ACCESS_TOKEN"
    )
    GROUNDING_MAX_CHARS: int = Field(default=60_000, validation_alias="GROUNDING_MAX_CHARS")

    # Event sink
    REDIS_URL: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    REDIS_SOCKET_TIMEOUT_SECONDS: float = Field(
        default=2.0, gt=0, validation_alias="REDIS_SOCKET_TIMEOUT_SECONDS"
    )
    OUTCOME_LOG_MAX_ENTRIES: int = Field(
        default=1000, gt=0, validation_alias="OUTCOME_LOG_MAX_ENTRIES"
    )
    EVENT_QUEUE_SIZE: int = Field(default=256, gt=0, validation_alias="EVENT_QUEUE_SIZE")

    # Logging knobs
    LOGGER_NAME: str = "mr-syllabus"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    # Prompts & canned answers
    SYLLABUS_SYSTEM_PROMPT: str = (
        "You are Mr. Syllabus, a helpful assistant for students in this course. "
        "Answer the student's question based ONLY on the syllabus text you are given.\n"
        "\n"
        "Rules:\n"
        "- Do not use outside knowledge or guess at course details.\n"
        "- If the answer is not in the syllabus, say plainly that the syllabus does not "
        "contain that information and suggest contacting the instructor.\n"
        "- Keep the answer short and friendly; plain text, no markdown headings.\n"
    )
    DISCLAIMER_SUFFIX: str = (
        "\n\n(Note: I couldn't reach the live syllabus right now, so this answer comes "
        "from my saved course notes and may not fully match your question. Please check "
        "the syllabus or contact your instructor to confirm.)"
    )
    EMPTY_CORPUS_ANSWER: str = (
        "I couldn't find specific information about that in the syllabus. Please check "
        "the complete syllabus or contact your instructor for clarification."
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
