# service/syllabus_service.py
import logging
from typing import Optional
from config.settings import settings
from core.anthropic_client import AnthropicProvider
from core.gemini_client import GeminiProvider
from core.interfaces import OutcomeRecorder
from core.orchestrator import FallbackOrchestrator
from core.profiles import get_profile
from core.syllabus_source import GoogleDocSource
from model.api import AskResponse
from model.corpus import CourseInfo
from repository.corpus_repository import CorpusRepository
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)


class SyllabusService:
    """
    Caller-facing entry point. Without a loaded corpus the service is not
    ready and every question gets the "initializing" error.
    """

    def __init__(self, orchestrator: Optional[FallbackOrchestrator]) -> None:
        self._orchestrator = orchestrator

    @property
    def ready(self) -> bool:
        return self._orchestrator is not None

    async def ask(self, question: Optional[str]) -> AskResponse:
        if question is None or not question.strip():
            logger.info("ask.invalid reason=empty_question")
            raise AppError.of(ErrorMessage.INVALID_INPUT)
        if self._orchestrator is None:
            logger.warning("ask.not_ready")
            raise AppError.of(ErrorMessage.NOT_READY)

        try:
            result = await self._orchestrator.answer(question.strip())
        except Exception:
            logger.exception("ask.error")
            raise AppError.of(ErrorMessage.INTERNAL_ERROR)
        return AskResponse(
            answer=result.answer,
            confidence=result.confidence,
            category=result.category,
            source=result.source,
        )

    def course_info(self) -> CourseInfo:
        if self._orchestrator is None:
            raise AppError.of(ErrorMessage.NOT_READY)
        return self._orchestrator.corpus.courseInfo


def build_syllabus_service(recorder: OutcomeRecorder) -> SyllabusService:
    """Wire the production service from settings; corpus failures leave it not ready."""
    corpus = CorpusRepository(settings.CORPUS_PATH).load()
    if corpus is None:
        logger.error("service.not_ready corpus=%s", settings.CORPUS_PATH)
        return SyllabusService(None)

    profile = get_profile(settings.MATCHING_PROFILE, settings.CONFIDENCE_THRESHOLD)
    providers = [
        AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY),
        GeminiProvider(api_key=settings.GEMINI_API_KEY),
    ]
    source = GoogleDocSource(
        doc_id=settings.SYLLABUS_DOC_ID,
        access_token=settings.GOOGLE_DOCS_ACCESS_TOKEN,
    )
    # Hard ceiling per external call, covering the client's own retries.
    ceiling = settings.PROVIDER_TIMEOUT_SECONDS * (settings.PROVIDER_MAX_RETRIES + 1) + 5
    orchestrator = FallbackOrchestrator(
        corpus=corpus,
        providers=providers,
        document_source=source,
        recorder=recorder,
        profile=profile,
        call_timeout=ceiling,
    )
    logger.info(
        "service.ready pairs=%d profile=%s threshold=%.2f providers=%s",
        len(corpus.qaPairs),
        profile.name,
        profile.threshold,
        ",".join(p.name for p in providers),
    )
    return SyllabusService(orchestrator)
