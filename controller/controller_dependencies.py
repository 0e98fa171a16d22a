# controller/controller_dependencies.py
from fastapi import Request
from repository.outcome_repository import OutcomeRepository
from service.analytics_service import AnalyticsService
from service.syllabus_service import SyllabusService

_NOT_READY = SyllabusService(None)


def get_syllabus_service(request: Request) -> SyllabusService:
    # Built once in the app lifespan; before that the service reports not ready.
    return getattr(request.app.state, "syllabus_service", None) or _NOT_READY


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService(OutcomeRepository())
