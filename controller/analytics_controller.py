# controller/analytics_controller.py
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_analytics_service
from model.api import AnalyticsResponse
from service.analytics_service import AnalyticsService
from util.constants import InternalURIs

analytics_router = APIRouter()


@analytics_router.get(InternalURIs.ANALYTICS, response_model=AnalyticsResponse)
async def analytics(
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsResponse:
    return await service.report()
