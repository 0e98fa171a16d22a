# controller/ask_controller.py
from fastapi import APIRouter, Depends, status
from controller.controller_dependencies import get_syllabus_service
from model.api import AskRequest, AskResponse
from model.corpus import CourseInfo
from service.syllabus_service import SyllabusService
from util.constants import InternalURIs

ask_router = APIRouter()


@ask_router.post(
    InternalURIs.ASK,
    response_model=AskResponse,
    status_code=status.HTTP_200_OK,
)
async def ask(
    payload: AskRequest,
    service: SyllabusService = Depends(get_syllabus_service),
) -> AskResponse:
    return await service.ask(payload.question)


@ask_router.get(InternalURIs.COURSE_INFO, response_model=CourseInfo)
async def course_info(
    service: SyllabusService = Depends(get_syllabus_service),
) -> CourseInfo:
    return service.course_info()
