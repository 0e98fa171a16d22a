# main.py
import logging
import routes
from contextlib import asynccontextmanager
from util.constants import InternalURIs
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, ping_redis
from model.api import HealthResponse
from repository.outcome_repository import OutcomeRepository
from service.event_recorder import EventRecorder
from service.syllabus_service import build_syllabus_service
from util.logger import init_logger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Initializing...{Color.RESET}")

    if not await ping_redis():
        # Outcomes are still queued; writes fail and are dropped until Redis is back.
        logger.error("startup.redis.unreachable url=%s", settings.REDIS_URL)

    recorder = EventRecorder(OutcomeRepository(), maxsize=settings.EVENT_QUEUE_SIZE)
    recorder.start()
    fastApi.state.syllabus_service = build_syllabus_service(recorder)
    print(f"{Color.BLUE}Server Started{Color.RESET}")

    try:
        yield
    finally:
        await recorder.stop()
        try:
            await close_redis()
        except Exception as e:
            logger.error("shutdown.redis.close_error err=%s", type(e).__name__)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,  # Allow cookies and other credentials
    allow_methods=["GET", "POST"],  # Allowed HTTP Methods
    allow_headers=["Authorization", "Content-Type", "Accept"],  # Allowed HTTP Headers
)


@app.get(InternalURIs.HEALTHZ, response_model=HealthResponse)
async def healthz(request: Request) -> HealthResponse:
    service = getattr(request.app.state, "syllabus_service", None)
    return HealthResponse(ok=True, ready=bool(service and service.ready))


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
