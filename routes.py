# routes.py
from fastapi import FastAPI
from controller.analytics_controller import analytics_router
from controller.ask_controller import ask_router


def register_routes(app: FastAPI) -> None:
    """Register controllers here."""
    app.include_router(ask_router)
    app.include_router(analytics_router)
