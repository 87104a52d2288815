import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bms_notifications.config import get_settings
from bms_notifications.infrastructure.database import engine, initialize_database
from bms_notifications.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the notification tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the FastAPI application exposing the notification endpoints."""

    logging.basicConfig(level=get_settings().log_level.upper())

    app = FastAPI(title="BMS Notifications", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
