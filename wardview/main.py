"""
app entry point

    uvicorn wardview.main:app --reload

builds the fastapi app, configures logging, seeds the stores on startup and
wires the error handlers. everything else lives in api/router.py.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from wardview.api.handlers import register_exception_handlers
from wardview.api.router import api_router
from wardview.core.config import settings
from wardview.core.logging_config import get_logger, setup_logging
from wardview.core.state import get_registry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = get_registry()
    logger.info("startup", app=settings.app_name, environment=settings.environment, **registry.record_counts())
    yield
    logger.info("shutdown", app=settings.app_name)


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
