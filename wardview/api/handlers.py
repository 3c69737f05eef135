from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wardview.core.errors import BatchLoadError, InvalidRecordError, RecordNotFoundError, RegistrationError
from wardview.core.logging_config import get_logger

logger = get_logger(__name__)


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def batch_load_handler(request: Request, exc: BatchLoadError) -> JSONResponse:
    # the page gets a generic failure plus a retry hint, never partial data
    logger.error("batch_load_failed", view=exc.view, cause=repr(exc.cause), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "retry": True},
    )


async def registration_handler(request: Request, exc: RegistrationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "errors": exc.errors},
    )


async def invalid_record_handler(request: Request, exc: InvalidRecordError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "errors": exc.errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(BatchLoadError, batch_load_handler)
    app.add_exception_handler(RegistrationError, registration_handler)
    app.add_exception_handler(InvalidRecordError, invalid_record_handler)
