# core/exceptions.py
"""
Application-wide exception handlers.

Anything a controller did not turn into an ``HTTPException`` ends up here:
integrity violations become a 400, everything else a logged 500.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from core.logging_config import get_logger

logger = get_logger(__name__)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error in %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=400,
        content={"detail": "A record with this information already exists"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
