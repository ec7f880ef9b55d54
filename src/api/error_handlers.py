"""Global exception handlers.

Domain errors become ``{"detail": ..., "code": ...}`` with their status;
unparseable request bodies become a 400; anything else is a 500 that
never leaks internal details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.errors import InternalError, MenuAPIError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(MenuAPIError)
    async def menu_error_handler(request: Request, exc: MenuAPIError):
        if isinstance(exc, InternalError):
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
        return JSONResponse(status_code=exc.http_status, content=exc.to_response(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request data", "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
        )
