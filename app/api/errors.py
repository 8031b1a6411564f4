"""Render AppError subclasses and request validation failures as JSON responses without leaking internals."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import AppError, InvalidInputError, StoreFailureError

logger = logging.getLogger(__name__)


def app_error_response(exc: AppError) -> JSONResponse:
    """JSON body {"detail", "code"}; 401s also advertise the Bearer scheme."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StoreFailureError):
        logger.error(
            "Store failure handling %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
    elif exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        logger.info(
            "Access denied: %s",
            exc.code,
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
    return app_error_response(exc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are 400 invalid_input, naming the first bad field."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "request"
        detail = f"Field '{field}': {first.get('msg', 'Validation failed')}"
    else:
        detail = "Request validation failed"
    logger.info("Invalid request", extra={"path": request.url.path, "detail": detail})
    return app_error_response(InvalidInputError(detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
