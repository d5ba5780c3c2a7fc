"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses (SRP, OCP for adding new handlers).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import DocflowException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status. Failed transition guards are 400 on the wire.
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "STATE_CONFLICT": 400,
    "AUTHENTICATION_ERROR": 401,
    "INVALID_OFFICE_SESSION": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "STORAGE_FAILURE": 503,
}

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


def _status_for(error_code: str) -> int:
    """Mapped status; file storage errors (STORAGE_*) not listed are 500."""
    if error_code in _ERROR_CODE_STATUS:
        return _ERROR_CODE_STATUS[error_code]
    if error_code.startswith("STORAGE_"):
        return 500
    return 400


def _docflow_exception_handler(
    request: Request, exc: DocflowException
) -> JSONResponse:
    """Return JSON from DocflowException.to_dict() with the mapped status code."""
    status = _status_for(exc.error_code)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
        headers=_UNAUTHORIZED_HEADERS if exc.error_code == "AUTHENTICATION_ERROR" else None,
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic error list with non-JSON ctx values (e.g. exceptions) stringified."""
    errors = []
    for err in exc.errors():
        item = dict(err)
        if "ctx" in item:
            item["ctx"] = {k: str(v) for k, v in item["ctx"].items()}
        item.pop("input", None)
        errors.append(item)
    return errors


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Entity store errors are fatal for the request: 500, never retried."""
    logger.exception("Entity store error: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Storage error"
    return JSONResponse(
        status_code=500,
        content={"error": "STORAGE_ERROR", "message": detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: DocflowException (and
    subclasses), RequestValidationError, StarletteHTTPException,
    SQLAlchemyError, generic Exception.
    """
    app.add_exception_handler(DocflowException, _docflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _storage_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
