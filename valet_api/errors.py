"""
Domain exceptions and the JSON error envelope.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"success": false, "error": <code>, "message": <text>, ...}``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code = 500
    default_code = "internal_error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        return {"success": False, "error": self.code, "message": self.message, **self.details}


class ValidationError(DomainException):
    """Missing or malformed input on a write operation."""

    status_code = 400
    default_code = "validation_error"


class NotFoundError(DomainException):
    """Referenced valet, booking, rota or settings row does not exist."""

    status_code = 404
    default_code = "not_found"


class CapacityExceeded(DomainException):
    """Booking would push a valet past their daily quota."""

    status_code = 409
    default_code = "capacity_exceeded"


class ConfigurationMissing(DomainException):
    """Global slot settings are absent, so no availability can be computed."""

    status_code = 500
    default_code = "configuration_missing"


class StoreError(DomainException):
    """Underlying data-access failure."""

    status_code = 500
    default_code = "store_error"


def _error_response(exc: DomainException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


def _describe_validation_errors(exc: RequestValidationError) -> list[dict]:
    described = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        described.append({"field": ".".join(location), "message": error.get("msg", "")})
    return described


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report pydantic 422s as 400 validation errors in the envelope."""
        errors = _describe_validation_errors(exc)
        missing = any(error.get("type") == "missing" for error in exc.errors())
        message = "Missing required fields" if missing else "Invalid request"
        logger.warning(f"Validation error for {request.url.path}: {errors}")
        return _error_response(ValidationError(message, details={"errors": errors}))

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"❌ Database error on {request.method} {request.url.path}: {exc}")
        return _error_response(StoreError(str(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": code, "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
        return _error_response(DomainException("Internal server error"))
