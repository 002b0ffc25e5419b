"""Error Handlers — global exception handlers for the storefront API.

Invariants:
    - StorefrontError → flat {"error": ...} JSON with the error's own status
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (StorefrontError), validation (Pydantic), catch-all (Exception)
    - Flat body shape everywhere so the storefront script reads data.error uniformly
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from storefront.core.errors import ErrorSeverity, PaymentProviderError, StorefrontError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_storefront_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def log_storefront_error(exc: StorefrontError, path: str | None) -> None:
    """Client mistakes log at WARNING, everything else at ERROR."""
    level = (
        logging.WARNING
        if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
        else logging.ERROR
    )
    extra = {
        "error_code": exc.code,
        "path": path,
        "status_code": exc.http_status,
        "sku_count": exc.context.sku_count,
    }
    if isinstance(exc, PaymentProviderError):
        extra["provider_error_type"] = exc.provider_type
        extra["provider_error_code"] = exc.provider_code
    logger.log(level, f"StorefrontError: {exc.message}", extra=extra)


def _register_storefront_error_handler(app: FastAPI) -> None:
    """Register storefront domain/infrastructure error handler."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        log_storefront_error(exc, request.url.path)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": "Invalid request data",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
