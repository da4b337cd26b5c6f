from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional, Sequence
import logging

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import TvtError, ValidationError
from app.schemas.response import ErrorResponse

logger = logging.getLogger(__name__)

MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def error_response(exc: TvtError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            code=exc.code,
            details=exc.details
        ).model_dump()
    )


def summarize_validation_errors(errors: Sequence[Dict[str, Any]]) -> ValidationError:
    """
    Turns pydantic's error list into a 400 ValidationError.

    The message names the offending fields, e.g. "amount required".
    Raw inputs are left out of the details; they can hold a whole screenshot.
    """
    missing: List[str] = []
    invalid: List[str] = []
    details = []

    for err in errors:
        if err.get("type") == "json_invalid":
            return ValidationError(
                "Invalid JSON body",
                details=[{"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": "json_invalid"}]
            )

        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = loc[0] if loc else None
        details.append({"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")})

        if field is None:
            continue
        target = missing if err.get("type") in MISSING_ERROR_TYPES else invalid
        if field not in target:
            target.append(field)

    parts = []
    if missing:
        parts.append(f"{', '.join(missing)} required")
    if invalid:
        parts.append(f"invalid value for {', '.join(invalid)}")

    message = "; ".join(parts) if parts else "Request body required"
    return ValidationError(message, details=details)


def add_exception_handlers(app: FastAPI, config: Optional[Settings] = None):
    """
    Registers exception handlers with the FastAPI app.
    """
    config = config or default_settings

    @app.exception_handler(TvtError)
    async def tvt_exception_handler(request: Request, exc: TvtError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.code}: {exc.message}",
                extra={"method": request.method, "route": request.url.path}
            )
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                code="HTTP_ERROR",
                details=None
            ).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Missing or empty body fields are a 400, matching the register and
        payment-proof contracts.
        """
        return error_response(summarize_validation_errors(exc.errors()))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "route": request.url.path,
            },
            exc_info=True
        )

        message = "An internal error occurred. Please try again later." if config.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=message,
                code="INTERNAL_ERROR",
                details=None
            ).model_dump()
        )
