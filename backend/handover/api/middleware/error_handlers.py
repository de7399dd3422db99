"""
Exception handlers

All failures leave the API as {"error": {"code", "message", "details"}} with
the request's X-Correlation-Id header, so the dashboard can show one error
shape and support can find the matching log lines.
"""
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.errors import DomainError
from ...utils.logger import get_logger, get_correlation_id

logger = get_logger(__name__)

_BODY_PREVIEW_CHARS = 500


def _send(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers={"X-Correlation-Id": get_correlation_id() or ""}
    )


def _respond(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    return _send(status_code, {"error": {"code": code, "message": message, "details": details or {}}})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Engine contract breaches (5xx) log at error, everything else at warning"""
    extra = {"error_code": exc.error_code, "path": request.url.path}
    if "project_id" in request.path_params:
        extra["project_id"] = request.path_params["project_id"]

    level = "error" if exc.http_status >= 500 else "warning"
    getattr(logger, level)(f"{exc.error_code}: {exc.message}", extra=extra)

    return _send(exc.http_status, exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and path/query parameters answer 400"""
    raw = await request.body()
    preview = raw.decode("utf-8", errors="replace")[:_BODY_PREVIEW_CHARS] if raw else "empty"
    logger.warning(
        f"Request validation failed on {request.method} {request.url.path}: {exc.errors()} body={preview}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path}
    )
    return _respond(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": exc.errors()},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store outages and bugs: full trace in the logs, generic 500 to the client"""
    logger.error(f"Unhandled {type(exc).__name__}: {exc}", extra={"path": request.url.path}, exc_info=True)
    return _respond(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        {"hint": "Check server logs for details"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
