"""Request tagging: correlation id propagation and one access log line per request"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ...utils.logger import get_logger, set_correlation_id
from ...utils.idgen import generate_correlation_id

logger = get_logger(__name__)

HEADER = "X-Correlation-Id"
UNLOGGED_PATHS = frozenset({"/health"})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Reuse the caller's X-Correlation-Id (or mint one), bind it to the logging
    context for the request, echo it back and log status and duration.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(HEADER) or generate_correlation_id()
        set_correlation_id(correlation_id)

        started = time.perf_counter()
        response = await call_next(request)
        response.headers[HEADER] = correlation_id

        path = request.url.path
        if path not in UNLOGGED_PATHS:
            logger.info(
                f"{request.method} {path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                }
            )
        return response
