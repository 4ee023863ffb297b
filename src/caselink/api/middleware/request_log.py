"""Per-request access logging."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from caselink.logging_config import bind_request_context, clear_request_context

logger = logging.getLogger("caselink.http")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency once per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        bind_request_context(getattr(request.state, "trace_id", "unknown"))
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                extra={"method": request.method, "path": request.url.path},
            )
            clear_request_context()
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s %s %sms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        clear_request_context()
        return response
