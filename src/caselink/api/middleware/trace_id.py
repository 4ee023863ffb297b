"""Trace ID middleware: every response carries the id its error body and logs use."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-Id"


def new_trace_id() -> str:
    return f"trc_{uuid.uuid4().hex[:16]}"


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Reuse an incoming X-Trace-Id (or X-Request-Id) or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = (
            request.headers.get("x-trace-id")
            or request.headers.get("x-request-id")
            or new_trace_id()
        )
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers[TRACE_HEADER] = trace_id
        return response
