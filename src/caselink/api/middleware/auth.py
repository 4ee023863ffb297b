"""Bearer token authentication middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from caselink.config import settings
from caselink.logging_config import bind_request_context

logger = logging.getLogger(__name__)

_ANONYMOUS = {"sub": "anonymous"}


def _public_paths() -> set[str]:
    prefix = settings.api_prefix.rstrip("/")
    return {
        f"{prefix}/health",
        f"{prefix}/auth/login",
        "/docs",
        "/openapi.json",
        "/redoc",
    }


def parse_bearer_token(header: str) -> str | None:
    if not header.startswith("Bearer "):
        return None
    return header[7:].strip() or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the opaque Bearer token to a user id and attach it to request.state.

    Routes enforce authentication through ``get_current_user``; this layer
    never rejects a request itself.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        request.state.token = None

        if path in _public_paths() or path.startswith("/docs") or path.startswith("/redoc"):
            request.state.user = dict(_ANONYMOUS)
            return await call_next(request)

        token = parse_bearer_token(request.headers.get("authorization", ""))
        if token is None:
            user_info = dict(_ANONYMOUS)
        else:
            request.state.token = token
            user_info = await self._resolve_token(token, request)

        request.state.user = user_info
        if user_info.get("sub") not in (None, "", "anonymous"):
            bind_request_context(getattr(request.state, "trace_id", "unknown"), user_info["sub"])
        return await call_next(request)

    async def _resolve_token(self, token: str, request: Request) -> dict:
        session_factory = getattr(request.app.state, "db_session_factory", None)
        if not session_factory:
            return {**_ANONYMOUS, "_auth_error": "Invalid or expired token"}

        from caselink.repositories.user_repo import AuthTokenRepository

        async with session_factory() as session:
            user_id = await AuthTokenRepository(session).resolve(token)

        if not user_id:
            logger.debug("Unknown bearer token presented")
            return {**_ANONYMOUS, "_auth_error": "Invalid or expired token"}
        return {"sub": user_id}
