"""Master API router mounted at the configured prefix."""

from fastapi import APIRouter

from caselink.api.routes import (
    auth,
    clients,
    connections,
    health,
    helper_ratings,
    orgs,
    users,
)
from caselink.config import settings

api_router = APIRouter(prefix=settings.api_prefix.rstrip("/"))
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router)
api_router.include_router(orgs.router)
api_router.include_router(clients.router)
api_router.include_router(users.router)
api_router.include_router(connections.router)
api_router.include_router(helper_ratings.router)
