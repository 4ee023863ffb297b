"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from caselink.config import APP_VERSION, settings
from caselink.db.engine import create_all, create_db_engine, create_session_factory
from caselink.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    engine = create_db_engine()
    await create_all(engine)
    session_factory = create_session_factory(engine)

    if settings.seed_demo_data:
        from caselink.services.seed import seed_demo_data

        async with session_factory() as seed_session:
            if await seed_demo_data(seed_session):
                await seed_session.commit()

    app.state.db_engine = engine
    app.state.db_session_factory = session_factory

    logger.info("CaseLink API started (db=%s)", "sqlite" if settings.is_sqlite else "postgresql")
    yield

    await engine.dispose()
    logger.info("CaseLink API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="CaseLink API",
        version=APP_VERSION,
        description="Multi-tenant case management: orgs, clients, helpers and their connections.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add middleware (order matters: last added = first executed)
    from caselink.api.middleware.auth import AuthMiddleware
    from caselink.api.middleware.request_log import RequestLogMiddleware
    from caselink.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(TraceIdMiddleware)

    from caselink.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from caselink.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
