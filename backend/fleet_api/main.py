"""Fleet API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FleetError → {"Error": message} responses
    - CORS configured from settings (not hardcoded)
    - DocumentStore and TokenVerifier built once in the lifespan and stored on
      app.state; request code reaches them only through api/dependencies.py

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests can build an app without touching a real database
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleet_api.api.error_handlers import register_error_handlers
from fleet_api.api.routes import health, loads, trucks, users
from fleet_api.config import get_settings
from fleet_api.infrastructure.database import DatabaseSessionManager
from fleet_api.infrastructure.document_store import SqlDocumentStore
from fleet_api.infrastructure.observability import setup_logging
from fleet_api.infrastructure.token_verifier import JWKSTokenVerifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_all:
        await db_manager.create_all()
    app.state.db_manager = db_manager
    app.state.store = SqlDocumentStore(db_manager)
    app.state.token_verifier = JWKSTokenVerifier(
        settings.jwks_uri,
        issuer=settings.auth_issuer,
        audience=settings.auth_audience,
        algorithms=settings.auth_algorithms,
        cache_seconds=settings.jwks_cache_seconds,
    )
    logger.info("Fleet API started")
    yield
    logger.info("Fleet API shutting down")
    await db_manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Fleet API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(trucks.router)
    app.include_router(loads.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
