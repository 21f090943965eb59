"""
FastAPI application for the OneStay backend.

All routes are mounted under /api/v1. Settings are passed in once; the
lifespan validates them and builds storage, services and the auth gate.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from onestay.api import logements, properties, users
from onestay.auth import routes as auth_routes
from onestay.auth.gate import AuthGate
from onestay.auth.tokens import TokenService
from onestay.config import Settings, check_settings, get_settings
from onestay.core.errors import OneStayError
from onestay.integrations.sentry import capture_exception, init_sentry
from onestay.logging_config import setup_logging
from onestay.repositories import UserRepository
from onestay.seed import bootstrap
from onestay.services import Services
from onestay.storage import MetadataStorage, create_storage, ensure_indexes

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


# =============================================================================
# Lifespan
# =============================================================================


def _lifespan(settings: Settings, storage: MetadataStorage | None = None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        setup_logging(settings.log_level)
        check_settings(settings)

        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")

        if storage is None:
            store = await create_storage(settings)
        else:
            store = storage
            await ensure_indexes(store)
        services = Services.build(store, settings)
        await bootstrap(services, settings)

        tokens = TokenService.from_settings(settings)

        app.state.settings = settings
        app.state.storage = store
        app.state.services = services
        app.state.tokens = tokens
        app.state.gate = AuthGate(
            tokens,
            role_source=settings.auth_role_source,
            users=UserRepository(store),
        )

        logger.info("OneStay API starting in %s mode", settings.environment)

        yield

        await store.close()
        logger.info("OneStay API shutting down")

    return lifespan


# =============================================================================
# Error Handling
# =============================================================================


async def handle_domain_error(request: Request, exc: OneStayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    capture_exception(exc, path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"detail": OneStayError.default_detail, "error_code": OneStayError.error_code},
    )


# =============================================================================
# App Setup
# =============================================================================


def create_app(settings: Settings | None = None, storage: MetadataStorage | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: defaults to get_settings()
        storage: use this backend instead of the configured one (tests)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="OneStay API",
        description="Property rental listings: accounts, roles, properties",
        version="1.0.0",
        lifespan=_lifespan(settings, storage),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization"],
    )

    app.add_exception_handler(OneStayError, handle_domain_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth_routes.router, prefix=API_PREFIX)
    app.include_router(users.router, prefix=API_PREFIX)
    app.include_router(properties.router, prefix=API_PREFIX)
    app.include_router(logements.router, prefix=API_PREFIX)

    @app.get("/health")
    @app.get(f"{API_PREFIX}/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
