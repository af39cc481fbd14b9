"""
================================================================================
FILE: showcase_matcher/api/main.py
================================================================================

PURPOSE:
    FastAPI application factory. Creates the app, registers routes, exception
    handlers and middleware, and wires the ServiceContainer into app.state
    at startup.

STARTUP SEQUENCE:
    1. Load Settings (.env + environment) unless a container was passed in
    2. Configure logging from LOG_LEVEL / LOG_FORMAT
    3. Validate environment-specific configuration (fail fast)
    4. ServiceContainer.initialize(): embedding provider, Qdrant, handlers
    5. Serve requests

KEY FACTS:
    - Error at startup = server fails to start (config errors caught early)
    - Client-visible error messages pass through the search handler's
      sanitizer; full details only go to the server log
    - Every response carries an X-Request-ID header

TESTING ENVIRONMENT:
    - create_app(container=ServiceContainer(settings, fake_embeddings, fake_db))
    - with TestClient(app) as client: ...  (runs the startup hook)
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from showcase_matcher import __version__
from showcase_matcher.api import routes
from showcase_matcher.config.settings import Settings
from showcase_matcher.container.service_container import ServiceContainer
from showcase_matcher.core.exceptions import ShowcaseMatcherError, ValidationError
from showcase_matcher.utils.helpers import generate_request_id
from showcase_matcher.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Pre-built (not yet initialized) container; built from
                   Settings() at startup when None.
    """
    app = FastAPI(
        title="Showcase Matcher",
        description="Find hackathon showcase projects similar to an idea",
        version=__version__,
    )
    app.state.container = None

    # =========================================================================
    # STARTUP HOOK
    # =========================================================================

    @app.on_event("startup")
    async def startup_event():
        try:
            logger.info("=" * 80)
            logger.info("APPLICATION STARTUP")
            logger.info("=" * 80)

            active = container
            if active is None:
                settings = Settings()
                configure_logging(settings)
                settings.validate_for_environment()
                active = ServiceContainer(settings)

            logger.info(
                "Settings loaded: "
                f"environment={active.settings.environment} | "
                f"embedding_provider={active.settings.embedding_provider} | "
                f"qdrant={active.settings.qdrant_url}"
            )

            await active.initialize()
            app.state.container = active

            logger.info("=" * 80)
            logger.info("APPLICATION STARTUP COMPLETE")
            logger.info("=" * 80)
        except Exception as e:
            logger.error(f"STARTUP FAILED: {str(e)}", exc_info=True)
            raise RuntimeError(f"Failed to initialize backend: {str(e)}") from e

    # =========================================================================
    # SHUTDOWN HOOK
    # =========================================================================

    @app.on_event("shutdown")
    async def shutdown_event():
        active = app.state.container
        if active is None:
            return
        try:
            logger.info("APPLICATION SHUTDOWN")
            await active.shutdown()
            logger.info("✓ APPLICATION SHUTDOWN COMPLETE")
        except Exception as e:
            logger.error(f"SHUTDOWN ERROR: {str(e)}", exc_info=True)
        finally:
            app.state.container = None

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(ShowcaseMatcherError)
    async def showcase_exception_handler(request: Request, exc: ShowcaseMatcherError):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            f"Showcase matcher error [request_id={request_id}]: {exc.message}",
            extra={"error_code": exc.error_code},
        )

        message = exc.message
        active = app.state.container
        if active is not None and active.settings.is_production:
            message = active.get_search_handler().sanitize(message)

        return JSONResponse(
            status_code=400 if isinstance(exc, ValidationError) else 500,
            content={
                "message": message,
                "error_code": exc.error_code,
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            f"Unexpected error [request_id={request_id}]: {str(exc)}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "message": "An unexpected error occurred",
                "request_id": request_id,
            },
        )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Add unique request ID for correlation tracking."""
        request.state.request_id = request.headers.get("X-Request-ID") or generate_request_id()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    # =========================================================================
    # ROUTES
    # =========================================================================

    app.include_router(routes.router)
    app.include_router(routes.health_router)

    return app
