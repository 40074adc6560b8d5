"""
FastAPI Application Entry Point

Integrates:
  - Discord interactions webhook
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from commands import default_registry
from config import Config
from transport.discord import (
    INTERACTIONS_PATH,
    CommandRegistry,
    FollowUpClient,
    InteractionHTTPError,
    MethodNotAllowed,
    router as discord_router,
)

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    registry: Optional[CommandRegistry] = None,
    followup_client: Optional[FollowUpClient] = None,
) -> FastAPI:
    """
    Build the application with its process-wide dependencies.

    Config, registry and follow-up client are created once here and shared
    read-only by every request.
    """
    config = config or Config.from_env()
    registry = registry if registry is not None else default_registry()
    followup_client = followup_client or FollowUpClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.
        """
        # Startup
        logger.info("=" * 60)
        logger.info("Interactions webhook starting up...")
        logger.info(f"Application ID: {config.application_id or '(not set)'}")
        logger.info(f"Environment: {config.environment}")
        logger.info(f"Commands: {', '.join(sorted(registry)) or '(none)'}")
        logger.info("=" * 60)
        config.validate()

        yield

        # Shutdown
        logger.info("Interactions webhook shutting down...")
        await followup_client.aclose()

    app = FastAPI(
        title="Discord Interactions Webhook",
        description="Verifies and dispatches Discord interaction callbacks",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.registry = registry
    app.state.followup_client = followup_client

    @app.exception_handler(InteractionHTTPError)
    async def interaction_error_handler(request: Request, exc: InteractionHTTPError):
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.reason}",
            extra={"status_code": exc.status_code},
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def method_not_routed_handler(request: Request, exc: StarletteHTTPException):
        """Methods the interactions route does not list still get a 400."""
        if exc.status_code == 405 and request.url.path == INTERACTIONS_PATH:
            return await interaction_error_handler(request, MethodNotAllowed(request.method))
        return await http_exception_handler(request, exc)

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "500 - INTERNAL SERVER ERROR", "reason": "Internal server error"},
            )

    app.include_router(discord_router)

    # Health check endpoints
    @app.get("/health/live")
    async def health_live():
        """Live health check (Kubernetes liveness probe)."""
        return {"status": "alive"}

    @app.get("/health/ready")
    async def health_ready():
        """Readiness health check (Kubernetes readiness probe)."""
        missing = config.validate()
        if missing:
            return {"status": "not_ready", "reason": f"Missing: {', '.join(missing)}"}
        return {"status": "ready"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.config.port)
