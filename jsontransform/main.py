"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jsontransform.config import get_settings
from jsontransform.core.logging import setup_logging, get_logger
from jsontransform.core.error_handlers import register_error_handlers
from jsontransform.core.middleware import RequestContextMiddleware
from jsontransform.api.routes import router as api_router
from jsontransform.services.map_source import load_default_map

settings = get_settings()


# ─── Lifespan: startup / shutdown ─────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the default map and configure logging."""
    logger = get_logger(__name__)

    # Startup
    setup_logging(level=settings.log_level, log_format=settings.log_format)
    app.state.default_map = load_default_map(settings)
    logger.info(
        "Application starting",
        extra={
            "app": settings.app_name,
            "version": settings.app_version,
            "env": settings.app_env,
            "map_file": settings.map_file or None,
            "missing_value_policy": settings.missing_value_policy,
        },
    )

    yield

    # Shutdown
    logger.info("Application shut down gracefully.")


# ─── App factory ──────────────────────────────────────────────────────

def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    application.state.default_map = None

    # Middleware (order matters — outermost first)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestContextMiddleware)

    # Error handlers
    register_error_handlers(application)

    # Routes
    application.include_router(api_router, prefix="/api/v1")

    # Health check
    @application.get("/health", tags=["Health"])
    async def health_check() -> dict:
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn (``json-transform`` console script)."""
    uvicorn.run(
        "jsontransform.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_debug,
        log_config=None,
    )
