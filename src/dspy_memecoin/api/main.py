"""FastAPI main application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..agents.lm import ensure_dspy_configured
from ..config.config import settings
from ..utils.logging import get_logger, setup_logging
from .dependencies import get_services
from .middleware.error_handler import register_error_handlers
from .routers import analytics, coins, health, memes, preferences, state, templates

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns:
        FastAPI: Application with routers and error handlers registered
    """
    app = FastAPI(
        title=settings.app_name,
        description="Meme generation with DSPy and meme coin creation",
        version=settings.app_version,
        docs_url="/docs",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    prefix = settings.api_prefix
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(memes.router, prefix=f"{prefix}/memes", tags=["memes"])
    app.include_router(templates.router, prefix=f"{prefix}/templates", tags=["templates"])
    app.include_router(analytics.router, prefix=f"{prefix}/analytics", tags=["analytics"])
    app.include_router(coins.router, prefix=f"{prefix}/coins", tags=["coins"])
    app.include_router(preferences.router, prefix=f"{prefix}/preferences", tags=["preferences"])
    app.include_router(state.router, prefix=f"{prefix}/state", tags=["state"])

    @app.on_event("startup")
    async def startup_event() -> None:
        """Configure logging and DSPy, then load the stored state."""
        setup_logging(settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
        logger.info("starting", app=settings.app_name, version=settings.app_version, env=settings.app_env)
        if not ensure_dspy_configured():
            logger.warning("dspy_unavailable", detail="rule-based selection and captions will be used")
        get_services()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        logger.info("shutting_down", app=settings.app_name)

    return app


app = create_app()
