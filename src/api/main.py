"""FastAPI application exposing the HTTP dialect converter."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.config.feature_flags import FeatureFlags
from src.config.settings import get_settings
from src.dialect.converter import HttpDialectConverter
from src.utils.logging_config import setup_logging
from .middleware.error_handler import setup_error_handlers
from .routers import dialect_converter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the converter on startup and release its HTTP client on shutdown."""
    settings = get_settings()
    setup_logging(level=settings.log_level)

    _, warnings = FeatureFlags.validate_configuration()
    for warning in warnings:
        logger.warning(warning)

    if not hasattr(app.state, "converter"):
        app.state.converter = HttpDialectConverter(settings.dialect_converter)
    logger.info(
        "Dialect converter ready (pool: %d services)",
        len(app.state.converter.endpoints),
    )

    yield

    app.state.converter.close()
    logger.info("Dialect converter shut down")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Delegates SQL dialect translation to external HTTP services",
        version="1.0.0",
        lifespan=lifespan,
    )
    setup_error_handlers(app)
    app.include_router(dialect_converter.router)
    return app


app = create_app()
