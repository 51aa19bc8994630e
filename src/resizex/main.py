"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from resizex.config import Settings

from fastapi import FastAPI

from resizex.api.routes import router
from resizex.config import get_settings
from resizex.imaging.pipeline import ImagePipeline

logger = logging.getLogger(__name__)


def build_pipeline(settings: Settings) -> ImagePipeline:
    """Create the shared pipeline from application settings."""
    return ImagePipeline(
        settings.bounding_box,
        resample=settings.resample,
        max_pixels=settings.max_image_pixels,
        logger=logging.getLogger("resizex.pipeline"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging and build the pipeline."""
    settings = get_settings()
    app.state.settings = settings

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    logger.info(
        "Starting ResizeX (box=%dx%d, resample=%s, auth=%s)",
        settings.max_width,
        settings.max_height,
        settings.resample,
        "on" if settings.api_key else "off",
    )
    app.state.pipeline = build_pipeline(settings)

    logger.info("ResizeX ready")
    yield
    logger.info("ResizeX shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="ResizeX",
        description="Decode, orient and downscale images to a bounding box",
        version="0.1.0",
        lifespan=lifespan,
    )
    application.include_router(router)
    return application


app = create_app()
