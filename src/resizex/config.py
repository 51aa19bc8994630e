"""Environment-based configuration for ResizeX."""

from __future__ import annotations

from typing import Literal

from PIL import Image
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from resizex.imaging.buffer import BoundingBox

# Pillow raises DecompressionBombError above twice its global limit,
# whatever max_image_pixels says.
PILLOW_PIXEL_CEILING = 2 * (Image.MAX_IMAGE_PIXELS or 89_478_485)


class Settings(BaseSettings):
    """Application settings loaded from RESIZEX_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RESIZEX_",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8083

    # Authentication (None = disabled)
    api_key: str | None = None

    # Output bounding box
    max_width: int = Field(default=1024, ge=1)
    max_height: int = Field(default=1024, ge=1)

    # Smooth filter used for both rotation and downscaling
    resample: Literal["lanczos", "bicubic", "bilinear"] = "lanczos"

    # Input limits
    max_image_pixels: int = Field(default=89_478_485, ge=1, le=PILLOW_PIXEL_CEILING)
    max_file_size: int = Field(default=52_428_800, ge=1)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox(max_width=self.max_width, max_height=self.max_height)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
