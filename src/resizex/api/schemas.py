"""Pydantic request/response schemas for the ResizeX API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProcessResponse(BaseModel):
    """The normalized image produced from an upload."""

    width: int = Field(description="Output width in pixels")
    height: int = Field(description="Output height in pixels")
    pixel_format: str = Field(description="Pixel layout: 'L8', 'LA8', 'RGB8' or 'RGBA8'")
    source_width: int = Field(description="Decoded width before rotation and resize")
    source_height: int = Field(description="Decoded height before rotation and resize")
    rotation: int = Field(description="Clockwise rotation applied from EXIF: 0, 90, 180 or 270")
    resized: bool = Field(description="Whether the image was scaled down to fit the bounding box")
    pixels: str | None = Field(
        default=None,
        description="Base64 of the packed pixel rows, top to bottom (only with include_pixels=true)",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    max_width: int
    max_height: int
    resample: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
