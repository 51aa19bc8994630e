"""API route definitions."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from resizex.api.middleware import verify_api_key
from resizex.api.schemas import ErrorResponse, HealthResponse, ProcessResponse

if TYPE_CHECKING:
    from resizex.config import Settings
    from resizex.imaging.pipeline import ImagePipeline

router = APIRouter(prefix="/api/v1", dependencies=[Depends(verify_api_key)])


def _get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def _get_pipeline(request: Request) -> ImagePipeline:
    pipeline: ImagePipeline = request.app.state.pipeline
    return pipeline


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": ErrorResponse},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    },
    summary="Orient and downscale an image",
)
async def process_image(
    request: Request,
    file: UploadFile,
    include_pixels: bool = False,
) -> ProcessResponse | JSONResponse:
    """Decode an uploaded image, rotate it upright, and fit it in the bounding box."""
    settings = _get_settings(request)
    pipeline = _get_pipeline(request)

    data = await file.read(settings.max_file_size + 1)
    if len(data) > settings.max_file_size:
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"detail": f"File exceeds {settings.max_file_size} bytes"},
        )

    result = await run_in_threadpool(pipeline.run, data)
    if result is None:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Unrecognized or corrupt image data"},
        )

    image = result.image
    return ProcessResponse(
        width=image.width,
        height=image.height,
        pixel_format=str(image.pixel_format),
        source_width=result.source_size[0],
        source_height=result.source_size[1],
        rotation=int(result.rotation),
        resized=result.resized,
        pixels=base64.b64encode(image.tobytes()).decode("ascii") if include_pixels else None,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health(request: Request) -> HealthResponse:
    """Return service health and the active output limits."""
    pipeline = _get_pipeline(request)
    return HealthResponse(
        status="ok",
        max_width=pipeline.box.max_width,
        max_height=pipeline.box.max_height,
        resample=str(pipeline.resample),
    )
