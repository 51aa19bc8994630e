"""Decode -> orient -> resize, as one call that never raises on bad input.

A failed call yields ``None``; the reason is only ever reported through the
pipeline's logger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, TypeAlias

from resizex.imaging.buffer import DEFAULT_BOX, BoundingBox, ImageBuffer, OrientationHint
from resizex.imaging.decoder import decode_image
from resizex.imaging.errors import DecodeError
from resizex.imaging.filters import Resample
from resizex.imaging.orientation import read_orientation, rotate_image
from resizex.imaging.resize import resize_image

ImageSource: TypeAlias = bytes | bytearray | memoryview | BinaryIO


@dataclass(frozen=True)
class PipelineResult:
    """The output buffer and a record of what was done to produce it."""

    image: ImageBuffer
    source_size: tuple[int, int]
    rotation: OrientationHint
    resized: bool


class ImagePipeline:
    """Stateless image normalizer: upright and no larger than ``box``.

    Holds only immutable configuration, so a single instance can be shared
    between threads.
    """

    def __init__(
        self,
        box: BoundingBox = DEFAULT_BOX,
        *,
        resample: Resample | str = Resample.LANCZOS,
        max_pixels: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._box = box
        self._resample = Resample(resample)
        self._max_pixels = max_pixels
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def box(self) -> BoundingBox:
        return self._box

    @property
    def resample(self) -> Resample:
        return self._resample

    def run(self, source: ImageSource) -> PipelineResult | None:
        """Process one image and report the steps taken.

        Returns:
            The result, or ``None`` if the source could not be read or
            decoded.
        """
        data = self._read_source(source)
        if data is None:
            return None

        try:
            decoded = decode_image(data, max_pixels=self._max_pixels, log=self._logger)
        except DecodeError as exc:
            self._logger.error("Failed to decode image: %s", exc)
            return None

        hint = read_orientation(data, log=self._logger)
        upright = rotate_image(decoded, hint, resample=self._resample)
        image = resize_image(upright, self._box, resample=self._resample)

        self._logger.debug(
            "Processed image %dx%d -> %dx%d (rotation=%d)",
            decoded.width,
            decoded.height,
            image.width,
            image.height,
            hint,
        )
        return PipelineResult(
            image=image,
            source_size=decoded.size,
            rotation=hint,
            resized=image is not upright,
        )

    def process(self, source: ImageSource) -> ImageBuffer | None:
        """Return the upright, bounded image, or ``None`` on failure."""
        result = self.run(source)
        return result.image if result is not None else None

    def _read_source(self, source: ImageSource) -> bytes | None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source)

        # Streams are read once; decode and metadata both use these bytes.
        try:
            data = source.read()
        except OSError as exc:
            self._logger.error("Failed to read image stream: %s", exc)
            return None
        if not isinstance(data, (bytes, bytearray)):
            self._logger.error("Image stream returned %s, expected bytes", type(data).__name__)
            return None
        return bytes(data)


def process(source: ImageSource, box: BoundingBox = DEFAULT_BOX) -> ImageBuffer | None:
    """Decode, orient and bound a single image with default settings."""
    return ImagePipeline(box).process(source)
