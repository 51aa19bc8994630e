"""Owned pixel buffer and the small value types passed between stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from numpy.typing import NDArray


class PixelFormat(StrEnum):
    L8 = "L8"
    LA8 = "LA8"
    RGB8 = "RGB8"
    RGBA8 = "RGBA8"

    @property
    def channels(self) -> int:
        return _CHANNELS[self]

    @property
    def pil_mode(self) -> str:
        return _PIL_MODES[self]

    @classmethod
    def from_pil_mode(cls, mode: str) -> PixelFormat | None:
        """Return the pixel format stored natively for a Pillow mode, if any."""
        for fmt, pil_mode in _PIL_MODES.items():
            if pil_mode == mode:
                return fmt
        return None


_CHANNELS: dict[PixelFormat, int] = {
    PixelFormat.L8: 1,
    PixelFormat.LA8: 2,
    PixelFormat.RGB8: 3,
    PixelFormat.RGBA8: 4,
}

_PIL_MODES: dict[PixelFormat, str] = {
    PixelFormat.L8: "L",
    PixelFormat.LA8: "LA",
    PixelFormat.RGB8: "RGB",
    PixelFormat.RGBA8: "RGBA",
}


class OrientationHint(IntEnum):
    """Clockwise rotation, in degrees, needed to make an image upright."""

    NORMAL = 0
    ROTATE_90 = 90
    ROTATE_180 = 180
    ROTATE_270 = 270


@dataclass(frozen=True)
class BoundingBox:
    """Maximum width and height an output image may occupy."""

    max_width: int
    max_height: int

    def __post_init__(self) -> None:
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError(f"Bounding box must be positive, got {self.max_width}x{self.max_height}")


DEFAULT_BOX = BoundingBox(max_width=1024, max_height=1024)


@dataclass(frozen=True)
class ImageBuffer:
    """A decoded image: a read-only uint8 pixel array plus its format.

    Single-channel images are stored as HxW arrays, everything else as
    HxWxC. Stages never write into ``pixels``; they return a new buffer.
    """

    pixels: NDArray[np.uint8]
    pixel_format: PixelFormat

    def __post_init__(self) -> None:
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {self.pixels.dtype}")

        channels = self.pixel_format.channels
        expected_ndim = 2 if channels == 1 else 3
        if self.pixels.ndim != expected_ndim or (channels > 1 and self.pixels.shape[2] != channels):
            raise ValueError(f"Pixel array of shape {self.pixels.shape} does not match {self.pixel_format}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError("Image dimensions must be positive")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), in Pillow's order."""
        return self.width, self.height

    def tobytes(self) -> bytes:
        """Return the packed pixel rows, top to bottom."""
        return self.pixels.tobytes()

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    @classmethod
    def from_pil(cls, image: Image.Image) -> ImageBuffer:
        """Copy a Pillow image whose mode is one of the native pixel formats."""
        pixel_format = PixelFormat.from_pil_mode(image.mode)
        if pixel_format is None:
            raise ValueError(f"Unsupported image mode: {image.mode}")

        pixels = np.array(image, dtype=np.uint8)
        pixels.setflags(write=False)
        return cls(pixels=pixels, pixel_format=pixel_format)
