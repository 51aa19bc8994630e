"""Decode encoded image bytes into an owned pixel buffer.

The format is detected by Pillow from the content itself. Pixel data is
loaded eagerly so truncated files fail here rather than in a later stage.
"""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from resizex.imaging.buffer import ImageBuffer, PixelFormat
from resizex.imaging.diagnostics import forward_warnings
from resizex.imaging.errors import DecodeError

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    EOFError,
    SyntaxError,
    ValueError,
)

# Integer and float samples wider than 8 bits; all single-channel.
_HIGH_BIT_DEPTH_MODES = frozenset({"I", "F"})


def decode_image(
    data: bytes,
    *,
    max_pixels: int | None = None,
    log: logging.Logger | None = None,
) -> ImageBuffer:
    """Decode raw image bytes.

    Args:
        data: Complete encoded file contents (JPEG, PNG, ...).
        max_pixels: Reject images with more pixels than this. ``None`` keeps
            only Pillow's own decompression bomb guard.
        log: Receives decoder warnings. Defaults to this module's logger.

    Returns:
        The decoded image in one of the native pixel formats.

    Raises:
        DecodeError: If the bytes are empty, unrecognized, truncated, or
            describe an image that is empty or too large.
    """
    log = log or logger
    if not data:
        raise DecodeError("Empty image data")

    try:
        with forward_warnings(log), Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if width == 0 or height == 0:
                raise DecodeError(f"Image has zero dimension ({width}x{height})")
            if max_pixels is not None and width * height > max_pixels:
                raise DecodeError(f"Image of {width}x{height} exceeds the {max_pixels} pixel limit")

            img.load()
            log.debug("Decoded %s image %dx%d (mode=%s)", img.format, width, height, img.mode)
            return ImageBuffer.from_pil(_to_native_mode(img, log))
    except DecodeError:
        raise
    except _DECODE_ERRORS as exc:
        raise DecodeError(f"Unrecognized or corrupt image data: {exc}") from exc


def _high_bit_depth_to_l(img: Image.Image) -> Image.Image:
    # Pillow's convert() clips these at 255 instead of scaling them.
    values = np.asarray(img)
    if img.mode == "F":
        values = np.nan_to_num(values.astype(np.float64))
        if values.max(initial=0.0) <= 1.0:
            values = values * 255.0
        scaled = np.clip(np.rint(values), 0, 255)
    else:
        scaled = np.clip(values.astype(np.int64), 0, 65535) >> 8
    return Image.fromarray(scaled.astype(np.uint8))


def _to_native_mode(img: Image.Image, log: logging.Logger) -> Image.Image:
    if PixelFormat.from_pil_mode(img.mode) is not None:
        return img

    if img.mode in _HIGH_BIT_DEPTH_MODES or img.mode.startswith("I;16"):
        log.debug("Scaling %s samples down to 8 bits", img.mode)
        return _high_bit_depth_to_l(img)

    has_alpha = "transparency" in img.info or img.mode in ("PA", "RGBa", "La")
    target = PixelFormat.RGBA8 if has_alpha else PixelFormat.RGB8
    log.debug("Converting mode %s to %s", img.mode, target)
    return img.convert(target.pil_mode)
