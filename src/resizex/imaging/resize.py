"""Downscale a buffer so it fits inside a bounding box."""

from __future__ import annotations

import math

from resizex.imaging.buffer import BoundingBox, ImageBuffer
from resizex.imaging.filters import Resample


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def fit_within(width: int, height: int, box: BoundingBox) -> tuple[int, int] | None:
    """Compute the downscaled size of a ``width`` x ``height`` image.

    Both sides are scaled by the same ratio, so the aspect ratio is kept.

    Returns:
        The new (width, height), or ``None`` if the image already fits and
        must not be scaled.
    """
    ratio = min(box.max_width / width, box.max_height / height)
    if ratio >= 1:
        return None

    new_width = max(1, _round_half_up(width * ratio))
    new_height = max(1, _round_half_up(height * ratio))
    return new_width, new_height


def resize_image(
    buffer: ImageBuffer,
    box: BoundingBox,
    *,
    resample: Resample = Resample.LANCZOS,
) -> ImageBuffer:
    """Scale a buffer down into ``box``, never up.

    Returns the input buffer itself when it already fits.
    """
    target = fit_within(buffer.width, buffer.height, box)
    if target is None:
        return buffer

    resized = buffer.to_pil().resize(target, resample=resample.resize_filter)
    return ImageBuffer.from_pil(resized)
