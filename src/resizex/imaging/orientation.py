"""EXIF orientation lookup and upright rotation.

Only the three pure rotations are honoured. Mirrored orientations
(EXIF values 2, 4, 5 and 7) are left as stored, the same as an image with
no orientation tag at all.
"""

from __future__ import annotations

import io
import logging

from PIL import ExifTags, Image, UnidentifiedImageError

from resizex.imaging.buffer import ImageBuffer, OrientationHint
from resizex.imaging.diagnostics import forward_warnings
from resizex.imaging.errors import MetadataReadError
from resizex.imaging.filters import Resample

logger = logging.getLogger(__name__)

EXIF_ORIENTATION_TAG = ExifTags.Base.Orientation

_EXIF_TO_HINT: dict[int, OrientationHint] = {
    3: OrientationHint.ROTATE_180,
    6: OrientationHint.ROTATE_90,
    8: OrientationHint.ROTATE_270,
}


def hint_from_exif(value: object) -> OrientationHint:
    """Map a raw EXIF orientation value to the clockwise rotation it calls for."""
    if isinstance(value, bool) or not isinstance(value, int):
        return OrientationHint.NORMAL
    return _EXIF_TO_HINT.get(value, OrientationHint.NORMAL)


def read_exif_orientation(data: bytes) -> int | None:
    """Return the raw EXIF orientation value stored in encoded image bytes.

    Only the container header is parsed; pixel data is not decoded.

    Raises:
        MetadataReadError: If the container or its EXIF block cannot be read.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            value = img.getexif().get(EXIF_ORIENTATION_TAG)
    except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError, KeyError, TypeError) as exc:
        raise MetadataReadError(f"Could not read orientation metadata: {exc}") from exc
    return value


def read_orientation(data: bytes, *, log: logging.Logger | None = None) -> OrientationHint:
    """Read the orientation hint for encoded image bytes.

    Unreadable metadata is not an error for the caller: it is logged as a
    warning and treated as an upright image.
    """
    log = log or logger
    try:
        with forward_warnings(log):
            value = read_exif_orientation(data)
    except MetadataReadError as exc:
        log.warning("%s; assuming normal orientation", exc)
        return OrientationHint.NORMAL

    hint = hint_from_exif(value)
    log.debug("EXIF orientation %s -> rotate %d", value, hint)
    return hint


def rotate_image(
    buffer: ImageBuffer,
    hint: OrientationHint,
    *,
    resample: Resample = Resample.LANCZOS,
) -> ImageBuffer:
    """Rotate a buffer clockwise by ``hint`` degrees.

    Width and height swap for 90 and 270 degrees. ``NORMAL`` returns the
    input buffer itself.
    """
    if hint is OrientationHint.NORMAL:
        return buffer

    # Image.rotate turns counter-clockwise.
    rotated = buffer.to_pil().rotate(-int(hint), resample=resample.rotate_filter, expand=True)
    return ImageBuffer.from_pil(rotated)
