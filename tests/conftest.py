"""Shared helpers for building encoded test images in memory."""

from __future__ import annotations

import io

from PIL import Image

MARKER = (255, 0, 0)
BACKGROUND = (255, 255, 255)


def encode_image(
    size: tuple[int, int] = (40, 20),
    *,
    mode: str = "RGB",
    fmt: str = "PNG",
    orientation: int | None = None,
    marker: bool = False,
) -> bytes:
    """Encode a solid image, optionally with a red top-left marker and EXIF orientation."""
    color: object = {"RGB": BACKGROUND, "RGBA": (*BACKGROUND, 255)}.get(mode, 255)
    img = Image.new(mode, size, color)  # type: ignore[arg-type]
    if marker:
        # Only meaningful for RGB images.
        img.paste(MARKER, (0, 0, 4, 4))

    save_kwargs: dict[str, object] = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        save_kwargs["exif"] = exif
    if fmt == "JPEG":
        save_kwargs["quality"] = 95

    buf = io.BytesIO()
    img.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()
