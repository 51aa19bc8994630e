"""Smooth resampling filters shared by the rotate and resize stages."""

from __future__ import annotations

from enum import StrEnum

from PIL import Image


class Resample(StrEnum):
    LANCZOS = "lanczos"
    BICUBIC = "bicubic"
    BILINEAR = "bilinear"

    @property
    def resize_filter(self) -> Image.Resampling:
        return _RESIZE_FILTERS[self]

    @property
    def rotate_filter(self) -> Image.Resampling:
        # Image.rotate only accepts NEAREST, BILINEAR and BICUBIC.
        if self is Resample.BILINEAR:
            return Image.Resampling.BILINEAR
        return Image.Resampling.BICUBIC


_RESIZE_FILTERS: dict[Resample, Image.Resampling] = {
    Resample.LANCZOS: Image.Resampling.LANCZOS,
    Resample.BICUBIC: Image.Resampling.BICUBIC,
    Resample.BILINEAR: Image.Resampling.BILINEAR,
}
