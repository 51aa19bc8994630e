"""Tests for the pixel buffer and value types."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from resizex.imaging.buffer import DEFAULT_BOX, BoundingBox, ImageBuffer, OrientationHint, PixelFormat


class TestBoundingBox:
    def test_default_is_1024_square(self) -> None:
        assert DEFAULT_BOX == BoundingBox(max_width=1024, max_height=1024)

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 10)])
    def test_non_positive_rejected(self, width: int, height: int) -> None:
        with pytest.raises(ValueError, match="positive"):
            BoundingBox(max_width=width, max_height=height)


class TestPixelFormat:
    def test_native_modes_round_trip(self) -> None:
        for fmt in PixelFormat:
            assert PixelFormat.from_pil_mode(fmt.pil_mode) is fmt

    def test_palette_mode_is_not_native(self) -> None:
        assert PixelFormat.from_pil_mode("P") is None

    def test_channels(self) -> None:
        assert [fmt.channels for fmt in PixelFormat] == [1, 2, 3, 4]


class TestOrientationHint:
    def test_values_are_clockwise_degrees(self) -> None:
        assert [int(h) for h in OrientationHint] == [0, 90, 180, 270]


class TestImageBuffer:
    def test_from_pil_rgb(self) -> None:
        buffer = ImageBuffer.from_pil(Image.new("RGB", (30, 10)))
        assert buffer.size == (30, 10)
        assert buffer.width == 30
        assert buffer.height == 10
        assert buffer.pixel_format is PixelFormat.RGB8
        assert buffer.pixels.shape == (10, 30, 3)

    def test_from_pil_grayscale_is_two_dimensional(self) -> None:
        buffer = ImageBuffer.from_pil(Image.new("L", (5, 7)))
        assert buffer.pixel_format is PixelFormat.L8
        assert buffer.pixels.shape == (7, 5)

    def test_pixels_are_read_only(self) -> None:
        buffer = ImageBuffer.from_pil(Image.new("RGBA", (4, 4)))
        with pytest.raises(ValueError):
            buffer.pixels[0, 0, 0] = 1

    def test_from_pil_rejects_unsupported_mode(self) -> None:
        with pytest.raises(ValueError, match="Unsupported image mode"):
            ImageBuffer.from_pil(Image.new("P", (4, 4)))

    def test_shape_must_match_format(self) -> None:
        with pytest.raises(ValueError, match="does not match"):
            ImageBuffer(pixels=np.zeros((4, 4, 3), dtype=np.uint8), pixel_format=PixelFormat.RGBA8)

    def test_dtype_must_be_uint8(self) -> None:
        with pytest.raises(ValueError, match="uint8"):
            ImageBuffer(pixels=np.zeros((4, 4), dtype=np.float32), pixel_format=PixelFormat.L8)

    def test_empty_image_rejected(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            ImageBuffer(pixels=np.zeros((0, 4, 3), dtype=np.uint8), pixel_format=PixelFormat.RGB8)

    def test_tobytes_is_packed_rows(self) -> None:
        buffer = ImageBuffer.from_pil(Image.new("RGBA", (3, 2), (1, 2, 3, 4)))
        assert buffer.tobytes() == bytes([1, 2, 3, 4]) * 6

    def test_to_pil_preserves_pixels(self) -> None:
        source = Image.new("LA", (6, 3), (10, 200))
        buffer = ImageBuffer.from_pil(source)
        restored = buffer.to_pil()
        assert restored.mode == "LA"
        assert restored.size == (6, 3)
        assert restored.getpixel((0, 0)) == (10, 200)
