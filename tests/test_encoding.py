"""Tests for Pillow-based frame encoding."""

import io
from dataclasses import replace

import pytest
from PIL import Image

from screenshot_watcher.encoding import PillowImageEncoder
from screenshot_watcher.errors import EncodingError


class TestPillowImageEncoder:
    """Encoding of raw RGBA frames."""

    def test_encodes_webp_by_default(self, raw_frame):
        """Default encoder produces a WebP image with matching metadata."""
        encoded = PillowImageEncoder().encode(raw_frame)

        assert encoded.format == "webp"
        assert encoded.extension == "webp"
        assert encoded.display_index == raw_frame.display_index
        assert encoded.captured_at == raw_frame.captured_at
        assert encoded.data

        with Image.open(io.BytesIO(encoded.data)) as image:
            assert image.format == "WEBP"
            assert image.size == (raw_frame.width, raw_frame.height)

    def test_encoding_is_deterministic(self, raw_frame):
        encoder = PillowImageEncoder()
        assert encoder.encode(raw_frame).data == encoder.encode(raw_frame).data

    def test_png_format_is_supported(self, raw_frame):
        encoded = PillowImageEncoder(format="png").encode(raw_frame)
        assert encoded.extension == "png"
        assert encoded.data.startswith(b"\x89PNG")

    def test_rejects_stride_mismatch(self, raw_frame):
        """A pixel buffer that does not match width*height*4 is malformed."""
        truncated = replace(raw_frame, pixels=raw_frame.pixels[:-1])
        with pytest.raises(EncodingError):
            PillowImageEncoder().encode(truncated)

    def test_rejects_zero_dimensions(self, raw_frame):
        empty = replace(raw_frame, width=0, height=0, pixels=b"")
        with pytest.raises(EncodingError):
            PillowImageEncoder().encode(empty)

    def test_unknown_format_is_rejected(self):
        with pytest.raises(ValueError):
            PillowImageEncoder(format="bmp")

    def test_quality_out_of_range_is_rejected(self):
        with pytest.raises(ValueError):
            PillowImageEncoder(quality=101)
