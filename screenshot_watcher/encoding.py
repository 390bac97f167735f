"""Image encoding for captured frames."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image

from screenshot_watcher.errors import EncodingError
from screenshot_watcher.types import EncodedFrame, RawFrame

DEFAULT_FORMAT = "webp"

_PILLOW_FORMATS: dict[str, tuple[str, str]] = {
    "webp": ("WEBP", "webp"),
    "png": ("PNG", "png"),
}


@dataclass(slots=True, frozen=True)
class PillowImageEncoder:
    """Encodes RGBA frames with Pillow using one fixed format."""

    format: str = DEFAULT_FORMAT
    lossless: bool = True
    quality: int = 80
    method: int = 4

    def __post_init__(self) -> None:
        """Reject unsupported formats and quality values."""
        if self.format not in _PILLOW_FORMATS:
            supported: str = ", ".join(sorted(_PILLOW_FORMATS))
            raise ValueError(f"Unsupported image format '{self.format}'. Supported: {supported}")
        if not 0 <= self.quality <= 100:
            raise ValueError(f"Quality must be within 0-100, got {self.quality}.")

    @property
    def extension(self) -> str:
        """File extension for the configured format."""
        return _PILLOW_FORMATS[self.format][1]

    def encode(self, frame: RawFrame) -> EncodedFrame:
        """Compress `frame` into the configured format."""
        if frame.width <= 0 or frame.height <= 0:
            raise EncodingError(
                f"Frame from display {frame.display_index} has invalid size "
                f"{frame.width}x{frame.height}."
            )
        if len(frame.pixels) != frame.expected_size:
            raise EncodingError(
                f"Frame from display {frame.display_index} has {len(frame.pixels)} bytes, "
                f"expected {frame.expected_size} for {frame.width}x{frame.height} RGBA."
            )

        try:
            image = Image.frombytes("RGBA", (frame.width, frame.height), frame.pixels)
            buffer = io.BytesIO()
            image.save(buffer, format=_PILLOW_FORMATS[self.format][0], **self._save_options())
        except (OSError, ValueError) as error:
            raise EncodingError(
                f"Unable to encode frame from display {frame.display_index}: {error}"
            ) from error

        return EncodedFrame(
            data=buffer.getvalue(),
            format=self.format,
            extension=self.extension,
            display_index=frame.display_index,
            captured_at=frame.captured_at,
        )

    def _save_options(self) -> dict[str, object]:
        """Return Pillow save keyword arguments for the configured format."""
        if self.format == "webp":
            return {"lossless": self.lossless, "quality": self.quality, "method": self.method}
        return {}
