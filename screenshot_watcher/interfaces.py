"""Protocol interfaces for pipeline components."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Protocol

from screenshot_watcher.types import (
    DeliveryResult,
    DisplayHandle,
    EncodedFrame,
    RawFrame,
    TelemetryEvent,
)


class DisplayEnumerator(Protocol):
    """Discovers the displays currently attached."""

    def enumerate(self) -> Sequence[DisplayHandle]:
        """Return handles ordered by display index; empty when none are attached."""


class FrameCapturer(Protocol):
    """Grabs the current contents of one display."""

    def capture(self, handle: DisplayHandle) -> RawFrame:
        """Capture and return a raw RGBA frame."""


class ImageEncoder(Protocol):
    """Compresses raw frames into a fixed image format."""

    def encode(self, frame: RawFrame) -> EncodedFrame:
        """Return the encoded frame."""


class FrameArchiver(Protocol):
    """Persists encoded frames locally."""

    def archive(self, frame: EncodedFrame, timestamp: datetime, index: int) -> Path:
        """Write the frame and return where it was stored."""


class EventSink(Protocol):
    """Delivers batches of events to the collection server."""

    def deliver(self, events: Sequence[TelemetryEvent]) -> DeliveryResult:
        """Send the whole batch in one request."""
