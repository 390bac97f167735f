"""
Test Configuration
==================

Shared fixtures and in-memory pipeline fakes for screenshot_watcher tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from screenshot_watcher.archive import LocalFrameArchiver
from screenshot_watcher.errors import CaptureError, EnumerationError
from screenshot_watcher.types import DeliveryResult, DisplayHandle, RawFrame


CAPTURE_TIME = datetime(2024, 5, 17, 9, 30, 15, tzinfo=timezone.utc)


def make_raw_frame(index: int = 0, width: int = 4, height: int = 3) -> RawFrame:
    """Build a small RGBA frame with a deterministic pattern."""
    pixels = bytes((x * 40 + index) % 256 for x in range(width * height * 4))
    return RawFrame(
        width=width,
        height=height,
        pixels=pixels,
        display_index=index,
        captured_at=CAPTURE_TIME,
    )


class FakeEnumerator:
    """Returns a fixed number of displays, or raises."""

    def __init__(self, count: int = 2, error: Exception | None = None) -> None:
        self.count = count
        self.error = error
        self.calls = 0

    def enumerate(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [
            DisplayHandle(index=i, left=i * 1920, top=0, width=1920, height=1080)
            for i in range(self.count)
        ]


class FakeCapturer:
    """Produces small frames; displays listed in `failing` raise CaptureError."""

    def __init__(self, failing: set[int] | None = None) -> None:
        self.failing = failing or set()
        self.captured: list[int] = []

    def capture(self, handle):
        if handle.index in self.failing:
            raise CaptureError("display disconnected", display_index=handle.index)
        self.captured.append(handle.index)
        return make_raw_frame(handle.index)


class RecordingSink:
    """Collects delivered batches; optionally raises a configured error."""

    def __init__(self, error: Exception | None = None, status_code: int = 200) -> None:
        self.error = error
        self.status_code = status_code
        self.batches: list[list] = []

    def deliver(self, events):
        self.batches.append(list(events))
        if self.error is not None:
            raise self.error
        return DeliveryResult(
            status_code=self.status_code,
            event_count=len(events),
            url="http://localhost:5666/api/0/buckets/test/events",
        )


@pytest.fixture
def raw_frame() -> RawFrame:
    """Provide a valid 4x3 RGBA frame."""
    return make_raw_frame()


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Provide a not-yet-created archive directory."""
    return tmp_path / "target" / "screenshots"


@pytest.fixture
def archiver(archive_dir: Path) -> LocalFrameArchiver:
    return LocalFrameArchiver(archive_dir=archive_dir)


@pytest.fixture
def broken_enumerator() -> FakeEnumerator:
    return FakeEnumerator(error=EnumerationError("no display server"))
