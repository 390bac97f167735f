"""Domain types shared across the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

RGBA_BYTES_PER_PIXEL = 4


@dataclass(slots=True, frozen=True)
class DisplayHandle:
    """One enumerated display; `index` is only stable within a single pass."""

    index: int
    left: int
    top: int
    width: int
    height: int

    def region(self) -> dict[str, int]:
        """Return the capture region in the shape mss expects."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


@dataclass(slots=True, frozen=True)
class RawFrame:
    """RGBA8 raster captured from one display at one instant."""

    width: int
    height: int
    pixels: bytes
    display_index: int
    captured_at: datetime

    @property
    def expected_size(self) -> int:
        """Byte length an RGBA buffer of this size must have."""
        return self.width * self.height * RGBA_BYTES_PER_PIXEL


@dataclass(slots=True, frozen=True)
class EncodedFrame:
    """Compressed image bytes plus the capture metadata they came from."""

    data: bytes
    format: str
    extension: str
    display_index: int
    captured_at: datetime


@dataclass(slots=True, frozen=True)
class EventData:
    """The metadata attached to each screenshot event."""

    format: str
    display: int

    def __post_init__(self) -> None:
        """Enforce the required metadata fields."""
        if not self.format:
            raise ValueError("Event format must be a non-empty string.")
        if self.display < 0:
            raise ValueError(f"Display index must be non-negative, got {self.display}.")

    def to_json(self) -> dict[str, Any]:
        """Return the JSON `data` map."""
        return {"format": self.format, "display": self.display}


@dataclass(slots=True, frozen=True)
class TelemetryEvent:
    """One event as accepted by the collection server."""

    timestamp: datetime
    data: EventData
    duration: timedelta = timedelta(0)
    blob_data: bytes | None = None
    id: int | None = None

    def to_json(self) -> dict[str, Any]:
        """Serialize into the server's event shape.

        Blobs are sent as arrays of byte values and the duration in seconds.
        """
        timestamp: datetime = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "timestamp": timestamp.astimezone(timezone.utc).isoformat(),
            "duration": self.duration.total_seconds(),
            "data": self.data.to_json(),
            "blob_data": list(self.blob_data) if self.blob_data is not None else None,
        }


@dataclass(slots=True, frozen=True)
class DeliveryResult:
    """Outcome of one accepted batch."""

    status_code: int
    event_count: int
    url: str


@dataclass(slots=True, frozen=True)
class StageFailure:
    """A pipeline error captured instead of propagated."""

    stage: str
    error: Exception
    display_index: int | None = None


@dataclass(slots=True)
class CycleReport:
    """Everything one capture cycle produced."""

    started_at: datetime
    finished_at: datetime | None = None
    display_count: int = 0
    archived_paths: list[Path] = field(default_factory=list)
    events: list[TelemetryEvent] = field(default_factory=list)
    delivery: DeliveryResult | None = None
    failures: list[StageFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True when no stage failed during the cycle."""
        return not self.failures

    def failures_for(self, stage: str) -> list[StageFailure]:
        """Return failures recorded for one stage."""
        return [failure for failure in self.failures if failure.stage == stage]
