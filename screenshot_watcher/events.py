"""Construction of telemetry events from encoded frames."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta, timezone
from typing import Any

from screenshot_watcher.types import EncodedFrame, EventData, TelemetryEvent


def build_event(frame: EncodedFrame, index: int) -> TelemetryEvent:
    """Wrap an encoded frame as a zero-duration event stamped with its capture time."""
    return TelemetryEvent(
        timestamp=frame.captured_at.astimezone(timezone.utc),
        duration=timedelta(0),
        data=EventData(format=frame.format, display=index),
        blob_data=frame.data,
    )


def events_to_json(events: Iterable[TelemetryEvent]) -> list[dict[str, Any]]:
    """Serialize a batch into the JSON array posted to the server."""
    return [event.to_json() for event in events]
