"""Capture cycle orchestration and the fixed-interval loop."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from screenshot_watcher.errors import (
    CaptureError,
    DeliveryError,
    EncodingError,
    EnumerationError,
    StorageError,
)
from screenshot_watcher.events import build_event
from screenshot_watcher.interfaces import (
    DisplayEnumerator,
    EventSink,
    FrameArchiver,
    FrameCapturer,
    ImageEncoder,
)
from screenshot_watcher.types import (
    CycleReport,
    DisplayHandle,
    EncodedFrame,
    RawFrame,
    StageFailure,
)


@dataclass(slots=True)
class ScreenshotWatcher:
    """Runs enumerate, capture, encode, archive, build and deliver once per tick."""

    enumerator: DisplayEnumerator
    capturer: FrameCapturer
    encoder: ImageEncoder
    archiver: FrameArchiver
    sink: EventSink
    logger: logging.Logger = logging.getLogger(__name__)

    def run_once(self) -> CycleReport:
        """Execute one cycle; stage failures are recorded on the report, never raised."""
        report = CycleReport(started_at=datetime.now(timezone.utc))

        try:
            handles: list[DisplayHandle] = list(self.enumerator.enumerate())
        except EnumerationError as error:
            self._record(report, "enumerate", error)
            handles = []
        report.display_count = len(handles)

        for handle in handles:
            self._process_display(handle, report)

        if report.events:
            try:
                report.delivery = self.sink.deliver(report.events)
            except DeliveryError as error:
                self._record(report, "deliver", error)
            else:
                self.logger.info(
                    "Delivered %d events to %s.",
                    report.delivery.event_count,
                    report.delivery.url,
                )
        else:
            self.logger.info("No events captured this cycle; skipping delivery.")

        report.finished_at = datetime.now(timezone.utc)
        self.logger.info(
            "Cycle finished: %d displays, %d archived, %d events, %d failures.",
            report.display_count,
            len(report.archived_paths),
            len(report.events),
            len(report.failures),
        )
        return report

    def run_loop(self, *, interval_seconds: float, max_cycles: int | None = None) -> None:
        """Run cycles back to back with a fixed sleep between them until stopped."""
        if max_cycles is not None and max_cycles < 1:
            raise ValueError(f"Maximum cycles must be at least 1, got {max_cycles}.")
        completed_cycles: int = 0
        while True:
            try:
                self.run_once()
            except Exception:
                self.logger.exception("Unexpected failure during capture cycle.")

            completed_cycles += 1
            if max_cycles is not None and completed_cycles >= max_cycles:
                break

            time.sleep(interval_seconds)

    def _process_display(self, handle: DisplayHandle, report: CycleReport) -> None:
        """Capture and encode one display, then feed the archive and event sinks."""
        try:
            raw: RawFrame = self.capturer.capture(handle)
        except CaptureError as error:
            self._record(report, "capture", error, handle.index)
            return
        except Exception as error:
            self._record(report, "capture", error, handle.index, unexpected=True)
            return

        try:
            encoded: EncodedFrame = self.encoder.encode(raw)
        except EncodingError as error:
            self._record(report, "encode", error, handle.index)
            return
        except Exception as error:
            self._record(report, "encode", error, handle.index, unexpected=True)
            return
        self.logger.debug("Display %d encoded to %d bytes.", handle.index, len(encoded.data))

        try:
            path = self.archiver.archive(encoded, encoded.captured_at, handle.index)
        except StorageError as error:
            self._record(report, "archive", error, handle.index)
        except Exception as error:
            self._record(report, "archive", error, handle.index, unexpected=True)
        else:
            report.archived_paths.append(path)

        report.events.append(build_event(encoded, handle.index))

    def _record(
        self,
        report: CycleReport,
        stage: str,
        error: Exception,
        display_index: int | None = None,
        *,
        unexpected: bool = False,
    ) -> None:
        """Log a stage failure and keep it on the cycle report."""
        log = self.logger.exception if unexpected else self.logger.warning
        if display_index is None:
            log("Stage %s failed: %s", stage, error)
        else:
            log("Stage %s failed for display %d: %s", stage, display_index, error)
        report.failures.append(
            StageFailure(stage=stage, error=error, display_index=display_index)
        )
