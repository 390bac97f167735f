"""Display enumeration and screen-capture implementations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from PIL import Image

from screenshot_watcher.errors import CaptureError, EnumerationError
from screenshot_watcher.types import DisplayHandle, RawFrame

LOGGER = logging.getLogger(__name__)


def _import_mss():
    """Import mss, surfacing a missing dependency as a runtime error."""
    try:
        import mss
        import mss.exception
    except ImportError as error:
        raise RuntimeError("mss is required for screenshot capture.") from error
    return mss


@dataclass(slots=True)
class MSSDisplayEnumerator:
    """Lists physical monitors known to mss."""

    logger: logging.Logger = LOGGER

    def enumerate(self) -> list[DisplayHandle]:
        """Return one handle per monitor, skipping mss's combined virtual screen."""
        mss = _import_mss()
        try:
            with mss.mss() as session:
                monitors: list[dict[str, int]] = list(session.monitors[1:])
        except (mss.exception.ScreenShotError, OSError) as error:
            raise EnumerationError(f"Unable to query displays: {error}") from error

        handles: list[DisplayHandle] = []
        for index, monitor in enumerate(monitors):
            handle = DisplayHandle(
                index=index,
                left=int(monitor["left"]),
                top=int(monitor["top"]),
                width=int(monitor["width"]),
                height=int(monitor["height"]),
            )
            self.logger.debug("Display %d: %s", index, handle)
            handles.append(handle)
        return handles


@dataclass(slots=True)
class MSSFrameCapturer:
    """Grabs a display region with mss and converts it to RGBA."""

    def capture(self, handle: DisplayHandle) -> RawFrame:
        """Capture the current contents of `handle` as an RGBA8 frame."""
        mss = _import_mss()

        try:
            with mss.mss() as session:
                screenshot = session.grab(handle.region())
            captured_at: datetime = datetime.now(timezone.utc)
            width, height = screenshot.size
            # mss hands back BGRA with an unreliable alpha byte on X11.
            image = Image.frombytes("RGB", (width, height), screenshot.bgra, "raw", "BGRX")
            pixels: bytes = image.convert("RGBA").tobytes()
        except (mss.exception.ScreenShotError, OSError, ValueError) as error:
            raise CaptureError(
                f"Unable to capture display {handle.index}: {error}",
                display_index=handle.index,
            ) from error

        return RawFrame(
            width=width,
            height=height,
            pixels=pixels,
            display_index=handle.index,
            captured_at=captured_at,
        )
