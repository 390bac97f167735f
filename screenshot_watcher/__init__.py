"""Periodic multi-display screenshot watcher package."""

from importlib.metadata import PackageNotFoundError, version

from screenshot_watcher.types import CycleReport, EventData, TelemetryEvent
from screenshot_watcher.watcher import ScreenshotWatcher

try:
    __version__ = version("screenshot-watcher")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["CycleReport", "EventData", "ScreenshotWatcher", "TelemetryEvent", "__version__"]
