"""Local persistence of encoded screenshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from screenshot_watcher.errors import StorageError
from screenshot_watcher.types import EncodedFrame

LOGGER = logging.getLogger(__name__)

ARCHIVE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def build_archive_name(timestamp: datetime, index: int, extension: str) -> str:
    """Build `{local timestamp}_{index}.{ext}`; the index separates same-second captures."""
    local_time: datetime = timestamp.astimezone() if timestamp.tzinfo else timestamp
    return f"{local_time.strftime(ARCHIVE_TIMESTAMP_FORMAT)}_{index}.{extension}"


@dataclass(slots=True)
class LocalFrameArchiver:
    """Writes encoded frames into a flat archive directory."""

    archive_dir: Path

    def archive(self, frame: EncodedFrame, timestamp: datetime, index: int) -> Path:
        """Persist `frame` and return its path; never overwrites an existing file."""
        target_path: Path = self.archive_dir / build_archive_name(
            timestamp, index, frame.extension
        )
        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
            with target_path.open("xb") as handle:
                handle.write(frame.data)
        except OSError as error:
            raise StorageError(f"Unable to write {target_path}: {error}") from error

        LOGGER.debug("Archived %d bytes to %s", len(frame.data), target_path)
        return target_path
