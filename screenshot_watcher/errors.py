"""Exceptions raised by pipeline components."""

from __future__ import annotations


class WatcherError(RuntimeError):
    """Base class for all recoverable pipeline failures."""


class EnumerationError(WatcherError):
    """The display subsystem could not be queried."""


class CaptureError(WatcherError):
    """A single display could not be read."""

    def __init__(self, message: str, *, display_index: int | None = None) -> None:
        super().__init__(message)
        self.display_index = display_index


class EncodingError(WatcherError):
    """A raw frame could not be converted into the target image format."""


class StorageError(WatcherError):
    """An encoded frame could not be written to the local archive."""


class DeliveryError(WatcherError):
    """A batch of events was not accepted by the server."""


class TransportError(DeliveryError):
    """The request never produced a response (refused, timed out, DNS)."""


class RemoteError(DeliveryError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Server rejected events with status {status_code}.")
        self.status_code = status_code
