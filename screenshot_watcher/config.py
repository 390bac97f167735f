"""Environment-driven configuration models."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "SCREENSHOT_WATCHER_"
BUCKET_PREFIX = "aw-watcher-screenshot_"
DEFAULT_DEVICE_ID = "Razerator"
SUPPORTED_SCHEMES = ("http", "https")


def _get_env(name: str, default: str | None = None) -> str | None:
    """Return an environment variable or the provided default value."""
    value: str | None = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    stripped: str = value.strip()
    return stripped if stripped else default


def _get_env_float(name: str, default: float) -> float:
    """Return an environment variable parsed as float."""
    value: str | None = _get_env(name)
    if value is None:
        return default
    return float(value)


def _get_env_int(name: str, default: int) -> int:
    """Return an environment variable parsed as int."""
    value: str | None = _get_env(name)
    if value is None:
        return default
    return int(value)


def _get_env_bool(name: str, default: bool) -> bool:
    """Return an environment variable parsed as bool."""
    value: str | None = _get_env(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "y", "on"}


@dataclass(slots=True, frozen=True)
class ServerConfig:
    """Where and how events are delivered."""

    host: str = "localhost"
    port: int = 5666
    scheme: str = "http"
    auth_token: str | None = None
    device_id: str | None = None
    bucket_id: str | None = None
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Reject unusable server settings."""
        if not self.host:
            raise ValueError("Server host must not be empty.")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Server port must be within 1-65535, got {self.port}.")
        if self.scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported scheme '{self.scheme}'. Use http or https.")
        if self.timeout_seconds <= 0:
            raise ValueError("Request timeout must be positive.")

    @property
    def bucket(self) -> str:
        """Bucket receiving this watcher's events."""
        if self.bucket_id:
            return self.bucket_id
        return f"{BUCKET_PREFIX}{self.device_id or DEFAULT_DEVICE_ID}"

    @property
    def events_url(self) -> str:
        """Endpoint that accepts event batches for the bucket."""
        return f"{self.scheme}://{self.host}:{self.port}/api/0/buckets/{self.bucket}/events"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load server settings from environment variables."""
        return cls(
            host=_get_env("SERVER", "localhost") or "localhost",
            port=_get_env_int("PORT", 5666),
            scheme=(_get_env("SCHEME", "http") or "http").lower(),
            auth_token=_get_env("AUTH_TOKEN"),
            device_id=_get_env("DEVICE_ID"),
            bucket_id=_get_env("BUCKET_ID"),
            timeout_seconds=_get_env_float("TIMEOUT_SECONDS", 30.0),
        )


@dataclass(slots=True, frozen=True)
class WatcherConfig:
    """Runtime settings, fixed for the lifetime of the process."""

    server: ServerConfig
    interval_seconds: int = 5
    archive_dir: Path = Path("target/screenshots")
    verbose: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Reject intervals that are not whole positive seconds."""
        if isinstance(self.interval_seconds, bool) or not isinstance(self.interval_seconds, int):
            raise ValueError("Capture interval must be a whole number of seconds.")
        if self.interval_seconds < 1:
            raise ValueError(f"Capture interval must be at least 1 second, got {self.interval_seconds}.")

    @property
    def effective_log_level(self) -> str:
        """Log level to configure, forced to DEBUG when verbose."""
        return "DEBUG" if self.verbose else self.log_level

    @classmethod
    def from_env(cls) -> "WatcherConfig":
        """Load watcher runtime settings from environment variables."""
        return cls(
            server=ServerConfig.from_env(),
            interval_seconds=_get_env_int("INTERVAL", 5),
            archive_dir=Path(_get_env("ARCHIVE_DIR", "target/screenshots") or "target/screenshots"),
            verbose=_get_env_bool("VERBOSE", False),
            log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        )
