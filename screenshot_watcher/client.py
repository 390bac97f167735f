"""HTTP delivery of event batches to the collection server."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import requests

from screenshot_watcher.config import ServerConfig
from screenshot_watcher.errors import RemoteError, TransportError
from screenshot_watcher.events import events_to_json
from screenshot_watcher.types import DeliveryResult, TelemetryEvent

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class EventDeliveryClient:
    """Posts a whole cycle of events to the bucket endpoint in one request."""

    config: ServerConfig

    def deliver(self, events: Sequence[TelemetryEvent]) -> DeliveryResult:
        """Send `events` and return the accepted status; raises on any failure."""
        if not events:
            raise ValueError("Cannot deliver an empty batch of events.")

        url: str = self.config.events_url
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.config.auth_token:
            headers["Authorization"] = f"Bearer {self.config.auth_token}"

        try:
            response = requests.post(
                url,
                headers=headers,
                json=events_to_json(events),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as error:
            raise TransportError(f"Unable to reach {url}: {error}") from error

        LOGGER.info("Response: %s", response.status_code)
        if not 200 <= response.status_code < 300:
            raise RemoteError(
                response.status_code,
                f"Server at {url} rejected {len(events)} events with status {response.status_code}.",
            )
        return DeliveryResult(status_code=response.status_code, event_count=len(events), url=url)
