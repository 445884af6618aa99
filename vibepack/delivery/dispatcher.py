"""Best-effort, fire-and-forget delivery of destination events."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import threading
import time
from typing import Any, Callable

import requests

from vibepack.config import IntegrationConfig
from vibepack.core.canonical import canonical_json
from vibepack.core.models import DestinationEvent

logger = logging.getLogger(__name__)

PostFn = Callable[..., Any]

_JSON_HEADERS = {"Content-Type": "application/json"}
_LOG_PREVIEW_CHARS = 200


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Outcome of one delivery attempt (network and file paths)."""

    event_id: str
    skipped: bool = False
    http_status: int | None = None
    http_error: str | None = None
    file_written: bool = False
    file_error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.http_status is not None and 200 <= self.http_status < 300

    @property
    def ok(self) -> bool:
        return not self.skipped and self.http_error is None and self.file_error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "skipped": self.skipped,
            "http_status": self.http_status,
            "http_error": self.http_error,
            "file_written": self.file_written,
            "file_error": self.file_error,
        }


class EventDispatcher:
    """Serializes destination events and delivers them without blocking callers."""

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        post_fn: PostFn | None = None,
    ) -> None:
        self.config = config
        self._post_fn = post_fn or requests.post
        self._file_lock = threading.Lock()
        self._inflight_lock = threading.Lock()
        self._inflight: set[threading.Thread] = set()

    def dispatch(self, event: DestinationEvent) -> None:
        """Start delivery in the background and return immediately."""
        if not self.config.enabled:
            return
        thread = threading.Thread(
            target=self._run_delivery,
            args=(event,),
            name=f"vibekit-dispatch-{event.id}",
            daemon=True,
        )
        with self._inflight_lock:
            self._inflight.add(thread)
        try:
            thread.start()
        except RuntimeError as error:
            with self._inflight_lock:
                self._inflight.discard(thread)
            logger.debug("Could not start delivery thread for %s: %s", event.id, error)

    def deliver(self, event: DestinationEvent) -> DeliveryResult:
        """Deliver synchronously and report what happened; never raises."""
        if not self.config.enabled:
            return DeliveryResult(event_id=event.id, skipped=True)

        try:
            body = canonical_json(event.to_dict())
        except (TypeError, ValueError) as error:
            logger.debug("Failed to serialize event %s: %s", event.id, error)
            return DeliveryResult(event_id=event.id, http_error=f"serialization: {error}")

        http_status, http_error = self._post(body)
        file_written, file_error = self._append(body)
        return DeliveryResult(
            event_id=event.id,
            http_status=http_status,
            http_error=http_error,
            file_written=file_written,
            file_error=file_error,
        )

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for in-flight deliveries; return True when none remain."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._inflight_lock:
            pending = list(self._inflight)
        for thread in pending:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(remaining)
        with self._inflight_lock:
            return not any(thread.is_alive() for thread in self._inflight)

    @property
    def inflight_count(self) -> int:
        with self._inflight_lock:
            return sum(1 for thread in self._inflight if thread.is_alive())

    def _run_delivery(self, event: DestinationEvent) -> None:
        try:
            self.deliver(event)
        except Exception as error:
            logger.debug("Delivery of %s failed: %s: %s", event.id, error.__class__.__name__, error)
        finally:
            with self._inflight_lock:
                self._inflight.discard(threading.current_thread())

    def _post(self, body: str) -> tuple[int | None, str | None]:
        url = self.config.server_url
        if not url:
            return None, None

        logger.debug("Sending event: %s...", body[:_LOG_PREVIEW_CHARS])
        try:
            response = self._post_fn(
                url,
                data=body.encode("utf-8"),
                headers=dict(_JSON_HEADERS),
                timeout=self.config.timeout_seconds,
            )
        except (requests.RequestException, ValueError, OSError) as error:
            logger.debug("Failed to send event (server may not be running): %s", error)
            return None, f"{error.__class__.__name__}: {error}"

        status = int(getattr(response, "status_code", 0) or 0)
        if not 200 <= status < 300:
            logger.debug("Server responded with %s", status)
            return status, f"HTTP {status}"
        return status, None

    def _append(self, body: str) -> tuple[bool, str | None]:
        path_value = self.config.events_file_path
        if not path_value:
            return False, None

        target = Path(path_value)
        try:
            with self._file_lock:
                target.parent.mkdir(parents=True, exist_ok=True)
                with target.open("a", encoding="utf-8") as handle:
                    handle.write(body + "\n")
        except OSError as error:
            logger.debug("Failed to write to events file %s: %s", target, error)
            return False, f"{error.__class__.__name__}: {error}"
        logger.debug("Appended to events file: %s", target)
        return True, None
