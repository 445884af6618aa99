"""Single-call integration entry point for agent code.

Usage::

    from vibekit import enable

    teardown = enable({"enabled": True, "debug": True})
    ...
    teardown()
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from vibepack.core.ids import generate_event_id
from vibepack.core.models import Notification
from vibepack.events import AgentEventStream, default_event_stream
from vibepack.integration import Teardown, try_create_integration

SYSTEM_SESSION_ID = "system"
ENABLED_MESSAGE = "vibekit integration enabled"


def enable(
    options: Mapping[str, Any] | None = None,
    *,
    stream: AgentEventStream | None = None,
    environ: Mapping[str, str] | None = None,
) -> Teardown:
    """Subscribe to agent events and announce the integration to the server."""
    integration = try_create_integration(
        options,
        stream=stream if stream is not None else default_event_stream(),
        environ=environ,
    )
    if integration is None or not integration.enabled:
        return _noop_teardown

    integration.start()
    timestamp = int(time.time() * 1000)
    integration.emit(
        Notification(
            id=generate_event_id(SYSTEM_SESSION_ID, timestamp),
            timestamp=timestamp,
            session_id=SYSTEM_SESSION_ID,
            cwd=integration.transformer.current_cwd(),
            message=ENABLED_MESSAGE,
            kind="info",
        )
    )
    return integration.teardown


def _noop_teardown() -> None:
    return None
