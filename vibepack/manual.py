"""Manual event sending for callers without an agent event stream."""

from __future__ import annotations

import itertools
import time
from typing import Any

from vibepack.core.ids import generate_event_id
from vibepack.core.models import SourceEvent
from vibepack.integration import Integration

_MANUAL_RUN_PREFIX = "manual"
_SEQUENCE = itertools.count(1)


def send_tool_use(
    integration: Integration,
    session_id: str,
    tool_name: str,
    params: dict[str, Any],
    result: dict[str, Any],
    error: str | None = None,
) -> None:
    """Send a pre/post tool pair; the post event carries the measured duration."""
    started_at = _now_ms()
    tool_use_id = generate_event_id(session_id, started_at)
    integration.handle_event(
        _source_event(
            "tool",
            session_id,
            started_at,
            {"phase": "pre", "toolName": tool_name, "toolUseId": tool_use_id, "params": params},
        )
    )

    post_data: dict[str, Any] = {
        "phase": "post",
        "toolName": tool_name,
        "toolUseId": tool_use_id,
        "params": params,
        "result": result,
    }
    if error is not None:
        post_data["error"] = error
    integration.handle_event(_source_event("tool", session_id, _now_ms(), post_data))


def send_user_prompt(integration: Integration, session_id: str, prompt: str) -> None:
    integration.handle_event(
        _source_event("prompt", session_id, _now_ms(), {"prompt": prompt})
    )


def send_stop(integration: Integration, session_id: str, response: str | None = None) -> None:
    data: dict[str, Any] = {"phase": "end"}
    if response is not None:
        data["result"] = response
    integration.handle_event(_source_event("lifecycle", session_id, _now_ms(), data))


def _source_event(stream: str, session_id: str, ts: int, data: dict[str, Any]) -> SourceEvent:
    return SourceEvent(
        stream=stream,
        seq=next(_SEQUENCE),
        ts=ts,
        run_id=f"{_MANUAL_RUN_PREFIX}-{session_id}",
        session_key=session_id,
        data=data,
    )


def _now_ms() -> int:
    return int(time.time() * 1000)
