"""Agent runtime event to visualization event transformation."""

from __future__ import annotations

import os
from typing import Any, Callable

from vibepack.core.ids import generate_event_id
from vibepack.core.models import (
    DestinationEvent,
    Notification,
    PromptSubmit,
    SessionStart,
    SessionStop,
    SourceEvent,
    ToolPost,
    ToolPre,
)
from vibepack.transform.correlation import ToolCorrelationTable

CwdProvider = Callable[[], str]

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class EventTransformer:
    """Converts one source event into at most one destination event.

    The only state is the correlation table, which links ``pre`` and ``post``
    tool events so the post event can report a duration.
    """

    def __init__(
        self,
        *,
        correlation: ToolCorrelationTable | None = None,
        cwd: str | None = None,
        cwd_provider: CwdProvider | None = None,
    ) -> None:
        self.correlation = correlation if correlation is not None else ToolCorrelationTable()
        self._cwd = cwd
        self._cwd_provider = cwd_provider or os.getcwd

    def current_cwd(self) -> str:
        if self._cwd:
            return self._cwd
        return self._cwd_provider()

    def transform(self, event: SourceEvent) -> DestinationEvent | None:
        if event.stream == "lifecycle":
            return self._transform_lifecycle(event)
        if event.stream == "tool":
            return self._transform_tool(event)
        if event.stream == "assistant":
            return None
        if event.stream == "error":
            return Notification(
                **self._base_fields(event),
                message=event.data.get("error") or UNKNOWN_ERROR_MESSAGE,
                kind="error",
            )
        if event.stream == "prompt":
            prompt = event.data.get("prompt", event.data.get("content"))
            return PromptSubmit(
                **self._base_fields(event),
                prompt=prompt if prompt is not None else "",
            )
        return None

    def _transform_lifecycle(self, event: SourceEvent) -> DestinationEvent | None:
        phase = event.phase
        if phase == "start":
            return SessionStart(**self._base_fields(event), source="startup")
        if phase == "end":
            return SessionStop(
                **self._base_fields(event),
                response=event.data.get("result"),
            )
        return None

    def _transform_tool(self, event: SourceEvent) -> DestinationEvent | None:
        phase = event.phase
        if phase not in {"pre", "post"}:
            return None

        data = event.data
        tool_use_id = str(data.get("toolUseId") or f"{event.session_id}-{event.seq}")
        tool_name = str(data["toolName"])
        tool_input = data.get("params") or {}

        if phase == "pre":
            self.correlation.record(tool_use_id, event.ts)
            return ToolPre(
                **self._base_fields(event),
                tool=tool_name,
                tool_input=tool_input,
                tool_use_id=tool_use_id,
                assistant_text=data.get("assistantText"),
            )

        started_at = self.correlation.pop(tool_use_id)
        return ToolPost(
            **self._base_fields(event),
            tool=tool_name,
            tool_input=tool_input,
            tool_response=data.get("result") or {},
            tool_use_id=tool_use_id,
            success="error" not in data,
            duration=event.ts - started_at if started_at is not None else None,
        )

    def _base_fields(self, event: SourceEvent) -> dict[str, Any]:
        session_id = event.session_id
        return {
            "id": generate_event_id(session_id, event.ts),
            "timestamp": event.ts,
            "session_id": session_id,
            "cwd": self.current_cwd(),
        }

