"""Core data models for source and destination events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from vibepack.core.types import SessionStartSource


@dataclass(frozen=True, slots=True)
class SourceEvent:
    """One agent runtime event, tagged by stream with a phase in ``data``."""

    stream: str
    seq: int
    ts: int
    run_id: str
    session_key: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def session_id(self) -> str:
        return self.session_key or self.run_id

    @property
    def phase(self) -> str | None:
        phase = self.data.get("phase")
        return str(phase) if phase is not None else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "stream": self.stream,
            "seq": self.seq,
            "ts": self.ts,
            "runId": self.run_id,
            "data": dict(self.data),
        }
        if self.session_key is not None:
            payload["sessionKey"] = self.session_key
        return payload

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "SourceEvent":
        data = raw.get("data", {})
        if not isinstance(data, dict):
            raise TypeError(f"source event data must be an object, got {type(data).__name__}")
        session_key = raw.get("sessionKey", raw.get("session_key"))
        return cls(
            stream=str(raw["stream"]),
            seq=int(raw["seq"]),
            ts=int(raw["ts"]),
            run_id=str(raw["runId"] if "runId" in raw else raw["run_id"]),
            session_key=str(session_key) if session_key else None,
            data=dict(data),
        )


@dataclass(frozen=True, slots=True)
class _BaseEvent:
    id: str
    timestamp: int
    session_id: str
    cwd: str

    type: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "sessionId": self.session_id,
            "cwd": self.cwd,
        }
        payload.update(self._variant_fields())
        return payload

    def _variant_fields(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class SessionStart(_BaseEvent):
    source: SessionStartSource = "startup"

    type: ClassVar[str] = "session_start"

    def _variant_fields(self) -> dict[str, Any]:
        return {"source": self.source}


@dataclass(frozen=True, slots=True)
class SessionStop(_BaseEvent):
    response: Any = None
    stop_hook_active: bool = False

    type: ClassVar[str] = "stop"

    def _variant_fields(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"stopHookActive": self.stop_hook_active}
        if self.response is not None:
            payload["response"] = self.response
        return payload


@dataclass(frozen=True, slots=True)
class ToolPre(_BaseEvent):
    tool: str = ""
    tool_input: dict[str, Any] = field(default_factory=dict)
    tool_use_id: str = ""
    assistant_text: Any = None

    type: ClassVar[str] = "pre_tool_use"

    def _variant_fields(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "tool": self.tool,
            "toolInput": self.tool_input,
            "toolUseId": self.tool_use_id,
        }
        if self.assistant_text is not None:
            payload["assistantText"] = self.assistant_text
        return payload


@dataclass(frozen=True, slots=True)
class ToolPost(_BaseEvent):
    tool: str = ""
    tool_input: dict[str, Any] = field(default_factory=dict)
    tool_response: Any = field(default_factory=dict)
    tool_use_id: str = ""
    success: bool = True
    duration: int | None = None

    type: ClassVar[str] = "post_tool_use"

    def _variant_fields(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "tool": self.tool,
            "toolInput": self.tool_input,
            "toolResponse": self.tool_response,
            "toolUseId": self.tool_use_id,
            "success": self.success,
        }
        if self.duration is not None:
            payload["duration"] = self.duration
        return payload


@dataclass(frozen=True, slots=True)
class PromptSubmit(_BaseEvent):
    prompt: Any = ""

    type: ClassVar[str] = "user_prompt_submit"

    def _variant_fields(self) -> dict[str, Any]:
        return {"prompt": self.prompt}


@dataclass(frozen=True, slots=True)
class Notification(_BaseEvent):
    message: Any = ""
    kind: str = "error"

    type: ClassVar[str] = "notification"

    def _variant_fields(self) -> dict[str, Any]:
        return {"message": self.message, "notificationType": self.kind}


DestinationEvent = Union[
    SessionStart,
    SessionStop,
    ToolPre,
    ToolPost,
    PromptSubmit,
    Notification,
]
