"""Versioned plugin interfaces and agent hook payloads."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1

HookName = Literal[
    "before_agent_start",
    "agent_end",
    "before_tool_call",
    "after_tool_call",
    "message_received",
]

HOOK_NAMES: tuple[str, ...] = (
    "before_agent_start",
    "agent_end",
    "before_tool_call",
    "after_tool_call",
    "message_received",
)


@dataclass(frozen=True, slots=True)
class HookContext:
    agent_id: str
    session_key: str | None = None
    tool_name: str | None = None
    tool_call_id: str | None = None

    @property
    def session_id(self) -> str:
        return self.session_key or self.agent_id


@dataclass(frozen=True, slots=True)
class BeforeAgentStartEvent:
    prompt: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AgentEndEvent:
    result: dict[str, Any] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class BeforeToolCallEvent:
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AfterToolCallEvent:
    params: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MessageReceivedEvent:
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class HostPlugin:
    """Base no-op plugin interface (API v1.x)."""

    api_version = PLUGIN_API_VERSION
    id = "plugin"
    name = "host-plugin"

    def on_load(self, registry: Any, options: dict[str, Any] | None = None) -> None:
        return None

    def on_unload(self, registry: Any) -> None:
        return None
