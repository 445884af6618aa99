"""Plugin that forwards host hook calls to the visualization server.

Register it with a host registry::

    plugin = VibecraftPlugin()
    plugin.on_load(registry, {"serverUrl": "http://localhost:4003/event"})

Each hook is converted into a source event and sent through the same
transform-and-dispatch path as the event-stream integration.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any

from vibepack.config import resolve_config
from vibepack.core.models import SourceEvent
from vibepack.integration import Integration
from vibepack.logging_setup import configure_logging
from vibepack.plugins.base import (
    PLUGIN_API_VERSION,
    AfterToolCallEvent,
    AgentEndEvent,
    BeforeAgentStartEvent,
    BeforeToolCallEvent,
    HookContext,
    HostPlugin,
    MessageReceivedEvent,
)
from vibepack.plugins.registry import HookRegistration, HookRegistry

logger = logging.getLogger(__name__)

PLUGIN_ID = "builtin:vibecraft"


class VibecraftPlugin(HostPlugin):
    api_version = PLUGIN_API_VERSION
    id = PLUGIN_ID
    name = "Vibecraft Integration"
    version = "1.0.0"
    description = "Streams agent activity to the Vibecraft visualization server"

    def __init__(self, **options: Any) -> None:
        self.default_options = dict(options)
        self.integration: Integration | None = None
        self._sequence = itertools.count(1)

    @property
    def loaded(self) -> bool:
        return self.integration is not None

    def on_load(self, registry: HookRegistry, options: dict[str, Any] | None = None) -> None:
        merged: dict[str, Any] = {"enabled": True}
        merged.update(self.default_options)
        merged.update(options or {})
        config = resolve_config(merged, environ={})
        configure_logging(debug=config.debug)

        if not config.enabled:
            logger.debug("%s disabled", PLUGIN_ID)
            return

        self.integration = Integration(config)
        handlers = {
            "before_agent_start": self.handle_before_agent_start,
            "agent_end": self.handle_agent_end,
            "before_tool_call": self.handle_before_tool_call,
            "after_tool_call": self.handle_after_tool_call,
            "message_received": self.handle_message_received,
        }
        for hook_name, handler in handlers.items():
            registry.register_hook(
                HookRegistration(plugin_id=PLUGIN_ID, hook_name=hook_name, handler=handler)
            )
        logger.debug("%s loaded (server=%s)", PLUGIN_ID, config.server_url)

    def on_unload(self, registry: HookRegistry) -> None:
        registry.unregister_hooks(PLUGIN_ID)
        if self.integration is not None:
            self.integration.teardown()
            self.integration = None
        logger.debug("%s unloaded", PLUGIN_ID)

    def handle_before_agent_start(self, event: BeforeAgentStartEvent, ctx: HookContext) -> None:
        self._forward("lifecycle", ctx, {"phase": "start"})

    def handle_agent_end(self, event: AgentEndEvent, ctx: HookContext) -> None:
        data: dict[str, Any] = {"phase": "end"}
        response = (event.result or {}).get("response")
        if response is not None:
            data["result"] = response
        self._forward("lifecycle", ctx, data)

    def handle_before_tool_call(self, event: BeforeToolCallEvent, ctx: HookContext) -> None:
        self._forward("tool", ctx, self._tool_data("pre", ctx, event.params))

    def handle_after_tool_call(self, event: AfterToolCallEvent, ctx: HookContext) -> None:
        data = self._tool_data("post", ctx, event.params)
        if event.result is not None:
            data["result"] = event.result
        if event.error is not None:
            data["error"] = event.error
        self._forward("tool", ctx, data)

    def handle_message_received(self, event: MessageReceivedEvent, ctx: HookContext) -> None:
        self._forward("prompt", ctx, {"prompt": event.content or ""})

    def _tool_data(self, phase: str, ctx: HookContext, params: dict[str, Any]) -> dict[str, Any]:
        data: dict[str, Any] = {
            "phase": phase,
            "toolName": ctx.tool_name or "unknown",
            "params": dict(params or {}),
        }
        if ctx.tool_call_id:
            data["toolUseId"] = ctx.tool_call_id
        return data

    def _forward(self, stream: str, ctx: HookContext, data: dict[str, Any]) -> None:
        if self.integration is None:
            return
        self.integration.handle_event(
            SourceEvent(
                stream=stream,
                seq=next(self._sequence),
                ts=int(time.time() * 1000),
                run_id=ctx.agent_id,
                session_key=ctx.session_key,
                data=data,
            )
        )
