"""Stable public API surface for vibekit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from vibepack.config import IntegrationConfig, resolve_config
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
from vibepack.delivery import DeliveryResult, EventDispatcher
from vibepack.events import AgentEventStream, emit_agent_event, on_agent_event
from vibepack.exceptions import IntegrationConfigError, VibekitError
from vibepack.integration import Integration, setup_integration
from vibepack.manual import send_stop, send_tool_use, send_user_prompt
from vibepack.plugins import HookContext, HookRegistry, VibecraftPlugin
from vibepack.simple import enable
from vibepack.transform import EventTransformer, ToolCorrelationTable

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AgentEventStream",
    "DeliveryResult",
    "DestinationEvent",
    "EventDispatcher",
    "EventTransformer",
    "HookContext",
    "HookRegistry",
    "Integration",
    "IntegrationConfig",
    "IntegrationConfigError",
    "Notification",
    "PromptSubmit",
    "SessionStart",
    "SessionStop",
    "SourceEvent",
    "ToolCorrelationTable",
    "ToolPost",
    "ToolPre",
    "VibecraftPlugin",
    "VibekitError",
    "emit_agent_event",
    "enable",
    "on_agent_event",
    "resolve_config",
    "send_stop",
    "send_tool_use",
    "send_user_prompt",
    "setup_integration",
]
