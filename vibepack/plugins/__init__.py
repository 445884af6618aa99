"""Plugin subsystem: host hook registry and the vibecraft plugin."""

from vibepack.plugins.base import (
    HOOK_NAMES,
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_VERSION,
    AfterToolCallEvent,
    AgentEndEvent,
    BeforeAgentStartEvent,
    BeforeToolCallEvent,
    HookContext,
    HostPlugin,
    MessageReceivedEvent,
)
from vibepack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from vibepack.plugins.loader import (
    BUILTIN_ENTRYPOINTS,
    PluginSpec,
    create_plugin,
    load_plugin_specs_from_file,
    load_plugins_from_file,
    parse_plugin_config,
    unload_plugins,
)
from vibepack.plugins.registry import HookDiagnostic, HookRegistration, HookRegistry
from vibepack.plugins.vibecraft import PLUGIN_ID, VibecraftPlugin

__all__ = [
    "BUILTIN_ENTRYPOINTS",
    "HOOK_NAMES",
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_ID",
    "AfterToolCallEvent",
    "AgentEndEvent",
    "BeforeAgentStartEvent",
    "BeforeToolCallEvent",
    "HookContext",
    "HookDiagnostic",
    "HookRegistration",
    "HookRegistry",
    "HostPlugin",
    "MessageReceivedEvent",
    "PluginConfigError",
    "PluginError",
    "PluginLoadError",
    "PluginSpec",
    "VibecraftPlugin",
    "create_plugin",
    "load_plugin_specs_from_file",
    "load_plugins_from_file",
    "parse_plugin_config",
    "unload_plugins",
]
