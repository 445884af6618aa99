"""Load host plugins from a versioned JSON config file.

Config shape (version 1)::

    {
      "config_version": 1,
      "plugins": [
        {"id": "builtin:vibecraft", "options": {"serverUrl": "..."}},
        {"entrypoint": "my_pkg.plugins:MyPlugin", "enabled": false}
      ]
    }
"""

from __future__ import annotations

import importlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from vibepack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from vibepack.plugins.exceptions import PluginConfigError, PluginLoadError
from vibepack.plugins.registry import HookRegistry

BUILTIN_ENTRYPOINTS = {
    "builtin:vibecraft": "vibepack.plugins.vibecraft:VibecraftPlugin",
}

_ENTRY_KEYS = frozenset({"entrypoint", "id", "options", "config", "enabled"})


@dataclass(frozen=True, slots=True)
class PluginSpec:
    entrypoint: str
    options: dict[str, Any] = field(default_factory=dict)
    plugin_id: str | None = None

    @property
    def label(self) -> str:
        return self.plugin_id or self.entrypoint


def parse_plugin_config(raw: Any, *, source: str = "<config>") -> list[PluginSpec]:
    """Validate a decoded config document and return the enabled plugin specs."""
    if not isinstance(raw, Mapping):
        raise PluginConfigError(f"{source}: plugin config must be a JSON object.")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"{source}: Unsupported plugin config version {version!r} "
            f"(this release reads version {PLUGIN_CONFIG_VERSION})."
        )

    entries = raw.get("plugins")
    if not isinstance(entries, list):
        raise PluginConfigError(f"{source}: 'plugins' must be a JSON array.")

    specs: list[PluginSpec] = []
    for position, entry in enumerate(entries, start=1):
        spec = _parse_entry(entry, where=f"{source} plugin #{position}")
        if spec is not None:
            specs.append(spec)
    return specs


def load_plugin_specs_from_file(path: str | Path) -> list[PluginSpec]:
    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON in {config_path}: {error}") from error
    return parse_plugin_config(raw, source=str(config_path))


def load_plugins_from_file(path: str | Path, registry: HookRegistry) -> list[Any]:
    """Create every enabled plugin and call ``on_load(registry, options)``.

    If one plugin fails, the ones already loaded are unloaded again before the
    error propagates, so the registry is left as it was.
    """
    loaded: list[Any] = []
    try:
        for spec in load_plugin_specs_from_file(path):
            plugin = create_plugin(spec)
            plugin.on_load(registry, dict(spec.options))
            loaded.append(plugin)
    except Exception:
        unload_plugins(loaded, registry)
        raise
    return loaded


def unload_plugins(plugins: Iterable[Any], registry: HookRegistry) -> None:
    """Unload plugins in reverse load order."""
    for plugin in reversed(list(plugins)):
        plugin.on_unload(registry)


def create_plugin(spec: PluginSpec) -> Any:
    """Resolve ``spec.entrypoint`` and return a plugin with a compatible API."""
    target = _resolve_entrypoint(spec)
    if callable(target):
        try:
            plugin = target()
        except Exception as error:
            raise PluginLoadError(f"{spec.label}: could not create plugin: {error}") from error
    else:
        plugin = target

    for hook in ("on_load", "on_unload"):
        if not callable(getattr(plugin, hook, None)):
            raise PluginLoadError(f"{spec.label}: plugin has no callable {hook}().")

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(declared) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"{spec.label}: unsupported api_version {declared!r} "
            f"(expected {_major(PLUGIN_API_VERSION)}.x)."
        )
    return plugin


def _parse_entry(entry: Any, *, where: str) -> PluginSpec | None:
    if not isinstance(entry, Mapping):
        raise PluginConfigError(f"{where}: entry must be a JSON object.")

    extra = sorted(set(entry) - _ENTRY_KEYS)
    if extra:
        raise PluginConfigError(f"{where}: unsupported keys {', '.join(extra)}.")

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"{where}: 'enabled' must be true or false.")
    if not enabled:
        return None

    plugin_id = entry.get("id")
    entrypoint = entry.get("entrypoint")
    if entrypoint is None and plugin_id is not None:
        entrypoint = BUILTIN_ENTRYPOINTS.get(str(plugin_id))
        if entrypoint is None:
            raise PluginConfigError(f"{where}: unknown builtin id {plugin_id!r}.")
    if not isinstance(entrypoint, str) or entrypoint.count(":") != 1:
        raise PluginConfigError(f"{where}: 'entrypoint' must look like 'module:attribute'.")

    options = entry.get("options", entry.get("config", {}))
    if not isinstance(options, Mapping):
        raise PluginConfigError(f"{where}: 'options' must be a JSON object.")

    return PluginSpec(
        entrypoint=entrypoint,
        options=dict(options),
        plugin_id=str(plugin_id) if plugin_id is not None else None,
    )


def _resolve_entrypoint(spec: PluginSpec) -> Any:
    module_name, attribute = spec.entrypoint.split(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"{spec.label}: failed to import module {module_name!r}: {error}"
        ) from error
    if not hasattr(module, attribute):
        raise PluginLoadError(f"{spec.label}: {module_name!r} has no attribute {attribute!r}.")
    return getattr(module, attribute)


def _major(version: str) -> str:
    return version.partition(".")[0]
