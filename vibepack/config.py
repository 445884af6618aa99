"""Integration configuration: defaults, environment and explicit options."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
import os
from typing import Any, Mapping

from vibepack.exceptions import IntegrationConfigError
from vibepack.transform.correlation import (
    DEFAULT_CORRELATION_MAX_ENTRIES,
    DEFAULT_CORRELATION_TTL_MS,
)

DEFAULT_SERVER_URL = "http://localhost:4003/event"
DEFAULT_TIMEOUT_SECONDS = 2.0
_MAX_TIMEOUT_SECONDS = 30.0

ENABLED_ENV_VAR = "VIBEKIT_ENABLED"
SERVER_URL_ENV_VAR = "VIBEKIT_SERVER_URL"
EVENTS_FILE_ENV_VAR = "VIBEKIT_EVENTS_FILE"
DEBUG_ENV_VAR = "VIBEKIT_DEBUG"
CWD_ENV_VAR = "VIBEKIT_CWD"
TIMEOUT_ENV_VAR = "VIBEKIT_TIMEOUT_SECONDS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

_OPTION_ALIASES = {
    "enabled": "enabled",
    "serverUrl": "server_url",
    "server_url": "server_url",
    "endpoint": "server_url",
    "eventsFilePath": "events_file_path",
    "events_file_path": "events_file_path",
    "debug": "debug",
    "cwd": "cwd",
    "timeoutSeconds": "timeout_seconds",
    "timeout_seconds": "timeout_seconds",
    "correlationTtlMs": "correlation_ttl_ms",
    "correlation_ttl_ms": "correlation_ttl_ms",
    "correlationMaxEntries": "correlation_max_entries",
    "correlation_max_entries": "correlation_max_entries",
}
_NULLABLE_DEFAULTS: dict[str, Any] = {"events_file_path": "", "cwd": None}


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    enabled: bool = False
    server_url: str = DEFAULT_SERVER_URL
    events_file_path: str = ""
    debug: bool = False
    cwd: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    correlation_ttl_ms: int = DEFAULT_CORRELATION_TTL_MS
    correlation_max_entries: int = DEFAULT_CORRELATION_MAX_ENTRIES

    def merged(self, options: Mapping[str, Any] | None) -> "IntegrationConfig":
        """Return a copy with validated explicit options applied on top."""
        if not options:
            return self
        return replace(self, **normalize_options(options))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map option aliases to field names and validate value types."""
    unknown = sorted(str(key) for key in options if key not in _OPTION_ALIASES)
    if unknown:
        raise IntegrationConfigError(f"Unsupported integration options: {', '.join(unknown)}")

    normalized: dict[str, Any] = {}
    for key, value in options.items():
        field_name = _OPTION_ALIASES[key]
        if value is None and field_name in _NULLABLE_DEFAULTS:
            normalized[field_name] = _NULLABLE_DEFAULTS[field_name]
            continue
        normalized[field_name] = _validate_option(field_name, value)
    return normalized


def _validate_option(field_name: str, value: Any) -> Any:
    if field_name in {"enabled", "debug"}:
        if not isinstance(value, bool):
            raise IntegrationConfigError(f"Option '{field_name}' must be boolean.")
        return value
    if field_name in {"server_url", "events_file_path", "cwd"}:
        if not isinstance(value, (str, os.PathLike)):
            raise IntegrationConfigError(f"Option '{field_name}' must be a string.")
        return os.fspath(value)
    if field_name == "timeout_seconds":
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise IntegrationConfigError("Option 'timeout_seconds' must be a positive number.")
        return min(float(value), _MAX_TIMEOUT_SECONDS)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise IntegrationConfigError(f"Option '{field_name}' must be a positive integer.")
    return value


def config_from_env(environ: Mapping[str, str] | None = None) -> IntegrationConfig:
    env = os.environ if environ is None else environ
    defaults = IntegrationConfig()
    return IntegrationConfig(
        enabled=_resolve_bool(env.get(ENABLED_ENV_VAR), default=defaults.enabled),
        server_url=_resolve_text(env.get(SERVER_URL_ENV_VAR)) or defaults.server_url,
        events_file_path=_resolve_text(env.get(EVENTS_FILE_ENV_VAR)) or "",
        debug=_resolve_bool(env.get(DEBUG_ENV_VAR), default=defaults.debug),
        cwd=_resolve_text(env.get(CWD_ENV_VAR)) or None,
        timeout_seconds=_resolve_timeout_seconds(env.get(TIMEOUT_ENV_VAR)),
    )


def resolve_config(
    options: Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> IntegrationConfig:
    """Resolve defaults < environment < explicit options."""
    return config_from_env(environ).merged(options)


def _resolve_text(raw: str | None) -> str:
    if raw is None:
        return ""
    return raw.strip()


def _resolve_bool(raw: str | None, *, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _resolve_timeout_seconds(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        parsed = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    if parsed <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return min(parsed, _MAX_TIMEOUT_SECONDS)
