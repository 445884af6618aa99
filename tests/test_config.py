from pathlib import Path

import pytest

from vibepack.config import (
    DEFAULT_SERVER_URL,
    DEFAULT_TIMEOUT_SECONDS,
    IntegrationConfig,
    config_from_env,
    resolve_config,
)
from vibepack.exceptions import IntegrationConfigError, VibekitError


def test_defaults_are_disabled_localhost() -> None:
    config = resolve_config(environ={})

    assert config == IntegrationConfig()
    assert config.enabled is False
    assert config.server_url == DEFAULT_SERVER_URL
    assert config.events_file_path == ""
    assert config.timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_environment_values_are_read() -> None:
    config = config_from_env(
        {
            "VIBEKIT_ENABLED": "yes",
            "VIBEKIT_SERVER_URL": " http://127.0.0.1:9000/event ",
            "VIBEKIT_EVENTS_FILE": "/tmp/events.ndjson",
            "VIBEKIT_DEBUG": "1",
            "VIBEKIT_CWD": "/repo",
            "VIBEKIT_TIMEOUT_SECONDS": "5",
        }
    )

    assert config.enabled is True
    assert config.server_url == "http://127.0.0.1:9000/event"
    assert config.events_file_path == "/tmp/events.ndjson"
    assert config.debug is True
    assert config.cwd == "/repo"
    assert config.timeout_seconds == 5.0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", False), ("off", False), ("TRUE", True), ("maybe", False)],
)
def test_enabled_env_parsing_falls_back_to_default(raw: str, expected: bool) -> None:
    assert config_from_env({"VIBEKIT_ENABLED": raw}).enabled is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("abc", DEFAULT_TIMEOUT_SECONDS), ("-1", DEFAULT_TIMEOUT_SECONDS), ("120", 30.0)],
)
def test_timeout_env_is_validated_and_clamped(raw: str, expected: float) -> None:
    assert config_from_env({"VIBEKIT_TIMEOUT_SECONDS": raw}).timeout_seconds == expected


def test_explicit_options_override_environment() -> None:
    config = resolve_config(
        {"enabled": False, "serverUrl": "http://override/event"},
        environ={"VIBEKIT_ENABLED": "1", "VIBEKIT_SERVER_URL": "http://env/event"},
    )

    assert config.enabled is False
    assert config.server_url == "http://override/event"


def test_option_aliases_map_to_fields(tmp_path: Path) -> None:
    config = resolve_config(
        {
            "endpoint": "http://alias/event",
            "eventsFilePath": tmp_path / "events.ndjson",
            "timeoutSeconds": 1,
            "correlationMaxEntries": 8,
        },
        environ={},
    )

    assert config.server_url == "http://alias/event"
    assert config.events_file_path == str(tmp_path / "events.ndjson")
    assert config.timeout_seconds == 1.0
    assert config.correlation_max_entries == 8


def test_none_resets_nullable_options() -> None:
    config = resolve_config(
        {"eventsFilePath": None, "cwd": None},
        environ={"VIBEKIT_EVENTS_FILE": "/tmp/x", "VIBEKIT_CWD": "/repo"},
    )

    assert config.events_file_path == ""
    assert config.cwd is None


@pytest.mark.parametrize(
    "options",
    [
        {"unknown": 1},
        {"enabled": "yes"},
        {"serverUrl": 42},
        {"timeoutSeconds": 0},
        {"timeoutSeconds": True},
        {"correlationTtlMs": 1.5},
        {"serverUrl": None},
    ],
)
def test_invalid_options_raise_config_error(options: dict) -> None:
    with pytest.raises(IntegrationConfigError) as excinfo:
        resolve_config(options, environ={})

    assert isinstance(excinfo.value, VibekitError)
    assert isinstance(excinfo.value, ValueError)


def test_to_dict_lists_every_field() -> None:
    payload = IntegrationConfig(enabled=True).to_dict()

    assert payload["enabled"] is True
    assert set(payload) == {
        "enabled",
        "server_url",
        "events_file_path",
        "debug",
        "cwd",
        "timeout_seconds",
        "correlation_ttl_ms",
        "correlation_max_entries",
    }
