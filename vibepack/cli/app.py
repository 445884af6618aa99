import json
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Any, Iterable, NoReturn, Optional

import typer

from vibepack.config import IntegrationConfig, resolve_config
from vibepack.core.models import SourceEvent
from vibepack.exceptions import IntegrationConfigError
from vibepack.integration import Integration
from vibepack.logging_setup import configure_logging
from vibepack.manual import send_stop, send_tool_use, send_user_prompt

app = typer.Typer(help="vibekit CLI")
send_app = typer.Typer(help="Send one-off events to the visualization server.")
app.add_typer(send_app, name="send")

_DEFAULT_WAIT_SECONDS = 5.0


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("vibekit")
    except PackageNotFoundError:
        from vibekit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show vibekit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err)


def _fail(message: str, *, json_output: bool, exit_code: int = 2) -> NoReturn:
    if json_output:
        _echo_json({"status": "error", "exit_code": exit_code, "message": message})
    else:
        _echo(message, err=True)
    raise typer.Exit(code=exit_code)


def _build_integration(
    *,
    server_url: str | None,
    events_file: Path | None,
    cwd: str | None,
    debug: bool,
    timeout_seconds: float | None,
    json_output: bool,
) -> Integration:
    options: dict[str, Any] = {"enabled": True}
    if server_url is not None:
        options["server_url"] = server_url
    if events_file is not None:
        options["events_file_path"] = str(events_file)
    if cwd is not None:
        options["cwd"] = cwd
    if debug:
        options["debug"] = True
    if timeout_seconds is not None:
        options["timeout_seconds"] = timeout_seconds
    try:
        config = resolve_config(options)
    except IntegrationConfigError as error:
        _fail(str(error), json_output=json_output)
    configure_logging(debug=config.debug)
    return Integration(config)


def _iter_source_lines(source: str) -> Iterable[str]:
    if source == "-":
        yield from sys.stdin
        return
    with Path(source).open("r", encoding="utf-8") as handle:
        yield from handle


def _parse_json_object(raw: str | None, *, option: str, json_output: bool) -> dict[str, Any]:
    if raw is None:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as error:
        _fail(f"{option} must be a JSON object: {error}", json_output=json_output)
    if not isinstance(parsed, dict):
        _fail(f"{option} must be a JSON object", json_output=json_output)
    return parsed


def _server_url_option() -> Any:
    return typer.Option(None, "--server-url", "--endpoint", help="Visualization server URL.")


def _events_file_option() -> Any:
    return typer.Option(None, "--events-file", help="Append events to this NDJSON file.")


@app.command()
def forward(
    source: str = typer.Argument("-", help="NDJSON file of source events, or '-' for stdin."),
    server_url: Optional[str] = _server_url_option(),
    events_file: Optional[Path] = _events_file_option(),
    cwd: Optional[str] = typer.Option(None, "--cwd", help="Working directory to report."),
    timeout_seconds: Optional[float] = typer.Option(
        None,
        "--timeout-seconds",
        help="Per-request delivery timeout.",
    ),
    wait_seconds: float = typer.Option(
        _DEFAULT_WAIT_SECONDS,
        "--wait-seconds",
        help="How long to wait for in-flight deliveries before exiting.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable verbose diagnostic logging."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable summary."),
) -> None:
    """Transform agent source events and forward them to the visualization server."""
    integration = _build_integration(
        server_url=server_url,
        events_file=events_file,
        cwd=cwd,
        debug=debug,
        timeout_seconds=timeout_seconds,
        json_output=json_output,
    )

    received = forwarded = dropped = malformed = 0
    try:
        for line in _iter_source_lines(source):
            stripped = line.strip()
            if not stripped:
                continue
            received += 1
            try:
                raw = json.loads(stripped)
                if not isinstance(raw, dict):
                    raise TypeError("source event must be a JSON object")
                destination = integration.handle_event(SourceEvent.from_dict(raw))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                malformed += 1
                continue
            if destination is None:
                dropped += 1
            else:
                forwarded += 1
    except OSError as error:
        _fail(f"could not read source events: {error}", json_output=json_output)

    drained = integration.flush(max(0.0, wait_seconds))
    integration.teardown()

    payload = {
        "status": "ok",
        "exit_code": 0,
        "received": received,
        "forwarded": forwarded,
        "dropped": dropped,
        "malformed": malformed,
        "drained": drained,
    }
    if json_output:
        _echo_json(payload)
    else:
        _echo(
            f"forwarded {forwarded} of {received} event(s) "
            f"(dropped={dropped} malformed={malformed})"
        )


@send_app.command("prompt")
def send_prompt_command(
    session_id: str = typer.Argument(..., help="Session identifier."),
    prompt: str = typer.Argument(..., help="Prompt text."),
    server_url: Optional[str] = _server_url_option(),
    events_file: Optional[Path] = _events_file_option(),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable result."),
) -> None:
    """Send a user prompt event."""
    integration = _build_integration(
        server_url=server_url,
        events_file=events_file,
        cwd=None,
        debug=False,
        timeout_seconds=None,
        json_output=json_output,
    )
    send_user_prompt(integration, session_id, prompt)
    _finish_send(integration, kind="user_prompt_submit", json_output=json_output)


@send_app.command("stop")
def send_stop_command(
    session_id: str = typer.Argument(..., help="Session identifier."),
    response: Optional[str] = typer.Option(None, "--response", help="Final response text."),
    server_url: Optional[str] = _server_url_option(),
    events_file: Optional[Path] = _events_file_option(),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable result."),
) -> None:
    """Send a stop (session completion) event."""
    integration = _build_integration(
        server_url=server_url,
        events_file=events_file,
        cwd=None,
        debug=False,
        timeout_seconds=None,
        json_output=json_output,
    )
    send_stop(integration, session_id, response)
    _finish_send(integration, kind="stop", json_output=json_output)


@send_app.command("tool")
def send_tool_command(
    session_id: str = typer.Argument(..., help="Session identifier."),
    tool_name: str = typer.Argument(..., help="Tool name."),
    params: Optional[str] = typer.Option(None, "--params", help="Tool input as a JSON object."),
    result: Optional[str] = typer.Option(None, "--result", help="Tool output as a JSON object."),
    error: Optional[str] = typer.Option(None, "--error", help="Mark the tool call as failed."),
    server_url: Optional[str] = _server_url_option(),
    events_file: Optional[Path] = _events_file_option(),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable result."),
) -> None:
    """Send a pre/post tool use pair."""
    tool_params = _parse_json_object(params, option="--params", json_output=json_output)
    tool_result = _parse_json_object(result, option="--result", json_output=json_output)
    integration = _build_integration(
        server_url=server_url,
        events_file=events_file,
        cwd=None,
        debug=False,
        timeout_seconds=None,
        json_output=json_output,
    )
    send_tool_use(integration, session_id, tool_name, tool_params, tool_result, error)
    _finish_send(integration, kind="tool_use", json_output=json_output)


def _finish_send(integration: Integration, *, kind: str, json_output: bool) -> None:
    drained = integration.flush(_DEFAULT_WAIT_SECONDS)
    integration.teardown()
    payload = {"status": "ok", "exit_code": 0, "event": kind, "drained": drained}
    if json_output:
        _echo_json(payload)
    else:
        _echo(f"sent {kind} event")


@app.command("config")
def show_config(
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable config."),
) -> None:
    """Show the configuration resolved from the environment."""
    config: IntegrationConfig = resolve_config()
    payload = {"status": "ok", "exit_code": 0, "config": config.to_dict()}
    if json_output:
        _echo_json(payload)
        return
    for key, value in config.to_dict().items():
        _echo(f"{key}={value}")
