from vibepack.config import IntegrationConfig
from vibepack.core.models import DestinationEvent
from vibepack.integration import Integration
from vibepack.manual import send_stop, send_tool_use, send_user_prompt


class _RecordingDispatcher:
    def __init__(self) -> None:
        self.events: list[DestinationEvent] = []

    def dispatch(self, event: DestinationEvent) -> None:
        self.events.append(event)

    def flush(self, timeout: float | None = None) -> bool:
        return True


def _integration(enabled: bool = True) -> tuple[Integration, _RecordingDispatcher]:
    dispatcher = _RecordingDispatcher()
    integration = Integration(
        IntegrationConfig(enabled=enabled, server_url="", cwd="/work"),
        dispatcher=dispatcher,  # type: ignore[arg-type]
    )
    return integration, dispatcher


def test_send_tool_use_emits_correlated_pair() -> None:
    integration, dispatcher = _integration()

    send_tool_use(integration, "sess", "Read", {"path": "a.txt"}, {"content": "hi"})

    pre, post = (event.to_dict() for event in dispatcher.events)
    assert pre["type"] == "pre_tool_use"
    assert post["type"] == "post_tool_use"
    assert pre["toolUseId"] == post["toolUseId"]
    assert pre["toolUseId"].startswith("sess-")
    assert post["toolInput"] == {"path": "a.txt"}
    assert post["toolResponse"] == {"content": "hi"}
    assert post["success"] is True
    assert post["duration"] >= 0
    assert post["sessionId"] == "sess"
    assert len(integration.correlation) == 0


def test_send_tool_use_with_error_marks_failure() -> None:
    integration, dispatcher = _integration()

    send_tool_use(integration, "sess", "Bash", {"cmd": "false"}, {}, error="exit 1")

    assert dispatcher.events[-1].to_dict()["success"] is False


def test_send_user_prompt() -> None:
    integration, dispatcher = _integration()

    send_user_prompt(integration, "sess", "write tests")

    payload = dispatcher.events[0].to_dict()
    assert payload["type"] == "user_prompt_submit"
    assert payload["prompt"] == "write tests"
    assert payload["cwd"] == "/work"


def test_send_stop_with_and_without_response() -> None:
    integration, dispatcher = _integration()

    send_stop(integration, "sess", "finished")
    send_stop(integration, "sess")

    first, second = (event.to_dict() for event in dispatcher.events)
    assert first["type"] == "stop"
    assert first["response"] == "finished"
    assert "response" not in second


def test_manual_calls_are_noops_when_disabled() -> None:
    integration, dispatcher = _integration(enabled=False)

    send_user_prompt(integration, "sess", "ignored")
    send_tool_use(integration, "sess", "Read", {}, {})
    send_stop(integration, "sess")

    assert dispatcher.events == []
