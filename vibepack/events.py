"""In-process agent event stream with subscribe/unsubscribe handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable
import warnings

from vibepack.core.models import SourceEvent

AgentEventListener = Callable[[SourceEvent], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class ListenerDiagnostic:
    listener: str
    stream: str
    seq: int
    error_type: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {
            "listener": self.listener,
            "stream": self.stream,
            "seq": self.seq,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class AgentEventStream:
    """Delivers source events to listeners one at a time, in subscription order."""

    _listeners: list[AgentEventListener] = field(default_factory=list)
    diagnostics: list[ListenerDiagnostic] = field(default_factory=list)

    def subscribe(self, listener: AgentEventListener) -> Unsubscribe:
        self._listeners.append(listener)
        active = True

        def unsubscribe() -> None:
            nonlocal active
            if not active:
                return
            active = False
            try:
                self._listeners.remove(listener)
            except ValueError:
                return

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: SourceEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as error:
                diagnostic = ListenerDiagnostic(
                    listener=_listener_name(listener),
                    stream=event.stream,
                    seq=event.seq,
                    error_type=error.__class__.__name__,
                    message=str(error),
                )
                self.diagnostics.append(diagnostic)
                warnings.warn(
                    (
                        f"vibekit event listener failure: listener={diagnostic.listener} "
                        f"stream={diagnostic.stream} seq={diagnostic.seq} "
                        f"error={diagnostic.error_type}: {diagnostic.message}"
                    ),
                    RuntimeWarning,
                    stacklevel=2,
                )


def _listener_name(listener: AgentEventListener) -> str:
    name = getattr(listener, "__qualname__", None) or getattr(listener, "__name__", None)
    return str(name or listener.__class__.__name__)


_DEFAULT_STREAM = AgentEventStream()


def default_event_stream() -> AgentEventStream:
    return _DEFAULT_STREAM


def on_agent_event(listener: AgentEventListener) -> Unsubscribe:
    """Subscribe to the process-wide default stream."""
    return _DEFAULT_STREAM.subscribe(listener)


def emit_agent_event(event: SourceEvent) -> None:
    _DEFAULT_STREAM.emit(event)
