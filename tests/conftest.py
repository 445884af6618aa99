from __future__ import annotations

from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import json
import threading
import time
from typing import Any, Iterator

import pytest


@dataclass(slots=True)
class RecordingServer:
    """Local visualization-server stand-in that records POSTed events."""

    server: ThreadingHTTPServer
    status_code: int = 200
    delay_seconds: float = 0.0
    requests: list[dict[str, Any]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def url(self) -> str:
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}/event"

    @property
    def events(self) -> list[dict[str, Any]]:
        with self.lock:
            return [item["body"] for item in self.requests]

    def wait_for(self, count: int, timeout: float = 5.0) -> list[dict[str, Any]]:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            events = self.events
            if len(events) >= count:
                return events
            time.sleep(0.01)
        return self.events


def _start_recording_server() -> tuple[RecordingServer, threading.Thread]:
    recorder: RecordingServer | None = None

    class Handler(BaseHTTPRequestHandler):
        def do_POST(self) -> None:  # noqa: N802
            assert recorder is not None
            length = int(self.headers.get("Content-Length", "0") or 0)
            raw = self.rfile.read(length).decode("utf-8")
            with recorder.lock:
                recorder.requests.append(
                    {
                        "path": self.path,
                        "content_type": self.headers.get("Content-Type"),
                        "raw": raw,
                        "body": json.loads(raw),
                    }
                )
            if recorder.delay_seconds:
                time.sleep(recorder.delay_seconds)
            body = b'{"ok":true}'
            try:
                self.send_response(recorder.status_code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)
            except (BrokenPipeError, ConnectionResetError):
                return

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            return

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    recorder = RecordingServer(server=server)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return recorder, thread


@pytest.fixture
def event_server() -> Iterator[RecordingServer]:
    recorder, thread = _start_recording_server()
    try:
        yield recorder
    finally:
        recorder.server.shutdown()
        recorder.server.server_close()
        thread.join(timeout=2)


@pytest.fixture
def unused_url() -> str:
    """A URL on a port nothing listens on."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), BaseHTTPRequestHandler)
    host, port = server.server_address[:2]
    server.server_close()
    return f"http://{host}:{port}/event"
