"""Tool invocation start-time table used to compute tool durations."""

from __future__ import annotations

from collections import OrderedDict

DEFAULT_CORRELATION_TTL_MS = 10 * 60 * 1000
DEFAULT_CORRELATION_MAX_ENTRIES = 1024


class ToolCorrelationTable:
    """Maps tool-use ids to start timestamps (epoch ms).

    Entries whose matching post event never arrives are evicted once they are
    older than ``ttl_ms`` relative to the newest recorded start, or when the
    table grows past ``max_entries`` (oldest first).
    """

    def __init__(
        self,
        *,
        ttl_ms: int = DEFAULT_CORRELATION_TTL_MS,
        max_entries: int = DEFAULT_CORRELATION_MAX_ENTRIES,
    ) -> None:
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_ms = ttl_ms
        self.max_entries = max_entries
        self._starts: OrderedDict[str, int] = OrderedDict()

    def __len__(self) -> int:
        return len(self._starts)

    def __contains__(self, tool_use_id: object) -> bool:
        return tool_use_id in self._starts

    def record(self, tool_use_id: str, started_at: int) -> None:
        self._starts.pop(tool_use_id, None)
        self._starts[tool_use_id] = started_at
        self.evict(now=started_at)

    def get(self, tool_use_id: str) -> int | None:
        return self._starts.get(tool_use_id)

    def pop(self, tool_use_id: str) -> int | None:
        return self._starts.pop(tool_use_id, None)

    def evict(self, *, now: int) -> int:
        """Drop expired and overflow entries; return how many were removed."""
        cutoff = now - self.ttl_ms
        expired = [key for key, started in self._starts.items() if started < cutoff]
        for key in expired:
            del self._starts[key]
        removed = len(expired)
        while len(self._starts) > self.max_entries:
            self._starts.popitem(last=False)
            removed += 1
        return removed

    def clear(self) -> None:
        self._starts.clear()
