"""Core models and serialization primitives for vibekit."""

from vibepack.core.canonical import canonical_json, canonicalize
from vibepack.core.ids import generate_event_id
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
from vibepack.core.types import DESTINATION_EVENT_TYPES, SOURCE_STREAMS

__all__ = [
    "DESTINATION_EVENT_TYPES",
    "SOURCE_STREAMS",
    "DestinationEvent",
    "Notification",
    "PromptSubmit",
    "SessionStart",
    "SessionStop",
    "SourceEvent",
    "ToolPost",
    "ToolPre",
    "canonical_json",
    "canonicalize",
    "generate_event_id",
]
