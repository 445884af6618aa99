"""Type definitions for vibekit core models."""

from typing import Literal

SourceStream = Literal["lifecycle", "tool", "assistant", "error", "prompt"]

SOURCE_STREAMS: tuple[str, ...] = (
    "lifecycle",
    "tool",
    "assistant",
    "error",
    "prompt",
)

DestinationEventType = Literal[
    "session_start",
    "stop",
    "pre_tool_use",
    "post_tool_use",
    "user_prompt_submit",
    "notification",
]

DESTINATION_EVENT_TYPES: tuple[str, ...] = (
    "session_start",
    "stop",
    "pre_tool_use",
    "post_tool_use",
    "user_prompt_submit",
    "notification",
)

SessionStartSource = Literal["startup", "resume", "clear", "compact"]
