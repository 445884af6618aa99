"""Destination event id generation."""

from __future__ import annotations

import random
import string

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 7


def generate_event_id(session_id: str, timestamp: int) -> str:
    """Build ``{session}-{timestamp}-{suffix}``; collisions are tolerated."""
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=_SUFFIX_LENGTH))
    return f"{session_id}-{timestamp}-{suffix}"
