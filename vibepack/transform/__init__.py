"""Source-to-destination event transformation."""

from vibepack.transform.correlation import (
    DEFAULT_CORRELATION_MAX_ENTRIES,
    DEFAULT_CORRELATION_TTL_MS,
    ToolCorrelationTable,
)
from vibepack.transform.transformer import UNKNOWN_ERROR_MESSAGE, EventTransformer

__all__ = [
    "DEFAULT_CORRELATION_MAX_ENTRIES",
    "DEFAULT_CORRELATION_TTL_MS",
    "UNKNOWN_ERROR_MESSAGE",
    "EventTransformer",
    "ToolCorrelationTable",
]
