"""Conversion and session-state engine."""

from .rates import RateTable
from .conversion import (
    ConversionRequest,
    ConversionResult,
    HistoryEntry,
    MISSING_DATA_MESSAGE,
    OUT_OF_RANGE_MESSAGE,
    convert,
    round2,
)
from .session import EMPTY_HISTORY_MESSAGE, HistoryView, SessionState

__all__ = [
    "RateTable",
    "ConversionRequest",
    "ConversionResult",
    "HistoryEntry",
    "MISSING_DATA_MESSAGE",
    "OUT_OF_RANGE_MESSAGE",
    "convert",
    "round2",
    "EMPTY_HISTORY_MESSAGE",
    "HistoryView",
    "SessionState",
]
