"""Per-run session state and conversion history."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Sequence

from currency_converter.utils.errors import InvalidAmountError
from currency_converter.utils.validation import is_valid_amount

from .conversion import ConversionResult, HistoryEntry, convert

EMPTY_HISTORY_MESSAGE = "No conversions yet in this session."


class HistoryView:
    """Read-only, restartable view over the session history.

    Each iteration walks the entries recorded so far in insertion order.
    """

    def __init__(self, entries: Sequence[HistoryEntry]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[HistoryEntry]:
        return (entry for entry in tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return len(self._entries) > 0

    def render(self) -> List[str]:
        """Numbered lines, or the empty-history notice."""
        if not self:
            return [EMPTY_HISTORY_MESSAGE]
        return [f"{i}. {entry}" for i, entry in enumerate(self, 1)]


@dataclass
class SessionState:
    """Selections and history for one interactive run."""

    source_currency: Optional[str] = None
    destination_currency: Optional[str] = None
    pending_amount: Optional[float] = None
    _history: List[HistoryEntry] = field(default_factory=list, init=False, repr=False)

    def set_source(self, code: str) -> None:
        self.source_currency = code

    def set_destination(self, code: str) -> None:
        self.destination_currency = code

    def set_amount(self, amount: float) -> None:
        check = is_valid_amount(amount)
        if not check.valid:
            raise InvalidAmountError(f"Amount must be a positive number, got: {amount!r}")
        self.pending_amount = check.parsed

    def append_history(self, entry: HistoryEntry) -> None:
        self._history.append(entry)

    def list_history(self) -> HistoryView:
        return HistoryView(self._history)

    def convert(self, rates: Mapping[str, float]) -> ConversionResult:
        """Convert the current selection and record it when it succeeds."""
        result = convert(rates, self.source_currency, self.destination_currency, self.pending_amount)
        if result.entry is not None:
            self.append_history(result.entry)
        return result
