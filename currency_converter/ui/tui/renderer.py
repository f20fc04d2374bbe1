from __future__ import annotations

"""Formatting helpers for the TUI."""

from typing import Iterator, List, Optional, Sequence

from currency_converter.core.conversion import round2

from .config import NOT_SET


def format_code(code: Optional[str]) -> str:
    return code or NOT_SET


def format_amount(amount: Optional[float]) -> str:
    if not amount:
        return NOT_SET
    return str(round2(amount))


def format_rate(rate: float) -> str:
    return format(rate, ".10g")


def chunk(items: Sequence[str], size: int) -> Iterator[List[str]]:
    size = max(size, 1)
    for start in range(0, len(items), size):
        yield list(items[start:start + size])
