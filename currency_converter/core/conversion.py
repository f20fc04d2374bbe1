"""Currency conversion over a base-quoted rate table.

Rates are "units of currency per 1 unit of base", so a pairwise conversion
goes through the base: ``amount / rate[from] * rate[to]``.

Rounding rule: amounts are rounded to 2 decimals with ROUND_HALF_UP applied
to the shortest decimal repr of the float (``Decimal(str(x))``). The same
rounded values feed the message and the history entry.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Mapping, Optional

MISSING_DATA_MESSAGE = (
    "Error: missing required data: set source currency, destination currency, and amount"
)
OUT_OF_RANGE_MESSAGE = "Error: the converted amount is too large to represent."

_CENT = Decimal("0.01")
# wide enough for any finite float at cent precision
_CONTEXT = Context(prec=400)


def round2(value: float) -> Decimal:
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP, context=_CONTEXT)


@dataclass(frozen=True)
class ConversionRequest:
    source: str
    destination: str
    amount: float


@dataclass(frozen=True)
class HistoryEntry:
    """One completed conversion; amounts already rounded to cents."""

    source: str
    destination: str
    amount: Decimal
    converted: Decimal

    def __str__(self) -> str:
        return f"[{self.source} -> {self.destination}] {self.amount} -> {self.converted}"


@dataclass(frozen=True)
class ConversionResult:
    message: str
    entry: Optional[HistoryEntry] = None

    @property
    def ok(self) -> bool:
        return self.entry is not None


def convert(
    rates: Mapping[str, float],
    from_code: Optional[str],
    to_code: Optional[str],
    amount: Optional[float],
) -> ConversionResult:
    """Convert ``amount`` from ``from_code`` to ``to_code``.

    Missing or falsy inputs (None, "", 0) yield MISSING_DATA_MESSAGE and no
    entry. A result that overflows the float range yields OUT_OF_RANGE_MESSAGE
    and no entry. Both codes must already be keys of ``rates``.
    """
    if not from_code or not to_code or not amount:
        return ConversionResult(MISSING_DATA_MESSAGE)

    request = ConversionRequest(from_code, to_code, float(amount))
    converted = (request.amount / rates[request.source]) * rates[request.destination]
    if not math.isfinite(converted):
        return ConversionResult(OUT_OF_RANGE_MESSAGE)

    entry = HistoryEntry(
        source=request.source,
        destination=request.destination,
        amount=round2(request.amount),
        converted=round2(converted),
    )
    message = f"{entry.amount} {entry.source} equivale a {entry.converted} {entry.destination}"
    return ConversionResult(message, entry)
