"""Immutable snapshot of exchange rates quoted against one base currency."""
from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterator, List, Optional

from currency_converter.utils.errors import ValidationError


class RateTable(Mapping):
    """Currency code -> units of that currency per 1 unit of the base currency.

    The base currency's own entry must be exactly 1. The table is read-only:
    the underlying dict is copied and exposed through a mapping proxy.
    """

    __slots__ = ("_rates", "_base_currency", "_fetched_at")

    def __init__(
        self,
        rates: Mapping[str, float],
        base_currency: str = "USD",
        fetched_at: Optional[datetime] = None,
    ) -> None:
        base = str(base_currency).strip().upper()
        normalized = {}
        for code, rate in rates.items():
            key = str(code).strip().upper()
            if not key.isalpha():
                raise ValidationError(f"Invalid currency code: {code!r}")
            try:
                value = float(rate)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid rate for {key}: {rate!r}") from None
            if not math.isfinite(value) or value <= 0:
                raise ValidationError(f"Invalid rate for {key}: {rate!r}")
            normalized[key] = value

        if base not in normalized:
            raise ValidationError(f"Base currency {base} missing from rate table")
        if not math.isclose(normalized[base], 1.0, rel_tol=1e-9):
            raise ValidationError(
                f"Base currency {base} must have rate 1, got {normalized[base]}"
            )

        self._rates = MappingProxyType(normalized)
        self._base_currency = base
        self._fetched_at = fetched_at or datetime.now(timezone.utc)

    @property
    def base_currency(self) -> str:
        return self._base_currency

    @property
    def fetched_at(self) -> datetime:
        return self._fetched_at

    def codes(self) -> List[str]:
        """Currency codes in the order the provider returned them."""
        return list(self._rates)

    def __getitem__(self, code: str) -> float:
        return self._rates[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"RateTable(base={self._base_currency!r}, currencies={len(self._rates)})"
