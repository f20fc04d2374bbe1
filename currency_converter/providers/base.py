"""Provider base class for rate table sources."""
from __future__ import annotations

from abc import ABC, abstractmethod

from currency_converter.core.rates import RateTable


class BaseRateProvider(ABC):
    """Abstract source of a base-quoted rate table."""

    NAME: str = "base"

    @abstractmethod
    async def fetch_rates(self) -> RateTable:
        """Fetch one snapshot of rates.

        Raises:
            RateFetchError: On any failure; callers never retry.
        """
