"""Offline provider serving a fixed table from configuration."""
from __future__ import annotations

from typing import Mapping

from currency_converter.config import Config
from currency_converter.core.rates import RateTable
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.errors import RateFetchError, ValidationError


class StaticRateProvider(BaseRateProvider):
    NAME = "static"

    def __init__(self, rates: Mapping[str, float], base_currency: str = "USD") -> None:
        self._rates = dict(rates)
        self._base_currency = base_currency

    @classmethod
    def from_config(cls, cfg: Config) -> "StaticRateProvider":
        return cls(cfg.get("api.static.rates", {}), base_currency=cfg.base_currency)

    async def fetch_rates(self) -> RateTable:
        try:
            return RateTable(self._rates, base_currency=self._base_currency)
        except ValidationError as e:
            raise RateFetchError(f"Invalid static rate table: {e}") from e
