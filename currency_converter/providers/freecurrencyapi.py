"""freecurrencyapi.com provider implementation."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from currency_converter.config import Config
from currency_converter.core.rates import RateTable
from currency_converter.providers.base import BaseRateProvider
from currency_converter.utils.decorators import log_execution, retry
from currency_converter.utils.errors import RateFetchError, ValidationError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.freecurrencyapi.com/v1"


class FreeCurrencyAPIClient(BaseRateProvider):
    NAME = "freecurrencyapi"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        base_currency: str = "USD",
        currencies: Optional[List[str]] = None,
    ) -> None:
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.base_currency = base_currency.upper()
        self.currencies = [c.upper() for c in currencies or []]

    @classmethod
    def from_config(
        cls,
        cfg: Config,
        api_key: Optional[str] = None,
        base_currency: Optional[str] = None,
    ) -> "FreeCurrencyAPIClient":
        return cls(
            api_key=api_key or cfg.api_key,
            base_url=cfg.api_base_url,
            timeout=cfg.api_timeout,
            base_currency=base_currency or cfg.base_currency,
            currencies=cfg.currencies,
        )

    def _params(self) -> Dict[str, str]:
        params = {"apikey": self.api_key, "base_currency": self.base_currency}
        if self.currencies:
            params["currencies"] = ",".join(self.currencies)
        return params

    @retry(max_attempts=3, delay=1.0, exceptions=(httpx.TransportError,))
    async def _get_latest(self) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(f"{self.base_url}/latest", params=self._params())

    @log_execution
    async def fetch_rates(self) -> RateTable:
        if not self.api_key:
            raise RateFetchError(
                "No API key configured for freecurrencyapi.com. "
                "Set FREECURRENCYAPI_API_KEY or pass --api-key."
            )

        try:
            resp = await self._get_latest()
        except httpx.HTTPError as e:
            logger.error(f"freecurrencyapi.com request failed: {e}")
            raise RateFetchError(f"Could not reach freecurrencyapi.com: {e}") from e

        try:
            payload: Any = resp.json()
        except ValueError:
            payload = None

        if resp.status_code >= 400:
            detail = payload.get("message") if isinstance(payload, dict) else None
            logger.error(f"freecurrencyapi.com returned HTTP {resp.status_code}: {detail}")
            raise RateFetchError(
                f"freecurrencyapi.com returned HTTP {resp.status_code}: {detail or 'request failed'}"
            )

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not data:
            logger.error("freecurrencyapi.com response missing 'data' object")
            raise RateFetchError("The API response does not contain the expected rate data.")

        rates = dict(data)
        # a currencies filter can leave the base out of the payload
        rates.setdefault(self.base_currency, 1.0)
        try:
            table = RateTable(rates, base_currency=self.base_currency)
        except ValidationError as e:
            logger.error(f"Failed to parse freecurrencyapi.com response: {e}")
            raise RateFetchError(f"Invalid rate data from freecurrencyapi.com: {e}") from e

        logger.info(f"Fetched {len(table)} rates (base {table.base_currency})")
        return table
