"""Provider factory and exports."""
from typing import Callable, Optional

from currency_converter.config import Config
from currency_converter.core.rates import RateTable
from currency_converter.utils.errors import RateFetchError
from currency_converter.utils.logging import get_logger

from .base import BaseRateProvider
from .freecurrencyapi import FreeCurrencyAPIClient
from .static import StaticRateProvider

logger = get_logger(__name__)


def get_provider(
    provider_name: str,
    cfg: Config,
    api_key: Optional[str] = None,
    base_currency: Optional[str] = None,
) -> BaseRateProvider:
    """Get provider by canonical name.

    Canonical names:
    - "freecurrencyapi"
    - "static" (base currency comes from the configured table)
    """
    if provider_name == "freecurrencyapi":
        return FreeCurrencyAPIClient.from_config(cfg, api_key=api_key, base_currency=base_currency)
    if provider_name == "static":
        return StaticRateProvider.from_config(cfg)
    raise ValueError(f"Unknown provider: {provider_name}")


async def try_fetch_rates(
    provider: BaseRateProvider,
    on_error: Optional[Callable[[RateFetchError], None]] = None,
) -> Optional[RateTable]:
    """Fetch a rate table, returning None when the provider fails.

    The failure is logged and handed to ``on_error`` so callers can still
    show the reason.
    """
    try:
        return await provider.fetch_rates()
    except RateFetchError as e:
        logger.error(f"Rate fetch from {provider.NAME} failed: {e}")
        if on_error is not None:
            on_error(e)
        return None


__all__ = [
    "BaseRateProvider",
    "FreeCurrencyAPIClient",
    "StaticRateProvider",
    "get_provider",
    "try_fetch_rates",
]
