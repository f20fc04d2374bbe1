"""Custom exception classes for the currency converter."""


class CurrencyConverterError(Exception):
    """Base exception for all currency converter errors."""
    pass


class ConfigurationError(CurrencyConverterError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(CurrencyConverterError):
    """Raised when data validation fails."""
    pass


class InvalidCurrencyCodeError(ValidationError):
    """Raised when a currency code is not present in the rate table."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when an amount is not a positive finite number."""
    pass


class DataProviderError(CurrencyConverterError):
    """Base exception for data provider errors."""
    pass


class RateFetchError(DataProviderError):
    """Raised when the rate table could not be fetched."""
    pass
