"""Input validation for currency codes and amounts.

The ``is_valid_*`` checks are pure and never raise. The ``validate_*``
variants raise a ``ValidationError`` subclass and are meant for prompt
boundaries that catch and report them.
"""
from __future__ import annotations

import math
from typing import Any, Mapping, NamedTuple, Optional

from currency_converter.utils.errors import InvalidAmountError, InvalidCurrencyCodeError

INVALID_CODE_MESSAGE = "Error: invalid currency code. Try again."
INVALID_AMOUNT_MESSAGE = "Error: enter a positive numeric value."


class AmountCheck(NamedTuple):
    valid: bool
    parsed: Optional[float]


def normalize_code(code: Any) -> str:
    """Uppercase and strip a user-typed code; non-strings become ''."""
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


def is_valid_code(rates: Mapping[str, float], code: Any) -> bool:
    """Return True if the normalized code is a key of ``rates``."""
    normalized = normalize_code(code)
    return bool(normalized) and normalized in rates


def validate_currency_code(rates: Mapping[str, float], code: Any) -> str:
    """
    Validate a currency code against a rate table.

    Args:
        rates: Rate table (any mapping keyed by uppercase code)
        code: Raw user input, e.g. " usd "

    Returns:
        Normalized code, e.g. "USD"

    Raises:
        InvalidCurrencyCodeError: If the code is not in the table
    """
    if not is_valid_code(rates, code):
        raise InvalidCurrencyCodeError(f"Unknown currency code: {code!r}")
    return normalize_code(code)


def is_valid_amount(text: Any) -> AmountCheck:
    """Parse ``text`` as a float and accept it only if finite and > 0."""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    elif isinstance(text, str):
        try:
            value = float(text.strip())
        except ValueError:
            return AmountCheck(False, None)
    else:
        return AmountCheck(False, None)

    if not math.isfinite(value) or value <= 0:
        return AmountCheck(False, None)
    return AmountCheck(True, value)


def validate_amount(text: Any) -> float:
    """
    Validate a conversion amount.

    Raises:
        InvalidAmountError: For non-numeric, non-finite, zero or negative input
    """
    check = is_valid_amount(text)
    if not check.valid:
        raise InvalidAmountError(f"Amount must be a positive number, got: {text!r}")
    return check.parsed
