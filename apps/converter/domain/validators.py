"""
Input validation for conversion requests.

Checks run in a fixed order and the first failing check wins, so callers
always see the same error for the same bad input.
"""

import math
from decimal import Decimal

from apps.converter.domain.config import DEFAULT_MAX_AMOUNT
from apps.converter.domain.exceptions import InvalidAmount, InvalidCurrencyCode

CURRENCY_CODE_LENGTH = 3


def validate_amount(amount, max_amount: float = DEFAULT_MAX_AMOUNT) -> float:
    """
    Validate a conversion amount and return it as a float.

    Raises:
        InvalidAmount: with one of the reasons "not a valid number",
            "not finite", "negative", "must be greater than zero" or
            "exceeds maximum".
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise InvalidAmount("not a valid number")

    try:
        value = float(amount)
    except OverflowError:
        # Only ints this large overflow; they are finite, just out of range.
        raise InvalidAmount("negative" if amount < 0 else "exceeds maximum")
    except ValueError:
        # Decimal("sNaN") refuses float conversion.
        raise InvalidAmount("not a valid number")

    if math.isnan(value):
        raise InvalidAmount("not a valid number")
    if math.isinf(value):
        raise InvalidAmount("not finite")
    if value < 0:
        raise InvalidAmount("negative")
    if value == 0:
        raise InvalidAmount("must be greater than zero")
    if value > max_amount:
        raise InvalidAmount("exceeds maximum")
    return value


def validate_currency_code(code, field: str) -> str:
    """
    Validate a currency code for the given field ("source" or "target").

    Codes are not normalized here: "usd" is rejected rather than upper-cased.
    """
    if not isinstance(code, str) or not code.strip():
        raise InvalidCurrencyCode(field, "blank")
    if len(code) != CURRENCY_CODE_LENGTH:
        raise InvalidCurrencyCode(field, "wrong length")
    if not all(char.isalpha() and char.isupper() for char in code):
        raise InvalidCurrencyCode(field, "not uppercase letters")
    return code


def is_valid_currency_code(code) -> bool:
    try:
        validate_currency_code(code, "code")
    except InvalidCurrencyCode:
        return False
    return True
