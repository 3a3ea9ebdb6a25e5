"""
Domain: monetary and numeric value parsing.

Amounts are carried as `Decimal` end to end. Rounding to two fraction digits
happens only when a value is presented (API responses, PDF), never while
accumulating.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Largest accepted user input has 15 integer digits; anything bigger cannot
# be a real amount and would overflow the decimal context once multiplied.
MAX_INPUT_ADJUSTED_EXPONENT = 14
MAX_QUANTITY = 10 ** 9


def parse_non_negative_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a user-supplied amount.

    Accepts Decimal, int, float and numeric strings. Returns None for anything
    non-numeric, non-finite (NaN, Infinity), negative or implausibly large
    (such as "1e9999999").
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        text = value.strip() if isinstance(value, str) else str(value)
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite() or number < 0:
        return None
    if number and number.adjusted() > MAX_INPUT_ADJUSTED_EXPONENT:
        return None
    return number


def parse_positive_int(value: Any) -> Optional[int]:
    """
    Parse a user-supplied quantity.

    Returns None unless the value is a whole number greater than zero.
    "3" and 3.0 are accepted; "1.5", "abc", 0, -1 and anything above
    MAX_QUANTITY are not.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        parsed = parse_non_negative_decimal(value)
        if parsed is None or parsed != parsed.to_integral_value():
            return None
        number = int(parsed)

    if number < 1 or number > MAX_QUANTITY:
        return None
    return number


def to_decimal(value: Any, *, name: str) -> Decimal:
    """
    Strict conversion used at the persistence boundary.

    Raises ValueError when the value cannot represent a finite amount.
    """

    if isinstance(value, bool):
        raise ValueError(f"{name} must be numeric, got bool")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


def round_money(value: Decimal) -> Decimal:
    """Round to cents for display."""

    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{round_money(value):,.2f}"
