"""Integer amount helpers"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from splitt.config import Settings, get_settings

ONE_HUNDRED_PERCENT = 100

_NON_DIGITS = re.compile(r"\D")


def percent_of(amount: int, share: int) -> int:
    """
    Calculate a whole-unit percentage of an amount.

    Args:
        amount: Amount in minor currency units
        share: Integer percentage (0-100)

    Returns:
        ``amount * share / 100`` rounded half up to a whole unit
    """
    value = Decimal(amount) * Decimal(share) / Decimal(ONE_HUNDRED_PERCENT)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def sum_amounts(values: Iterable[int]) -> int:
    """Sum a collection of integer amounts"""
    return sum(values, 0)


def parse_input_amount(value: str, settings: Optional[Settings] = None) -> int:
    """
    Parse raw user input into an amount in minor currency units.

    Every non-digit character is dropped. Trailing digits are dropped while
    the amount is above the configured maximum, so typing or pasting past
    the limit never exceeds it.

    Args:
        value: Raw input, e.g. "12,50"
        settings: Settings providing ``max_amount``

    Returns:
        Parsed amount, 0 for empty input
    """
    settings = settings or get_settings()
    cleaned = _NON_DIGITS.sub("", value)
    amount = int(cleaned) if cleaned else 0
    while amount > settings.max_amount:
        amount //= 10
    return amount


def is_below_min(amount: int, settings: Optional[Settings] = None) -> bool:
    """Check whether a non-zero amount is below the minimum expense amount"""
    settings = settings or get_settings()
    return 0 < amount < settings.min_expense_amount
