# parsers/number_format.py

"""
Helpers for the comma-decimal amounts printed on Polish receipts.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

LEADING_NUMBER_PATTERN = re.compile(r'^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))')

CENT = Decimal('0.01')
WHOLE = Decimal('1')


def leading_number(text: str) -> Optional[Decimal]:
    """
    Reads the number at the start of an OCR fragment, ignoring whatever follows.

    The first comma is treated as the decimal separator, so '0,50zł' gives 0.50
    and '1 x 3,99 3,99' gives 1. Returns None when the text does not start
    with a number.
    """
    match = LEADING_NUMBER_PATTERN.match(text.replace(',', '.', 1))
    if not match:
        return None
    return Decimal(match.group(1))


def to_decimal(text: str) -> Decimal:
    """Converts a comma-decimal amount such as '1,474' or '3.99'. Unit suffixes are dropped."""
    number = leading_number(text)
    if number is None:
        raise InvalidOperation(f"Not a number: '{text}'")
    return number


def round_price(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal) -> int:
    return int(value.quantize(WHOLE, rounding=ROUND_HALF_UP))
