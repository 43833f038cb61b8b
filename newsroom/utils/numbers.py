"""
Numeric helpers.

Python's round() rounds halves to even (round(12.5) == 12). Published scores
round halves up, so 5 of 40 points is reported as 13 rather than 12.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float]


def round_half_up(value: Number, ndigits: int = 0) -> Number:
    """
    Round to `ndigits` decimals with halves rounded away from zero.

    Returns an int when ndigits is 0, otherwise a float.
    """
    exponent = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    if ndigits == 0:
        return int(rounded)
    return float(rounded)
