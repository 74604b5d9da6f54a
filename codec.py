"""Decimal text conversion for segmented integers.

Output is unsigned base 10 with no leading zeros ("0" for zero).
Input must be a non-empty run of ASCII digits; anything else yields
``None`` rather than an exception, so callers check for absence.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from integer import Integer

    I = TypeVar("I", bound=Integer)

_DIGITS = "0123456789"


def to_string(value: Integer) -> str:
    """Render ``value`` in decimal by repeated division by ten.

    Each step is a full long division, so the cost is quadratic in the
    number of digits.
    """
    if not value:
        return "0"

    ten = type(value)(10)
    temp = value.copy()
    digits: list[str] = []
    while temp:
        temp, digit = divmod(temp, ten)
        digits.append(_DIGITS[digit.tail()])
    return "".join(reversed(digits))


def from_string(int_type: type[I], text: str) -> I | None:
    """Parse decimal ``text`` into ``int_type``.

    There is no overflow check: fixed types keep the value modulo their
    width, dynamic types grow.  Leading zeros are accepted.
    """
    if not text:
        return None

    result = int_type(0)
    ten = int_type(10)
    for char in text:
        if not "0" <= char <= "9":
            return None
        result *= ten
        result += int_type(ord(char) - ord("0"))
    return result
