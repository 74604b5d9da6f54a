"""Numeric limits for fixed-width integer types.

Generic numeric code asks a type for its range and capabilities through
``numeric_limits(int_type)``.  Fixed types are unsigned, exact, bounded
and wrap modulo 2**bits.  Floating-point attributes do not apply and
report ``False``/``0``/``None``.

Dynamic integers have no width, hence no limits.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from integer import FixedInteger, Integer

_LOG10_2 = math.log10(2)


@dataclass(frozen=True)
class NumericLimits:
    """Range and capability description of one fixed-width type."""

    int_type: type[FixedInteger]

    is_specialized: bool = True
    is_signed: bool = False
    is_integer: bool = True
    is_exact: bool = True
    is_bounded: bool = True
    is_modulo: bool = True
    radix: int = 2

    # Floating-point attributes
    has_infinity: bool = False
    has_quiet_nan: bool = False
    has_signaling_nan: bool = False
    is_iec559: bool = False
    max_digits10: int = 0
    min_exponent: int = 0
    min_exponent10: int = 0
    max_exponent: int = 0
    max_exponent10: int = 0
    traps: bool = False
    tinyness_before: bool = False

    @property
    def digits(self) -> int:
        """Number of binary digits: the type's bit width."""
        return self.int_type.BITS

    @property
    def digits10(self) -> int:
        """Decimal digits representable without change."""
        return math.floor(self.int_type.BITS * _LOG10_2)

    def min(self) -> FixedInteger:
        return self.int_type(0)

    def lowest(self) -> FixedInteger:
        return self.int_type(0)

    def max(self) -> FixedInteger:
        return ~self.int_type(0)

    # Not applicable to integers.

    def epsilon(self) -> None:
        return None

    def round_error(self) -> None:
        return None

    def infinity(self) -> None:
        return None

    def quiet_nan(self) -> None:
        return None

    def signaling_nan(self) -> None:
        return None

    def denorm_min(self) -> None:
        return None


def numeric_limits(int_type: type[Integer]) -> NumericLimits:
    """Return the limits descriptor for a fixed-width integer type."""
    is_fixed = isinstance(int_type, type) and issubclass(int_type, FixedInteger)
    if not is_fixed or not hasattr(int_type, "BITS"):
        raise TypeError(
            f"numeric limits are only defined for fixed-width integer types, "
            f"got {int_type!r}"
        )
    return NumericLimits(int_type)
