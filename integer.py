"""Segmented unsigned integer types.

``Integer`` carries the whole operator surface.  It holds a segment
store and forwards every operation to ``engine``; the store decides
whether the value has a fixed width or grows with its magnitude.

    >>> Int128 = fixed_width(128)
    >>> str(Int128(0) - 1)
    '340282366920938463463374607431768211455'
    >>> value = DynamicInteger(2**64 - 1)
    >>> value.increment().length()
    2

Binary operators return new values.  Compound operators (``+=`` and
friends) and ``increment``/``decrement`` mutate the value in place, so
values are unhashable; use ``copy()`` to get an independent value.
"""
from __future__ import annotations

import functools
import operator
from typing import Callable, ClassVar, Iterable

import codec
import engine
from segments import (
    NATIVE_MAX,
    NATIVE_MIN,
    SEGMENT_BITS,
    SEGMENT_MASK,
    DynamicStore,
    FixedStore,
    SegmentStore,
)

StoreOp = Callable[[SegmentStore, SegmentStore], None]


def _check_native(value: object) -> int:
    if not isinstance(value, int):
        raise TypeError(
            f"integer value required, got {type(value).__name__}"
        )
    if not NATIVE_MIN <= value <= NATIVE_MAX:
        raise ValueError(
            f"{value} does not fit in one segment "
            f"[{NATIVE_MIN}, {NATIVE_MAX}]"
        )
    return value


def _check_shift(shift: object) -> int:
    shift = operator.index(shift)
    if shift < 0:
        raise ValueError("negative shift count")
    return shift


class Integer:
    """Unsigned integer made of 64-bit segments, least significant first."""

    __slots__ = ("_store",)

    is_dynamic: ClassVar[bool]
    _new_store: ClassVar[Callable[[], SegmentStore]]

    def __init__(self, value: int = 0) -> None:
        store = self._new_store()
        store.load(_check_native(value))
        self._store = store

    @classmethod
    def _wrap(cls, store: SegmentStore) -> Integer:
        obj = cls.__new__(cls)
        obj._store = store
        return obj

    @classmethod
    def from_segments(cls, segments: Iterable[int]) -> Integer:
        """Build a value from 64-bit segments, least significant first."""
        values = [operator.index(s) for s in segments]
        for s in values:
            if not 0 <= s <= SEGMENT_MASK:
                raise ValueError(f"segment {s} is outside [0, {SEGMENT_MASK}]")
        store = cls._new_store()
        if not store.growable and len(values) > store.length():
            raise ValueError(
                f"{cls.__name__} holds {store.length()} segments, "
                f"got {len(values)}"
            )
        store.widen(len(values))
        store.segments[: len(values)] = values
        store.trim()
        return cls._wrap(store)

    # -- inspection ---------------------------------------------------------

    def length(self) -> int:
        """Number of segments."""
        return self._store.length()

    def bits(self) -> int:
        return self._store.bits()

    def tail(self) -> int:
        """Lowest 64 bits."""
        return self._store.tail()

    @property
    def segments(self) -> tuple[int, ...]:
        return tuple(self._store.segments)

    def bit_length(self) -> int:
        return engine.bit_length(self._store)

    def copy(self) -> Integer:
        return self._wrap(self._store.copy())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Integer:
        return self.copy()

    # -- conversions --------------------------------------------------------

    def __bool__(self) -> bool:
        return not engine.is_zero(self._store)

    def __int__(self) -> int:
        value = 0
        for segment in reversed(self._store.segments):
            value = (value << SEGMENT_BITS) | segment
        return value

    def __str__(self) -> str:
        return codec.to_string(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    # -- operand plumbing ---------------------------------------------------

    def _coerce(self, other: object) -> Integer | None:
        if type(other) is type(self):
            return other
        if isinstance(other, int):
            return type(self)(other)
        return None

    def _apply(self, other: object, op: StoreOp, inplace: bool = False):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        target = self if inplace else self.copy()
        op(target._store, other._store)
        return target

    def _reflect(self, other: object, op: StoreOp):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other._apply(self, op)

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other):
        return self._apply(other, engine.add_into)

    __radd__ = __add__

    def __iadd__(self, other):
        return self._apply(other, engine.add_into, inplace=True)

    def __sub__(self, other):
        return self._apply(other, engine.subtract_into)

    def __rsub__(self, other):
        return self._reflect(other, engine.subtract_into)

    def __isub__(self, other):
        return self._apply(other, engine.subtract_into, inplace=True)

    def __mul__(self, other):
        return self._apply(other, engine.multiply_into)

    __rmul__ = __mul__

    def __imul__(self, other):
        return self._apply(other, engine.multiply_into, inplace=True)

    def __floordiv__(self, other):
        return self._apply(other, engine.divide_into)

    def __rfloordiv__(self, other):
        return self._reflect(other, engine.divide_into)

    def __ifloordiv__(self, other):
        return self._apply(other, engine.divide_into, inplace=True)

    def __mod__(self, other):
        return self._apply(other, engine.remainder_into)

    def __rmod__(self, other):
        return self._reflect(other, engine.remainder_into)

    def __imod__(self, other):
        return self._apply(other, engine.remainder_into, inplace=True)

    def __divmod__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        quotient, remainder = engine.divide(self._store, other._store)
        return self._wrap(quotient), self._wrap(remainder)

    def __rdivmod__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return divmod(other, self)

    def __pos__(self):
        return self.copy()

    def __neg__(self):
        return self._wrap(engine.negate(self._store))

    # -- bitwise ------------------------------------------------------------

    def __and__(self, other):
        return self._apply(other, engine.and_into)

    __rand__ = __and__

    def __iand__(self, other):
        return self._apply(other, engine.and_into, inplace=True)

    def __or__(self, other):
        return self._apply(other, engine.or_into)

    __ror__ = __or__

    def __ior__(self, other):
        return self._apply(other, engine.or_into, inplace=True)

    def __xor__(self, other):
        return self._apply(other, engine.xor_into)

    __rxor__ = __xor__

    def __ixor__(self, other):
        return self._apply(other, engine.xor_into, inplace=True)

    def __invert__(self):
        result = self.copy()
        engine.invert(result._store)
        return result

    def __lshift__(self, shift):
        result = self.copy()
        engine.shift_left(result._store, _check_shift(shift))
        return result

    def __ilshift__(self, shift):
        engine.shift_left(self._store, _check_shift(shift))
        return self

    def __rshift__(self, shift):
        result = self.copy()
        engine.shift_right(result._store, _check_shift(shift))
        return result

    def __irshift__(self, shift):
        engine.shift_right(self._store, _check_shift(shift))
        return self

    # -- increment / decrement ----------------------------------------------

    def increment(self) -> Integer:
        """Add one in place and return the value itself."""
        engine.increment(self._store)
        return self

    def decrement(self) -> Integer:
        """Subtract one in place and return the value itself."""
        engine.decrement(self._store)
        return self

    def post_increment(self) -> Integer:
        """Add one in place and return the previous value."""
        previous = self.copy()
        engine.increment(self._store)
        return previous

    def post_decrement(self) -> Integer:
        """Subtract one in place and return the previous value."""
        previous = self.copy()
        engine.decrement(self._store)
        return previous

    # -- comparison ---------------------------------------------------------

    def _native(self, other: int) -> int:
        """Reduce a native int the way construction loads one: fixed
        types work modulo their width, dynamic types keep negatives as a
        single 64-bit pattern."""
        if not self.is_dynamic:
            return other % (1 << self.BITS)
        if other < 0:
            return other & SEGMENT_MASK
        return other

    def _compare(self, other: object) -> int | None:
        if isinstance(other, int):
            mine, theirs = int(self), self._native(other)
            return (mine > theirs) - (mine < theirs)
        if type(other) is not type(self):
            return None
        return engine.compare(self._store, other._store)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return int(self) == self._native(other)
        if type(other) is not type(self):
            return NotImplemented
        return self._store.segments == other._store.segments

    def __lt__(self, other):
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp < 0

    def __le__(self, other):
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp <= 0

    def __gt__(self, other):
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp > 0

    def __ge__(self, other):
        cmp = self._compare(other)
        return NotImplemented if cmp is None else cmp >= 0

    __hash__ = None  # mutable through compound operators


# ---------------------------------------------------------------------------
# Dynamic width
# ---------------------------------------------------------------------------

class DynamicInteger(Integer):
    """Integer whose segment count follows its magnitude."""

    __slots__ = ()

    is_dynamic = True
    _new_store = DynamicStore


# ---------------------------------------------------------------------------
# Fixed width
# ---------------------------------------------------------------------------

def _no_width() -> SegmentStore:
    raise TypeError("FixedInteger needs a width; use fixed_width(bits)")


class FixedInteger(Integer):
    """Integer of a fixed power-of-two width; arithmetic wraps."""

    __slots__ = ()

    is_dynamic = False
    BITS: ClassVar[int]
    _new_store = staticmethod(_no_width)


def validate_width(bits: int) -> None:
    if bits <= SEGMENT_BITS or bits & (bits - 1):
        raise ValueError(
            f"bit width must be a power of two greater than {SEGMENT_BITS}, "
            f"got {bits}"
        )


@functools.lru_cache(maxsize=None)
def _make_fixed(bits: int) -> type[FixedInteger]:
    validate_width(bits)
    return type(
        f"Int{bits}",
        (FixedInteger,),
        {
            "__slots__": (),
            "__module__": __name__,
            "BITS": bits,
            "_new_store": staticmethod(
                functools.partial(FixedStore, bits // SEGMENT_BITS)
            ),
        },
    )


def fixed_width(bits: int) -> type[FixedInteger]:
    """Return the fixed-width integer type for ``bits``.

    The same class is returned for the same width, so values built from
    separate calls interoperate.
    """
    return _make_fixed(operator.index(bits))


Int128 = fixed_width(128)
Int256 = fixed_width(256)
Int512 = fixed_width(512)
