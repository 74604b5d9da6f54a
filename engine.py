"""Segment arithmetic.

Every algorithm here works on a ``SegmentStore`` and is shared by the
fixed and dynamic representations.  Where the two differ (dropping a
carry versus growing, truncating a product versus sizing it) the store
decides; the loops themselves are identical.

Functions named ``*_into`` mutate their first argument.  ``multiply``
and ``divide`` build new stores.

Word helpers
------------
add_with_carry   one segment of an addition, returns (sum, carry)
sub_with_borrow  one segment of a subtraction, returns (diff, borrow)
mul128           64x64 -> 128 bit product from 32-bit limbs
"""
from __future__ import annotations

from segments import SEGMENT_BITS, SEGMENT_MASK, SegmentStore

_HALF_BITS = SEGMENT_BITS // 2
_HALF_MASK = (1 << _HALF_BITS) - 1
_TOP_BIT = SEGMENT_BITS - 1


# ---------------------------------------------------------------------------
# Word helpers
# ---------------------------------------------------------------------------

def add_with_carry(a: int, b: int, carry: int) -> tuple[int, int]:
    total = a + b + carry
    return total & SEGMENT_MASK, total >> SEGMENT_BITS


def sub_with_borrow(a: int, b: int, borrow: int) -> tuple[int, int]:
    diff = a - b - borrow
    return diff & SEGMENT_MASK, 1 if diff < 0 else 0


def mul128(a: int, b: int) -> tuple[int, int]:
    """Multiply two segments, returning the (low, high) halves of the product.

    The product is assembled from four 32x32 partial products so that no
    intermediate exceeds 64 bits.
    """
    a_lo, a_hi = a & _HALF_MASK, a >> _HALF_BITS
    b_lo, b_hi = b & _HALF_MASK, b >> _HALF_BITS

    p0 = a_lo * b_lo
    p1 = a_lo * b_hi
    p2 = a_hi * b_lo
    p3 = a_hi * b_hi

    mid = p1 + (p0 >> _HALF_BITS)
    mid, carry = add_with_carry(mid, p2, 0)

    lo = ((mid << _HALF_BITS) & SEGMENT_MASK) | (p0 & _HALF_MASK)
    hi = p3 + (mid >> _HALF_BITS) + (carry << _HALF_BITS)
    return lo, hi


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------

def is_zero(store: SegmentStore) -> bool:
    return not any(store.segments)


def compare(a: SegmentStore, b: SegmentStore) -> int:
    """Three-way comparison: -1, 0 or 1.

    A longer trimmed store is always larger; fixed stores of one type
    have equal lengths so only the segment walk applies to them.
    """
    if a.length() != b.length():
        return -1 if a.length() < b.length() else 1
    for x, y in zip(reversed(a.segments), reversed(b.segments)):
        if x != y:
            return -1 if x < y else 1
    return 0


def bit_length(store: SegmentStore) -> int:
    for i in range(store.length() - 1, -1, -1):
        if store.segments[i]:
            return i * SEGMENT_BITS + store.segments[i].bit_length()
    return 0


# ---------------------------------------------------------------------------
# Additive operations
# ---------------------------------------------------------------------------

def add_into(dst: SegmentStore, src: SegmentStore) -> None:
    dst.widen(src.length())
    segments, other = dst.segments, src.segments
    carry = 0
    for i in range(dst.length()):
        value = other[i] if i < len(other) else 0
        segments[i], carry = add_with_carry(segments[i], value, carry)
    dst.carry_out(carry)


def subtract_into(dst: SegmentStore, src: SegmentStore) -> None:
    """Subtract with borrow; a borrow out of the top segment is discarded,
    so the result wraps within the store's current length."""
    dst.widen(src.length())
    segments, other = dst.segments, src.segments
    borrow = 0
    for i in range(dst.length()):
        value = other[i] if i < len(other) else 0
        segments[i], borrow = sub_with_borrow(segments[i], value, borrow)
    dst.trim()


def negate(store: SegmentStore) -> SegmentStore:
    result = store.sized(store.length())
    segments = result.segments
    borrow = 0
    for i in range(result.length()):
        segments[i], borrow = sub_with_borrow(0, store.segments[i], borrow)
    result.trim()
    return result


def increment(store: SegmentStore) -> None:
    segments = store.segments
    for i in range(store.length()):
        segments[i] = (segments[i] + 1) & SEGMENT_MASK
        if segments[i]:
            return
    store.carry_out(1)


def decrement(store: SegmentStore) -> None:
    """Ripple a borrow upward.

    A borrow that leaves the top segment is dropped: the value wraps to
    all ones within the current length.  Dynamic stores never grow
    downward, so ``0 - 1`` on a one-segment store is a single all-ones
    segment.
    """
    segments = store.segments
    for i in range(store.length()):
        was = segments[i]
        segments[i] = (was - 1) & SEGMENT_MASK
        if was:
            break
    store.trim()


# ---------------------------------------------------------------------------
# Multiplication and division
# ---------------------------------------------------------------------------

def multiply(a: SegmentStore, b: SegmentStore) -> SegmentStore:
    """Schoolbook product.

    The result store is requested at ``len(a) + len(b)`` segments; fixed
    stores answer with their own width, which truncates the product.
    """
    result = a.sized(a.length() + b.length())
    out = result.segments
    size = result.length()
    b_len = b.length()

    for i, x in enumerate(a.segments):
        carry = 0
        for j, y in enumerate(b.segments):
            k = i + j
            if k >= size:
                break
            lo, hi = mul128(x, y)
            lo, c1 = add_with_carry(lo, carry, 0)
            lo, c2 = add_with_carry(lo, out[k], 0)
            out[k] = lo
            carry = hi + c1 + c2
        if i + b_len < size:
            out[i + b_len] = carry

    result.trim()
    return result


def multiply_into(dst: SegmentStore, src: SegmentStore) -> None:
    dst.segments[:] = multiply(dst, src).segments


def divide(
    dividend: SegmentStore, divisor: SegmentStore
) -> tuple[SegmentStore, SegmentStore]:
    """Restoring long division, one dividend bit at a time.

    Returns ``(quotient, remainder)``.  Raises ``ZeroDivisionError``
    before touching any state when the divisor is zero.
    """
    if is_zero(divisor):
        raise ZeroDivisionError("division by zero")

    quotient = dividend.blank()
    remainder = dividend.blank()

    for bit_idx in range(dividend.bits() - 1, -1, -1):
        seg_idx, bit_in_seg = divmod(bit_idx, SEGMENT_BITS)

        # A fixed remainder can exceed 2**(bits-1) when the divisor does;
        # the bit pushed out of the top still counts toward the comparison.
        spilled = not remainder.growable and remainder.segments[-1] >> _TOP_BIT
        shift_left(remainder, 1)
        if dividend.segments[seg_idx] >> bit_in_seg & 1:
            remainder.segments[0] |= 1

        if spilled or compare(remainder, divisor) >= 0:
            subtract_into(remainder, divisor)
            quotient.widen(seg_idx + 1)
            quotient.segments[seg_idx] |= 1 << bit_in_seg

    quotient.trim()
    remainder.trim()
    return quotient, remainder


def divide_into(dst: SegmentStore, src: SegmentStore) -> None:
    quotient, _ = divide(dst, src)
    dst.segments[:] = quotient.segments


def remainder_into(dst: SegmentStore, src: SegmentStore) -> None:
    _, remainder = divide(dst, src)
    dst.segments[:] = remainder.segments


# ---------------------------------------------------------------------------
# Bitwise operations
# ---------------------------------------------------------------------------

def and_into(dst: SegmentStore, src: SegmentStore) -> None:
    # Segments missing from the shorter operand are zero, so the result
    # never needs more than the shorter length.
    dst.narrow(src.length())
    segments, other = dst.segments, src.segments
    for i in range(dst.length()):
        segments[i] &= other[i]
    dst.trim()


def or_into(dst: SegmentStore, src: SegmentStore) -> None:
    dst.widen(src.length())
    segments = dst.segments
    for i, value in enumerate(src.segments):
        segments[i] |= value
    dst.trim()


def xor_into(dst: SegmentStore, src: SegmentStore) -> None:
    dst.widen(src.length())
    segments = dst.segments
    for i, value in enumerate(src.segments):
        segments[i] ^= value
    dst.trim()


def invert(store: SegmentStore) -> None:
    """Complement the segments that exist; there is no implicit ceiling
    for dynamic stores."""
    segments = store.segments
    for i in range(store.length()):
        segments[i] ^= SEGMENT_MASK
    store.trim()


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

def shift_left(store: SegmentStore, shift: int) -> None:
    if shift == 0:
        return
    seg_shift, bit_shift = divmod(shift, SEGMENT_BITS)
    if not store.expand_for_shift(seg_shift, bit_shift):
        store.clear()
        return

    segments = store.segments
    length = store.length()
    if bit_shift == 0:
        for i in range(length - 1, seg_shift - 1, -1):
            segments[i] = segments[i - seg_shift]
    else:
        back = SEGMENT_BITS - bit_shift
        for i in range(length - 1, seg_shift, -1):
            src = i - seg_shift
            segments[i] = ((segments[src] << bit_shift) & SEGMENT_MASK) | (
                segments[src - 1] >> back
            )
        segments[seg_shift] = (segments[0] << bit_shift) & SEGMENT_MASK

    for i in range(seg_shift):
        segments[i] = 0
    store.trim()


def shift_right(store: SegmentStore, shift: int) -> None:
    if shift == 0:
        return
    seg_shift, bit_shift = divmod(shift, SEGMENT_BITS)
    length = store.length()
    if seg_shift >= length:
        store.clear()
        return

    segments = store.segments
    kept = length - seg_shift
    if bit_shift == 0:
        for i in range(kept):
            segments[i] = segments[i + seg_shift]
    else:
        back = SEGMENT_BITS - bit_shift
        for i in range(kept - 1):
            segments[i] = (segments[i + seg_shift] >> bit_shift) | (
                (segments[i + seg_shift + 1] << back) & SEGMENT_MASK
            )
        segments[kept - 1] = segments[length - 1] >> bit_shift

    for i in range(kept, length):
        segments[i] = 0
    store.trim()
