"""Segment storage for segmented integers.

A value is a list of unsigned 64-bit segments, least significant first.
The two stores below own that list and decide how it may change shape:

FixedStore      constant length, carries out of the top are dropped
DynamicStore    grows on demand, trimmed back to the minimal length

The arithmetic in ``engine.py`` is written once against the
``SegmentStore`` protocol; every difference between the two modes is a
method on the store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

SEGMENT_BITS = 64
SEGMENT_MASK = (1 << SEGMENT_BITS) - 1

# Native values a store can be loaded from: one signed or unsigned segment.
NATIVE_MIN = -(1 << (SEGMENT_BITS - 1))
NATIVE_MAX = SEGMENT_MASK


class SegmentStore(Protocol):
    """What the arithmetic engine needs from a segment container."""

    segments: list[int]
    growable: bool

    def length(self) -> int: ...

    def bits(self) -> int: ...

    def tail(self) -> int: ...

    def copy(self) -> SegmentStore: ...

    def blank(self) -> SegmentStore: ...

    def sized(self, count: int) -> SegmentStore: ...

    def widen(self, count: int) -> None: ...

    def narrow(self, count: int) -> None: ...

    def carry_out(self, carry: int) -> None: ...

    def expand_for_shift(self, seg_shift: int, bit_shift: int) -> bool: ...

    def trim(self) -> None: ...

    def clear(self) -> None: ...

    def load(self, value: int) -> None: ...


# ---------------------------------------------------------------------------
# Fixed-length store
# ---------------------------------------------------------------------------

@dataclass
class FixedStore:
    """Constant number of segments; arithmetic wraps modulo 2**bits."""

    count: int
    segments: list[int] = field(default_factory=list)

    growable = False

    def __post_init__(self) -> None:
        if not self.segments:
            self.segments = [0] * self.count
        if len(self.segments) != self.count:
            raise ValueError(
                f"expected {self.count} segments, got {len(self.segments)}"
            )

    def length(self) -> int:
        return self.count

    def bits(self) -> int:
        return self.count * SEGMENT_BITS

    def tail(self) -> int:
        return self.segments[0]

    def copy(self) -> FixedStore:
        return FixedStore(self.count, list(self.segments))

    def blank(self) -> FixedStore:
        return FixedStore(self.count)

    def sized(self, count: int) -> FixedStore:
        # Products are truncated to the type's own width.
        return FixedStore(self.count)

    def widen(self, count: int) -> None:
        pass

    def narrow(self, count: int) -> None:
        pass

    def carry_out(self, carry: int) -> None:
        pass

    def expand_for_shift(self, seg_shift: int, bit_shift: int) -> bool:
        return seg_shift < self.count

    def trim(self) -> None:
        pass

    def clear(self) -> None:
        self.segments[:] = [0] * self.count

    def load(self, value: int) -> None:
        """Store a native value, sign-extending negatives across all segments."""
        self.segments[0] = value & SEGMENT_MASK
        fill = SEGMENT_MASK if value < 0 else 0
        for i in range(1, self.count):
            self.segments[i] = fill


# ---------------------------------------------------------------------------
# Growable store
# ---------------------------------------------------------------------------

@dataclass
class DynamicStore:
    """Segment list sized to its magnitude: at least one segment, no
    zero segments at the top except for the value zero itself."""

    segments: list[int] = field(default_factory=lambda: [0])

    growable = True

    def __post_init__(self) -> None:
        if not self.segments:
            self.segments = [0]

    def length(self) -> int:
        return len(self.segments)

    def bits(self) -> int:
        return len(self.segments) * SEGMENT_BITS

    def tail(self) -> int:
        return self.segments[0]

    def copy(self) -> DynamicStore:
        return DynamicStore(list(self.segments))

    def blank(self) -> DynamicStore:
        return DynamicStore()

    def sized(self, count: int) -> DynamicStore:
        return DynamicStore([0] * max(count, 1))

    def widen(self, count: int) -> None:
        missing = count - len(self.segments)
        if missing > 0:
            self.segments.extend([0] * missing)

    def narrow(self, count: int) -> None:
        del self.segments[max(count, 1):]

    def carry_out(self, carry: int) -> None:
        if carry:
            self.segments.append(carry)

    def expand_for_shift(self, seg_shift: int, bit_shift: int) -> bool:
        new_len = len(self.segments) + seg_shift
        if bit_shift and self.segments[-1] >> (SEGMENT_BITS - bit_shift):
            new_len += 1
        self.widen(new_len)
        return True

    def trim(self) -> None:
        segments = self.segments
        while len(segments) > 1 and segments[-1] == 0:
            segments.pop()

    def clear(self) -> None:
        self.segments[:] = [0]

    def load(self, value: int) -> None:
        """Store a native value in the lowest segment only.

        Negative values keep their 64-bit two's-complement pattern; no
        further segments are filled.
        """
        self.segments[:] = [value & SEGMENT_MASK]
