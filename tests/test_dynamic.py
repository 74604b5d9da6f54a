"""Tests for dynamic-width integers: growth, trimming, wrap-within-length."""

from __future__ import annotations

import pytest

from integer import DynamicInteger as Dynamic
from integer import Int128
from segments import SEGMENT_MASK


class TestGrowth:

    def test_increment_grows_past_one_segment(self):
        value = Dynamic(SEGMENT_MASK)
        value.increment()
        assert value.length() == 2
        assert value == Dynamic(1) << 64
        assert int(value) == 1 << 64

    def test_add_grows_by_one_segment(self):
        result = Dynamic(SEGMENT_MASK) + Dynamic(SEGMENT_MASK)
        assert result.length() == 2
        assert result.segments == (SEGMENT_MASK - 1, 1)

    def test_multiply_sizes_product(self):
        a = Dynamic(1) << 100
        b = Dynamic(1) << 90
        product = a * b
        assert int(product) == 1 << 190
        assert product.length() == 3

    def test_shift_round_trip(self):
        value = (Dynamic(1) << 200) >> 200
        assert value == Dynamic(1)
        assert value.length() == 1

    def test_large_shift(self):
        value = Dynamic(3) << 1000
        assert value.length() == 16
        assert int(value) == 3 << 1000

    def test_from_segments_trims(self):
        value = Dynamic.from_segments([5, 0, 0])
        assert value.segments == (5,)
        assert Dynamic.from_segments([]).segments == (0,)


class TestTrimming:

    def test_subtract_trims(self):
        result = (Dynamic(1) << 64) - 1
        assert result.segments == (SEGMENT_MASK,)

    def test_and_never_grows(self):
        wide = (Dynamic(1) << 128) | 0b1010
        result = wide & Dynamic(0b0110)
        assert result.segments == (0b0010,)

    def test_and_with_disjoint_high_bits_is_zero(self):
        result = (Dynamic(1) << 128) & (Dynamic(1) << 64)
        assert result.segments == (0,)

    def test_xor_to_zero(self):
        value = Dynamic(1) << 130
        assert (value ^ value).segments == (0,)

    def test_shift_right_trims(self):
        assert ((Dynamic(1) << 130) >> 70).length() == 1

    def test_division_result_trimmed(self):
        q, r = divmod(Dynamic(1) << 128, Dynamic(1) << 100)
        assert q == Dynamic(1) << 28
        assert r.segments == (0,)


class TestWrapWithinLength:

    def test_zero_minus_one_is_one_segment_of_ones(self):
        result = Dynamic(0) - Dynamic(1)
        assert result == Dynamic(-1)
        assert result.length() == 1
        assert result.segments == (SEGMENT_MASK,)

    def test_decrement_at_zero(self):
        value = Dynamic(0)
        value.decrement()
        assert value.segments == (SEGMENT_MASK,)

    def test_complement_of_zero(self):
        result = ~Dynamic(0)
        assert result.segments == (SEGMENT_MASK,)

    def test_complement_trims_cleared_top(self):
        value = Dynamic.from_segments([5, SEGMENT_MASK])
        assert (~value).segments == (SEGMENT_MASK - 5,)

    def test_negation_within_length(self):
        assert (-Dynamic(1)).segments == (SEGMENT_MASK,)
        assert -Dynamic(0) == 0

    def test_negative_native_fills_low_segment_only(self):
        assert Dynamic(-1).segments == (SEGMENT_MASK,)
        assert Int128(-1).segments == (SEGMENT_MASK, SEGMENT_MASK)


class TestOperatorSurface:

    def test_compound_operators(self):
        value = Dynamic(SEGMENT_MASK)
        value += 1
        value <<= 10
        value -= 1
        assert int(value) == (1 << 74) - 1

    def test_division_by_zero(self):
        value = Dynamic(1) << 70
        with pytest.raises(ZeroDivisionError):
            value // 0
        with pytest.raises(ZeroDivisionError):
            divmod(value, Dynamic(0))
        assert int(value) == 1 << 70

    def test_comparison_uses_length(self):
        assert Dynamic(SEGMENT_MASK) < Dynamic(1) << 64
        assert (Dynamic(1) << 64) > SEGMENT_MASK

    def test_not_interchangeable_with_fixed(self):
        with pytest.raises(TypeError):
            Dynamic(1) + Int128(1)
        assert Dynamic(1) != Int128(1)

    def test_repr(self):
        assert repr(Dynamic(1) << 64) == "DynamicInteger(18446744073709551616)"

    def test_is_dynamic(self):
        assert Dynamic.is_dynamic
        assert not hasattr(Dynamic, "BITS")

    def test_bits_follow_length(self):
        assert (Dynamic(1) << 64).bits() == 128

    def test_compare_with_wide_native(self):
        value = Dynamic(1) << 64
        assert (value == 1 << 64) is True
        assert (value != 1 << 64) is False
        assert Dynamic(1) << 200 > 1 << 199
        assert Dynamic(1) << 200 < 1 << 201
        assert 1 << 64 in [Dynamic(0), value]

    def test_negative_native_compares_as_low_segment(self):
        assert Dynamic(-1) == -1
        assert Dynamic(5) != -5
        assert Dynamic(0) < -(1 << 100) - 1

    def test_tail(self):
        assert (Dynamic(1) << 64 | 7).tail() == 7
        assert ((Dynamic(3) << 128) >> 128).tail() == 3
