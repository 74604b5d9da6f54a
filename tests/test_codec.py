"""Tests for decimal text conversion."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from codec import from_string, to_string
from integer import DynamicInteger, Int128, Int256

INT128_MAX = "340282366920938463463374607431768211455"


class TestToString:

    def test_zero(self):
        assert to_string(Int128(0)) == "0"
        assert to_string(DynamicInteger(0)) == "0"

    def test_small(self):
        assert to_string(Int128(1234567890)) == "1234567890"

    def test_segment_boundary(self):
        assert to_string(Int128(1) << 64) == "18446744073709551616"

    def test_max(self):
        assert to_string(~Int128(0)) == INT128_MAX

    def test_does_not_mutate(self):
        value = Int256(987654321)
        to_string(value)
        assert value == 987654321


class TestFromString:

    def test_parses_into_type(self):
        value = from_string(Int128, "18446744073709551616")
        assert isinstance(value, Int128)
        assert value.segments == (0, 1)

    def test_leading_zeros(self):
        assert from_string(Int128, "0007") == 7

    def test_zero(self):
        assert from_string(DynamicInteger, "0").segments == (0,)

    @pytest.mark.parametrize("text", ["", "-1", "+1", "12a", " 1", "1.0", "٣"])
    def test_rejects_non_digits(self, text):
        assert from_string(Int128, text) is None

    def test_fixed_wraps_without_error(self):
        assert from_string(Int128, "340282366920938463463374607431768211456") == 0

    def test_dynamic_grows(self):
        value = from_string(DynamicInteger, "1" + "0" * 40)
        assert int(value) == 10 ** 40
        assert value.length() == 3


class TestRoundTrip:

    @given(st.integers(min_value=0, max_value=(1 << 128) - 1))
    @settings(max_examples=30)
    def test_fixed(self, n):
        text = str(n)
        value = from_string(Int128, text)
        assert int(value) == n
        assert to_string(value) == text

    @given(st.integers(min_value=0, max_value=(1 << 200)))
    @settings(max_examples=30)
    def test_dynamic(self, n):
        value = from_string(DynamicInteger, str(n))
        assert to_string(value) == str(n)
        assert str(value) == str(n)
