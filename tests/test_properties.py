"""Property-based tests: every operator agrees with native int arithmetic.

Fixed types are checked modulo 2**bits; dynamic types against exact
results where the operation cannot wrap.
"""

from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from integer import DynamicInteger, Int128, Int256
from strategies import make, naturals, values

MOD128 = 1 << 128
MOD256 = 1 << 256

shift_st = st.integers(min_value=0, max_value=300)


# ---------------------------------------------------------------------------
# Fixed width
# ---------------------------------------------------------------------------

class TestFixedAgainstNative:

    @given(values(Int128), values(Int128))
    def test_add(self, a, b):
        assert int(a[1] + b[1]) == (a[0] + b[0]) % MOD128

    @given(values(Int128), values(Int128))
    def test_sub(self, a, b):
        assert int(a[1] - b[1]) == (a[0] - b[0]) % MOD128

    @given(values(Int256), values(Int256))
    def test_mul(self, a, b):
        assert int(a[1] * b[1]) == (a[0] * b[0]) % MOD256

    @given(values(Int128), values(Int128))
    @settings(max_examples=40)
    def test_divmod(self, a, b):
        assume(b[0])
        q, r = divmod(a[1], b[1])
        assert (int(q), int(r)) == divmod(a[0], b[0])

    @given(values(Int128), values(Int128))
    def test_bitwise(self, a, b):
        assert int(a[1] & b[1]) == a[0] & b[0]
        assert int(a[1] | b[1]) == a[0] | b[0]
        assert int(a[1] ^ b[1]) == a[0] ^ b[0]
        assert int(~a[1]) == a[0] ^ (MOD128 - 1)

    @given(values(Int128), shift_st)
    def test_shifts(self, a, s):
        assert int(a[1] << s) == (a[0] << s) % MOD128
        assert int(a[1] >> s) == a[0] >> s

    @given(values(Int128))
    def test_negate(self, a):
        assert int(-a[1]) == -a[0] % MOD128

    @given(values(Int128), values(Int128))
    def test_comparisons(self, a, b):
        assert (a[1] < b[1]) == (a[0] < b[0])
        assert (a[1] == b[1]) == (a[0] == b[0])
        assert (a[1] >= b[1]) == (a[0] >= b[0])

    @given(values(Int128))
    def test_increment_decrement(self, a):
        assert int(a[1].copy().increment()) == (a[0] + 1) % MOD128
        assert int(a[1].copy().decrement()) == (a[0] - 1) % MOD128

    @given(values(Int256))
    def test_length_is_constant(self, a):
        assert a[1].length() == 4
        assert (a[1] * a[1]).length() == 4


# ---------------------------------------------------------------------------
# Dynamic width
# ---------------------------------------------------------------------------

class TestDynamicAgainstNative:

    @given(values(DynamicInteger, 256), values(DynamicInteger, 256))
    def test_add(self, a, b):
        assert int(a[1] + b[1]) == a[0] + b[0]

    @given(values(DynamicInteger, 256), values(DynamicInteger, 256))
    def test_sub_without_underflow(self, a, b):
        big, small = max(a, b, key=lambda p: p[0]), min(a, b, key=lambda p: p[0])
        assert int(big[1] - small[1]) == big[0] - small[0]

    @given(values(DynamicInteger, 256), values(DynamicInteger, 256))
    def test_mul(self, a, b):
        assert int(a[1] * b[1]) == a[0] * b[0]

    @given(values(DynamicInteger, 256), values(DynamicInteger, 192))
    @settings(max_examples=40)
    def test_divmod(self, a, b):
        assume(b[0])
        q, r = divmod(a[1], b[1])
        assert (int(q), int(r)) == divmod(a[0], b[0])

    @given(values(DynamicInteger, 256), values(DynamicInteger, 256))
    def test_bitwise(self, a, b):
        assert int(a[1] & b[1]) == a[0] & b[0]
        assert int(a[1] | b[1]) == a[0] | b[0]
        assert int(a[1] ^ b[1]) == a[0] ^ b[0]

    @given(values(DynamicInteger, 256), shift_st)
    def test_shifts(self, a, s):
        assert int(a[1] << s) == a[0] << s
        assert int(a[1] >> s) == a[0] >> s
        assert (a[1] << s) >> s == a[1]

    @given(values(DynamicInteger, 256), values(DynamicInteger, 256))
    def test_always_trimmed(self, a, b):
        for v in (a[1] + b[1], a[1] * b[1], a[1] & b[1], a[1] ^ b[1], ~a[1]):
            assert v.length() == 1 or v.segments[-1] != 0

    @given(values(DynamicInteger, 256))
    def test_length_matches_magnitude(self, a):
        assert a[1].length() == max(1, -(-a[0].bit_length() // 64))

    @given(naturals(256))
    def test_increment(self, n):
        value = make(DynamicInteger, n)
        value.increment()
        assert int(value) == n + 1
