"""Algebraic laws of the segmented integer types.

The laws are machine-readable: each is a named predicate over integer
values (and, for the shift laws, native shift amounts).  The factory
samples them before it releases a type, and the conformance tests
iterate the same catalog with Hypothesis.

Layers
------
AlgebraicLaw   one named predicate with its arity
IntegerLaws    the catalog that applies to one integer type
build_laws()   selects the laws for a fixed or dynamic type
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

from codec import from_string, to_string
from integer import Integer
from limits import numeric_limits
from segments import SEGMENT_MASK

# Shift amounts sampled for dynamic types, which have no width to bound them.
DYNAMIC_SHIFT_SPAN = 256


# ---------------------------------------------------------------------------
# Catalog primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlgebraicLaw:
    """A relationship that must hold for every sampled input.

    ``arity`` counts integer values, ``shifts`` counts native shift
    amounts passed after them.  ``max_samples`` caps how often an
    expensive law is sampled.
    """

    name: str
    description: str
    arity: int
    check: Callable[..., bool]
    shifts: int = 0
    max_samples: int | None = None


@dataclass
class IntegerLaws:
    """The laws that apply to one integer type."""

    int_type: type[Integer]
    shift_span: int
    laws: list[AlgebraicLaw] = field(default_factory=list)

    def add(self, law: AlgebraicLaw) -> None:
        self.laws.append(law)

    def get(self, name: str) -> AlgebraicLaw:
        for law in self.laws:
            if law.name == name:
                return law
        raise KeyError(name)

    def __iter__(self) -> Iterator[AlgebraicLaw]:
        return iter(self.laws)

    def __len__(self) -> int:
        return len(self.laws)


# ---------------------------------------------------------------------------
# Laws shared by both representations
# ---------------------------------------------------------------------------

def _common_laws(one: Integer) -> list[AlgebraicLaw]:
    zero = one - one
    return [
        AlgebraicLaw(
            "additive_identity", "a + 0 == a", 1,
            lambda a: a + zero == a,
        ),
        AlgebraicLaw(
            "add_commutativity", "a + b == b + a", 2,
            lambda a, b: a + b == b + a,
        ),
        AlgebraicLaw(
            "mul_commutativity", "a * b == b * a", 2,
            lambda a, b: a * b == b * a,
        ),
        AlgebraicLaw(
            "and_commutativity", "a & b == b & a", 2,
            lambda a, b: a & b == b & a,
        ),
        AlgebraicLaw(
            "or_commutativity", "a | b == b | a", 2,
            lambda a, b: a | b == b | a,
        ),
        AlgebraicLaw(
            "xor_commutativity", "a ^ b == b ^ a", 2,
            lambda a, b: a ^ b == b ^ a,
        ),
        AlgebraicLaw(
            "add_sub_inverse", "(a + b) - b == a", 2,
            lambda a, b: (a + b) - b == a,
        ),
        AlgebraicLaw(
            "division_remainder",
            "(a // b) * b + a % b == a  (for b != 0)", 2,
            lambda a, b: not b or (a // b) * b + a % b == a,
        ),
        AlgebraicLaw(
            "remainder_below_divisor", "a % b < b  (for b != 0)", 2,
            lambda a, b: not b or a % b < b,
        ),
        AlgebraicLaw(
            "increment_decrement", "(a + 1) - 1 == a via increment/decrement", 1,
            lambda a: a.copy().increment().decrement() == a,
        ),
        AlgebraicLaw(
            "shift_left_multiplies", "a << s == a * (1 << s)", 1,
            lambda a, s: a << s == a * (one << s),
            shifts=1,
        ),
        AlgebraicLaw(
            "shift_right_divides", "a >> s == a // (1 << s)", 1,
            lambda a, s: a >> s == a // (one << s),
            shifts=1,
        ),
        AlgebraicLaw(
            "decimal_round_trip", "from_string(to_string(a)) == a", 1,
            lambda a: from_string(type(a), to_string(a)) == a,
            max_samples=4,
        ),
    ]


# ---------------------------------------------------------------------------
# Catalog builder
# ---------------------------------------------------------------------------

def build_laws(int_type: type[Integer]) -> IntegerLaws:
    """Construct the law catalog for ``int_type``."""
    one = int_type(1)

    if int_type.is_dynamic:
        catalog = IntegerLaws(int_type, DYNAMIC_SHIFT_SPAN, _common_laws(one))
        catalog.add(AlgebraicLaw(
            "shift_inverse", "(a << s) >> s == a", 1,
            lambda a, s: (a << s) >> s == a,
            shifts=1,
        ))
        # Complement and negation stay within the segments that exist;
        # when the result loses its top segment to trimming the input
        # width cannot be recovered.
        catalog.add(AlgebraicLaw(
            "double_complement",
            "~~a == a  (when the top segment is not all ones)", 1,
            lambda a: a.segments[-1] == SEGMENT_MASK or ~~a == a,
        ))
        catalog.add(AlgebraicLaw(
            "double_negation",
            "-(-a) == a  (when -a keeps the length of a)", 1,
            lambda a: (-a).length() != a.length() or -(-a) == a,
        ))
        catalog.add(AlgebraicLaw(
            "and_never_grows",
            "len(a & b) <= min(len(a), len(b))", 2,
            lambda a, b: (a & b).length() <= min(a.length(), b.length()),
        ))
        catalog.add(AlgebraicLaw(
            "add_grows_by_at_most_one",
            "len(a + b) <= max(len(a), len(b)) + 1", 2,
            lambda a, b: (a + b).length() <= max(a.length(), b.length()) + 1,
        ))
        catalog.add(AlgebraicLaw(
            "trimmed", "the top segment is non-zero unless the length is 1", 2,
            lambda a, b: all(
                v.length() == 1 or v.segments[-1]
                for v in (a + b, a - b, a * b, a | b, a ^ b, ~a, -a)
            ),
        ))
        return catalog

    bits = int_type.BITS
    limits = numeric_limits(int_type)
    catalog = IntegerLaws(int_type, bits, _common_laws(one))
    catalog.add(AlgebraicLaw(
        "shift_inverse",
        "(a << s) >> s == a  (when no set bit is shifted out)", 1,
        lambda a, s: a.bit_length() + s > bits or (a << s) >> s == a,
        shifts=1,
    ))
    catalog.add(AlgebraicLaw(
        "double_complement", "~~a == a", 1,
        lambda a: ~~a == a,
    ))
    catalog.add(AlgebraicLaw(
        "double_negation", "-(-a) == a", 1,
        lambda a: -(-a) == a,
    ))
    catalog.add(AlgebraicLaw(
        "additive_inverse", "a + (-a) == 0", 1,
        lambda a: not (a + (-a)),
    ))
    catalog.add(AlgebraicLaw(
        "wraparound", "max() + 1 == min()", 0,
        lambda: limits.max() + 1 == limits.min(),
    ))
    catalog.add(AlgebraicLaw(
        "constant_length", "every result spans the full width", 2,
        lambda a, b: all(
            v.length() == bits // 64
            for v in (a + b, a - b, a * b, a & b, a >> 1, a << 1)
        ),
    ))
    return catalog
