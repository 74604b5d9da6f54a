"""Verifying factory for integer types.

The factory does not just construct integer types - it *verifies* them
against their law catalog before releasing them.

Flow:
  1. Caller requests a fixed width (or the dynamic type).
  2. Factory builds the type.
  3. Factory samples every law of ``build_laws(type)``.
  4. If verification passes  -> return the type (cached for next time).
     If verification fails   -> raise, never hand out a broken type.

Samples are edge values (zero, one, segment boundaries, all ones, the
top bit) followed by seeded random segment patterns.
"""
from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Any

from integer import DynamicInteger, FixedInteger, Integer, fixed_width
from laws import AlgebraicLaw, IntegerLaws, build_laws
from segments import SEGMENT_BITS, SEGMENT_MASK

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of sampling one law.

    ``counterexample`` holds the reprs of the first operands (and shift
    amounts) that broke the law.
    """

    law_name: str
    passed: bool
    counterexample: tuple | None = None
    samples_run: int = 0
    description: str = ""

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.law_name} ({self.samples_run} samples){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying a law catalog against one type.

    ``bits`` is the fixed width, or ``None`` for the dynamic type.
    """

    type_name: str
    bits: int | None = None
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    @property
    def samples_run(self) -> int:
        return sum(r.samples_run for r in self.results)

    def summary(self) -> str:
        width = "dynamic width" if self.bits is None else f"{self.bits} bits"
        lines = [f"--- {self.type_name} ({width}) ---"]
        for r in self.results:
            lines.append(f"  {r}")
            if not r.passed and r.description:
                lines.append(f"      law: {r.description}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status} ({self.samples_run} samples)")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an integer type fails its laws."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")

    @property
    def failed_laws(self) -> list[str]:
        return [r.law_name for r in self.report.failures]


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class IntegerFactory:
    """Produces integer types that have been checked against their laws.

    ``samples`` is the number of value tuples drawn per law (edge cases
    first, random fill after).  ``seed`` makes the random fill
    reproducible.
    """

    DEFAULT_SAMPLES = 64
    DYNAMIC_MAX_SEGMENTS = 4

    def __init__(self, samples: int = DEFAULT_SAMPLES, seed: int | None = None):
        if samples < 1:
            raise ValueError(f"samples must be positive, got {samples}")
        self.samples = samples
        self.seed = seed
        self._verified: dict[type[Integer], VerificationReport] = {}

    def fixed(self, bits: int) -> type[FixedInteger]:
        """Build, verify, and return the fixed-width type for ``bits``."""
        int_type = fixed_width(bits)
        self._verify_or_raise(int_type)
        return int_type

    def dynamic(self) -> type[DynamicInteger]:
        """Verify and return the dynamic-width type."""
        self._verify_or_raise(DynamicInteger)
        return DynamicInteger

    def report(self, int_type: type[Integer]) -> VerificationReport | None:
        """The report from the verification that released ``int_type``."""
        return self._verified.get(int_type)

    def verify(
        self, int_type: type[Integer], laws: IntegerLaws | None = None
    ) -> VerificationReport:
        """Sample every law and collect the results (never raises)."""
        if laws is None:
            laws = build_laws(int_type)
        rng = random.Random(self.seed)
        report = VerificationReport(
            type_name=int_type.__name__,
            bits=None if int_type.is_dynamic else int_type.BITS,
        )
        for law in laws:
            report.results.append(self._verify_law(law, laws, rng))
        return report

    # -- internal ---------------------------------------------------------

    def _verify_or_raise(self, int_type: type[Integer]) -> None:
        if int_type in self._verified:
            return
        logger.debug("verifying %s with %d samples", int_type.__name__, self.samples)
        report = self.verify(int_type)
        if not report.passed:
            error = VerificationError(report)
            logger.warning(
                "%s failed verification: %s",
                int_type.__name__,
                ", ".join(error.failed_laws),
            )
            raise error
        self._verified[int_type] = report
        logger.debug("%s verified (%d laws)", int_type.__name__, len(report.results))

    def _verify_law(
        self, law: AlgebraicLaw, laws: IntegerLaws, rng: random.Random
    ) -> VerificationResult:
        count = self.samples
        if law.max_samples is not None:
            count = min(count, law.max_samples)

        samples = _generate_samples(laws, law, count, rng)
        samples_run = 0
        for combo in samples:
            samples_run += 1
            if not law.check(*combo):
                return VerificationResult(
                    law_name=law.name,
                    passed=False,
                    counterexample=_describe(combo),
                    samples_run=samples_run,
                    description=law.description,
                )

        return VerificationResult(
            law_name=law.name,
            passed=True,
            samples_run=samples_run,
            description=law.description,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def edge_values(int_type: type[Integer]) -> list[Integer]:
    """Values that sit on segment and width boundaries."""
    values = [
        int_type(0),
        int_type(1),
        int_type(10),
        int_type(SEGMENT_MASK),
        int_type(-1),
        int_type(1) << SEGMENT_BITS,
        (int_type(1) << SEGMENT_BITS) - 1,
    ]
    if int_type.is_dynamic:
        values.append(int_type(1) << (SEGMENT_BITS * 3 - 1))
    else:
        values.append(int_type(1) << (int_type.BITS - 1))
        values.append(int_type(-2))
    return values


def _random_value(int_type: type[Integer], rng: random.Random) -> Integer:
    if int_type.is_dynamic:
        count = rng.randint(1, IntegerFactory.DYNAMIC_MAX_SEGMENTS)
    else:
        count = int_type.BITS // SEGMENT_BITS
    segments = []
    for _ in range(count):
        # Bias toward zero and all-ones segments to exercise carries.
        pick = rng.random()
        if pick < 0.15:
            segments.append(0)
        elif pick < 0.3:
            segments.append(SEGMENT_MASK)
        else:
            segments.append(rng.getrandbits(SEGMENT_BITS))
    return int_type.from_segments(segments)


def _generate_samples(
    laws: IntegerLaws, law: AlgebraicLaw, count: int, rng: random.Random
) -> list[tuple[Any, ...]]:
    """Edge-value combinations first, then random fill up to ``count``."""
    if law.arity == 0 and law.shifts == 0:
        return [()]

    int_type = laws.int_type
    edge_shifts = [0, 1, SEGMENT_BITS - 1, SEGMENT_BITS, laws.shift_span - 1]
    edges = itertools.product(
        *([edge_values(int_type)] * law.arity + [edge_shifts] * law.shifts)
    )

    # Half edge cases, half random; at least one of each kind when possible.
    edge_count = max(1, count // 2)
    samples: list[tuple[Any, ...]] = list(itertools.islice(edges, edge_count))
    while len(samples) < count:
        values = tuple(_random_value(int_type, rng) for _ in range(law.arity))
        shifts = tuple(rng.randrange(laws.shift_span) for _ in range(law.shifts))
        samples.append(values + shifts)
    # Each check gets its own copies.
    return [
        tuple(v.copy() if isinstance(v, Integer) else v for v in combo)
        for combo in samples
    ]


def _describe(combo: tuple[Any, ...]) -> tuple[Any, ...]:
    return tuple(repr(v) for v in combo)
