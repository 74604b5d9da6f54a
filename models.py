"""Request and response models for the evaluation API.

Operands travel as decimal strings so that values wider than JSON
numbers survive the round trip.  These are data models only -- the
arithmetic happens in ``api.py`` through the integer types.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from integer import validate_width

DECIMAL_PATTERN = r"^[0-9]+$"
MAX_DIGITS = 160
MAX_SHIFT = 512
MAX_WIDTH = 512


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SHL = "shl"
    SHR = "shr"
    NEG = "neg"
    NOT = "not"

    @property
    def is_unary(self) -> bool:
        return self in (Operation.NEG, Operation.NOT)

    @property
    def is_shift(self) -> bool:
        return self in (Operation.SHL, Operation.SHR)


# ---------------------------------------------------------------------------
# Evaluate
# ---------------------------------------------------------------------------

class EvaluateRequest(BaseModel):
    """One operation on decimal operands.

    ``width`` selects a fixed-width type; leave it out for the dynamic
    type.  For shifts, ``b`` is the shift count.
    """

    op: Operation
    a: str = Field(..., min_length=1, max_length=MAX_DIGITS, pattern=DECIMAL_PATTERN)
    b: str | None = Field(
        default=None, min_length=1, max_length=MAX_DIGITS, pattern=DECIMAL_PATTERN
    )
    width: int | None = Field(
        default=None,
        le=MAX_WIDTH,
        description="Fixed bit width (power of two > 64); omit for dynamic",
    )

    @field_validator("width")
    @classmethod
    def width_is_power_of_two(cls, v: int | None) -> int | None:
        if v is not None:
            validate_width(v)
        return v

    @model_validator(mode="after")
    def operand_count_matches_op(self) -> EvaluateRequest:
        if self.op.is_unary and self.b is not None:
            raise ValueError(f"operation {self.op.value!r} takes one operand")
        if not self.op.is_unary and self.b is None:
            raise ValueError(f"operation {self.op.value!r} requires operand 'b'")
        if self.op.is_shift and int(self.b) > MAX_SHIFT:
            raise ValueError(f"shift count must be at most {MAX_SHIFT}")
        return self


class EvaluateResponse(BaseModel):
    """Result of an evaluation, with its segment layout."""

    op: Operation
    result: str
    segments: list[int]
    length: int
    bits: int
    width: int | None = None


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

class LimitsResponse(BaseModel):
    """Numeric limits of a fixed-width type; min/max as decimal strings."""

    width: int
    is_signed: bool
    is_integer: bool
    is_exact: bool
    is_bounded: bool
    is_modulo: bool
    radix: int
    digits: int
    digits10: int
    has_infinity: bool
    has_quiet_nan: bool
    min: str
    max: str
