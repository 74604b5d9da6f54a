"""FastAPI endpoints for evaluating segmented integer operations.

Routes
------
POST   /integers/evaluate         Apply one operation to decimal operands
GET    /integers/limits/{bits}    Numeric limits of a fixed-width type
"""

from __future__ import annotations

import logging
import operator
from typing import Callable

from fastapi import APIRouter, HTTPException, Path

from codec import from_string, to_string
from factory import IntegerFactory, VerificationError
from integer import Integer
from limits import numeric_limits
from models import (
    MAX_WIDTH,
    EvaluateRequest,
    EvaluateResponse,
    LimitsResponse,
    Operation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integers", tags=["integers"])

# The factory instance is injected by the app factory (see app.py).
_factory: IntegerFactory | None = None


def set_factory(factory: IntegerFactory) -> None:
    """Inject the integer factory. Called once at app startup."""
    global _factory
    _factory = factory


def get_factory() -> IntegerFactory:
    assert _factory is not None, "Factory not initialized"
    return _factory


_BINARY: dict[Operation, Callable[[Integer, Integer], Integer]] = {
    Operation.ADD: operator.add,
    Operation.SUB: operator.sub,
    Operation.MUL: operator.mul,
    Operation.DIV: operator.floordiv,
    Operation.MOD: operator.mod,
    Operation.AND: operator.and_,
    Operation.OR: operator.or_,
    Operation.XOR: operator.xor,
}

_SHIFT: dict[Operation, Callable[[Integer, int], Integer]] = {
    Operation.SHL: operator.lshift,
    Operation.SHR: operator.rshift,
}

_UNARY: dict[Operation, Callable[[Integer], Integer]] = {
    Operation.NEG: operator.neg,
    Operation.NOT: operator.invert,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _resolve_type(width: int | None) -> type[Integer]:
    factory = get_factory()
    try:
        return factory.dynamic() if width is None else factory.fixed(width)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except VerificationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


def _parse(int_type: type[Integer], text: str) -> Integer:
    value = from_string(int_type, text)
    if value is None:
        raise HTTPException(status_code=422, detail=f"not a decimal integer: {text!r}")
    return value


def _evaluate(payload: EvaluateRequest, int_type: type[Integer]) -> Integer:
    a = _parse(int_type, payload.a)
    if payload.op in _UNARY:
        return _UNARY[payload.op](a)
    if payload.op in _SHIFT:
        return _SHIFT[payload.op](a, int(payload.b))
    return _BINARY[payload.op](a, _parse(int_type, payload.b))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(payload: EvaluateRequest) -> EvaluateResponse:
    """Apply one operation and return the result with its segments."""
    int_type = _resolve_type(payload.width)
    try:
        result = _evaluate(payload, int_type)
    except ZeroDivisionError as e:
        logger.info("rejected %s on %s: %s", payload.op.value, int_type.__name__, e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.debug(
        "%s %s -> %d segments", int_type.__name__, payload.op.value, result.length()
    )
    return EvaluateResponse(
        op=payload.op,
        result=to_string(result),
        segments=list(result.segments),
        length=result.length(),
        bits=result.bits(),
        width=payload.width,
    )


@router.get("/limits/{bits}", response_model=LimitsResponse)
def get_limits(
    bits: int = Path(..., ge=1, le=MAX_WIDTH, description="Fixed bit width"),
) -> LimitsResponse:
    """Report the numeric limits of the fixed-width type for ``bits``."""
    int_type = _resolve_type(bits)
    limits = numeric_limits(int_type)
    return LimitsResponse(
        width=bits,
        is_signed=limits.is_signed,
        is_integer=limits.is_integer,
        is_exact=limits.is_exact,
        is_bounded=limits.is_bounded,
        is_modulo=limits.is_modulo,
        radix=limits.radix,
        digits=limits.digits,
        digits10=limits.digits10,
        has_infinity=limits.has_infinity,
        has_quiet_nan=limits.has_quiet_nan,
        min=to_string(limits.min()),
        max=to_string(limits.max()),
    )
