"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_factory
from factory import IntegerFactory

# Verification effort for the service; tests inject their own factory.
SERVICE_SAMPLES = 16


def create_app(factory: IntegerFactory | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional factory for testing; creates a fresh one if omitted.
    """
    if factory is None:
        factory = IntegerFactory(samples=SERVICE_SAMPLES)

    set_factory(factory)

    app = FastAPI(
        title="Segmented Integer API",
        description=(
            "Evaluates unsigned arbitrary-precision integer operations on "
            "decimal operands, either in a fixed power-of-two width that "
            "wraps on overflow or in a dynamic width that grows as needed. "
            "Every integer type is verified against its algebraic laws "
            "before it serves a request."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
