"""Shared fixtures and Hypothesis configuration."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from factory import IntegerFactory

# Long division is quadratic in the bit width; examples on wide values
# take longer than Hypothesis' default deadline.
settings.register_profile(
    "segments",
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("segments")


@pytest.fixture
def factory() -> IntegerFactory:
    """A small, reproducible factory."""
    return IntegerFactory(samples=12, seed=1234)
