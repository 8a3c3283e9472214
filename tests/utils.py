# tests/utils.py
"""
Single source of truth for test data and factories.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from finmath.schemas.models import ToleranceConfig

# -----------------------------
# Canonical cash-flow series
# -----------------------------

# numpy-financial docs example
CLASSIC_CASHFLOWS = [-100.0, 39.0, 59.0, 55.0, 20.0]
CLASSIC_IRR = 0.2809484

# Capital budgeting example; NPV@10% ≈ 80015.03, IRR ≈ 18.82%
PROJECT_CASHFLOWS = [-500_000.0, 200_000.0, 300_000.0, 200_000.0]

# Alternating signs with negligible returns: NPV slope stays ~1e-9
STALLED_CASHFLOWS = [-1.0, 1e-9, -1e-9, 1e-9]


def make_tolerance(**overrides: Any) -> ToleranceConfig:
    """ToleranceConfig with defaults, overridable per test."""
    return ToleranceConfig(**overrides)
