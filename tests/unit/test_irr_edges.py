# tests/unit/test_irr_edges.py

from __future__ import annotations

import math

import pytest

from finmath.core.finance.errors import (
    DivergedOutOfDomainError,
    InvalidInputError,
    NonConvergentError,
)
from finmath.core.finance.irr import irr, solve_irr
from tests.utils import STALLED_CASHFLOWS


@pytest.mark.parametrize(
    "cashflows",
    [
        [],
        [100.0],
        [-100.0],
    ],
)
def test_fewer_than_two_flows_is_invalid(cashflows):
    res = solve_irr(cashflows)
    assert res.status == "invalid_input"
    assert res.rate is None
    assert res.method is None
    assert res.iterations == 0
    with pytest.raises(InvalidInputError):
        irr(cashflows)


@pytest.mark.parametrize(
    "cashflows",
    [
        [100.0, 200.0, 300.0],
        [-50.0, -10.0],
        [0.0, 0.0, 0.0],
        [-10.0, 0.0],
    ],
)
def test_no_sign_change_is_invalid(cashflows):
    res = solve_irr(cashflows)
    assert res.status == "invalid_input"
    assert "positive and a negative" in (res.message or "")
    with pytest.raises(InvalidInputError):
        irr(cashflows)


def test_non_finite_flow_is_invalid():
    res = solve_irr([-100.0, math.nan, 120.0])
    assert res.status == "invalid_input"
    assert "cashflows[1]" in (res.message or "")


def test_non_iterable_is_invalid():
    res = solve_irr(42)  # type: ignore[arg-type]
    assert res.status == "invalid_input"


def test_near_zero_derivative_stalls():
    res = solve_irr(STALLED_CASHFLOWS)
    assert res.status == "non_convergent"
    assert res.method == "newton"
    assert res.iterations == 1
    assert "stalled" in (res.message or "")
    with pytest.raises(NonConvergentError):
        irr(STALLED_CASHFLOWS)


def test_iteration_budget_is_enforced(classic_cashflows, tolerance):
    res = solve_irr(classic_cashflows, tolerance(max_iterations=1))
    assert res.status == "non_convergent"
    assert res.iterations == 1
    assert res.residual is not None and abs(res.residual) > 1e-7
    assert "within 1 iterations" in (res.message or "")


def test_step_below_minus_one_diverges():
    # NPV = 1 - x + x^2 with x = 1/(1+r) has no real root; Newton's second
    # step from 0.1 overshoots far below -1.
    res = solve_irr([1.0, -1.0, 1.0])
    assert res.status == "diverged_out_of_domain"
    assert res.iterations == 2
    assert res.rate is None
    with pytest.raises(DivergedOutOfDomainError):
        irr([1.0, -1.0, 1.0])


def test_failures_are_deterministic():
    assert solve_irr(STALLED_CASHFLOWS) == solve_irr(STALLED_CASHFLOWS)
    assert solve_irr([1.0, -1.0, 1.0]) == solve_irr([1.0, -1.0, 1.0])
