# tests/unit/test_formulas.py

from __future__ import annotations

import pytest

from finmath.core.finance.conventions import ceil_to, round_half_away
from finmath.core.finance.errors import DivisionByZeroError, InvalidInputError, NonConvergentError
from finmath.core.finance.formulas import (
    cagr,
    compound_interest,
    discount_factor,
    discount_factors,
    future_value,
    leverage_ratio,
    payback_period,
    present_value,
    profitability_index,
    roi,
    rule_of_72,
    wacc,
)

# -------------------------
# Catalog examples (rates as fractions)
# -------------------------


def test_cagr():
    assert round_half_away(cagr(10_000, 19_500, 3), 4) == 0.2493


def test_compound_interest():
    assert round_half_away(compound_interest(0.043, 4, 1500, 6), 2) == 1938.84


def test_discount_factors_presentation():
    dfs = discount_factors(0.10, 5)
    assert [ceil_to(x, 3) for x in dfs] == [1.0, 0.91, 0.827, 0.752, 0.684]


def test_future_value():
    assert round_half_away(future_value(0.005, 1000, 12), 2) == 1061.68


def test_present_value_inverts_future_value():
    fv = future_value(0.07, 2500.0, 8)
    assert present_value(0.07, fv, 8) == pytest.approx(2500.0, rel=1e-12)
    assert present_value(0.10, 110.0) == pytest.approx(100.0, rel=1e-12)


def test_leverage_ratio():
    assert leverage_ratio(25, 10, 20) == pytest.approx(1.75)


def test_payback_even_flows():
    assert payback_period([-105, 25], even=True) == pytest.approx(4.2)


def test_payback_uneven_matches_even_for_constant_flows():
    assert payback_period([-105, 25, 25, 25, 25, 25]) == pytest.approx(4.2)


def test_payback_uneven_flows():
    # 3 full periods (-50 -> -11), then 11 of the next 19
    assert payback_period([-50, 10, 13, 16, 19, 22]) == pytest.approx(3 + 11 / 19)


def test_payback_exact_recovery():
    assert payback_period([-30, 10, 20, 5]) == pytest.approx(2.0)


def test_profitability_index():
    pi = profitability_index(0.10, [-40_000, 18_000, 12_000, 10_000, 9_000, 6_000])
    assert round_half_away(pi, 2) == 1.09


def test_roi():
    assert round_half_away(roi(-55_000, 60_000), 4) == 0.0909


def test_rule_of_72():
    assert rule_of_72(0.10) == pytest.approx(7.2)


def test_wacc():
    assert wacc(600_000, 400_000, 0.06, 0.05, 0.35) == pytest.approx(0.049)


# -------------------------
# Shape properties
# -------------------------


def test_future_value_strictly_increases_with_rate():
    rates = [-0.5, -0.1, 0.0, 0.01, 0.05, 0.1, 0.5, 1.0]
    for periods in (0.5, 1, 5, 30):
        values = [future_value(r, 1000.0, periods) for r in rates]
        assert all(a < b for a, b in zip(values, values[1:], strict=False))


def test_discount_factor_at_zero_period_is_one():
    assert discount_factor(0.25, 0) == 1.0
    assert discount_factor(0.0, 10) == 1.0


def test_cagr_round_trips_through_future_value():
    g = cagr(100.0, 250.0, 7)
    assert future_value(g, 100.0, 7) == pytest.approx(250.0, rel=1e-12)


# -------------------------
# Failure modes
# -------------------------


@pytest.mark.parametrize(
    "call",
    [
        lambda: cagr(100, 200, 0),
        lambda: cagr(100, -200, 2),
        lambda: compound_interest(-8.0, 4, 100, 1),
        lambda: compound_interest(0.05, 0, 100, 1),
        lambda: discount_factor(-1.0, 1),
        lambda: discount_factor(0.1, -1),
        lambda: discount_factors(0.1, 2.5),
        lambda: future_value(0.05, 100, -1),
        lambda: future_value(-1.5, 100, 1),
        lambda: present_value(0.05, float("nan")),
        lambda: payback_period([100, 10, -5]),
        lambda: payback_period([-100, 10, 20]),
        lambda: payback_period([-100]),
        lambda: wacc(-1, 100, 0.1, 0.05, 0.3),
        lambda: wacc(100, 100, 0.1, 0.05, 1.5),
    ],
)
def test_invalid_inputs(call):
    with pytest.raises(InvalidInputError):
        call()


@pytest.mark.parametrize(
    "call",
    [
        lambda: cagr(0, 100, 2),
        lambda: leverage_ratio(10, 10, 0),
        lambda: payback_period([-100, 0], even=True),
        lambda: profitability_index(0.1, [0, 10, 20]),
        lambda: roi(0, 100),
        lambda: rule_of_72(0.0),
        lambda: wacc(0, 0, 0.1, 0.05, 0.3),
    ],
)
def test_zero_denominators(call):
    with pytest.raises(DivisionByZeroError):
        call()


def test_overflow_maps_to_non_convergent():
    with pytest.raises(NonConvergentError) as info:
        future_value(1e10, 1.0, 1e10)
    assert isinstance(info.value.__cause__, OverflowError)
