# finmath/core/finance/formulas.py
"""
Direct (closed-form) finance formulas.

Conventions
-----------
- Rates in and out are decimal fractions (0.05 = 5%); see conventions.to_percent
  for display.
- Results are full precision; round for presentation with
  conventions.round_half_away.
- Every formula validates first and raises InvalidInputError /
  DivisionByZeroError; stray arithmetic errors (e.g. float overflow) are mapped
  onto the same taxonomy by finance_error_guard.
"""

from __future__ import annotations

from collections.abc import Iterable

from .conventions import (
    safe_divide,
    to_percent,
    validate_cashflows,
    validate_finite,
    validate_non_negative,
    validate_periods,
    validate_rate,
)
from .errors import InvalidInputError, finance_error_guard
from .irr import npv

# -------------------------
# Growth & time value
# -------------------------


def cagr(beginning_value: float, ending_value: float, periods: float) -> float:
    """
    Compound annual growth rate: the constant per-period rate that grows
    beginning_value into ending_value over `periods`.

        CAGR = (end / begin)^(1 / periods) - 1
    """
    with finance_error_guard():
        begin = validate_finite(beginning_value, "beginning_value")
        end = validate_finite(ending_value, "ending_value")
        n = validate_periods(periods)
        ratio = safe_divide(end, begin)
        if ratio < 0:
            raise InvalidInputError("beginning_value and ending_value must have the same sign")
        return ratio ** (1.0 / n) - 1.0


def compound_interest(rate: float, compoundings_per_period: float, principal: float, periods: float) -> float:
    """
    Balance after compounding `compoundings_per_period` times per period.

        A = P * (1 + rate / m)^(m * periods)
    """
    with finance_error_guard():
        m = validate_periods(compoundings_per_period, "compoundings_per_period")
        r = validate_finite(rate, "rate")
        validate_rate(r / m, "rate / compoundings_per_period")
        p = validate_finite(principal, "principal")
        n = validate_periods(periods)
        return p * (1.0 + r / m) ** (m * n)


def discount_factor(rate: float, period: float) -> float:
    """1 / (1 + rate)^period; period 0 gives 1.0."""
    with finance_error_guard():
        r = validate_rate(rate)
        t = validate_non_negative(period, "period")
        return 1.0 / (1.0 + r) ** t


def discount_factors(rate: float, periods: int) -> list[float]:
    """Discount factors for t = 0 .. periods-1."""
    n = validate_periods(periods)
    if not n.is_integer():
        raise InvalidInputError(f"periods must be a whole number, got {periods}")
    return [discount_factor(rate, t) for t in range(int(n))]


def future_value(rate: float, present_value: float, periods: float) -> float:
    """FV = PV * (1 + rate)^periods"""
    with finance_error_guard():
        r = validate_rate(rate)
        pv = validate_finite(present_value, "present_value")
        n = validate_periods(periods)
        return pv * (1.0 + r) ** n


def present_value(rate: float, future_value: float, periods: float = 1) -> float:
    """PV = FV / (1 + rate)^periods"""
    with finance_error_guard():
        r = validate_rate(rate)
        fv = validate_finite(future_value, "future_value")
        n = validate_periods(periods)
        return safe_divide(fv, (1.0 + r) ** n)


# -------------------------
# Capital budgeting
# -------------------------


def payback_period(cashflows: Iterable[float], *, even: bool = False) -> float:
    """
    Periods needed to recoup the initial outlay in cashflows[0].

    even=True:  constant inflows, so payback = |cf[0] / cf[1]|.
    even=False: whole periods until cumulative cash turns non-negative, plus
                the fraction of the recovering period's inflow that was needed.

    Raises InvalidInputError if the outlay is never recovered.
    """
    with finance_error_guard():
        if even:
            amounts = validate_cashflows(cashflows, require_sign_change=False)
            return abs(safe_divide(amounts[0], amounts[1]))

        amounts = validate_cashflows(cashflows)
        if amounts[0] >= 0:
            raise InvalidInputError("cashflows[0] must be the (negative) initial outlay")

        cumulative = amounts[0]
        for i, cf in enumerate(amounts[1:], start=1):
            deficit = -cumulative
            cumulative += cf
            if cumulative >= 0:
                return (i - 1) + deficit / cf
        raise InvalidInputError(f"initial outlay is not recovered within {len(amounts) - 1} periods")


def profitability_index(rate: float, cashflows: Iterable[float]) -> float:
    """
    PV of inflows (t >= 1) per unit of initial investment.

        PI = sum_{t>=1} CF[t] / (1+r)^t / |CF[0]|
    """
    with finance_error_guard():
        r = validate_rate(rate)
        amounts = validate_cashflows(cashflows, require_sign_change=False)
        pv_inflows = npv(r, [0.0, *amounts[1:]])
        return safe_divide(pv_inflows, abs(amounts[0]))


def roi(initial_investment: float, earnings: float) -> float:
    """Return on investment as a fraction: (earnings - |cost|) / |cost|."""
    with finance_error_guard():
        cost = abs(validate_finite(initial_investment, "initial_investment"))
        gain = validate_finite(earnings, "earnings")
        return safe_divide(gain - cost, cost)


def rule_of_72(rate: float) -> float:
    """Approximate periods to double at `rate` (0.10 -> 7.2)."""
    with finance_error_guard():
        r = validate_finite(rate, "rate")
        return safe_divide(72.0, to_percent(r))


# -------------------------
# Capital structure
# -------------------------


def leverage_ratio(total_liabilities: float, total_debts: float, total_income: float) -> float:
    """(liabilities + debts) / income"""
    with finance_error_guard():
        liabilities = validate_finite(total_liabilities, "total_liabilities")
        debts = validate_finite(total_debts, "total_debts")
        income = validate_finite(total_income, "total_income")
        return safe_divide(liabilities + debts, income)


def wacc(
    equity_value: float,
    debt_value: float,
    cost_of_equity: float,
    cost_of_debt: float,
    tax_rate: float,
) -> float:
    """
    Weighted average cost of capital.

        WACC = E/V * Re + D/V * Rd * (1 - T),   V = E + D

    Market values must be >= 0 and not both zero; tax_rate is a fraction in [0, 1].
    """
    with finance_error_guard():
        e = validate_non_negative(equity_value, "equity_value")
        d = validate_non_negative(debt_value, "debt_value")
        re = validate_finite(cost_of_equity, "cost_of_equity")
        rd = validate_finite(cost_of_debt, "cost_of_debt")
        t = validate_non_negative(tax_rate, "tax_rate")
        if t > 1.0:
            raise InvalidInputError(f"tax_rate must be <= 1, got {t}")
        v = e + d
        return safe_divide(e, v) * re + safe_divide(d, v) * rd * (1.0 - t)


__all__ = [
    "cagr",
    "compound_interest",
    "discount_factor",
    "discount_factors",
    "future_value",
    "present_value",
    "payback_period",
    "profitability_index",
    "roi",
    "rule_of_72",
    "leverage_ratio",
    "wacc",
]
