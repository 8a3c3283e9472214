# finmath/core/finance/amortization.py
"""
Loan amortization: level payment and monthly schedules.

Rates are annual fractions (0.075 = 7.5%) compounded monthly; payments are
monthly. Interest-only (IO) months, when requested, precede amortization.
"""

from __future__ import annotations

import math

from finmath.schemas.models import PaymentBreakdown

from .conventions import safe_divide, validate_non_negative, validate_periods
from .errors import InvalidInputError, finance_error_guard

_EPS = 1e-6  # floating cleanup for near-zero balances


def _whole(value: float, name: str) -> int:
    if not float(value).is_integer():
        raise InvalidInputError(f"{name} must be a whole number, got {value}")
    return int(value)


def amortization_payment(
    principal: float,
    annual_rate: float,
    periods: float,
    *,
    periods_in_months: bool = False,
    pay_at_beginning: bool = False,
) -> float:
    """
    Level monthly payment that fully repays `principal`.

    Formula (ordinary annuity, r = annual_rate / 12, n = months):
        PMT = P * r * (1 + r)^n / ((1 + r)^n - 1)

    With pay_at_beginning (annuity due) each payment accrues one period less:
        PMT = P * r * (1 + r)^(n - 1) / ((1 + r)^n - 1)

    Args:
        principal: Loan amount (>= 0).
        annual_rate: APR as a fraction.
        periods: Term in years, or in months when periods_in_months=True.

    Notes:
        - A zero rate reduces to principal / n.
    """
    with finance_error_guard():
        p = validate_non_negative(principal, "principal")
        rate = validate_non_negative(annual_rate, "annual_rate")
        term = validate_periods(periods)
        n = term if periods_in_months else term * 12.0

        r = rate / 12.0
        if r == 0.0:
            return p / n

        # (1 + r)^n - 1 via expm1/log1p; the naive form cancels to 0 for tiny r
        log_growth = math.log1p(r)
        growth_m1 = math.expm1(n * log_growth)
        accrual = math.exp((n - 1.0) * log_growth) if pay_at_beginning else growth_m1 + 1.0
        return p * safe_divide(r * accrual, growth_m1)


def amortization_schedule(
    principal: float,
    annual_rate: float,
    amort_years: int,
    *,
    io_years: int = 0,
) -> list[PaymentBreakdown]:
    """
    Monthly schedule: io_years of interest-only payments, then level payments
    over amort_years.

    Returns:
        One PaymentBreakdown per month. Empty when principal is 0.

    Notes:
        - amort_years == 0 gives a pure IO schedule (balance never falls).
        - The final payment absorbs rounding drift so the balance ends at exactly 0.
    """
    p = validate_non_negative(principal, "principal")
    rate = validate_non_negative(annual_rate, "annual_rate")
    amort = _whole(validate_non_negative(amort_years, "amort_years"), "amort_years")
    io = _whole(validate_non_negative(io_years, "io_years"), "io_years")

    if p == 0.0:
        return []

    r = rate / 12.0
    schedule: list[PaymentBreakdown] = []
    bal = p
    month = 0

    for _ in range(io * 12):
        month += 1
        interest = bal * r
        schedule.append(PaymentBreakdown(month, interest, 0.0, interest, bal))

    if amort > 0:
        n_months = amort * 12
        pmt = amortization_payment(bal, rate, amort)
        for i in range(1, n_months + 1):
            month += 1
            interest = bal * r
            principal_paid = max(0.0, pmt - interest)
            if i == n_months or principal_paid > bal:
                principal_paid = bal
            bal -= principal_paid
            if bal < _EPS:
                bal = 0.0
            schedule.append(PaymentBreakdown(month, interest, principal_paid, interest + principal_paid, bal))

    return schedule


def annual_debt_service(schedule: list[PaymentBreakdown], year: int) -> tuple[float, float, float]:
    """
    (total, interest, principal) paid during a 1-based year of a monthly schedule.
    Years past the end of the schedule return zeros.
    """
    if year <= 0:
        raise InvalidInputError("year is 1-based (Year 1, Year 2, ...).")

    rows = schedule[(year - 1) * 12 : year * 12]
    return (
        sum((p.total for p in rows), 0.0),
        sum((p.interest for p in rows), 0.0),
        sum((p.principal for p in rows), 0.0),
    )


def balance_after_years(schedule: list[PaymentBreakdown], years: int) -> float:
    """Outstanding balance after `years` whole years (clamped to the schedule)."""
    if not schedule:
        return 0.0
    if years <= 0:
        # no payment made yet: balance before month 1
        first = schedule[0]
        return first.balance + first.principal
    cutoff = min(len(schedule), years * 12)
    return schedule[cutoff - 1].balance


def remaining_term_years(schedule: list[PaymentBreakdown], from_year: int) -> int:
    """Whole years left in the schedule after the end of 1-based `from_year`."""
    months_elapsed = min(max(from_year, 0) * 12, len(schedule))
    return (len(schedule) - months_elapsed) // 12


__all__ = [
    "amortization_payment",
    "amortization_schedule",
    "annual_debt_service",
    "balance_after_years",
    "remaining_term_years",
]
