# finmath/core/finance/__init__.py

from .amortization import (
    amortization_payment,
    amortization_schedule,
    annual_debt_service,
    balance_after_years,
    remaining_term_years,
)
from .conventions import (
    ceil_to,
    from_percent,
    round_half_away,
    safe_divide,
    to_percent,
    validate_cashflows,
    validate_periods,
    validate_rate,
)
from .errors import (
    FINANCE_ERRORS,
    DivergedOutOfDomainError,
    DivisionByZeroError,
    FinanceMathError,
    InvalidInputError,
    NonConvergentError,
)
from .formulas import (
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
from .irr import irr, npv, npv_derivative, solve_irr

__all__ = [
    # errors
    "FinanceMathError",
    "InvalidInputError",
    "DivisionByZeroError",
    "NonConvergentError",
    "DivergedOutOfDomainError",
    "FINANCE_ERRORS",
    # conventions
    "validate_periods",
    "validate_rate",
    "validate_cashflows",
    "safe_divide",
    "round_half_away",
    "ceil_to",
    "to_percent",
    "from_percent",
    # solver
    "npv",
    "npv_derivative",
    "solve_irr",
    "irr",
    # formulas
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
    # amortization
    "amortization_payment",
    "amortization_schedule",
    "annual_debt_service",
    "balance_after_years",
    "remaining_term_years",
]
