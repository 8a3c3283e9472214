# finmath/__init__.py
"""
finmath — closed-form financial mathematics with an iterative IRR solver.

    >>> from finmath import irr, npv
    >>> round(irr([-100.0, 39.0, 59.0, 55.0, 20.0]), 4)
    0.2809

All rates are decimal fractions. Formulas raise errors from
finmath.core.finance.errors; `solve_irr` returns a tagged SolveResult instead.

Importing the package has no side effects beyond a NullHandler on the
"finmath" logger. Call finmath.core.debug_log.get_debug_logger() to attach the
FINMATH_DEBUG rotating file log.
"""

from __future__ import annotations

from finmath.core.finance import *  # noqa: F403
from finmath.core.finance import __all__ as _finance_all
from finmath.inputs.inputs import ToleranceLoader, load_tolerance
from finmath.schemas.models import PaymentBreakdown, SolveResult, ToleranceConfig

__version__ = "0.1.0"

__all__ = [
    *_finance_all,
    "ToleranceConfig",
    "SolveResult",
    "PaymentBreakdown",
    "ToleranceLoader",
    "load_tolerance",
    "__version__",
]
