# finmath/core/finance/errors.py
"""
Typed errors shared by every finmath formula and the IRR solver.

Exports
-------
- FinanceMathError, InvalidInputError, DivisionByZeroError,
  NonConvergentError, DivergedOutOfDomainError
- FINANCE_ERRORS
- error_for_status(status)
- classify_finance_error(exc)
- finance_error_guard()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

# =========================
# Exception types
# =========================


class FinanceMathError(Exception):
    """Base class for finmath failures."""

    status: str = "error"


class InvalidInputError(FinanceMathError, ValueError):
    """Malformed arguments: wrong cardinality, no sign change, out-of-domain rate."""

    status = "invalid_input"


class DivisionByZeroError(FinanceMathError, ZeroDivisionError):
    """A formula denominator evaluated to exactly zero."""

    status = "division_by_zero"


class NonConvergentError(FinanceMathError, ArithmeticError):
    """Iterative search ran out of budget or stalled on a near-zero derivative."""

    status = "non_convergent"


class DivergedOutOfDomainError(FinanceMathError, ArithmeticError):
    """An iteration produced a rate <= -1.0, where (1 + r) is no longer positive."""

    status = "diverged_out_of_domain"


# Selector tuple for grouped exception handling
FINANCE_ERRORS = (
    InvalidInputError,
    DivisionByZeroError,
    NonConvergentError,
    DivergedOutOfDomainError,
)

_BY_STATUS: dict[str, type[FinanceMathError]] = {cls.status: cls for cls in FINANCE_ERRORS}


def error_for_status(status: str) -> type[FinanceMathError]:
    """Return the exception class for a failure tag (e.g. "non_convergent")."""
    try:
        return _BY_STATUS[status]
    except KeyError:
        raise ValueError(f"Unknown failure status: {status!r}") from None


# =========================
# Classification helpers
# =========================


def classify_finance_error(exc: Exception) -> FinanceMathError:
    """
    Map an arbitrary exception raised inside a formula to the shared taxonomy.

    Heuristics:
      - Any FinanceMathError → passed through
      - ZeroDivisionError → DivisionByZeroError
      - OverflowError / FloatingPointError → NonConvergentError
      - TypeError / ValueError → InvalidInputError
      - Fallback → FinanceMathError
    """
    if isinstance(exc, FinanceMathError):
        return exc

    msg = f"{type(exc).__name__}: {exc}"

    if isinstance(exc, ZeroDivisionError):
        return DivisionByZeroError(msg)
    if isinstance(exc, OverflowError | FloatingPointError):
        return NonConvergentError(msg)
    if isinstance(exc, TypeError | ValueError):
        return InvalidInputError(msg)

    return FinanceMathError(msg)


@contextmanager
def finance_error_guard() -> Iterator[None]:
    """Context manager to normalize stray arithmetic exceptions from formula bodies."""
    try:
        yield
    except FinanceMathError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_finance_error(exc) from exc


__all__ = [
    "FinanceMathError",
    "InvalidInputError",
    "DivisionByZeroError",
    "NonConvergentError",
    "DivergedOutOfDomainError",
    "FINANCE_ERRORS",
    "error_for_status",
    "classify_finance_error",
    "finance_error_guard",
]
