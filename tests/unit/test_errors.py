# tests/unit/test_errors.py

from __future__ import annotations

import pytest

from finmath.core.finance.errors import (
    FINANCE_ERRORS,
    DivergedOutOfDomainError,
    DivisionByZeroError,
    FinanceMathError,
    InvalidInputError,
    NonConvergentError,
    classify_finance_error,
    error_for_status,
    finance_error_guard,
)


def test_taxonomy_extends_builtin_hierarchy():
    assert issubclass(InvalidInputError, ValueError)
    assert issubclass(DivisionByZeroError, ZeroDivisionError)
    assert issubclass(NonConvergentError, ArithmeticError)
    assert issubclass(DivergedOutOfDomainError, ArithmeticError)
    assert all(issubclass(cls, FinanceMathError) for cls in FINANCE_ERRORS)


@pytest.mark.parametrize(
    "status, cls",
    [
        ("invalid_input", InvalidInputError),
        ("division_by_zero", DivisionByZeroError),
        ("non_convergent", NonConvergentError),
        ("diverged_out_of_domain", DivergedOutOfDomainError),
    ],
)
def test_error_for_status(status, cls):
    assert error_for_status(status) is cls
    assert cls.status == status


def test_error_for_unknown_status():
    with pytest.raises(ValueError, match="Unknown failure status"):
        error_for_status("converged")


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ZeroDivisionError("float division by zero"), DivisionByZeroError),
        (OverflowError("Numerical result out of range"), NonConvergentError),
        (FloatingPointError("invalid value"), NonConvergentError),
        (TypeError("unsupported operand"), InvalidInputError),
        (ValueError("math domain error"), InvalidInputError),
        (RuntimeError("boom"), FinanceMathError),
    ],
)
def test_classify_finance_error(exc, expected):
    out = classify_finance_error(exc)
    assert type(out) is expected
    assert type(exc).__name__ in str(out)


def test_classify_passes_library_errors_through():
    err = NonConvergentError("stalled")
    assert classify_finance_error(err) is err


def test_guard_chains_the_original_exception():
    with pytest.raises(DivisionByZeroError) as info:
        with finance_error_guard():
            1.0 / 0.0
    assert isinstance(info.value.__cause__, ZeroDivisionError)


def test_guard_reraises_library_errors_unchanged():
    err = InvalidInputError("bad")
    with pytest.raises(InvalidInputError) as info:
        with finance_error_guard():
            raise err
    assert info.value is err
