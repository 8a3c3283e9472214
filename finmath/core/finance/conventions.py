# finmath/core/finance/conventions.py
"""
Shared numeric conventions: validation, safe division, presentation rounding.

Every formula in finmath calls into this module first so that bad inputs
surface as InvalidInputError / DivisionByZeroError instead of as NaN, inf, or
a silently wrong number.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Real

from .errors import DivisionByZeroError, InvalidInputError


def validate_finite(value: float, name: str = "value") -> float:
    """Return value as float; reject bools, non-numbers, NaN and ±inf."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a real number, got {type(value).__name__}")
    v = float(value)
    if not math.isfinite(v):
        raise InvalidInputError(f"{name} must be finite, got {v}")
    return v


def validate_non_negative(value: float, name: str = "value") -> float:
    v = validate_finite(value, name)
    if v < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {v}")
    return v


def validate_periods(n: float, name: str = "periods") -> float:
    """Reject period counts <= 0."""
    v = validate_finite(n, name)
    if v <= 0:
        raise InvalidInputError(f"{name} must be > 0, got {v}")
    return v


def validate_rate(r: float, name: str = "rate") -> float:
    """
    Reject rates <= -1.0.

    At r = -1 the compounding factor (1 + r) is zero; below it the factor turns
    negative and integer powers flip sign, so no compounding formula is meaningful.
    """
    v = validate_finite(r, name)
    if v <= -1.0:
        raise InvalidInputError(f"{name} must be > -1.0, got {v}")
    return v


def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, raising DivisionByZeroError on an exact 0.0 denominator."""
    if denominator == 0.0:
        raise DivisionByZeroError(f"division of {numerator} by zero")
    return numerator / denominator


def validate_cashflows(
    cashflows: Iterable[float],
    *,
    min_length: int = 2,
    require_sign_change: bool = True,
) -> list[float]:
    """
    Materialize a cash-flow iterable into list[float] and check its shape.

    Raises InvalidInputError when:
      - the input is not iterable
      - any entry is not a finite real number
      - fewer than `min_length` entries are present
      - `require_sign_change` and there is not at least one strictly positive
        and one strictly negative entry
    """
    try:
        raw = list(cashflows)
    except TypeError as e:
        raise InvalidInputError(f"cash flows must be iterable: {e}") from e

    if len(raw) < min_length:
        raise InvalidInputError(f"at least {min_length} cash flows required, got {len(raw)}")

    amounts = [validate_finite(cf, f"cashflows[{i}]") for i, cf in enumerate(raw)]

    if require_sign_change:
        has_pos = any(a > 0 for a in amounts)
        has_neg = any(a < 0 for a in amounts)
        if not (has_pos and has_neg):
            raise InvalidInputError("cash flows must contain both a positive and a negative value")

    return amounts


# -------------------------
# Presentation helpers
# -------------------------


def round_half_away(value: float, places: int = 2) -> float:
    """Round half away from zero (2.345 -> 2.35, -2.345 -> -2.35) to `places` decimals."""
    scale = 10.0**places
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def ceil_to(value: float, places: int) -> float:
    scale = 10.0**places
    return math.ceil(value * scale) / scale


def to_percent(rate: float) -> float:
    """0.05 -> 5.0"""
    return rate * 100.0


def from_percent(pct: float) -> float:
    """5.0 -> 0.05"""
    return pct / 100.0


__all__ = [
    "validate_finite",
    "validate_non_negative",
    "validate_periods",
    "validate_rate",
    "safe_divide",
    "validate_cashflows",
    "round_half_away",
    "ceil_to",
    "to_percent",
    "from_percent",
]
