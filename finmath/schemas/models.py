# finmath/schemas/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

SolveStatus = Literal["converged", "invalid_input", "non_convergent", "diverged_out_of_domain"]
SolveMethod = Literal["newton", "bisection"]

# =========================
# Solver configuration
# =========================


class ToleranceConfig(BaseModel):
    """
    Iteration controls for the IRR solver.

    Immutable: one instance is shared read-only across a solve call (and may be
    reused across threads). The defaults are engineering choices, not constants;
    override any of them per call.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_iterations: int = Field(1000, ge=1, description="Upper bound on Newton steps (and, separately, on bisection steps).")
    convergence_epsilon: float = Field(
        1e-7, gt=0, description="A candidate rate is accepted once |NPV(rate)| falls below this value."
    )
    initial_guess: float = Field(0.1, gt=-1.0, description="Starting rate for Newton iteration (0.1 = 10%).")
    lower_bound: float | None = Field(
        None, gt=-1.0, description="Lower end of the optional bisection bracket used when Newton fails."
    )
    upper_bound: float | None = Field(None, description="Upper end of the optional bisection bracket used when Newton fails.")

    @model_validator(mode="after")
    def _check_bracket(self) -> ToleranceConfig:
        lo, hi = self.lower_bound, self.upper_bound
        if (lo is None) != (hi is None):
            raise ValueError("lower_bound and upper_bound must be set together")
        if lo is not None and hi is not None and not lo < hi:
            raise ValueError(f"lower_bound ({lo}) must be < upper_bound ({hi})")
        return self

    @property
    def has_bracket(self) -> bool:
        return self.lower_bound is not None and self.upper_bound is not None


# =========================
# Solver outcome
# =========================


class SolveResult(BaseModel):
    """
    Tagged outcome of one IRR solve: either a converged rate or a failure tag.

    `unwrap()` converts a failure into the matching exception from
    finmath.core.finance.errors.
    """

    model_config = ConfigDict(frozen=True)

    status: SolveStatus = Field(..., description="Terminal state of the solve.")
    rate: float | None = Field(None, description="Per-period rate as a decimal fraction; set only when converged.")
    iterations: int = Field(0, ge=0, description="Total Newton + bisection steps evaluated.")
    residual: float | None = Field(None, description="NPV at the last evaluated candidate rate.")
    method: SolveMethod | None = Field(None, description="Which search produced this outcome (None when input was rejected).")
    message: str | None = Field(None, description="Reason for a failure outcome.")

    @model_validator(mode="after")
    def _check_rate(self) -> SolveResult:
        # a rate is present exactly when the solve converged
        if (self.status == "converged") != (self.rate is not None):
            raise ValueError(f"rate must be set if and only if status is converged (status={self.status!r})")
        return self

    @property
    def converged(self) -> bool:
        return self.status == "converged"

    def unwrap(self) -> float:
        """Return the converged rate or raise the error matching `status`."""
        # local import: finmath.core.finance imports this module
        from finmath.core.finance.errors import error_for_status

        if self.status == "converged" and self.rate is not None:
            return self.rate
        raise error_for_status(self.status)(self.message or self.status)


# =========================
# Amortization rows
# =========================


@dataclass(frozen=True)
class PaymentBreakdown:
    """
    Immutable record of a single scheduled payment.

    Attributes:
        period (int): 1-based payment index (months for monthly schedules).
        interest (float): Interest paid this period.
        principal (float): Principal repaid this period.
        total (float): interest + principal.
        balance (float): Outstanding principal after this payment.
    """

    period: int
    interest: float
    principal: float
    total: float
    balance: float
