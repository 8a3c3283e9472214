# finmath/core/finance/irr.py
"""
NPV and IRR for periodic cash flows.

This is the only module that defines `npv` / `irr`; formulas that need
discounting import from here.

Solver
------
Newton-Raphson on f(r) = NPV(r), starting at ToleranceConfig.initial_guess:

    f(r)  = Σ cf[t] / (1 + r)^t
    f'(r) = Σ -t · cf[t] / (1 + r)^(t + 1)
    r'    = r - f(r) / f'(r)

Terminal states: converged, invalid_input, non_convergent (budget exhausted,
|f'| < epsilon, or non-finite arithmetic), diverged_out_of_domain (a step
landed on r <= -1). When the config carries a [lower_bound, upper_bound]
bracket and Newton fails, bisection inside the bracket gets a second chance.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from finmath.schemas.models import SolveResult, ToleranceConfig

from .conventions import validate_cashflows, validate_rate
from .errors import InvalidInputError, NonConvergentError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = ToleranceConfig()

FloatArray = NDArray[np.float64]


# ---------- NPV ----------
def _as_arrays(amounts: list[float]) -> tuple[FloatArray, FloatArray]:
    cf = np.asarray(amounts, dtype=np.float64)
    return cf, np.arange(cf.size, dtype=np.float64)


def _evaluate(rate: float, cf: FloatArray, t: FloatArray) -> tuple[float, float]:
    """Return (NPV(rate), dNPV/drate). Overflow shows up as inf/nan, never as an exception."""
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        growth = np.power(1.0 + rate, t)
        value = float(np.sum(cf / growth))
        slope = float(np.sum(-t * cf / (growth * (1.0 + rate))))
    return value, slope


def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Net present value of periodic cash flows; cashflows[0] is not discounted.

        NPV(r) = sum_{t=0..N-1} CF[t] / (1+r)^t
    """
    r = validate_rate(rate)
    amounts = validate_cashflows(cashflows, min_length=1, require_sign_change=False)
    value, _ = _evaluate(r, *_as_arrays(amounts))
    if not math.isfinite(value):
        raise NonConvergentError(f"NPV overflowed at rate {r}")
    return value


def npv_derivative(rate: float, cashflows: Iterable[float]) -> float:
    """d NPV / d rate = sum_t -t * CF[t] / (1+r)^(t+1)"""
    r = validate_rate(rate)
    amounts = validate_cashflows(cashflows, min_length=1, require_sign_change=False)
    _, slope = _evaluate(r, *_as_arrays(amounts))
    if not math.isfinite(slope):
        raise NonConvergentError(f"NPV derivative overflowed at rate {r}")
    return slope


# ---------- IRR ----------
def _newton(cf: FloatArray, t: FloatArray, cfg: ToleranceConfig) -> SolveResult:
    eps = cfg.convergence_epsilon
    r = cfg.initial_guess
    f: float | None = None

    for k in range(1, cfg.max_iterations + 1):
        f, df = _evaluate(r, cf, t)
        if not (math.isfinite(f) and math.isfinite(df)):
            return SolveResult(
                status="non_convergent",
                iterations=k,
                method="newton",
                message=f"NPV is not finite at rate {r!r}",
            )
        if abs(f) < eps:
            return SolveResult(status="converged", rate=r, iterations=k, residual=f, method="newton")
        if abs(df) < eps:
            return SolveResult(
                status="non_convergent",
                iterations=k,
                residual=f,
                method="newton",
                message=f"derivative stalled (|f'| = {abs(df):.3e}) at rate {r!r}",
            )

        r_next = r - f / df
        if not math.isfinite(r_next):
            return SolveResult(
                status="non_convergent",
                iterations=k,
                residual=f,
                method="newton",
                message=f"Newton step is not finite from rate {r!r}",
            )
        if r_next <= -1.0:
            return SolveResult(
                status="diverged_out_of_domain",
                iterations=k,
                residual=f,
                method="newton",
                message=f"Newton step left the domain: rate {r_next!r} <= -1",
            )
        r = r_next

    return SolveResult(
        status="non_convergent",
        iterations=cfg.max_iterations,
        residual=f,
        method="newton",
        message=f"no convergence within {cfg.max_iterations} iterations",
    )


def _bisect(cf: FloatArray, t: FloatArray, lo: float, hi: float, cfg: ToleranceConfig, prior: SolveResult) -> SolveResult:
    """Bracketed bisection on NPV(r) = 0 inside [lo, hi]."""
    eps = cfg.convergence_epsilon
    f_lo, _ = _evaluate(lo, cf, t)
    f_hi, _ = _evaluate(hi, cf, t)
    spent = prior.iterations

    if math.isfinite(f_lo) and abs(f_lo) < eps:
        return SolveResult(status="converged", rate=lo, iterations=spent, residual=f_lo, method="bisection")
    if math.isfinite(f_hi) and abs(f_hi) < eps:
        return SolveResult(status="converged", rate=hi, iterations=spent, residual=f_hi, method="bisection")
    if not (math.isfinite(f_lo) and math.isfinite(f_hi)) or (f_lo > 0) == (f_hi > 0):
        # Bracket does not straddle a root; Newton's verdict stands.
        return prior.model_copy(update={"message": f"{prior.message}; bracket [{lo}, {hi}] does not change sign"})

    f_mid = f_lo
    for k in range(1, cfg.max_iterations + 1):
        mid = (lo + hi) / 2.0
        f_mid, _ = _evaluate(mid, cf, t)
        if abs(f_mid) < eps:
            return SolveResult(status="converged", rate=mid, iterations=spent + k, residual=f_mid, method="bisection")
        # keep the sub-interval where the sign changes
        if (f_lo < 0) == (f_mid < 0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid

    return SolveResult(
        status="non_convergent",
        iterations=spent + cfg.max_iterations,
        residual=f_mid,
        method="bisection",
        message=f"bisection did not reach |NPV| < {eps} within {cfg.max_iterations} iterations",
    )


def _finish(result: SolveResult) -> SolveResult:
    logger.debug(
        "irr solve: status=%s method=%s iterations=%d rate=%r%s",
        result.status,
        result.method,
        result.iterations,
        result.rate,
        f" ({result.message})" if result.message else "",
    )
    return result


def solve_irr(cashflows: Iterable[float], config: ToleranceConfig | None = None) -> SolveResult:
    """
    Solve NPV(cashflows, r) = 0 for the per-period rate r.

    Never raises for domain failures: the outcome (converged rate or failure
    tag) is returned as a SolveResult. Identical inputs always give identical
    results; nothing is cached or retained between calls.

    Args:
        cashflows: Periodic amounts, index 0 = initial outlay (usually negative).
        config: Iteration controls; defaults to ToleranceConfig().

    Returns:
        SolveResult with status "converged" and `rate` set, or a failure status.
    """
    cfg = config if config is not None else DEFAULT_TOLERANCE

    try:
        amounts = validate_cashflows(cashflows)
    except InvalidInputError as e:
        return _finish(SolveResult(status="invalid_input", message=str(e)))

    cf, t = _as_arrays(amounts)
    result = _newton(cf, t, cfg)
    lo, hi = cfg.lower_bound, cfg.upper_bound
    if result.converged or lo is None or hi is None:
        return _finish(result)
    return _finish(_bisect(cf, t, lo, hi, cfg, prior=result))


def irr(cashflows: Iterable[float], config: ToleranceConfig | None = None) -> float:
    """
    Periodic IRR as a decimal rate (0.18 = 18%).

    Raises:
        InvalidInputError, NonConvergentError, DivergedOutOfDomainError
    """
    return solve_irr(cashflows, config).unwrap()


__all__ = ["DEFAULT_TOLERANCE", "npv", "npv_derivative", "solve_irr", "irr"]
