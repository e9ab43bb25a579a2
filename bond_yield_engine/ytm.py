"""
Yield-to-maturity root-finder.

Solves clean_price(y) = target for y (percent, annual, ACT/365 compounding):
- zero-coupon bonds: closed form ("direct")
- otherwise Newton-Raphson on the analytic price derivative, falling back to
  bisection over a fixed bracket when Newton-Raphson does not converge.

Non-convergence is reported in the result, not raised.
"""
from __future__ import annotations

import logging
import math
import pandas as pd
from dataclasses import dataclass
from typing import Optional

from .bonds import Bond
from .config import (
    BISECTION_BRACKET,
    BISECTION_WIDE_BRACKET,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    DERIVATIVE_FLOOR,
)
from .pricing import estimate_ytm, price_bond, price_derivative, zero_coupon_ytm
from .utils import to_timestamp

logger = logging.getLogger(__name__)

NEWTON_RAPHSON = "newton-raphson"
BISECTION = "bisection"
DIRECT = "direct"


@dataclass(frozen=True)
class YTMResult:
    ytm: float
    method: str
    iterations: int
    converged: bool
    error: float


def _direct(bond: Bond, settle: pd.Timestamp, target_price: float) -> YTMResult:
    return YTMResult(zero_coupon_ytm(bond, settle, target_price), DIRECT, 0, True, 0.0)


def calculate_ytm_newton_raphson(
    bond: Bond,
    settle: pd.Timestamp,
    target_price: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    initial_guess: Optional[float] = None,
) -> YTMResult:
    settle = to_timestamp(settle)
    if bond.is_zero_coupon:
        return _direct(bond, settle, target_price)

    y = initial_guess if initial_guess is not None else estimate_ytm(bond, settle, target_price)
    error = math.inf
    iterations = 0

    while iterations < max_iterations:
        residual = price_bond(bond, settle, y).clean_price - target_price
        error = abs(residual)

        if error < tolerance:
            return YTMResult(y, NEWTON_RAPHSON, iterations, True, error)

        deriv = price_derivative(bond, settle, y)
        if abs(deriv) < DERIVATIVE_FLOOR:
            return YTMResult(y, NEWTON_RAPHSON, iterations, False, error)

        # deriv is per unit of decimal yield, y is carried in percent
        y = y - residual / deriv * 100.0
        iterations += 1

    return YTMResult(y, NEWTON_RAPHSON, iterations, False, error)


def calculate_ytm_bisection(
    bond: Bond,
    settle: pd.Timestamp,
    target_price: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> YTMResult:
    """
    Bisection on [-10%, 50%], widened once to [-20%, 100%] when the target is not
    bracketed. Converges on |residual| < tolerance or bracket width < tolerance/100;
    at the iteration cap the bracket midpoint is returned unconverged.
    """
    settle = to_timestamp(settle)

    def clean(y: float) -> float:
        return price_bond(bond, settle, y).clean_price

    lo, hi = BISECTION_BRACKET
    p_lo, p_hi = clean(lo), clean(hi)

    if (target_price - p_lo) * (target_price - p_hi) > 0:
        lo, hi = BISECTION_WIDE_BRACKET
        logger.debug("%s: target %.6f not bracketed, widening to [%s, %s]", bond.label, target_price, lo, hi)
        p_lo, p_hi = clean(lo), clean(hi)

    error = math.inf
    iterations = 0

    while iterations < max_iterations:
        mid = (lo + hi) / 2.0
        p_mid = clean(mid)
        error = abs(p_mid - target_price)

        if error < tolerance or abs(hi - lo) < tolerance / 100.0:
            return YTMResult(mid, BISECTION, iterations, True, error)

        if (p_mid - target_price) * (p_lo - target_price) < 0:
            hi, p_hi = mid, p_mid
        else:
            lo, p_lo = mid, p_mid

        iterations += 1

    return YTMResult((lo + hi) / 2.0, BISECTION, iterations, False, error)


def calculate_ytm(
    bond: Bond,
    settle: pd.Timestamp,
    price: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    initial_guess: Optional[float] = None,
    use_bisection_fallback: bool = True,
) -> YTMResult:
    """YTM (percent) from a clean price: direct, Newton-Raphson, then bisection."""
    result = calculate_ytm_newton_raphson(
        bond, settle, price,
        max_iterations=max_iterations,
        tolerance=tolerance,
        initial_guess=initial_guess,
    )
    if result.converged or not use_bisection_fallback:
        return result

    logger.warning(
        "%s: Newton-Raphson did not converge after %d iterations (error %.3g), falling back to bisection",
        bond.label, result.iterations, result.error,
    )
    return calculate_ytm_bisection(bond, settle, price, max_iterations=max_iterations, tolerance=tolerance)
