from __future__ import annotations

import pandas as pd

from .bonds import Bond
from .config import BASIS_POINT, CONVEXITY_BUMP
from .pricing import price_bond, price_derivative, price_second_derivative


def _dirty(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    return price_bond(bond, settle, ytm_pct).dirty_price


def macaulay_duration(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    """-(1+y) * dP/dy / P on the dirty price, in years."""
    price = _dirty(bond, settle, ytm_pct)
    if price == 0:
        return 0.0
    y = ytm_pct / 100.0
    return -(1.0 + y) * price_derivative(bond, settle, ytm_pct) / price


def modified_duration(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    return macaulay_duration(bond, settle, ytm_pct) / (1.0 + ytm_pct / 100.0)


def dollar_duration(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    """DV01: price change for a 1bp yield move, modified duration * dirty * 0.0001."""
    price = _dirty(bond, settle, ytm_pct)
    if price == 0:
        return 0.0
    return modified_duration(bond, settle, ytm_pct) * price * BASIS_POINT


def convexity(bond: Bond, settle: pd.Timestamp, ytm_pct: float, bump: float = CONVEXITY_BUMP) -> float:
    """
    Central finite difference on the dirty price at +/- bump (percentage points):
        (P(y+h) - 2P(y) + P(y-h)) / (h/100)^2 / P(y)
    """
    price = _dirty(bond, settle, ytm_pct)
    if price == 0:
        return 0.0

    up = _dirty(bond, settle, ytm_pct + bump)
    down = _dirty(bond, settle, ytm_pct - bump)
    h = bump / 100.0
    return (up - 2.0 * price + down) / h**2 / price


def convexity_closed_form(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    """Analytic counterpart of convexity(): d2P/dy2 / P."""
    price = _dirty(bond, settle, ytm_pct)
    if price == 0:
        return 0.0
    return price_second_derivative(bond, settle, ytm_pct) / price
