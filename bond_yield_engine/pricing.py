from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass

from .accrued import accrued_interest
from .bonds import Bond
from .cashflows import discount_inputs
from .errors import InvalidInput, WrongInstrumentType
from .utils import to_timestamp, years_to_maturity


@dataclass(frozen=True)
class BondPrice:
    dirty_price: float
    accrued_interest: float
    face_value: float

    @property
    def clean_price(self) -> float:
        return self.dirty_price - self.accrued_interest

    @property
    def price_percentage(self) -> float:
        return self.clean_price / self.face_value * 100.0


def _growth(ytm_pct: float, times: np.ndarray, extra: float = 0.0) -> np.ndarray:
    # (1+y)^(t+extra); a base <= 0 yields nan/inf rather than raising
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return np.power(1.0 + ytm_pct / 100.0, times + extra)


def price_bond(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> BondPrice:
    """
    Dirty price = PV of remaining flows at a flat annual yield (percent), discounting
    on ACT/365 time; flows at or before settlement are excluded.
    Clean price = dirty - accrued interest (currency-rounded).
    """
    settle = to_timestamp(settle)
    times, amounts = discount_inputs(bond, settle)

    with np.errstate(invalid="ignore", divide="ignore"):
        dirty = float(np.sum(amounts / _growth(ytm_pct, times)))

    ai = accrued_interest(bond, settle).accrued_interest
    return BondPrice(dirty_price=dirty, accrued_interest=ai, face_value=bond.face_value)


def price_derivative(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    """dP/dy = -sum(t * CF / (1+y)^(t+1)), y as a decimal."""
    times, amounts = discount_inputs(bond, settle)
    with np.errstate(invalid="ignore", divide="ignore"):
        return float(-np.sum(times * amounts / _growth(ytm_pct, times, 1.0)))


def price_second_derivative(bond: Bond, settle: pd.Timestamp, ytm_pct: float) -> float:
    """d2P/dy2 = sum(t(t+1) * CF / (1+y)^(t+2)), y as a decimal."""
    times, amounts = discount_inputs(bond, settle)
    with np.errstate(invalid="ignore", divide="ignore"):
        return float(np.sum(times * (times + 1.0) * amounts / _growth(ytm_pct, times, 2.0)))


def zero_coupon_ytm(bond: Bond, settle: pd.Timestamp, price: float) -> float:
    """Closed form (FV / P)^(1/t) - 1, returned in percent."""
    if not bond.is_zero_coupon:
        raise WrongInstrumentType(f"{bond.label}: closed-form yield applies to zero-coupon bonds only.")

    t = years_to_maturity(settle, bond.maturity_date)
    if t <= 0 or price <= 0:
        raise InvalidInput(f"{bond.label}: years to maturity ({t:.6f}) and price ({price}) must be positive.")

    return ((bond.face_value / price) ** (1.0 / t) - 1.0) * 100.0


def estimate_ytm(bond: Bond, settle: pd.Timestamp, price: float) -> float:
    """
    Non-iterative seed for the root-finder (percent).
    Zero-coupon: exact closed form. Otherwise the approximate-yield formula
    (C + (FV - P) / t) / ((FV + P) / 2).
    """
    t = years_to_maturity(settle, bond.maturity_date)
    if t <= 0:
        raise InvalidInput(f"{bond.label}: no time left to maturity at {to_timestamp(settle).date()}.")

    if bond.is_zero_coupon:
        return zero_coupon_ytm(bond, settle, price)

    fv = bond.face_value
    num = bond.annual_coupon + (fv - price) / t
    den = (fv + price) / 2.0
    return num / den * 100.0
