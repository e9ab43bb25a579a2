from __future__ import annotations

import pandas as pd
from dataclasses import dataclass
from typing import Optional

from .bonds import Bond
from .cashflows import coupon_amount
from .config import CURRENCY_DECIMALS
from .utils import accrual_ratio, actual_days, coupon_dates_for_bond, find_adjacent_coupons, to_timestamp


@dataclass(frozen=True)
class AccruedInterestResult:
    accrued_interest: float = 0.0
    previous_coupon_date: Optional[pd.Timestamp] = None
    next_coupon_date: Optional[pd.Timestamp] = None
    days_accrued: int = 0
    days_in_period: int = 0
    accrual_ratio: float = 0.0


def round_by_currency(amount: float, currency: str) -> float:
    """KRW to the whole won, USD to the cent."""
    return round(float(amount), CURRENCY_DECIMALS[str(currency).upper()])


def accrued_interest(bond: Bond, settle: pd.Timestamp) -> AccruedInterestResult:
    """
    Coupon earned since the previous coupon date as of settlement, ICMA actual-day
    ratio, rounded to the bond's currency unit.

    Zero-coupon bonds, settlement before the first coupon (or issue), and
    settlement on/after the final coupon all accrue nothing.
    """
    if bond.is_zero_coupon:
        return AccruedInterestResult()

    settle = to_timestamp(settle)
    previous, nxt = find_adjacent_coupons(settle, coupon_dates_for_bond(bond))

    if previous is None or nxt is None:
        return AccruedInterestResult(previous_coupon_date=previous, next_coupon_date=nxt)

    ratio = accrual_ratio(previous, settle, nxt)
    amount = coupon_amount(bond) * ratio

    return AccruedInterestResult(
        accrued_interest=round_by_currency(amount, bond.currency),
        previous_coupon_date=previous,
        next_coupon_date=nxt,
        days_accrued=actual_days(previous, settle),
        days_in_period=actual_days(previous, nxt),
        accrual_ratio=ratio,
    )


def clean_price(dirty: float, accrued: float) -> float:
    return dirty - accrued


def dirty_price(clean: float, accrued: float) -> float:
    return clean + accrued


def accrued_interest_as_percent(accrued: float, face: float) -> float:
    if face == 0:
        return 0.0
    return accrued / face * 100.0
