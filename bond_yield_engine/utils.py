from __future__ import annotations

import pandas as pd
from typing import Iterable, List, Optional, Tuple
from functools import lru_cache

from .config import DAYS_PER_YEAR
from .errors import InvalidInput, MissingParameter, UnsupportedConvention, UnsupportedFrequency


# ---------- Calendar ----------

def to_timestamp(d) -> pd.Timestamp:
    """Coerce a date-like to a midnight Timestamp (time of day is never significant)."""
    return pd.Timestamp(d).normalize()


def actual_days(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Signed calendar days from start to end."""
    return (to_timestamp(end) - to_timestamp(start)).days


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def years_to_maturity(settle: pd.Timestamp, maturity: pd.Timestamp) -> float:
    """
    Remaining life in years on a fixed ACT/365 basis.
    This is the time measure used for every discount exponent in the engine.
    """
    return actual_days(settle, maturity) / float(DAYS_PER_YEAR)


# ---------- Schedule ----------

_INTERVAL_MONTHS = {0: 0, 1: 12, 2: 6, 4: 3, 12: 1}


def coupon_interval_months(freq: int) -> int:
    """Months between coupons; 0 for zero-coupon (no periodic schedule)."""
    try:
        return _INTERVAL_MONTHS[int(freq)]
    except (KeyError, TypeError, ValueError):
        raise UnsupportedFrequency(f"Unsupported coupon frequency: {freq!r}") from None


def generate_coupon_dates(maturity: pd.Timestamp, issue: pd.Timestamp, freq: int) -> List[pd.Timestamp]:
    """
    Coupon dates anchored at maturity, stepping backward by the coupon interval
    while the date is still strictly after issue. Returned in ascending order.
    """
    months = coupon_interval_months(freq)
    if months == 0:
        return []

    maturity = to_timestamp(maturity)
    issue = to_timestamp(issue)

    dates: List[pd.Timestamp] = []
    d = maturity
    while d > issue:
        dates.append(d)
        d = d - pd.DateOffset(months=months)

    dates.reverse()
    return dates


@lru_cache(maxsize=10_000)
def cached_schedule(maturity: pd.Timestamp, issue: pd.Timestamp, freq: int) -> Tuple[pd.Timestamp, ...]:
    """Cache full coupon schedules by (maturity, issue, freq)."""
    return tuple(generate_coupon_dates(maturity, issue, freq))


def coupon_dates_for_bond(bond) -> List[pd.Timestamp]:
    return list(cached_schedule(bond.maturity_date, bond.issue_date, bond.coupon_frequency))


def find_adjacent_coupons(
    settle: pd.Timestamp,
    coupon_dates: Iterable[pd.Timestamp],
) -> Tuple[Optional[pd.Timestamp], Optional[pd.Timestamp]]:
    """
    (previous, next) around settlement for an ascending schedule.
    A coupon falling on the settlement date is the previous coupon, not the next.
    """
    settle = to_timestamp(settle)
    previous: Optional[pd.Timestamp] = None
    nxt: Optional[pd.Timestamp] = None

    for d in coupon_dates:
        if d <= settle:
            previous = d
        else:
            nxt = d
            break

    return previous, nxt


# ---------- Day count ----------

def _days_30_360(start: pd.Timestamp, end: pd.Timestamp) -> int:
    y1, m1, d1 = start.year, start.month, start.day
    y2, m2, d2 = end.year, end.month, end.day

    # 30/360 US convention
    if d1 == 31:
        d1 = 30
    if d2 == 31 and d1 == 30:
        d2 = 30

    return (y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)


def yearfrac(
    start: pd.Timestamp,
    end: pd.Timestamp,
    convention: str = "ACT/365",
    next_coupon: Optional[pd.Timestamp] = None,
) -> float:
    """
    Year fraction between two dates under a day count convention.

    Supported:
    - ACT/365, ACT/365F
    - ACT/360
    - ACT/ACT, ACT/ACT-ICMA (period-relative; needs next_coupon)
    - 30/360, 30/360US (US bond basis)
    """
    start = to_timestamp(start)
    end = to_timestamp(end)

    convention = str(convention).upper().replace(" ", "")
    if end < start:
        raise InvalidInput(f"end < start: {start=} {end=}")

    if convention in ("ACT/365", "ACT/365F"):
        return actual_days(start, end) / 365.0

    if convention == "ACT/360":
        return actual_days(start, end) / 360.0

    if convention in ("ACT/ACT", "ACT/ACT-ICMA"):
        if next_coupon is None:
            raise MissingParameter("next_coupon is required for ACT/ACT")
        period = actual_days(start, next_coupon)
        if period == 0:
            return 0.0
        return actual_days(start, end) / period

    if convention in ("30/360", "30/360US"):
        return _days_30_360(start, end) / 360.0

    raise UnsupportedConvention(f"Unsupported day count convention: {convention}")


def accrual_ratio(previous: pd.Timestamp, settle: pd.Timestamp, nxt: pd.Timestamp) -> float:
    """Elapsed share of the coupon period on actual days (ICMA); 0 for an empty period."""
    period = actual_days(previous, nxt)
    if period == 0:
        return 0.0
    return actual_days(previous, settle) / period
