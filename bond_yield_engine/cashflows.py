from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .bonds import Bond
from .config import DAYS_PER_YEAR
from .utils import actual_days, coupon_dates_for_bond, to_timestamp

COUPON_FLOW = "coupon"
PRINCIPAL_FLOW = "principal"


@dataclass(frozen=True)
class CashFlow:
    date: pd.Timestamp
    amount: float
    kind: str


def coupon_amount(bond: Bond) -> float:
    """Flat per-period coupon: face * coupon_rate / freq (0 for zero-coupon)."""
    if bond.is_zero_coupon:
        return 0.0
    return bond.face_value * bond.coupon_rate / bond.coupon_frequency


def generate_cash_flows(bond: Bond, settle: Optional[pd.Timestamp] = None) -> List[CashFlow]:
    """
    Dated coupon + principal flows, ascending by date.

    With a settlement date, coupons dated on or after settlement are kept and the
    principal is kept only if maturity is strictly after settlement. A zero-coupon
    bond always returns its single principal flow.
    """
    if bond.is_zero_coupon:
        return [CashFlow(bond.maturity_date, bond.face_value, PRINCIPAL_FLOW)]

    settle = to_timestamp(settle) if settle is not None else None
    cpn = coupon_amount(bond)

    flows: List[CashFlow] = []
    for d in coupon_dates_for_bond(bond):
        if settle is not None and d < settle:
            continue
        flows.append(CashFlow(d, cpn, COUPON_FLOW))

    if settle is None or bond.maturity_date > settle:
        flows.append(CashFlow(bond.maturity_date, bond.face_value, PRINCIPAL_FLOW))

    # stable: coupon stays ahead of principal on the maturity date
    return sorted(flows, key=lambda cf: cf.date)


def discount_inputs(bond: Bond, settle: pd.Timestamp) -> Tuple[np.ndarray, np.ndarray]:
    """
    (times, amounts) of the settlement-filtered schedule, keeping only flows with
    a strictly positive ACT/365 time to payment.
    """
    settle = to_timestamp(settle)
    flows = generate_cash_flows(bond, settle)

    times = np.array([actual_days(settle, cf.date) / float(DAYS_PER_YEAR) for cf in flows], dtype=float)
    amounts = np.array([cf.amount for cf in flows], dtype=float)

    mask = times > 0
    return times[mask], amounts[mask]


def present_value(bond: Bond, settle: pd.Timestamp, annual_yield_pct: float) -> float:
    """Sum of amount / (1+y)^t over the settlement-filtered schedule, t on ACT/365."""
    settle = to_timestamp(settle)
    flows = generate_cash_flows(bond, settle)
    if not flows:
        return 0.0

    times = np.array([actual_days(settle, cf.date) / float(DAYS_PER_YEAR) for cf in flows], dtype=float)
    amounts = np.array([cf.amount for cf in flows], dtype=float)

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        dfs = np.power(1.0 + annual_yield_pct / 100.0, -times)
    return float(np.sum(amounts * dfs))


def total_cash_flow(flows: Sequence[CashFlow]) -> float:
    return float(sum(cf.amount for cf in flows))


def coupon_flows(flows: Sequence[CashFlow]) -> List[CashFlow]:
    return [cf for cf in flows if cf.kind == COUPON_FLOW]


def principal_flows(flows: Sequence[CashFlow]) -> List[CashFlow]:
    return [cf for cf in flows if cf.kind == PRINCIPAL_FLOW]


def format_cash_flow(amount: float, currency: str) -> str:
    if str(currency).upper() == "KRW":
        return f"₩{amount:,.0f}"
    return f"${amount:,.2f}"


def cashflow_table(
    flows: Sequence[CashFlow],
    settle: Optional[pd.Timestamp] = None,
    ytm_pct: Optional[float] = None,
) -> pd.DataFrame:
    """
    Display table of a schedule. With settle and ytm_pct, adds the ACT/365 time,
    discount factor and present value of every flow.
    """
    out = pd.DataFrame(
        [(cf.date, cf.kind, cf.amount) for cf in flows],
        columns=["date", "kind", "amount"],
    )

    if settle is not None and ytm_pct is not None:
        settle = to_timestamp(settle)
        out["t"] = [actual_days(settle, d) / float(DAYS_PER_YEAR) for d in out["date"]]
        out["discount_factor"] = np.power(1.0 + ytm_pct / 100.0, -out["t"].astype(float))
        out["present_value"] = out["amount"] * out["discount_factor"]

    return out
