from __future__ import annotations

import pandas as pd
from typing import Iterable

from .bonds import Bond
from .pricing import price_bond
from .risk import convexity, modified_duration
from .utils import to_timestamp

DEFAULT_SHOCKS_BP = (-100, -50, -25, 25, 50, 100)


def run_yield_scenarios(
    bond: Bond,
    settle: pd.Timestamp,
    ytm_pct: float,
    shocks_bp: Iterable[float] = DEFAULT_SHOCKS_BP,
) -> pd.DataFrame:
    """
    Parallel yield shocks on a single bond.

    Full revaluation P&L on the dirty price next to the duration and
    duration + convexity estimates:
        dP ~ -D_mod * P * dy + 0.5 * C * P * dy^2
    """
    settle = to_timestamp(settle)
    base = price_bond(bond, settle, ytm_pct).dirty_price
    d_mod = modified_duration(bond, settle, ytm_pct)
    cx = convexity(bond, settle, ytm_pct)

    rows = []
    for bp in shocks_bp:
        dy = bp / 10000.0
        shocked = price_bond(bond, settle, ytm_pct + bp / 100.0).dirty_price
        dur_pnl = -d_mod * base * dy

        rows.append(
            {
                "shock_bp": bp,
                "ytm": ytm_pct + bp / 100.0,
                "dirty_base": base,
                "dirty_shocked": shocked,
                "pnl": shocked - base,
                "pnl_duration": dur_pnl,
                "pnl_duration_convexity": dur_pnl + 0.5 * cx * base * dy**2,
            }
        )

    out = pd.DataFrame(rows)
    return out.sort_values("shock_bp").reset_index(drop=True)
