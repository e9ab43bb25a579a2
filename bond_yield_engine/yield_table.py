"""
Aggregate-yield comparison for distribution-paying bond funds/ETFs.

Rows carry a trailing-twelve-month distribution yield and a payout frequency;
no cash-flow model is involved. After-tax and bank-equivalent figures reuse the
tax conversions in conversion.py.
"""
from __future__ import annotations

import logging
import numpy as np
import pandas as pd
from typing import Optional, Union

from .config import DEFAULT_YIELD_TABLE, INTEREST_TAX_RATE
from .conversion import after_tax_to_before_tax, before_tax_to_after_tax
from .errors import InvalidInput

logger = logging.getLogger(__name__)

PAYOUT_PERIODS = {"monthly": 12, "quarterly": 4, "semiannual": 2, "annual": 1}

_COLUMNS = {
    "provider": "provider",
    "name": "name",
    "ticker": "ticker",
    "ttmYieldPct": "ttm_yield_pct",
    "frequency": "frequency",
}


def payout_periods(frequency: Optional[str], fallback: int = 12) -> int:
    return PAYOUT_PERIODS.get(str(frequency).lower(), fallback) if frequency else fallback


def load_yield_table(path: Optional[str] = None) -> pd.DataFrame:
    """Read yield rows {provider, name, ticker, ttmYieldPct, frequency} from a JSON array."""
    path = path or DEFAULT_YIELD_TABLE
    raw = pd.read_json(path, orient="records", dtype={"ticker": str})

    missing = [c for c in _COLUMNS if c not in raw.columns]
    if missing:
        raise InvalidInput(f"{path}: missing columns {missing}")

    out = raw[list(_COLUMNS)].rename(columns=_COLUMNS)
    out["ticker"] = out["ticker"].astype(str)
    out["ttm_yield_pct"] = out["ttm_yield_pct"].astype(float)

    logger.info("Loaded %d yield rows from %s", len(out), path)
    return out


def after_tax_yield(ttm_yield_pct, tax_rate: float = INTEREST_TAX_RATE):
    """Distribution yield net of tax, floored at zero (percent)."""
    return np.maximum(0.0, before_tax_to_after_tax(ttm_yield_pct, tax_rate))


def effective_annual_from_payout(after_tax_pct, periods):
    """Reinvested-distribution annual yield: (1 + r/m)^m - 1, unchanged for m <= 1."""
    r = np.asarray(after_tax_pct, dtype=float) / 100.0
    m = np.asarray(periods, dtype=float)
    safe_m = np.where(m > 1, m, 1.0)
    compounded = (np.power(1.0 + r / safe_m, safe_m) - 1.0) * 100.0
    out = np.where(m > 1, compounded, r * 100.0)
    return float(out) if out.ndim == 0 else out


def bank_equivalent_table(
    table: pd.DataFrame,
    etf_tax_rate: float = INTEREST_TAX_RATE,
    bank_tax_rate: float = INTEREST_TAX_RATE,
    compounding: bool = True,
    default_frequency: str = "monthly",
    query: Union[str, None] = None,
) -> pd.DataFrame:
    """
    Adds after_tax_pct, bank_equivalent_simple_pct and bank_equivalent_compound_pct.
    query filters case-insensitively on provider, name or ticker.
    """
    out = table.copy()

    if query and query.strip():
        q = query.strip().lower()
        mask = np.zeros(len(out), dtype=bool)
        for col in ("provider", "name", "ticker"):
            mask |= out[col].astype(str).str.lower().str.contains(q, regex=False).to_numpy()
        out = out[mask].copy()

    freq = out["frequency"].where(out["frequency"].notna(), default_frequency)
    out["payout_periods"] = [payout_periods(f) for f in freq]

    out["after_tax_pct"] = after_tax_yield(out["ttm_yield_pct"].astype(float), etf_tax_rate)
    out["bank_equivalent_simple_pct"] = after_tax_to_before_tax(out["after_tax_pct"], bank_tax_rate)

    if compounding:
        effective = effective_annual_from_payout(out["after_tax_pct"], out["payout_periods"])
    else:
        effective = out["after_tax_pct"]
    out["bank_equivalent_compound_pct"] = after_tax_to_before_tax(np.asarray(effective, dtype=float), bank_tax_rate)

    return out.reset_index(drop=True)
