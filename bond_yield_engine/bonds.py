from __future__ import annotations

import pandas as pd
from dataclasses import dataclass
from typing import Optional

from .config import CURRENCY_DECIMALS, SUPPORTED_FREQUENCIES
from .errors import InvalidInput, UnsupportedFrequency
from .utils import to_timestamp

COUPON = "coupon"
ZERO = "zero"


@dataclass(frozen=True)
class Bond:
    """
    Fixed-rate bullet bond.

    coupon_rate is a decimal fraction (0.035 = 3.5%). coupon_frequency 0 means
    zero-coupon; bond_type is derived from it when omitted, and an explicit tag
    that disagrees with the frequency is rejected.
    """
    issue_date: pd.Timestamp
    maturity_date: pd.Timestamp
    coupon_rate: float
    coupon_frequency: int = 2
    face_value: float = 10000.0
    currency: str = "KRW"
    bond_type: Optional[str] = None
    name: str = ""
    issuer: str = ""
    isin: str = ""

    def __post_init__(self):
        object.__setattr__(self, "issue_date", to_timestamp(self.issue_date))
        object.__setattr__(self, "maturity_date", to_timestamp(self.maturity_date))
        object.__setattr__(self, "currency", str(self.currency).upper())

        if self.coupon_frequency not in SUPPORTED_FREQUENCIES:
            raise UnsupportedFrequency(
                f"{self.label}: coupon frequency {self.coupon_frequency!r} not in {SUPPORTED_FREQUENCIES}."
            )

        implied = ZERO if self.coupon_frequency == 0 else COUPON
        if self.bond_type is None:
            object.__setattr__(self, "bond_type", implied)
        elif self.bond_type not in (COUPON, ZERO):
            raise InvalidInput(f"{self.label}: unknown bond type {self.bond_type!r}.")
        elif self.bond_type != implied:
            raise InvalidInput(
                f"{self.label}: bond type {self.bond_type!r} contradicts coupon frequency {self.coupon_frequency}."
            )

        if not self.face_value > 0:
            raise InvalidInput(f"{self.label}: face value must be positive.")
        if self.maturity_date <= self.issue_date:
            raise InvalidInput(f"{self.label}: maturity must be after issue date.")
        if self.currency not in CURRENCY_DECIMALS:
            raise InvalidInput(f"{self.label}: unsupported currency {self.currency!r}.")

    @property
    def label(self) -> str:
        return self.isin or self.name or "bond"

    @property
    def is_zero_coupon(self) -> bool:
        return self.bond_type == ZERO

    @property
    def annual_coupon(self) -> float:
        if self.is_zero_coupon:
            return 0.0
        return self.face_value * self.coupon_rate
