"""
One-call bond calculation for presentation layers.

Takes a bond, a settlement date and either a clean price or a yield, and returns
every figure a calculator screen shows: yield, clean/dirty price, accrued
interest, durations, convexity, bank-equivalent yield, remaining cash flows and
an optional buy-and-hold tax estimate.

The tax figures are an approximation for an individual investor holding to
maturity (coupons taxed at a flat rate, pull-to-par gain untaxed), not a
complete treatment of tax law.
"""
from __future__ import annotations

import pandas as pd
from dataclasses import dataclass
from typing import List, Optional

from .accrued import AccruedInterestResult, accrued_interest
from .bonds import Bond
from .cashflows import CashFlow, coupon_flows, generate_cash_flows, total_cash_flow
from .config import INTEREST_TAX_RATE
from .conversion import after_tax_to_before_tax, before_tax_to_after_tax, compare_deposit_vs_bond
from .errors import InvalidInput
from .pricing import BondPrice, price_bond
from .risk import convexity, dollar_duration, macaulay_duration, modified_duration
from .utils import to_timestamp
from .ytm import YTMResult, calculate_ytm

PRICE_INPUT = "price"
YIELD_INPUT = "yield"


@dataclass(frozen=True)
class TaxCalculation:
    interest_income: float
    capital_gain: float
    interest_tax: float
    capital_gain_tax: float
    total_tax: float
    net_return: float
    effective_tax_rate: float


@dataclass(frozen=True)
class CalculationResult:
    bond: Bond
    settlement_date: pd.Timestamp
    ytm: float
    price: BondPrice
    accrued: AccruedInterestResult
    macaulay_duration: float
    modified_duration: float
    dollar_duration: float
    convexity: float
    bank_equivalent_yield: float
    cash_flows: List[CashFlow]
    ytm_result: Optional[YTMResult] = None
    tax: Optional[TaxCalculation] = None

    @property
    def converged(self) -> bool:
        return self.ytm_result is None or self.ytm_result.converged


def bank_equivalent_yield(bond: Bond, ytm_pct: float, price: BondPrice, tax_rate: float = INTEREST_TAX_RATE) -> float:
    """Pretax deposit rate matching the bond's after-tax yield (coupon taxed, capital gain not)."""
    if price.clean_price <= 0:
        raise InvalidInput(f"{bond.label}: clean price must be positive.")

    after_tax = compare_deposit_vs_bond(
        deposit_rate=0.0,
        bond_ytm=ytm_pct,
        bond_coupon_rate=bond.coupon_rate * 100.0 if not bond.is_zero_coupon else 0.0,
        bond_price=price.price_percentage,
        tax_rate=tax_rate,
    ).bond_after_tax
    return after_tax_to_before_tax(after_tax, tax_rate)


def hold_to_maturity_tax(
    bond: Bond,
    settle: pd.Timestamp,
    price: BondPrice,
    tax_rate: float = INTEREST_TAX_RATE,
) -> TaxCalculation:
    """Coupons still to be received after settlement taxed at the flat rate; gain to par untaxed."""
    settle = to_timestamp(settle)
    remaining = [cf for cf in coupon_flows(generate_cash_flows(bond, settle)) if cf.date > settle]
    interest = total_cash_flow(remaining)
    gain = bond.face_value - price.clean_price

    interest_tax = interest - before_tax_to_after_tax(interest, tax_rate)
    gain_tax = 0.0
    total_tax = interest_tax + gain_tax
    gross = interest + gain

    return TaxCalculation(
        interest_income=interest,
        capital_gain=gain,
        interest_tax=interest_tax,
        capital_gain_tax=gain_tax,
        total_tax=total_tax,
        net_return=gross - total_tax,
        effective_tax_rate=total_tax / gross * 100.0 if gross > 0 else 0.0,
    )


def calculate(
    bond: Bond,
    settle: pd.Timestamp,
    input_type: str,
    value: float,
    include_tax: bool = False,
    tax_rate: float = INTEREST_TAX_RATE,
    **ytm_options,
) -> CalculationResult:
    """
    input_type "price": value is a clean price, solved for yield.
    input_type "yield": value is a yield in percent, priced directly.

    A price solve that does not converge still returns a result; check
    result.converged.
    """
    settle = to_timestamp(settle)

    ytm_result: Optional[YTMResult] = None
    if input_type == PRICE_INPUT:
        ytm_result = calculate_ytm(bond, settle, value, **ytm_options)
        ytm = ytm_result.ytm
    elif input_type == YIELD_INPUT:
        ytm = float(value)
    else:
        raise InvalidInput(f"input_type must be {PRICE_INPUT!r} or {YIELD_INPUT!r}, got {input_type!r}.")

    price = price_bond(bond, settle, ytm)
    flows = generate_cash_flows(bond, settle)

    return CalculationResult(
        bond=bond,
        settlement_date=settle,
        ytm=ytm,
        price=price,
        accrued=accrued_interest(bond, settle),
        macaulay_duration=macaulay_duration(bond, settle, ytm),
        modified_duration=modified_duration(bond, settle, ytm),
        dollar_duration=dollar_duration(bond, settle, ytm),
        convexity=convexity(bond, settle, ytm),
        bank_equivalent_yield=bank_equivalent_yield(bond, ytm, price, tax_rate),
        cash_flows=flows,
        ytm_result=ytm_result,
        tax=hold_to_maturity_tax(bond, settle, price, tax_rate) if include_tax else None,
    )
