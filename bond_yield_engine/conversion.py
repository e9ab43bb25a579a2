"""
Rate conversions between yield conventions.

Every rate in and out is in percent (3.5 = 3.5%); tax rates likewise.
"""
from __future__ import annotations

from dataclasses import dataclass

from .config import INTEREST_TAX_RATE, MONEY_MARKET_DAYS
from .errors import InvalidInput, InvalidTaxRate


def before_tax_to_after_tax(before_tax_rate: float, tax_rate: float) -> float:
    return before_tax_rate * (1.0 - tax_rate / 100.0)


def after_tax_to_before_tax(after_tax_rate: float, tax_rate: float) -> float:
    t = tax_rate / 100.0
    if t >= 1.0:
        raise InvalidTaxRate(f"Tax rate must be below 100%, got {tax_rate}.")
    return after_tax_rate / (1.0 - t)


def bond_ytm_to_deposit_rate(after_tax_yield: float, tax_rate: float = INTEREST_TAX_RATE) -> float:
    """Bank-equivalent yield: the pretax deposit rate giving the same after-tax return."""
    return after_tax_to_before_tax(after_tax_yield, tax_rate)


def bond_ytm_to_simple_rate(bond_ytm: float, years: float) -> float:
    """((1+ytm)^t - 1) / t"""
    if years <= 0:
        raise InvalidInput(f"Horizon must be positive, got {years}.")
    total = (1.0 + bond_ytm / 100.0) ** years - 1.0
    return total / years * 100.0


def simple_rate_to_compound_rate(simple_rate: float, years: float) -> float:
    """(1 + r*t)^(1/t) - 1"""
    if years <= 0:
        raise InvalidInput(f"Horizon must be positive, got {years}.")
    return ((1.0 + simple_rate / 100.0 * years) ** (1.0 / years) - 1.0) * 100.0


def nominal_to_real_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Fisher: (1 + nominal) / (1 + inflation) - 1"""
    return ((1.0 + nominal_rate / 100.0) / (1.0 + inflation_rate / 100.0) - 1.0) * 100.0


def convert_rate_frequency(annual_rate: float, frequency: int) -> float:
    """Per-period rate equivalent to an annual rate: (1 + annual)^(1/freq) - 1."""
    if frequency <= 0:
        raise InvalidInput(f"Frequency must be positive, got {frequency}.")
    return ((1.0 + annual_rate / 100.0) ** (1.0 / frequency) - 1.0) * 100.0


def discount_rate_to_yield(discount_rate: float, days_to_maturity: float) -> float:
    """Money-market: y = d / (1 - d * days/360)"""
    d = discount_rate / 100.0
    return d / (1.0 - d * days_to_maturity / MONEY_MARKET_DAYS) * 100.0


def yield_to_discount_rate(yield_rate: float, days_to_maturity: float) -> float:
    """Money-market: d = y / (1 + y * days/360)"""
    y = yield_rate / 100.0
    return y / (1.0 + y * days_to_maturity / MONEY_MARKET_DAYS) * 100.0


def bond_equivalent_yield(semi_annual_yield: float) -> float:
    return semi_annual_yield * 2.0


def effective_annual_yield(semi_annual_yield: float) -> float:
    return ((1.0 + semi_annual_yield / 100.0) ** 2 - 1.0) * 100.0


@dataclass(frozen=True)
class DepositComparison:
    deposit_after_tax: float
    bond_after_tax: float
    difference: float
    bond_advantage: bool


def compare_deposit_vs_bond(
    deposit_rate: float,
    bond_ytm: float,
    bond_coupon_rate: float,
    bond_price: float,
    tax_rate: float = INTEREST_TAX_RATE,
) -> DepositComparison:
    """
    After-tax deposit vs bond. Deposit interest is fully taxed; for the bond only
    the coupon yield is taxed and the capital-gain part
    (ytm - coupon * 100 / price) is untaxed.

    bond_coupon_rate in percent of face, bond_price in percent of par.
    """
    if bond_price <= 0:
        raise InvalidInput(f"Bond price must be positive, got {bond_price}.")

    deposit_after = before_tax_to_after_tax(deposit_rate, tax_rate)

    capital_gain_yield = bond_ytm - bond_coupon_rate * 100.0 / bond_price
    bond_after = before_tax_to_after_tax(bond_coupon_rate, tax_rate) + capital_gain_yield

    return DepositComparison(
        deposit_after_tax=deposit_after,
        bond_after_tax=bond_after,
        difference=bond_after - deposit_after,
        bond_advantage=bond_after > deposit_after,
    )
