import numpy as np
import pandas as pd
import pytest

from bond_yield_engine.bonds import Bond
from bond_yield_engine.cashflows import (
    cashflow_table,
    coupon_amount,
    coupon_flows,
    format_cash_flow,
    generate_cash_flows,
    present_value,
    principal_flows,
    total_cash_flow,
)
from bond_yield_engine.pricing import price_bond


@pytest.fixture(scope="module")
def ktb():
    return Bond(
        issue_date=pd.Timestamp("2020-09-10"),
        maturity_date=pd.Timestamp("2029-09-10"),
        coupon_rate=0.035,
        coupon_frequency=1,
        face_value=10000.0,
        currency="KRW",
        name="KTB 3.5% 2029",
    )


@pytest.fixture(scope="module")
def zero():
    return Bond(
        issue_date=pd.Timestamp("2023-03-10"),
        maturity_date=pd.Timestamp("2028-03-10"),
        coupon_rate=0.0,
        coupon_frequency=0,
        face_value=10000.0,
    )


def test_full_schedule(ktb):
    flows = generate_cash_flows(ktb)
    assert len(flows) == 10
    assert total_cash_flow(flows) == pytest.approx(9 * 350.0 + 10000.0)
    assert len(coupon_flows(flows)) == 9
    assert [cf.amount for cf in principal_flows(flows)] == [10000.0]


def test_maturity_date_tie_keeps_coupon_before_principal(ktb):
    last_two = generate_cash_flows(ktb)[-2:]
    assert last_two[0].date == last_two[1].date == pd.Timestamp("2029-09-10")
    assert [cf.kind for cf in last_two] == ["coupon", "principal"]


def test_settlement_filter(ktb):
    flows = generate_cash_flows(ktb, pd.Timestamp("2024-10-10"))
    assert len(flows) == 6
    assert flows[0].date == pd.Timestamp("2025-09-10")
    dates = [cf.date for cf in flows]
    assert dates == sorted(dates)


def test_coupon_on_settlement_date_is_included(ktb):
    flows = generate_cash_flows(ktb, pd.Timestamp("2025-09-10"))
    assert flows[0].date == pd.Timestamp("2025-09-10") and flows[0].kind == "coupon"
    assert len(coupon_flows(flows)) == 5


def test_nothing_left_after_maturity(ktb):
    assert generate_cash_flows(ktb, pd.Timestamp("2030-01-01")) == []


def test_zero_coupon_principal_is_unconditional(zero):
    flows = generate_cash_flows(zero, pd.Timestamp("2030-01-01"))
    assert len(flows) == 1
    assert flows[0].kind == "principal" and flows[0].amount == 10000.0
    assert coupon_amount(zero) == 0.0


def test_coupon_amount_semiannual():
    ust = Bond("2019-05-15", "2029-05-15", 0.025, coupon_frequency=2, face_value=1000.0, currency="USD")
    assert coupon_amount(ust) == pytest.approx(12.5)


def test_present_value_matches_dirty_price(ktb):
    settle = pd.Timestamp("2024-10-10")
    assert present_value(ktb, settle, 3.5) == pytest.approx(price_bond(ktb, settle, 3.5).dirty_price, rel=1e-12)


def test_present_value_counts_flow_on_settlement_date(ktb):
    """present_value discounts a same-day coupon at t=0; pricing excludes it."""
    settle = pd.Timestamp("2025-09-10")
    pv = present_value(ktb, settle, 4.0)
    dirty = price_bond(ktb, settle, 4.0).dirty_price
    assert pv - dirty == pytest.approx(350.0)


def test_format_cash_flow():
    assert format_cash_flow(1234567.4, "KRW") == "₩1,234,567"
    assert format_cash_flow(1234.5, "USD") == "$1,234.50"


def test_cashflow_table(ktb):
    settle = pd.Timestamp("2024-10-10")
    flows = generate_cash_flows(ktb, settle)

    plain = cashflow_table(flows)
    assert list(plain.columns) == ["date", "kind", "amount"]
    assert len(plain) == 6

    priced = cashflow_table(flows, settle, 3.5)
    assert {"t", "discount_factor", "present_value"}.issubset(priced.columns)
    assert np.all(np.diff(priced["discount_factor"].to_numpy()) <= 0)
    assert priced["present_value"].sum() == pytest.approx(present_value(ktb, settle, 3.5))
