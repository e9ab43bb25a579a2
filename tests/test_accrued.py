import pandas as pd
import pytest

from bond_yield_engine.accrued import (
    accrued_interest,
    accrued_interest_as_percent,
    clean_price,
    dirty_price,
    round_by_currency,
)
from bond_yield_engine.bonds import Bond


@pytest.fixture(scope="module")
def ktb():
    return Bond("2020-09-10", "2029-09-10", 0.035, coupon_frequency=1, face_value=10000.0, currency="KRW")


@pytest.fixture(scope="module")
def ust():
    return Bond("2019-05-15", "2029-05-15", 0.025, coupon_frequency=2, face_value=1000.0, currency="USD")


def test_accrued_mid_period_krw(ktb):
    res = accrued_interest(ktb, pd.Timestamp("2024-10-10"))
    assert res.previous_coupon_date == pd.Timestamp("2024-09-10")
    assert res.next_coupon_date == pd.Timestamp("2025-09-10")
    assert res.days_accrued == 30
    assert res.days_in_period == 365
    assert res.accrual_ratio == pytest.approx(30 / 365)
    assert res.accrued_interest == 29.0, "KRW accrued rounds to the whole won (28.77 -> 29)"


def test_accrued_rounds_to_cents_usd(ust):
    res = accrued_interest(ust, pd.Timestamp("2024-10-10"))
    assert res.days_accrued == 148
    assert res.days_in_period == 184
    assert res.accrued_interest == pytest.approx(10.05)


def test_accrued_zero_on_coupon_date(ktb):
    res = accrued_interest(ktb, pd.Timestamp("2024-09-10"))
    assert res.accrued_interest == 0.0
    assert res.days_accrued == 0
    assert res.previous_coupon_date == pd.Timestamp("2024-09-10")


def test_accrued_approaches_full_coupon(ktb):
    res = accrued_interest(ktb, pd.Timestamp("2025-09-09"))
    assert res.accrual_ratio == pytest.approx(364 / 365)
    assert res.accrued_interest == 349.0


def test_no_accrual_outside_coupon_bracket(ktb):
    before_first = accrued_interest(ktb, pd.Timestamp("2020-10-10"))
    assert before_first.accrued_interest == 0.0
    assert before_first.previous_coupon_date is None
    assert before_first.next_coupon_date == pd.Timestamp("2021-09-10")

    at_maturity = accrued_interest(ktb, pd.Timestamp("2029-09-10"))
    assert at_maturity.accrued_interest == 0.0
    assert at_maturity.next_coupon_date is None


def test_zero_coupon_accrues_nothing():
    z = Bond("2023-03-10", "2028-03-10", 0.0, coupon_frequency=0)
    res = accrued_interest(z, pd.Timestamp("2024-10-10"))
    assert res.accrued_interest == 0.0
    assert res.previous_coupon_date is None and res.next_coupon_date is None
    assert res.accrual_ratio == 0.0


def test_clean_dirty_helpers():
    assert clean_price(10029.0, 29.0) == 10000.0
    assert dirty_price(10000.0, 29.0) == 10029.0
    assert round_by_currency(1.234, "USD") == 1.23
    assert round_by_currency(28.77, "KRW") == 29.0
    assert accrued_interest_as_percent(29.0, 10000.0) == pytest.approx(0.29)
    assert accrued_interest_as_percent(29.0, 0.0) == 0.0
