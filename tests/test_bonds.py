import dataclasses

import pandas as pd
import pytest

from bond_yield_engine.bonds import Bond
from bond_yield_engine.errors import InvalidInput, UnsupportedFrequency


def test_dates_coerced_and_type_derived():
    b = Bond(issue_date="2020-09-10", maturity_date="2029-09-10", coupon_rate=0.035, coupon_frequency=1)
    assert b.issue_date == pd.Timestamp("2020-09-10")
    assert b.bond_type == "coupon"
    assert not b.is_zero_coupon
    assert b.annual_coupon == pytest.approx(350.0)


def test_frequency_zero_means_zero_coupon():
    z = Bond(issue_date="2023-03-10", maturity_date="2028-03-10", coupon_rate=0.0, coupon_frequency=0)
    assert z.bond_type == "zero"
    assert z.is_zero_coupon
    assert z.annual_coupon == 0.0


@pytest.mark.parametrize("bond_type,freq", [("zero", 2), ("coupon", 0)])
def test_tag_frequency_disagreement_rejected(bond_type, freq):
    with pytest.raises(InvalidInput):
        Bond("2020-01-01", "2025-01-01", 0.03, coupon_frequency=freq, bond_type=bond_type)


def test_invalid_descriptions_rejected():
    with pytest.raises(UnsupportedFrequency):
        Bond("2020-01-01", "2025-01-01", 0.03, coupon_frequency=3)
    with pytest.raises(InvalidInput):
        Bond("2020-01-01", "2025-01-01", 0.03, face_value=0.0)
    with pytest.raises(InvalidInput):
        Bond("2025-01-01", "2025-01-01", 0.03)
    with pytest.raises(InvalidInput):
        Bond("2020-01-01", "2025-01-01", 0.03, currency="EUR")
    with pytest.raises(InvalidInput):
        Bond("2020-01-01", "2025-01-01", 0.03, bond_type="floater")


def test_bond_is_immutable():
    b = Bond("2020-01-01", "2025-01-01", 0.03, currency="usd")
    assert b.currency == "USD"
    with pytest.raises(dataclasses.FrozenInstanceError):
        b.face_value = 100.0
