# config.py
# Purpose: Engine-wide numerical defaults and market constants

from __future__ import annotations

import os

PACKAGE_ROOT = os.path.dirname(__file__)

# Root-finder
DEFAULT_TOLERANCE = 1e-4          # price units, 0.01bp on a percent-of-par scale
DEFAULT_MAX_ITERATIONS = 100
DERIVATIVE_FLOOR = 1e-10
BISECTION_BRACKET = (-10.0, 50.0)        # percent
BISECTION_WIDE_BRACKET = (-20.0, 100.0)  # percent

# Risk
CONVEXITY_BUMP = 0.01   # percentage points (1bp)
BASIS_POINT = 0.0001

# Calendar
DAYS_PER_YEAR = 365
MONEY_MARKET_DAYS = 360

# Instruments
SUPPORTED_FREQUENCIES = (0, 1, 2, 4, 12)
CURRENCY_DECIMALS = {"KRW": 0, "USD": 2}

# Tax: interest income tax 14% + local income tax 1.4%
INTEREST_TAX_RATE = 15.4

DEFAULT_YIELD_TABLE = os.path.join(PACKAGE_ROOT, "data", "etf_yields.json")
