"""
Bond Yield Engine

Modules:
- utils: coupon schedule, calendar and day count helpers
- bonds: bond description (validated, immutable)
- cashflows: dated coupon/principal flows + present value + display table
- accrued: accrued interest + clean/dirty reconciliation
- pricing: price from yield, price derivatives, yield seeds
- ytm: yield-to-maturity root-finder (direct / Newton-Raphson / bisection)
- risk: Macaulay/modified/dollar duration + convexity
- conversion: tax, compounding, money-market and deposit-vs-bond conversions
- yield_table: fund/ETF distribution-yield comparison table
- calculator: one-call calculation for presentation layers
- scenarios: yield shock what-if table

Presentation layers should import from this package.
"""
