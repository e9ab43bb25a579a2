from __future__ import annotations


class BondMathError(ValueError):
    """Base class for every error raised by the engine."""


class InvalidInput(BondMathError):
    pass


class InvalidTaxRate(InvalidInput):
    pass


class WrongInstrumentType(BondMathError):
    pass


class UnsupportedConvention(BondMathError):
    pass


class MissingParameter(BondMathError):
    pass


class UnsupportedFrequency(BondMathError):
    pass
