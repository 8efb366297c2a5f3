"""
Error taxonomy for the calculation engine.

All errors are raised synchronously and are never retried: the same inputs
always fail the same way. The API layer maps them to HTTP responses.
"""


class StoneCalcError(ValueError):
    """Base class for all calculation failures."""


class InvalidDimension(StoneCalcError):
    """A raw or canonical dimension (or target value) is zero, negative, or non-finite."""


class InvalidMode(StoneCalcError):
    """An unrecognized calculation mode reached the dispatcher."""


class DivisionByZero(StoneCalcError):
    """A per-piece area or length used as a divisor is zero."""
