"""General utilities, such as exception classes."""


# ratreal-specific exceptions

class RatrealError(Exception):
    """Base ratreal error."""

class InvalidFormat(RatrealError, ValueError):
    """Malformed textual input, such as '1/2/3' or '1..2'."""

class DivisionByZero(RatrealError, ZeroDivisionError):
    """Division by a value known to be exactly zero."""

class IntervalSpansZero(RatrealError, ZeroDivisionError):
    """Division by an interval that is not exactly zero, but contains zero."""

class UndefinedValue(RatrealError, ArithmeticError):
    """Indeterminate form, such as 0**0."""

class DivisionSingularity(RatrealError, ZeroDivisionError):
    """An oracle's denominator could not be separated from zero
    at the requested precision.
    """


# diagnostics

class RatrealWarning(UserWarning):
    """Base ratreal warning."""

class PrecisionUnreachable(RatrealWarning):
    """A narrowing strategy stopped before reaching the requested precision.
    The best interval found so far is still returned, and is still guaranteed
    to contain the true value.
    """

