"""Standard operation codes and classifications, shared by intervals and oracles."""

from enum import IntEnum, unique

@unique
class OP(IntEnum):
    neg = 0
    add = 1
    sub = 2
    mul = 3
    div = 4

@unique
class Verdict(IntEnum):
    """Outcome of classifying an oracle against a target interval.
    See `Oracle.classify()` for details."""
    UNKNOWN = -1
    NO_MATCH = 0
    MATCH = 1

@unique
class OperandKind(IntEnum):
    """Closed set of things that can be combined by oracle arithmetic.
    Literals are wrapped as exact oracles when a combinator is built."""
    RATIONAL = 0
    INTERVAL = 1
    ORACLE = 2
