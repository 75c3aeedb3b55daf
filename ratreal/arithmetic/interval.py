"""Closed intervals with exact rational endpoints.

Every operation returns an interval that is guaranteed to contain the
result of applying the operation to any points of the operand intervals.
"""

import gmpy2 as gmp

from ..exact import utils
from ..exact import gmpmath
from ..exact.rational import Rational


_zero = Rational(0)
_one = Rational(1)


def _rational(x):
    if isinstance(x, Rational):
        return x
    else:
        return Rational(x)

def _min_max(values):
    lo = values[0]
    hi = values[0]
    for v in values[1:]:
        if v < lo:
            lo = v
        if v > hi:
            hi = v
    return lo, hi


class RationalInterval(object):
    """A closed interval [low, high] over the rationals.
    The endpoints are always ordered, so low <= high; an interval with
    low == high is a single, exactly known point.
    Intervals are immutable; every operation returns a new interval.
    """

    _low: Rational = _zero
    _high: Rational = _zero

    # the internal state is not directly visible: expose it with properties

    @property
    def low(self):
        """The lower bound."""
        return self._low

    @property
    def high(self):
        """The upper bound."""
        return self._high

    def __init__(self, a, b=None):
        """Creates the interval between `a` and `b`, in whichever order they are given.
        The endpoints are anything accepted by `Rational()`. If `b` is not provided,
        the interval is the single point `a`."""
        a = _rational(a)
        if b is None:
            b = a
        else:
            b = _rational(b)

        if a <= b:
            self._low = a
            self._high = b
        else:
            self._low = b
            self._high = a

    @classmethod
    def point(cls, x):
        """The degenerate interval [x, x]."""
        return cls(x, x)

    @classmethod
    def parse(cls, s):
        """Parse an interval written "a:b", where a and b are rationals in any
        format accepted by `Rational.parse()`."""
        parts = s.split(':')
        if len(parts) != 2:
            raise utils.InvalidFormat('invalid interval: {}; use a:b'.format(repr(s)))
        return cls(Rational.parse(parts[0]), Rational.parse(parts[1]))

    def __repr__(self):
        return '{}({}, {})'.format(type(self).__name__, repr(self._low), repr(self._high))

    def __str__(self):
        return '{}:{}'.format(str(self._low), str(self._high))

    def to_mixed_string(self):
        return '{}:{}'.format(self._low.to_mixed_string(), self._high.to_mixed_string())

    def __eq__(self, other):
        if not isinstance(other, RationalInterval):
            return NotImplemented
        return self._low == other._low and self._high == other._high

    def __ne__(self, other):
        if not isinstance(other, RationalInterval):
            return NotImplemented
        return self._low != other._low or self._high != other._high

    def __hash__(self):
        return hash((self._low, self._high))

    def equals(self, other):
        return self == _interval(other)

    # (visible) utility functions

    def is_point(self) -> bool:
        """Is the interval a "singleton" interval, e.g. [a, a]?"""
        return self._low == self._high

    def is_exactly_zero(self) -> bool:
        return self._low.is_zero() and self._high.is_zero()

    def width(self) -> Rational:
        return self._high - self._low

    def magnitude(self) -> Rational:
        """Largest absolute value in the interval."""
        lo = abs(self._low)
        hi = abs(self._high)
        return lo if lo > hi else hi

    def min_magnitude(self) -> Rational:
        """Smallest absolute value in the interval; zero if the interval contains zero."""
        if self.contains_zero():
            return _zero
        lo = abs(self._low)
        hi = abs(self._high)
        return lo if lo < hi else hi

    def bit_length(self):
        return max(self._low.bit_length(), self._high.bit_length())

    def contains_zero(self) -> bool:
        return self._low <= _zero and _zero <= self._high

    def contains_value(self, x) -> bool:
        """Does the interval contain the point `x`?"""
        x = _rational(x)
        return self._low <= x and x <= self._high

    def contains(self, other) -> bool:
        """Does this interval contain all of `other`?
        Scalars are treated as single points."""
        other = _interval(other)
        return self._low <= other._low and other._high <= self._high

    def overlaps(self, other) -> bool:
        other = _interval(other)
        return not (self._high < other._low or other._high < self._low)

    def intersection(self, other):
        """The overlap of two intervals, or None if they are disjoint."""
        other = _interval(other)
        if not self.overlaps(other):
            return None
        lo = self._low if self._low > other._low else other._low
        hi = self._high if self._high < other._high else other._high
        return RationalInterval(lo, hi)

    def union(self, other):
        """The union of two intervals, or None if it is not an interval.
        Intervals that share an endpoint can be joined."""
        other = _interval(other)
        if not self.overlaps(other):
            return None
        lo = self._low if self._low < other._low else other._low
        hi = self._high if self._high > other._high else other._high
        return RationalInterval(lo, hi)

    def halo(self, delta):
        """Expand the interval symmetrically by `delta` on both sides."""
        delta = _rational(delta)
        if delta < _zero:
            raise ValueError('halo must be nonnegative: {}'.format(str(delta)))
        return RationalInterval(self._low - delta, self._high + delta)

    def mediant(self) -> Rational:
        """(n1 + n2) / (d1 + d2) for the endpoints n1/d1 and n2/d2."""
        return Rational(self._low.numerator + self._high.numerator,
                        self._low.denominator + self._high.denominator)

    def midpoint(self) -> Rational:
        return (self._low + self._high) / 2

    def scale10(self, exponent):
        """Multiply both endpoints by 10**exponent."""
        return RationalInterval(self._low.scale10(exponent), self._high.scale10(exponent))

    def shortest_decimal(self, base=10):
        """The rational in this interval with the smallest power of `base` as its
        denominator; among those, the one with the smallest numerator.
        Returns None for a point that has no finite expansion in `base`."""
        if base < 2:
            raise ValueError('base must be at least 2: {}'.format(repr(base)))
        # a point p/q needs base**k with q | base**k, so k <= log2(q)
        limit = self._low.denominator.bit_length() if self.is_point() else None
        scale = 1
        k = 0
        while limit is None or k <= limit:
            lo = (self._low * scale).ceil()
            hi = (self._high * scale).floor()
            if lo <= hi:
                return Rational(lo, scale)
            scale *= base
            k += 1
        return None

    def to_mpfr(self, prec=53):
        """Round this interval outward to a pair of gmpy2 mpfr bounds with prec bits."""
        lo = gmpmath.rational_to_mpfr(self._low, prec=prec, rm=gmp.RoundDown)
        hi = gmpmath.rational_to_mpfr(self._high, prec=prec, rm=gmp.RoundUp)
        return lo, hi

    # arithmetic

    def negate(self):
        return RationalInterval(-self._high, -self._low)

    def add(self, other):
        other = _interval(other)
        return RationalInterval(self._low + other._low, self._high + other._high)

    def subtract(self, other):
        other = _interval(other)
        return RationalInterval(self._low - other._high, self._high - other._low)

    def multiply(self, other):
        """Multiply two intervals. Any of the four corner products can be
        extremal, depending on the signs of the endpoints."""
        other = _interval(other)
        lo, hi = _min_max([
            self._low * other._low,
            self._low * other._high,
            self._high * other._low,
            self._high * other._high,
        ])
        return RationalInterval(lo, hi)

    def divide(self, other):
        """Divide two intervals. Raises DivisionByZero if the divisor is exactly
        zero, and IntervalSpansZero if it contains zero anywhere else."""
        other = _interval(other)
        if other.is_exactly_zero():
            raise utils.DivisionByZero('division of {} by zero'.format(str(self)))
        if other.contains_zero():
            raise utils.IntervalSpansZero('cannot divide {} by an interval containing zero: {}'
                                          .format(str(self), str(other)))
        lo, hi = _min_max([
            self._low / other._low,
            self._low / other._high,
            self._high / other._low,
            self._high / other._high,
        ])
        return RationalInterval(lo, hi)

    def reciprocate(self):
        if self.is_exactly_zero():
            raise utils.DivisionByZero('cannot take the reciprocal of zero')
        if self.contains_zero():
            raise utils.IntervalSpansZero('cannot take the reciprocal of an interval containing zero: {}'
                                          .format(str(self)))
        return RationalInterval(self._high.reciprocal(), self._low.reciprocal())

    def pow(self, exponent):
        """Raise every point of the interval to an integer power.
        Even powers fold the negative half of the interval onto the positive half."""
        n = int(exponent)
        if n == 0:
            if self.is_exactly_zero():
                raise utils.UndefinedValue('0**0 is undefined')
            if self.contains_zero():
                raise utils.UndefinedValue('cannot raise an interval containing zero to the power 0: {}'
                                           .format(str(self)))
            return RationalInterval(_one, _one)
        elif n < 0:
            if self.contains_zero() and not self.is_exactly_zero():
                raise utils.IntervalSpansZero('cannot raise an interval containing zero to a negative power: {}'
                                              .format(str(self)))
            return self.pow(-n).reciprocate()
        elif n % 2 == 1:
            return RationalInterval(self._low ** n, self._high ** n)
        elif self.contains_zero():
            return RationalInterval(_zero, self.magnitude() ** n)
        elif self._high < _zero:
            return RationalInterval(self._high ** n, self._low ** n)
        else:
            return RationalInterval(self._low ** n, self._high ** n)

    def mpow(self, exponent):
        """Multiply the interval by itself `exponent` times, treating each factor
        as an independent quantity. Wider than `pow()` for intervals spanning zero."""
        n = int(exponent)
        if n == 0:
            raise utils.UndefinedValue('multiplicative power needs at least one factor')
        elif n < 0:
            return self.reciprocate().mpow(-n)
        result = self
        for _ in range(n - 1):
            result = result.multiply(self)
        return result

    # python operators

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __add__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return other.multiply(self)

    def __truediv__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        other = _try_interval(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __pow__(self, exponent):
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            return NotImplemented
        return self.pow(exponent)

    def __contains__(self, x):
        return self.contains_value(x)


def _interval(x):
    if isinstance(x, RationalInterval):
        return x
    else:
        return RationalInterval(x, x)

def _try_interval(x):
    if isinstance(x, RationalInterval):
        return x
    elif isinstance(x, Rational) or (isinstance(x, int) and not isinstance(x, bool)):
        return RationalInterval(x, x)
    else:
        return None
