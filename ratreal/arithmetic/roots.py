"""Exact n-th roots by Newton's method.

For a guess g of the n-th root of q, the partner p = q / g**(n-1) lies on the
other side of the root, so [min(g, p), max(g, p)] always brackets it. Each
Newton step g <- (g*(n-1) + p) / n tightens the bracket.
"""

import logging
import warnings

from ..exact import utils
from ..exact import gmpmath
from ..exact.rational import Rational
from .interval import RationalInterval
from .oracle import Oracle


logger = logging.getLogger(__name__)

# Newton steps allowed per narrowing request
MAX_ITERATIONS = 100


class NewtonRootOracle(Oracle):
    """An oracle for the positive n-th root of a positive Rational, negated if `negative` is set."""

    _q: Rational = Rational(1)
    _n: int = 2
    _g: Rational = Rational(1)
    _p: Rational = Rational(1)
    _negative: bool = False

    def __init__(self, q, guess, n, negative=False, max_iterations=MAX_ITERATIONS):
        self._q = q
        self._n = n
        self._negative = negative
        self._max_iterations = max_iterations
        self._g = guess
        self._p = self._partner(guess)
        super().__init__(self._bracket())

    # the internal state is not directly visible: expose it with properties

    @property
    def radicand(self):
        return -self._q if self._negative else self._q

    @property
    def index(self):
        return self._n

    def _partner(self, g):
        return self._q / (g ** (self._n - 1))

    def _bracket(self):
        interval = RationalInterval(self._g, self._p)
        if self._negative:
            return interval.negate()
        else:
            return interval

    async def _refine(self, yes, precision):
        n = self._n
        i = 0
        while (self._p - self._g).abs() > precision and i < self._max_iterations:
            self._g = (self._g * (n - 1) + self._p) / n
            self._p = self._partner(self._g)
            i += 1

        refined = self._bracket()
        logger.debug('root %d of %s: %d iterations, width %s', n, str(self.radicand), i, str(refined.width()))
        if refined.width() > precision:
            warnings.warn(utils.PrecisionUnreachable(
                'root {} of {} did not reach precision {} in {} iterations'
                .format(n, str(self.radicand), str(precision), self._max_iterations)), stacklevel=3)
        return refined


def nth_root(value, guess=None, n=2, max_iterations=MAX_ITERATIONS):
    """An oracle for the real n-th root of value, by Newton's method from `guess`.

    Without a guess, the iteration starts from a floating-point estimate. A
    negative guess selects the negative root when n is even.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError('root index must be an int: {}'.format(repr(n)))
    if n < 1:
        raise ValueError('root index must be at least 1: {}'.format(repr(n)))

    q = value if isinstance(value, Rational) else Rational(value)
    if q.is_zero():
        return Oracle(RationalInterval(q))
    if n == 1:
        return Oracle(RationalInterval(q))

    if q.sign() < 0 and n % 2 == 0:
        raise utils.UndefinedValue('even root of a negative number: root {} of {}'.format(n, str(q)))

    if guess is None:
        g = gmpmath.root_estimate(q.abs(), n)
        guess_negative = False
    else:
        g = guess if isinstance(guess, Rational) else Rational(guess)
        if g.is_zero():
            raise utils.DivisionByZero('initial guess for root {} of {} is zero'.format(n, str(q)))
        guess_negative = g.sign() < 0

    if n % 2 == 0:
        negative = guess_negative
    else:
        negative = q.sign() < 0

    return NewtonRootOracle(q.abs(), g.abs(), n, negative=negative, max_iterations=max_iterations)

def sqrt(value, guess=None, max_iterations=MAX_ITERATIONS):
    """An oracle for the square root of value."""
    return nth_root(value, guess=guess, n=2, max_iterations=max_iterations)
