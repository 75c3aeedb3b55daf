"""Arithmetic on oracles.

Each combinator builds a CompoundOracle over its operands. The initial bound is
computed eagerly from the operands' current bounds; narrowing splits the
requested precision between the operands, narrows them concurrently, and
recombines their bounds with interval arithmetic.
"""

import logging

from ..exact import utils
from ..exact.ops import OP
from ..exact.rational import Rational
from .interval import RationalInterval
from .oracle import Oracle, to_oracle, join


logger = logging.getLogger(__name__)

# distance a zero-spanning denominator is pushed away from zero before it is narrowed
DIVISION_EPSILON = Rational(1, 10 ** 9)
# a compound narrowing retries with a halved sub-precision at most this many times
MAX_SPLIT_ROUNDS = 4

_one = Rational(1)
_half = Rational(1, 2)


def _safe_denominator(d, epsilon):
    """Shrink a denominator interval away from zero so it can be divided by.
    The result need not contain the true value."""
    if d.is_exactly_zero():
        raise utils.DivisionByZero('denominator is exactly zero')
    if not d.contains_zero():
        return d

    lo, hi = d.low, d.high
    if hi.is_zero():
        safe = RationalInterval(lo, -epsilon)
    elif lo.is_zero():
        safe = RationalInterval(epsilon, hi)
    elif abs(lo) > abs(hi):
        safe = RationalInterval(lo, -epsilon)
    else:
        safe = RationalInterval(epsilon, hi)

    logger.warning('denominator %s contains zero; dividing by %s until it is narrowed',
                   str(d), str(safe))
    return safe


class CompoundOracle(Oracle):
    """An oracle for the result of an arithmetic operation on other oracles.
    Literal operands (Rationals, ints, intervals) are wrapped as exact oracles
    when the compound is built.
    """

    _op: OP = OP.neg
    _operands: tuple = ()

    # the internal state is not directly visible: expose it with properties

    @property
    def op(self):
        return self._op

    @property
    def operands(self):
        return self._operands

    def __init__(self, op, *operands, epsilon=DIVISION_EPSILON, max_rounds=MAX_SPLIT_ROUNDS):
        op = OP(op)
        arity = 1 if op == OP.neg else 2
        if len(operands) != arity:
            raise ValueError('{} takes {} operand(s), got {}'.format(op.name, arity, len(operands)))

        self._op = op
        self._operands = tuple(to_oracle(x) for x in operands)
        self._max_rounds = max_rounds

        if op == OP.div:
            n, d = self._operands
            safe = _safe_denominator(d.yes, epsilon)
            super().__init__(n.yes.divide(safe))
            if safe is not d.yes:
                self._guaranteed = False
        else:
            super().__init__(self._combine())

        # a bound built from a guess is itself a guess
        if not all(x.guaranteed for x in self._operands):
            self._guaranteed = False

    def __repr__(self):
        return '{}({}, yes={})'.format(type(self).__name__, self._op.name, str(self._yes))

    def _combine(self):
        """Bound the result using the operands' current bounds."""
        if self._op == OP.neg:
            return self._operands[0].yes.negate()

        a, b = (x.yes for x in self._operands)
        if self._op == OP.add:
            return a.add(b)
        elif self._op == OP.sub:
            return a.subtract(b)
        elif self._op == OP.mul:
            return a.multiply(b)
        else:
            if b.contains_zero():
                raise utils.DivisionSingularity('cannot separate denominator {} from zero'.format(str(b)))
            return a.divide(b)

    async def _split(self, precision):
        """The precision to request from each operand."""
        if self._op == OP.add or self._op == OP.sub:
            return precision / 2

        elif self._op == OP.mul:
            a, b = (x.yes for x in self._operands)
            m = max(a.magnitude(), b.magnitude())
            if m < _half:
                return precision
            else:
                return precision / (2 * m)

        else:
            n, d = self._operands
            d_min = d.yes.min_magnitude()
            if d_min < _one:
                await d.narrow(precision)
                d_min = d.yes.min_magnitude()
            if d_min.is_zero():
                return precision / 4
            else:
                return precision * d_min * d_min / (d_min + n.yes.magnitude())

    async def _refine(self, yes, precision):
        if self._op == OP.neg:
            await self._operands[0].narrow(precision)
            return self._combine()

        sub_precision = await self._split(precision)
        rounds = 0
        while True:
            await join(*(x.narrow(sub_precision) for x in self._operands))
            refined = self._combine()
            rounds += 1
            logger.debug('%s round %d: operand precision %s, width %s',
                         self._op.name, rounds, str(sub_precision), str(refined.width()))
            if refined.width() <= precision or rounds >= self._max_rounds:
                return refined
            sub_precision = sub_precision / 2


def negate(a):
    """-a"""
    return CompoundOracle(OP.neg, a)

def add(a, b):
    """a + b"""
    return CompoundOracle(OP.add, a, b)

def subtract(a, b):
    """a - b"""
    return CompoundOracle(OP.sub, a, b)

def multiply(a, b):
    """a * b"""
    return CompoundOracle(OP.mul, a, b)

def divide(n, d, epsilon=DIVISION_EPSILON):
    """n / d

    If the denominator's bound contains zero, the initial bound is computed as if
    the denominator were pushed `epsilon` away from zero; narrowing replaces it,
    and fails with DivisionSingularity if the denominator still can't be
    separated from zero.
    """
    return CompoundOracle(OP.div, n, d, epsilon=epsilon)
