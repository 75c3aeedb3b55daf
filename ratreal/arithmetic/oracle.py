"""Oracles: refinable, guaranteed bounds on real numbers.

An oracle stands for one real number that may not be rational. All it knows
is an interval `yes` that certainly contains the number; asking it to narrow
to some precision replaces `yes` with a tighter interval, which may take
arbitrarily long (and may await the narrowing of other oracles).

Narrowing runs on asyncio. Requests against one oracle are served one at a
time, in the order they arrive, so `yes` is never observed mid-update.
"""

import asyncio
import inspect
import logging
import warnings

from ..exact import utils
from ..exact.ops import Verdict, OperandKind
from ..exact.rational import Rational
from .interval import RationalInterval


logger = logging.getLogger(__name__)

# precision used when a caller does not ask for one
DEFAULT_PRECISION = Rational(1, 10 ** 6)


def halo(interval, delta):
    """[low - delta, high + delta]"""
    return interval.halo(delta)

def to_precision(precision=None):
    """Coerce a requested absolute precision to a positive Rational.
    None gives DEFAULT_PRECISION; a float f is read as 1/round(1/f).
    Zero and negative values raise ValueError."""
    if precision is None:
        return DEFAULT_PRECISION
    elif isinstance(precision, Rational):
        delta = precision
    elif isinstance(precision, float):
        if not precision > 0:
            raise ValueError('precision must be positive: {}'.format(repr(precision)))
        delta = Rational(1, round(1 / precision))
    else:
        delta = Rational(precision)

    if delta.sign() <= 0:
        raise ValueError('precision must be positive: {}'.format(str(delta)))
    return delta

async def join(*aws):
    """Run several narrowing branches concurrently and wait for all of them.
    Once every branch has finished, the first failure (in argument order)
    is raised; otherwise the list of results is returned."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


def _decide(yes, ab, delta):
    if not ab.overlaps(yes):
        return Verdict.NO_MATCH
    elif ab.halo(delta).contains(yes):
        return Verdict.MATCH
    else:
        return None


class Oracle(object):
    """A refinable bound on a real number.

    The base class knows its value exactly (or as well as it ever will):
    narrowing leaves `yes` unchanged. Subclasses provide a strategy by
    overriding `_refine()`.
    """

    # the true value is always in here
    _yes: RationalInterval = RationalInterval(0)

    # false only while `_yes` is a heuristic guess that narrowing must replace,
    # rather than tighten
    _guaranteed: bool = True

    def __init__(self, yes):
        if not isinstance(yes, RationalInterval):
            raise TypeError('expected a RationalInterval: {}'.format(repr(yes)))
        self._yes = yes
        self._lock = asyncio.Lock()

    def __repr__(self):
        return '{}(yes={})'.format(type(self).__name__, str(self._yes))

    @property
    def yes(self):
        """The best interval known so far to contain the true value."""
        return self._yes

    def current_yes(self):
        """Non-blocking read of the latest knowledge; same as `yes`."""
        return self._yes

    @property
    def guaranteed(self):
        """False while `yes` is only a guess that the next narrowing replaces."""
        return self._guaranteed

    async def _refine(self, yes, precision):
        """Compute an interval containing the true value, ideally no wider than precision.
        Must not assign to `_yes`; the result is installed by `narrow()`."""
        return yes

    def _install(self, refined):
        if not self._guaranteed:
            if not refined.overlaps(self._yes):
                logger.warning('%r: refinement %s is disjoint from the guessed bound; replacing it',
                               self, str(refined))
            self._yes = refined
            self._guaranteed = True
            return
        # both intervals contain the true value, so their overlap does too
        tightened = self._yes.intersection(refined)
        if tightened is None:
            logger.warning('%r: refinement %s is disjoint from current bound; replacing it',
                           self, str(refined))
            tightened = refined
        self._yes = tightened

    async def narrow(self, precision=None):
        """Refine `yes` toward the requested absolute precision and return it.
        Concurrent requests against this oracle are queued and run in order;
        a request that fails does not block the ones behind it."""
        delta = to_precision(precision)
        async with self._lock:
            refined = await self._refine(self._yes, delta)
            self._install(refined)
            logger.debug('narrowed %s to width %s (requested %s)',
                         type(self).__name__, str(self._yes.width()), str(delta))
            return self._yes

    async def classify(self, ab, precision=None):
        """Decide whether the true value is within `precision` of the target interval `ab`.
        Returns a pair (verdict, interval), where the interval is the `yes` used to decide:
            NO_MATCH  the true value is certainly outside ab
            MATCH     the true value is certainly inside halo(ab, precision)
            UNKNOWN   even after narrowing, the available precision cannot tell
        The oracle narrows (once) only if the current `yes` does not already decide.
        A guessed `yes` never decides on its own: it is always narrowed first.
        """
        if not isinstance(ab, RationalInterval):
            ab = RationalInterval(ab)
        delta = to_precision(precision)

        if self._guaranteed:
            current = self._yes
            verdict = _decide(current, ab, delta)
            if verdict is not None:
                return verdict, current

        refined = await self.narrow(delta)
        verdict = _decide(refined, ab, delta)
        if verdict is not None:
            return verdict, refined

        width = refined.width()
        if width > delta:
            logger.warning('%s: narrowing failed to reach precision %s, width is still %s',
                           type(self).__name__, str(delta), str(width))
            warnings.warn(utils.PrecisionUnreachable(
                'could not narrow {} to precision {}'.format(type(self).__name__, str(delta))), stacklevel=2)
        return Verdict.UNKNOWN, refined


class FunctionOracle(Oracle):
    """An oracle refined by a caller-supplied function compute(yes, precision),
    which may be a plain function or a coroutine function."""

    def __init__(self, yes, compute):
        super().__init__(yes)
        self._compute = compute

    async def _refine(self, yes, precision):
        result = self._compute(yes, precision)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, RationalInterval):
            raise TypeError('narrowing function must return a RationalInterval: {}'.format(repr(result)))
        return result


# leaf constructors

def from_rational(q):
    """An oracle for the exact value q."""
    if not isinstance(q, Rational):
        q = Rational(q)
    return Oracle(RationalInterval(q, q))

def from_interval(interval):
    """An oracle for some unknown value in a fixed interval."""
    if not isinstance(interval, RationalInterval):
        raise TypeError('expected a RationalInterval: {}'.format(repr(interval)))
    return Oracle(interval)

def from_function(yes, compute):
    """An oracle starting from `yes`, narrowed by compute(yes, precision)."""
    if not isinstance(yes, RationalInterval):
        yes = RationalInterval(yes)
    return FunctionOracle(yes, compute)


# operand coercion

def operand_kind(x):
    """Classify something that can appear as an operand of oracle arithmetic."""
    if isinstance(x, Oracle):
        return OperandKind.ORACLE
    elif isinstance(x, RationalInterval):
        return OperandKind.INTERVAL
    elif isinstance(x, Rational) or (isinstance(x, int) and not isinstance(x, bool)):
        return OperandKind.RATIONAL
    else:
        raise TypeError('cannot use {} as an oracle operand'.format(repr(x)))

def to_interval(x):
    """The interval currently known for an operand."""
    kind = operand_kind(x)
    if kind == OperandKind.ORACLE:
        return x.yes
    elif kind == OperandKind.INTERVAL:
        return x
    else:
        return RationalInterval(x, x)

def to_oracle(x):
    """Wrap a literal operand as an exact oracle; oracles pass through."""
    kind = operand_kind(x)
    if kind == OperandKind.ORACLE:
        return x
    else:
        return Oracle(to_interval(x))
