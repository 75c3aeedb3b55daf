"""Continued fractions as streams of terms, and oracles for their values.

A stream may be infinite (sqrt(2), e, the golden ratio) or finite. Terms are
produced lazily and memoized in a buffer shared by every clone of a stream;
each clone keeps its own position.
"""

import itertools
import logging
import warnings

from ..exact import utils
from ..exact.rational import Rational
from .interval import RationalInterval
from .oracle import Oracle


logger = logging.getLogger(__name__)

# narrowing gives up on a continued fraction beyond this many terms
MAX_DEPTH = 10000


class _TermBuffer(object):
    """Terms read so far from one source iterator."""

    def __init__(self, it):
        self._it = it
        self._terms = []
        self._done = False

    def get(self, i):
        """Term i, or None if the source ends before it."""
        while len(self._terms) <= i and not self._done:
            try:
                a = next(self._it)
            except StopIteration:
                self._done = True
                break
            if not isinstance(a, int) or isinstance(a, bool):
                raise TypeError('continued fraction terms must be ints: {}'.format(repr(a)))
            if self._terms and a <= 0:
                raise ValueError('continued fraction term {} must be positive: {}'
                                 .format(len(self._terms), repr(a)))
            self._terms.append(a)

        if i < len(self._terms):
            return self._terms[i]
        else:
            return None


class CFStream(object):
    """A cursor over the terms of a continued fraction [a0; a1, a2, ...].

    The source is an iterable of ints, or a function of no arguments returning
    one. Passing another CFStream creates a clone: it shares the terms already
    read, starting from the same position.
    """

    _position: int = 0

    # the internal state is not directly visible: expose it with properties

    @property
    def position(self):
        """Index of the next term."""
        return self._position

    def __init__(self, source):
        if isinstance(source, CFStream):
            self._buffer = source._buffer
            self._position = source._position
        else:
            if callable(source):
                source = source()
            self._buffer = _TermBuffer(iter(source))

    def __repr__(self):
        return '{}(position={})'.format(type(self).__name__, self._position)

    def peek(self):
        """The next term without advancing, or None at the end."""
        return self._buffer.get(self._position)

    def next(self):
        """The next term, or None at the end."""
        a = self._buffer.get(self._position)
        if a is not None:
            self._position += 1
        return a

    def clone(self):
        return CFStream(self)

    def __iter__(self):
        return self

    def __next__(self):
        a = self.next()
        if a is None:
            raise StopIteration
        return a


# stock streams

def cf_from_terms(terms):
    """A finite stream over the given terms."""
    return CFStream(list(terms))

def _sqrt2_terms():
    yield 1
    yield from itertools.repeat(2)

def _e_terms():
    yield 2
    for k in itertools.count(1):
        yield 1
        yield 2 * k
        yield 1

def _phi_terms():
    yield from itertools.repeat(1)

def cf_sqrt2():
    """sqrt(2) = [1; 2, 2, 2, ...]"""
    return CFStream(_sqrt2_terms)

def cf_e():
    """e = [2; 1, 2, 1, 1, 4, 1, 1, 6, 1, ...]"""
    return CFStream(_e_terms)

def cf_phi():
    """The golden ratio (1 + sqrt(5)) / 2 = [1; 1, 1, ...]"""
    return CFStream(_phi_terms)


# convergents

def convergent(stream, n):
    """The value of the first n terms of the stream, read from its current position.
    Zero for n = 0; a stream shorter than n gives its exact value. The stream
    itself is not advanced."""
    cursor = stream.clone()
    h_prev, h = 0, 1
    k_prev, k = 1, 0
    for _ in range(n):
        a = cursor.next()
        if a is None:
            break
        h_prev, h = h, a * h + h_prev
        k_prev, k = k, a * k + k_prev
    if k == 0:
        return Rational(0)
    return Rational(h, k)

def convergent_interval(stream, n):
    """The interval between convergents n and n + 1, which contains the value of the stream."""
    return RationalInterval(convergent(stream, n), convergent(stream, n + 1))


class ContinuedFractionOracle(Oracle):
    """An oracle for the value of a continued fraction stream.
    The bound is the interval between two consecutive convergents; narrowing
    reads more terms until it is narrow enough."""

    def __init__(self, stream, max_depth=MAX_DEPTH):
        self._cursor = stream.clone()
        self._max_depth = max_depth
        self._h_prev, self._h = 0, 1
        self._k_prev, self._k = 1, 0
        self._depth = 0
        self._exhausted = False

        if not self._advance():
            raise ValueError('continued fraction has no terms')
        self._advance()
        super().__init__(self._bracket())

    # the internal state is not directly visible: expose it with properties

    @property
    def depth(self):
        """Number of terms read so far."""
        return self._depth

    def _advance(self):
        """Read one more term into the convergent; False at the end of a finite stream."""
        a = self._cursor.next()
        if a is None:
            self._exhausted = True
            return False
        self._h_prev, self._h = self._h, a * self._h + self._h_prev
        self._k_prev, self._k = self._k, a * self._k + self._k_prev
        self._depth += 1
        return True

    def _bracket(self):
        last = Rational(self._h, self._k)
        if self._exhausted:
            return RationalInterval(last)
        else:
            return RationalInterval(Rational(self._h_prev, self._k_prev), last)

    async def _refine(self, yes, precision):
        refined = self._bracket()
        start = self._depth
        while refined.width() > precision and not self._exhausted and self._depth < self._max_depth:
            self._advance()
            refined = self._bracket()

        logger.debug('continued fraction: depth %d -> %d, width %s', start, self._depth, str(refined.width()))
        if refined.width() > precision:
            warnings.warn(utils.PrecisionUnreachable(
                'continued fraction did not reach precision {} within {} terms'
                .format(str(precision), self._max_depth)), stacklevel=3)
        return refined


def from_continued_fraction(stream, max_depth=MAX_DEPTH):
    """An oracle for the value of a continued fraction, given as a CFStream or a sequence of terms."""
    if not isinstance(stream, CFStream):
        stream = CFStream(stream)
    return ContinuedFractionOracle(stream, max_depth=max_depth)
