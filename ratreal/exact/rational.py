"""Exact rational numbers with arbitrary precision integer components."""

import re
import fractions

import gmpy2 as gmp

from . import utils
from . import expansion


_int_re = re.compile(r'(?P<num>[-+]?\d+)')
_frac_re = re.compile(r'(?P<num>[-+]?\d+)\s*/\s*(?P<den>[-+]?\d+)')
_mixed_re = re.compile(r'(?P<sign>[-+]?)(?P<whole>\d+)\.\.(?P<num>\d+)/(?P<den>\d+)')
_dec_re = re.compile(r'(?P<sign>[-+]?)(?P<ipart>\d*)(?:\.(?P<fpart>\d*)(?:\((?P<rpart>\d+)\))?)?'
                     r'(?:[eE](?P<exp>[-+]?\d+))?')

_mpz_type = type(gmp.mpz(0))
_mpq_type = type(gmp.mpq(0))


def _parse(s):
    """Parse a string into a (numerator, denominator) pair, not necessarily reduced.
    Raises InvalidFormat if the string is not in a known grammar.
    """
    text = s.strip()

    m = _int_re.fullmatch(text)
    if m:
        return int(m.group('num')), 1

    m = _frac_re.fullmatch(text)
    if m:
        return int(m.group('num')), int(m.group('den'))

    m = _mixed_re.fullmatch(text)
    if m:
        whole = int(m.group('whole'))
        num = int(m.group('num'))
        den = int(m.group('den'))
        total = whole * den + num
        if m.group('sign') == '-':
            total = -total
        return total, den

    m = _dec_re.fullmatch(text)
    if m and '.' in text and (m.group('ipart') or m.group('fpart') or m.group('rpart')):
        ipart = m.group('ipart') or '0'
        fpart = m.group('fpart') or ''
        rpart = m.group('rpart')

        scale = 10 ** len(fpart)
        num = int(ipart) * scale + int(fpart or '0')
        den = scale
        if rpart:
            # x.f(r) == (x.f * (10**len(r) - 1) + r) / (10**len(f) * (10**len(r) - 1))
            nines = (10 ** len(rpart)) - 1
            num = num * nines + int(rpart)
            den = den * nines

        exp = int(m.group('exp') or '0')
        if exp >= 0:
            num *= 10 ** exp
        else:
            den *= 10 ** -exp

        if m.group('sign') == '-':
            num = -num
        return num, den

    if m and m.group('exp') is not None and m.group('ipart'):
        # integer with an exponent, such as 15e-1
        num = int(m.group('ipart'))
        exp = int(m.group('exp'))
        den = 1
        if exp >= 0:
            num *= 10 ** exp
        else:
            den = 10 ** -exp
        if m.group('sign') == '-':
            num = -num
        return num, den

    raise utils.InvalidFormat('invalid rational: {}; use a, a/b, a.b, a.b(c) or a..b/c'.format(repr(s)))

def _components(x):
    """Split a rational-like value into a (numerator, denominator) pair of ints."""
    if isinstance(x, Rational):
        return x._n, x._d
    elif isinstance(x, bool):
        raise TypeError('expected a rational-like value, got {}'.format(repr(x)))
    elif isinstance(x, int):
        return x, 1
    elif isinstance(x, _mpz_type):
        return int(x), 1
    elif isinstance(x, (_mpq_type, fractions.Fraction)):
        return int(x.numerator), int(x.denominator)
    elif isinstance(x, str):
        return _parse(x)
    elif isinstance(x, float):
        # go through the shortest decimal string, not the binary expansion
        return _parse(repr(x))
    else:
        raise TypeError('expected a rational-like value, got {}'.format(repr(x)))

def _coerce(x):
    if isinstance(x, Rational):
        return x
    elif isinstance(x, (int, _mpz_type, _mpq_type, fractions.Fraction)) and not isinstance(x, bool):
        return Rational(x)
    else:
        return None


class Rational(object):
    """An exact rational number numerator / denominator.
    The representation is always reduced: the components are coprime,
    the denominator is positive, and zero is 0/1.
    Rationals are immutable; every operation returns a new value.
    """

    _n: int = 0
    _d: int = 1

    # the internal state is not directly visible: expose it with properties

    @property
    def numerator(self):
        """Signed integer numerator."""
        return self._n

    @property
    def denominator(self):
        """Positive integer denominator."""
        return self._d

    def __init__(self, numerator=0, denominator=1):
        """Create a new rational numerator / denominator. Either argument can be
        an integer, another Rational, a gmpy2 mpz or mpq, a float, or a string
        in one of the forms "a", "a/b", "a.b", "a.b(c)" (repeating digits c),
        or "a..b/c" (mixed number)."""
        n1, d1 = _components(numerator)
        n2, d2 = _components(denominator)
        if d1 == 0 or n2 == 0 or d2 == 0:
            raise utils.DivisionByZero('zero denominator: {}/{}'.format(repr(numerator), repr(denominator)))
        n = n1 * d2
        d = d1 * n2

        # normalize: divide out the gcd, then move the sign into the numerator
        g = int(gmp.gcd(abs(n), abs(d)))
        n //= g
        d //= g
        if d < 0:
            n = -n
            d = -d
        self._n = n
        self._d = d

    @classmethod
    def parse(cls, s):
        """Parse a string into a Rational. Raises InvalidFormat for malformed text."""
        if not isinstance(s, str):
            raise TypeError('expected a string, got {}'.format(repr(s)))
        return cls(s)

    def __repr__(self):
        return '{}({}, {})'.format(type(self).__name__, repr(self._n), repr(self._d))

    def __str__(self):
        if self._d == 1:
            return str(self._n)
        else:
            return '{}/{}'.format(self._n, self._d)

    def __hash__(self):
        # agree with int and Fraction, which compare equal to this value
        return hash(fractions.Fraction(self._n, self._d))

    def __bool__(self):
        return self._n != 0

    def __float__(self):
        return float(gmp.mpq(self._n, self._d))

    def __int__(self):
        # truncate toward zero, like int(float)
        if self._n < 0:
            return -((-self._n) // self._d)
        else:
            return self._n // self._d

    def to_mpq(self):
        """This value as a gmpy2 mpq."""
        return gmp.mpq(self._n, self._d)

    # utility functions

    def is_zero(self):
        return self._n == 0

    def is_integer(self):
        return self._d == 1

    def sign(self):
        """-1, 0 or 1, according to the sign of this value."""
        if self._n < 0:
            return -1
        elif self._n > 0:
            return 1
        else:
            return 0

    def floor(self):
        return Rational(self._n // self._d)

    def ceil(self):
        return Rational(-((-self._n) // self._d))

    def bit_length(self):
        """Bits needed for the larger of the two components."""
        return max(abs(self._n).bit_length(), self._d.bit_length())

    # arithmetic

    def add(self, other):
        n, d = _components(other)
        return Rational(self._n * d + n * self._d, self._d * d)

    def subtract(self, other):
        n, d = _components(other)
        return Rational(self._n * d - n * self._d, self._d * d)

    def multiply(self, other):
        n, d = _components(other)
        return Rational(self._n * n, self._d * d)

    def divide(self, other):
        n, d = _components(other)
        if n == 0:
            raise utils.DivisionByZero('division of {} by zero'.format(str(self)))
        return Rational(self._n * d, self._d * n)

    def negate(self):
        return Rational(-self._n, self._d)

    def abs(self):
        if self._n < 0:
            return self.negate()
        else:
            return self

    def reciprocal(self):
        if self._n == 0:
            raise utils.DivisionByZero('cannot take the reciprocal of zero')
        return Rational(self._d, self._n)

    def pow(self, exponent):
        """Raise this value to an integer power. Negative powers are reciprocals;
        0**0 raises UndefinedValue, and 0 to a negative power raises DivisionByZero.
        """
        if isinstance(exponent, Rational):
            if not exponent.is_integer():
                raise ValueError('expected an integer exponent: {}'.format(str(exponent)))
            exponent = exponent.numerator
        exponent = int(exponent)
        if exponent == 0:
            if self._n == 0:
                raise utils.UndefinedValue('0**0 is undefined')
            return Rational(1)
        elif exponent < 0:
            return self.reciprocal().pow(-exponent)
        # components of a reduced fraction stay coprime under powers
        result = Rational()
        result._n = self._n ** exponent
        result._d = self._d ** exponent
        return result

    def scale10(self, exponent):
        """Multiply by 10**exponent, for any integer exponent."""
        if exponent >= 0:
            return Rational(self._n * (10 ** exponent), self._d)
        else:
            return Rational(self._n, self._d * (10 ** -exponent))

    # comparison

    def compareto(self, other):
        """Compare to another rational by cross multiplication:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
        """
        n, d = _components(other)
        lhs = self._n * d
        rhs = n * self._d
        if lhs < rhs:
            return -1
        elif lhs == rhs:
            return 0
        else:
            return 1

    def equals(self, other):
        return self.compareto(other) == 0

    def less_than(self, other):
        return self.compareto(other) < 0

    def less_than_or_equal(self, other):
        return self.compareto(other) <= 0

    def greater_than(self, other):
        return self.compareto(other) > 0

    def greater_than_or_equal(self, other):
        return self.compareto(other) >= 0

    # python operators

    def __eq__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._n == other._n and self._d == other._d

    def __ne__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._n != other._n or self._d != other._d

    def __lt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.compareto(other) < 0

    def __le__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.compareto(other) <= 0

    def __gt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.compareto(other) > 0

    def __ge__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.compareto(other) >= 0

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.multiply(self)

    def __truediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __pow__(self, exponent):
        if not isinstance(exponent, (int, _mpz_type)) or isinstance(exponent, bool):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # text

    def to_mixed_string(self):
        """Mixed number notation "a..b/c", e.g. "-1..1/2" for -3/2."""
        if self._d == 1:
            return str(self._n)
        whole, rem = divmod(abs(self._n), self._d)
        sign = '-' if self._n < 0 else ''
        if whole == 0:
            return '{}{}/{}'.format(sign, rem, self._d)
        else:
            return '{}{}..{}/{}'.format(sign, whole, rem, self._d)

    def to_decimal_string(self, max_digits=expansion.DEFAULT_PERIOD_DIGITS):
        """Exact decimal notation with the period in parentheses, e.g. "0.1(6)"."""
        return expansion.decimal_string(self, max_digits=max_digits)

    # continued fractions

    def to_continued_fraction(self, max_terms=expansion.DEFAULT_CF_LIMIT):
        """Continued fraction terms [a0; a1, a2, ...] of this value."""
        return expansion.continued_fraction(self, max_terms=max_terms)

    @classmethod
    def from_continued_fraction(cls, terms):
        """Evaluate a finite continued fraction [a0; a1, a2, ...].
        All terms after the first must be positive integers."""
        terms = [int(a) for a in terms]
        if len(terms) == 0:
            raise ValueError('continued fraction cannot be empty')
        for a in terms[1:]:
            if a <= 0:
                raise ValueError('continued fraction terms must be positive: {}'.format(repr(a)))
        h, k = expansion.convergents(terms)[-1]
        return cls(h, k)

    def convergents(self, max_terms=expansion.DEFAULT_CF_LIMIT):
        """Successive convergents of this value's continued fraction."""
        terms = self.to_continued_fraction(max_terms=max_terms)
        return [Rational(h, k) for h, k in expansion.convergents(terms)]

    def best_approximation(self, max_denominator):
        """The last convergent with a denominator no larger than max_denominator."""
        if max_denominator < 1:
            raise ValueError('max_denominator must be positive: {}'.format(repr(max_denominator)))
        best = None
        for c in self.convergents():
            if c.denominator <= max_denominator:
                best = c
            else:
                break
        return best
