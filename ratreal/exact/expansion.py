"""Pure expansions of rational numbers: decimal digits with period detection,
and continued fractions.

Everything here works on plain integers, taking any value with integer
`numerator` and `denominator` attributes (such as a Rational, or a gmpy2 mpq).
Nothing is cached on the values themselves; callers memoize if they need to.
"""

import typing

import gmpy2 as gmp


# period search gives up after this many digits, and reports a period length of -1
MAX_PERIOD_CHECK = 10 ** 7
DEFAULT_PERIOD_DIGITS = 20
DEFAULT_CF_LIMIT = 1000


class DecimalExpansion(typing.NamedTuple):
    """Exact decimal expansion of a rational number.
    The value is (-1 if negative) * whole_part.initial_segment(period_digits)...,
    where the period repeats forever unless the expansion is terminating.
    """
    negative: bool
    whole_part: int
    initial_segment: str
    period_digits: str
    period_length: int
    is_terminating: bool


def _long_division(rem, d, ndigits):
    digits = []
    for _ in range(ndigits):
        if rem == 0:
            break
        rem *= 10
        digits.append(str(rem // d))
        rem %= d
    return ''.join(digits), rem

def _period_length(reduced):
    # multiplicative order of 10 modulo reduced, which must be coprime to 10
    length = 1
    r = 10 % reduced
    while r != 1 and length < MAX_PERIOD_CHECK:
        r = (r * 10) % reduced
        length += 1
    if r != 1:
        return -1
    else:
        return length

def decimal_expansion(x, max_digits=DEFAULT_PERIOD_DIGITS) -> DecimalExpansion:
    """Compute the decimal expansion of x.
    The initial (non-repeating) segment is always computed in full; at most
    `max_digits` digits of the period are produced. A period length of -1 means
    that the period is longer than MAX_PERIOD_CHECK digits.
    """
    n = int(x.numerator)
    d = int(x.denominator)
    if d <= 0:
        raise ValueError('expected a positive denominator: {}'.format(repr(d)))

    negative = n < 0
    whole, rem = divmod(abs(n), d)
    if rem == 0:
        return DecimalExpansion(negative, whole, '', '', 0, True)

    # the initial segment is as long as the larger power of 2 or 5 in d
    r2, twos = gmp.remove(d, 2)
    reduced, fives = gmp.remove(r2, 5)
    reduced = int(reduced)
    initial, rem = _long_division(rem, d, max(twos, fives))

    if reduced == 1:
        return DecimalExpansion(negative, whole, initial, '', 0, True)

    period_length = _period_length(reduced)
    if period_length == -1 or period_length > max_digits:
        ndigits = max_digits
    else:
        ndigits = period_length
    period, _ = _long_division(rem, d, ndigits)

    return DecimalExpansion(negative, whole, initial, period, period_length, False)

def decimal_string(x, max_digits=DEFAULT_PERIOD_DIGITS) -> str:
    """Exact decimal string for x, with the repeating part in parentheses,
    e.g. "0.1(6)" for 1/6. A period that was cut short ends with "...".
    """
    e = decimal_expansion(x, max_digits=max_digits)
    s = ('-' if e.negative else '') + str(e.whole_part)
    if e.is_terminating:
        if e.initial_segment:
            s += '.' + e.initial_segment
        return s
    else:
        truncated = e.period_length == -1 or e.period_length > len(e.period_digits)
        return '{}.{}({}{})'.format(s, e.initial_segment, e.period_digits, '...' if truncated else '')


def continued_fraction(x, max_terms=DEFAULT_CF_LIMIT) -> typing.List[int]:
    """Regular continued fraction terms of x, using floor division,
    so the first term carries the sign and the rest are positive.
    The expansion is cut off after `max_terms` terms.
    """
    n = int(x.numerator)
    d = int(x.denominator)
    terms = []
    while d != 0 and len(terms) < max_terms:
        q, r = divmod(n, d)
        terms.append(q)
        n, d = d, r
    return terms

def convergents(terms) -> typing.List[typing.Tuple[int, int]]:
    """Convergents (h, k) of a finite sequence of continued fraction terms, using
    h_i = a_i * h_{i-1} + h_{i-2} and k_i = a_i * k_{i-1} + k_{i-2}.
    """
    results = []
    h_prev, h = 0, 1
    k_prev, k = 1, 0
    for a in terms:
        h_prev, h = h, a * h + h_prev
        k_prev, k = k, a * k + k_prev
        results.append((h, k))
    return results
