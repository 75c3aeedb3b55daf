"""Conversions between exact rationals and GMP/MPFR numbers,
and floating-point estimates used to seed exact iterations.
"""


import gmpy2 as gmp

from . import rational


def _mpfr_context(prec, rm):
    return gmp.context(
        precision=prec,
        emin=gmp.get_emin_min(),
        emax=gmp.get_emax_max(),
        subnormalize=False,
        trap_underflow=True,
        trap_overflow=True,
        trap_inexact=False,
        trap_invalid=True,
        trap_erange=True,
        trap_divzero=True,
        round=rm,
    )

def rational_to_mpfr(x, prec=53, rm=gmp.RoundToNearest):
    """Round a Rational to an mpfr with prec bits, in rounding mode rm
    (one of gmp.RoundToNearest, gmp.RoundDown, gmp.RoundUp, gmp.RoundToZero).
    """
    if prec < 2:
        raise ValueError('precision must be at least 2 bits: {}'.format(repr(prec)))
    with _mpfr_context(prec, rm):
        return gmp.mpfr(gmp.mpq(x.numerator, x.denominator))

def mpfr_to_rational(x):
    """The exact value of a finite mpfr, as a Rational."""
    if gmp.is_nan(x) or gmp.is_infinite(x):
        raise ValueError('expected a finite mpfr: {}'.format(repr(x)))

    m, exp = x.as_mantissa_exp()
    m = int(m)
    exp = int(exp)
    if exp >= 0:
        return rational.Rational(m * (2 ** exp))
    else:
        return rational.Rational(m, 2 ** -exp)

def root_estimate(q, n, prec=53):
    """A rational approximation of the positive real n-th root of a positive Rational q,
    computed with prec bits of MPFR precision. Only an estimate: there is no guarantee
    about which side of the true root it lies on.
    """
    if n < 1:
        raise ValueError('expected a positive root index: {}'.format(repr(n)))
    if q.sign() <= 0:
        raise ValueError('expected a positive radicand: {}'.format(str(q)))

    with _mpfr_context(prec, gmp.RoundToNearest):
        estimate = gmp.rootn(gmp.mpfr(gmp.mpq(q.numerator, q.denominator)), n)
    return mpfr_to_rational(estimate)
