"""Tests for conversions between Rationals and MPFR numbers."""

import gmpy2 as gmp
import pytest

from ratreal.exact import gmpmath
from ratreal.exact.rational import Rational


class TestConversions:

    def test_directed_rounding_brackets(self) -> None:
        third = Rational(1, 3)
        lo = gmpmath.mpfr_to_rational(gmpmath.rational_to_mpfr(third, prec=24, rm=gmp.RoundDown))
        hi = gmpmath.mpfr_to_rational(gmpmath.rational_to_mpfr(third, prec=24, rm=gmp.RoundUp))
        assert lo < third < hi

    def test_exact_values_round_trip(self) -> None:
        for x in [Rational(1, 2), Rational(-3, 8), Rational(5), Rational(0)]:
            assert gmpmath.mpfr_to_rational(gmpmath.rational_to_mpfr(x)) == x

    def test_mpfr_to_rational(self) -> None:
        assert gmpmath.mpfr_to_rational(gmp.mpfr('0.5')) == Rational(1, 2)
        assert gmpmath.mpfr_to_rational(gmp.mpfr(-6)) == Rational(-6)

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError):
            gmpmath.mpfr_to_rational(gmp.mpfr('nan'))
        with pytest.raises(ValueError):
            gmpmath.mpfr_to_rational(gmp.mpfr('inf'))

    def test_precision_too_small(self) -> None:
        with pytest.raises(ValueError):
            gmpmath.rational_to_mpfr(Rational(1, 3), prec=1)


class TestRootEstimate:

    def test_square_root(self) -> None:
        r = gmpmath.root_estimate(Rational(2), 2)
        assert abs(r * r - 2) < Rational(1, 10 ** 12)

    def test_cube_root(self) -> None:
        r = gmpmath.root_estimate(Rational(27), 3)
        assert abs(r - 3) < Rational(1, 10 ** 12)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            gmpmath.root_estimate(Rational(-1), 2)
        with pytest.raises(ValueError):
            gmpmath.root_estimate(Rational(2), 0)
