"""Tests for exact rationals: normalization, parsing, arithmetic, text and continued fractions."""

import fractions

import gmpy2 as gmp
import pytest

from ratreal.exact import utils
from ratreal.exact.rational import Rational


class TestNormalization:

    def test_reduced_with_positive_denominator(self) -> None:
        x = Rational(6, -4)
        assert x.numerator == -3
        assert x.denominator == 2

    def test_zero_is_zero_over_one(self) -> None:
        x = Rational(0, -7)
        assert x.numerator == 0
        assert x.denominator == 1

    @pytest.mark.parametrize('n, d, k', [(1, 3, 2), (-5, 7, -3), (12, 18, 1000)])
    def test_scaling_both_components(self, n, d, k) -> None:
        assert Rational(n, d) == Rational(k * n, k * d)

    def test_components_coprime(self) -> None:
        x = Rational(2 ** 20 * 3, 2 ** 15 * 9)
        assert gmp.gcd(x.numerator, x.denominator) == 1
        assert x == Rational(32, 3)

    def test_zero_denominator(self) -> None:
        with pytest.raises(utils.DivisionByZero):
            Rational(1, 0)

    def test_division_by_zero_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Rational(1) / 0

    def test_from_other_types(self) -> None:
        assert Rational(gmp.mpz(5)) == Rational(5)
        assert Rational(gmp.mpq(3, 9)) == Rational(1, 3)
        assert Rational(fractions.Fraction(2, 4)) == Rational(1, 2)
        assert Rational(Rational(1, 2), Rational(3, 4)) == Rational(2, 3)

    def test_float_goes_through_decimal(self) -> None:
        assert Rational(0.1) == Rational(1, 10)

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError):
            Rational(True)

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            Rational([1, 2])

    def test_hash_agrees_with_builtins(self) -> None:
        assert hash(Rational(3)) == hash(3)
        assert hash(Rational(1, 2)) == hash(fractions.Fraction(1, 2))
        assert len({Rational(2, 4), Rational(1, 2)}) == 1


class TestParse:

    @pytest.mark.parametrize('text, expected', [
        ('42', Rational(42)),
        ('-7', Rational(-7)),
        ('1/3', Rational(1, 3)),
        (' -2 / 6 ', Rational(-1, 3)),
        ('1.5', Rational(3, 2)),
        ('-0.25', Rational(-1, 4)),
        ('.5', Rational(1, 2)),
        ('0.1(6)', Rational(1, 6)),
        ('0.(3)', Rational(1, 3)),
        ('1.(142857)', Rational(8, 7)),
        ('1.5e2', Rational(150)),
        ('15e-1', Rational(3, 2)),
        ('1..1/2', Rational(3, 2)),
        ('-1..1/2', Rational(-3, 2)),
    ])
    def test_formats(self, text, expected) -> None:
        assert Rational.parse(text) == expected

    @pytest.mark.parametrize('text', ['', 'abc', '1/2/3', '1..2', '1.2.3', '.', '1/'])
    def test_invalid(self, text) -> None:
        with pytest.raises(utils.InvalidFormat):
            Rational.parse(text)

    def test_invalid_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Rational('not a number')

    def test_parse_requires_string(self) -> None:
        with pytest.raises(TypeError):
            Rational.parse(3)


class TestArithmetic:

    def test_basic(self) -> None:
        a = Rational(1, 2)
        b = Rational(1, 3)
        assert a + b == Rational(5, 6)
        assert a - b == Rational(1, 6)
        assert a * b == Rational(1, 6)
        assert a / b == Rational(3, 2)
        assert -a == Rational(-1, 2)
        assert abs(Rational(-2, 3)) == Rational(2, 3)

    def test_mixed_with_int(self) -> None:
        assert 1 + Rational(1, 2) == Rational(3, 2)
        assert 1 - Rational(1, 2) == Rational(1, 2)
        assert 2 * Rational(1, 3) == Rational(2, 3)
        assert 1 / Rational(2, 3) == Rational(3, 2)

    @pytest.mark.parametrize('a, b', [
        (Rational(3, 7), Rational(-5, 11)),
        (Rational(-1), Rational(1, 1000)),
        (Rational(0), Rational(9, 2)),
    ])
    def test_divide_then_multiply(self, a, b) -> None:
        assert a.divide(b).multiply(b) == a

    def test_pow(self) -> None:
        assert Rational(2, 3) ** 3 == Rational(8, 27)
        assert Rational(2, 3) ** -2 == Rational(9, 4)
        assert Rational(-2) ** 0 == Rational(1)
        assert Rational(4).pow(Rational(1, 1) * 2) == Rational(16)

    def test_pow_zero_to_zero(self) -> None:
        with pytest.raises(utils.UndefinedValue):
            Rational(0).pow(0)

    def test_pow_zero_to_negative(self) -> None:
        with pytest.raises(utils.DivisionByZero):
            Rational(0).pow(-1)

    def test_pow_non_integer_exponent(self) -> None:
        with pytest.raises(ValueError):
            Rational(2).pow(Rational(1, 2))

    def test_reciprocal(self) -> None:
        assert Rational(-3, 4).reciprocal() == Rational(-4, 3)
        with pytest.raises(utils.DivisionByZero):
            Rational(0).reciprocal()

    def test_floor_ceil_int(self) -> None:
        x = Rational(-3, 2)
        assert x.floor() == -2
        assert x.ceil() == -1
        assert int(x) == -1
        assert int(Rational(7, 2)) == 3
        assert float(Rational(1, 4)) == 0.25

    def test_scale10(self) -> None:
        assert Rational(3, 2).scale10(2) == Rational(150)
        assert Rational(3, 2).scale10(-2) == Rational(3, 200)


class TestComparison:

    def test_compareto(self) -> None:
        assert Rational(1, 3).compareto(Rational(1, 2)) == -1
        assert Rational(2, 4).compareto(Rational(1, 2)) == 0
        assert Rational(-1, 3).compareto(Rational(-1, 2)) == 1

    def test_operators(self) -> None:
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(1, 2) <= Rational(2, 4)
        assert Rational(1) > Rational(99, 100)
        assert Rational(5) >= 5
        assert Rational(3) == 3
        assert Rational(1, 2) != Rational(1, 3)

    def test_named_comparisons(self) -> None:
        a = Rational(1, 3)
        assert a.less_than(Rational(1, 2))
        assert a.less_than_or_equal(a)
        assert a.greater_than(0)
        assert a.greater_than_or_equal(Rational(1, 3))
        assert a.equals(Rational(2, 6))

    def test_unrelated_type_not_equal(self) -> None:
        assert Rational(1) != 'one'

    def test_fractions_compare_equal(self) -> None:
        assert Rational(1, 2) == fractions.Fraction(1, 2)
        assert fractions.Fraction(1, 2) == Rational(1, 2)
        assert Rational(1, 3) != fractions.Fraction(1, 2)
        assert len({Rational(1, 2), fractions.Fraction(1, 2)}) == 1

    def test_fractions_mix(self) -> None:
        assert Rational(1, 3) < fractions.Fraction(1, 2)
        assert fractions.Fraction(1, 2) > Rational(1, 3)
        assert Rational(1, 3) + fractions.Fraction(1, 6) == Rational(1, 2)
        assert isinstance(fractions.Fraction(1, 6) + Rational(1, 3), Rational)


class TestText:

    def test_str_and_repr(self) -> None:
        assert str(Rational(3)) == '3'
        assert str(Rational(-1, 2)) == '-1/2'
        assert repr(Rational(1, 2)) == 'Rational(1, 2)'

    def test_mixed_string(self) -> None:
        assert Rational(-3, 2).to_mixed_string() == '-1..1/2'
        assert Rational(1, 2).to_mixed_string() == '1/2'
        assert Rational(4).to_mixed_string() == '4'

    def test_mixed_string_parses_back(self) -> None:
        x = Rational(-22, 7)
        assert Rational.parse(x.to_mixed_string()) == x

    @pytest.mark.parametrize('x, text', [
        (Rational(1, 6), '0.1(6)'),
        (Rational(3, 8), '0.375'),
        (Rational(-5, 4), '-1.25'),
        (Rational(22, 7), '3.(142857)'),
        (Rational(7), '7'),
    ])
    def test_decimal_string(self, x, text) -> None:
        assert x.to_decimal_string() == text

    def test_decimal_string_truncated_period(self) -> None:
        assert Rational(1, 7).to_decimal_string(max_digits=3) == '0.(142...)'


class TestContinuedFractions:

    def test_terms(self) -> None:
        assert Rational(415, 93).to_continued_fraction() == [4, 2, 6, 7]

    def test_negative_terms(self) -> None:
        assert Rational(-7, 3).to_continued_fraction() == [-3, 1, 2]

    def test_from_terms(self) -> None:
        assert Rational.from_continued_fraction([4, 2, 6, 7]) == Rational(415, 93)
        assert Rational.from_continued_fraction([-3, 1, 2]) == Rational(-7, 3)

    def test_from_terms_invalid(self) -> None:
        with pytest.raises(ValueError):
            Rational.from_continued_fraction([])
        with pytest.raises(ValueError):
            Rational.from_continued_fraction([1, 0])

    def test_convergents(self) -> None:
        assert Rational(415, 93).convergents() == [
            Rational(4), Rational(9, 2), Rational(58, 13), Rational(415, 93)]

    def test_best_approximation(self) -> None:
        pi = Rational('3.14159265358979')
        assert pi.best_approximation(10) == Rational(22, 7)
        assert pi.best_approximation(1000) == Rational(355, 113)

    def test_best_approximation_invalid(self) -> None:
        with pytest.raises(ValueError):
            Rational(1, 2).best_approximation(0)
