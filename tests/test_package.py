"""Tests for the top-level package interface."""

import logging

import pytest

import ratreal


class TestExports:

    @pytest.mark.parametrize('name', [
        'Rational', 'RationalInterval', 'Oracle', 'CompoundOracle', 'Verdict', 'OP',
        'halo', 'from_rational', 'from_interval', 'from_function', 'to_oracle',
        'negate', 'add', 'subtract', 'multiply', 'divide', 'nth_root', 'sqrt',
        'CFStream', 'from_continued_fraction', 'cf_from_terms', 'cf_sqrt2', 'cf_e', 'cf_phi',
        'convergent', 'decimal_expansion',
        'RatrealError', 'InvalidFormat', 'DivisionByZero', 'IntervalSpansZero',
        'UndefinedValue', 'DivisionSingularity', 'PrecisionUnreachable',
    ])
    def test_exported(self, name) -> None:
        assert hasattr(ratreal, name)

    def test_error_hierarchy(self) -> None:
        for cls in [ratreal.InvalidFormat, ratreal.DivisionByZero, ratreal.IntervalSpansZero,
                    ratreal.UndefinedValue, ratreal.DivisionSingularity]:
            assert issubclass(cls, ratreal.RatrealError)
        assert issubclass(ratreal.InvalidFormat, ValueError)
        assert issubclass(ratreal.PrecisionUnreachable, UserWarning)

    def test_library_logger_is_quiet(self) -> None:
        handlers = logging.getLogger('ratreal').handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestUsage:

    @pytest.mark.asyncio
    async def test_readme_example(self) -> None:
        phi = ratreal.divide(ratreal.add(1, ratreal.sqrt(5)), 2)
        yes = await phi.narrow('1/1000000')
        assert yes.width() <= ratreal.Rational(1, 10 ** 6)
        verdict, _ = await phi.classify(ratreal.RationalInterval('1.618', '1.619'))
        assert verdict == ratreal.Verdict.MATCH
