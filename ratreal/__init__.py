import logging

from .exact import utils, ops, rational, expansion, gmpmath
from .arithmetic import interval, oracle, combinators, roots, contfrac

logging.getLogger(__name__).addHandler(logging.NullHandler())

Rational = rational.Rational
RationalInterval = interval.RationalInterval
decimal_expansion = expansion.decimal_expansion

OP = ops.OP
Verdict = ops.Verdict
OperandKind = ops.OperandKind

Oracle = oracle.Oracle
halo = oracle.halo
from_rational = oracle.from_rational
from_interval = oracle.from_interval
from_function = oracle.from_function
to_oracle = oracle.to_oracle

CompoundOracle = combinators.CompoundOracle
negate = combinators.negate
add = combinators.add
subtract = combinators.subtract
multiply = combinators.multiply
divide = combinators.divide

nth_root = roots.nth_root
sqrt = roots.sqrt

CFStream = contfrac.CFStream
from_continued_fraction = contfrac.from_continued_fraction
cf_from_terms = contfrac.cf_from_terms
cf_sqrt2 = contfrac.cf_sqrt2
cf_e = contfrac.cf_e
cf_phi = contfrac.cf_phi
convergent = contfrac.convergent

RatrealError = utils.RatrealError
InvalidFormat = utils.InvalidFormat
DivisionByZero = utils.DivisionByZero
IntervalSpansZero = utils.IntervalSpansZero
UndefinedValue = utils.UndefinedValue
DivisionSingularity = utils.DivisionSingularity
RatrealWarning = utils.RatrealWarning
PrecisionUnreachable = utils.PrecisionUnreachable
