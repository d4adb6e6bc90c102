from numbers import Integral

from rational import Operand
from rational.integer import ALIASES, IntegerType
from rational.number import Rational


# Literal constructors, one per C integer type.

def r(value: int) -> Rational:
    return Rational(value, 1, ALIASES['int'])


def lr(value: int) -> Rational:
    return Rational(value, 1, ALIASES['long'])


def llr(value: int) -> Rational:
    return Rational(value, 1, ALIASES['long long'])


def ur(value: int) -> Rational:
    return Rational(value, 1, ALIASES['unsigned int'])


def ulr(value: int) -> Rational:
    return Rational(value, 1, ALIASES['unsigned long'])


def ullr(value: int) -> Rational:
    return Rational(value, 1, ALIASES['unsigned long long'])


def numerator(value: Operand) -> int:
    """
    Numerator of a rational, or the integer itself, so code can treat both uniformly.
    """
    if isinstance(value, Rational):
        return value.numerator
    if isinstance(value, Integral):
        return value
    raise TypeError("Expected a rational or an integer, got {}".format(type(value).__name__))


def denominator(value: Operand) -> int:
    """
    Denominator of a rational, or 1 for an integer.
    """
    if isinstance(value, Rational):
        return value.denominator
    if isinstance(value, Integral):
        return 1
    raise TypeError("Expected a rational or an integer, got {}".format(type(value).__name__))


def rational_cast(value, target):
    """
    Convert between rationals and plain numbers.

    rational_cast(Rational(1, 4), float) == 0.25
    rational_cast(0.25, INT32) == Rational(1, 4, INT32)

    :param value: A rational, or an integer or float to convert to one.
    :param target: An arithmetic type when converting a rational, otherwise the integer type of the new rational.
    """
    if isinstance(value, Rational):
        return value.evaluate(target)
    if not isinstance(target, IntegerType):
        raise TypeError("Converting to a rational needs an integer type, got {!r}".format(target))
    if isinstance(value, Integral):
        return Rational(value, 1, target)
    if isinstance(value, float):
        return Rational.from_float(value, target)
    raise TypeError("Can not convert {} to a rational".format(type(value).__name__))


def absolute(value: Rational) -> Rational:
    return abs(value)


def power(value: Rational, exponent: int) -> Rational:
    return value ** exponent
