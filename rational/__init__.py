from typing import Tuple, Union

Pair = Tuple[int, int]

# Anything the arithmetic operators accept on the other side of a rational.
Operand = Union[int, 'Rational']


class RationalError(ArithmeticError):
    pass


class DenominatorZero(RationalError, ValueError):
    pass


class DivisionByZero(RationalError, ZeroDivisionError):
    pass


class NonFinite(RationalError, ValueError):
    pass


class Underflow(RationalError):
    pass


class Overflow(RationalError, OverflowError):
    pass


class ParseError(RuntimeError):
    pass
