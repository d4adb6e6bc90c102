import re
from math import gcd
from numbers import Integral
from typing import Optional

from rational import DenominatorZero, DivisionByZero, Operand, Overflow, Pair, ParseError
from rational.floats import DOUBLE, FloatFormat, decompose
from rational.integer import DEFAULT_TYPE, IntegerType

text_pattern = re.compile(r'\s*([+-]?\d+)\s*(?:/\s*([+-]?\d+))?\s*$')


class Rational:
    """
    An exact fraction whose numerator and denominator are stored in a fixed-width integer type.

    Values are always kept in canonical form: the numerator and denominator are co-prime and the denominator is greater
    than zero. Results which do not fit the integer type raise `Overflow`, unless the type wraps.

    Rationals are mutable through `assign`, the field setters and augmented assignment (`+=` and friends change the left
    operand in place), so they are not hashable.
    """

    __slots__ = ('dtype', '_numerator', '_denominator')
    __hash__ = None

    def __init__(self, numerator=0, denominator=1, dtype: Optional[IntegerType] = None):
        """
        Create a new rational.
        :param numerator: An integer, a float (converted exactly) or a rational to copy.
        :param denominator: Must not be zero. Only meaningful with an integer numerator.
        :param dtype: Integer type of both fields. Defaults to that of a copied rational, otherwise int64.
        """
        if isinstance(numerator, Rational):
            if denominator != 1:
                raise TypeError("A copied rational does not take a denominator.")
            self.dtype = numerator.dtype if dtype is None else dtype
            self.assign(numerator._numerator, numerator._denominator)
        elif isinstance(numerator, float):
            if denominator != 1:
                raise TypeError("A converted float does not take a denominator.")
            self.dtype = DEFAULT_TYPE if dtype is None else dtype
            self.assign_float(numerator)
        else:
            self.dtype = DEFAULT_TYPE if dtype is None else dtype
            self.assign(numerator, denominator)

    @classmethod
    def from_float(cls, value: float, dtype: Optional[IntegerType] = None, fmt: FloatFormat = DOUBLE) -> 'Rational':
        """
        Convert a finite float into the exact fraction it represents.
        :param value: The float to convert; infinities and NaN raise `NonFinite`.
        :param dtype: Integer type of the result.
        :param fmt: Binary format the value is taken to be in.
        """
        self = cls.__new__(cls)
        self.dtype = DEFAULT_TYPE if dtype is None else dtype
        self.assign_float(value, fmt)
        return self

    @classmethod
    def from_str(cls, text: str, dtype: Optional[IntegerType] = None) -> 'Rational':
        """
        Parse the `numerator/denominator` form written by `str`. The denominator is optional and defaults to 1.
        """
        m = text_pattern.match(text)
        if m is None:
            raise ParseError('Malformed rational: ' + text)
        return cls(int(m[1]), 1 if m[2] is None else int(m[2]), dtype)

    def assign(self, numerator: int, denominator: int = 1):
        """
        Replace both fields at once. Nothing changes if the denominator is zero or the pair does not fit.
        """
        t = self.dtype
        numerator, denominator = t(numerator), t(denominator)
        if denominator == 0:
            raise DenominatorZero("Denominator can not be zero.")

        self._numerator, self._denominator = self._canonize(numerator, denominator)

    def assign_float(self, value: float, fmt: FloatFormat = DOUBLE):
        numerator, denominator = decompose(value, fmt)
        # reduce exactly first so values like 0.5 fit narrow types
        g = gcd(numerator, denominator)
        self.assign(numerator // g, denominator // g)

    def _canonize(self, numerator: int, denominator: int) -> Pair:
        t = self.dtype
        g = t.gcd(numerator, denominator)
        numerator, denominator = t.div(numerator, g), t.div(denominator, g)

        if denominator < 0:
            numerator, denominator = t.neg(numerator), t.neg(denominator)
            if denominator < 0:
                # only reachable when the minimum of a wrapping type is negated
                raise Overflow("Denominator can not be made positive in {}".format(t))
        return numerator, denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @numerator.setter
    def numerator(self, value: int):
        self.assign(value, self._denominator)

    @property
    def denominator(self) -> int:
        return self._denominator

    @denominator.setter
    def denominator(self, value: int):
        self.assign(self._numerator, value)

    def copy(self) -> 'Rational':
        return Rational(self)

    def _operand(self, other: Operand) -> Optional[Pair]:
        """
        Numerator and denominator of the other side of an operator, or None if it is not supported.
        """
        if isinstance(other, Rational):
            if other.dtype != self.dtype:
                raise TypeError("Can not combine rationals of {!r} and {!r}.".format(self.dtype, other.dtype))
            return other._numerator, other._denominator
        if isinstance(other, Integral):
            return self.dtype(other), 1
        return None

    # Comparison

    def __eq__(self, other):
        if isinstance(other, Rational):
            return (self._numerator, self._denominator) == (other._numerator, other._denominator)
        if isinstance(other, Integral):
            return self._denominator == 1 and self._numerator == other
        return NotImplemented

    def _compare(self, other: Operand) -> Optional[int]:
        t = self.dtype
        if isinstance(other, Integral) and not t.min <= other <= t.max:
            # no value of the element type equals it, so compare exactly: a/b < n iff a < bn
            lhs, rhs = self._numerator, self._denominator * int(other)
            return (lhs > rhs) - (lhs < rhs)

        pair = self._operand(other)
        if pair is None:
            return None
        c, d = pair
        if (self._numerator, self._denominator) == (c, d):
            return 0

        # a/b < c/d iff ad < bc, since both denominators are positive
        lhs, rhs = t(self._numerator * d), t(self._denominator * c)
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other):
        c = self._compare(other)
        return NotImplemented if c is None else c < 0

    def __le__(self, other):
        c = self._compare(other)
        return NotImplemented if c is None else c <= 0

    def __gt__(self, other):
        c = self._compare(other)
        return NotImplemented if c is None else c > 0

    def __ge__(self, other):
        c = self._compare(other)
        return NotImplemented if c is None else c >= 0

    # Arithmetic assignment

    def __iadd__(self, other):
        pair = self._operand(other)
        if pair is None:
            return NotImplemented
        t = self.dtype
        a, b = self._numerator, self._denominator
        c, d = pair

        # a / b + c / d = (ad + bc) / bd
        self.assign(t(t(a * d) + t(b * c)), t(b * d))
        return self

    def __isub__(self, other):
        pair = self._operand(other)
        if pair is None:
            return NotImplemented
        t = self.dtype
        a, b = self._numerator, self._denominator
        c, d = pair

        # a / b - c / d = (ad - bc) / bd
        self.assign(t(t(a * d) - t(b * c)), t(b * d))
        return self

    def __imul__(self, other):
        pair = self._operand(other)
        if pair is None:
            return NotImplemented
        t = self.dtype
        c, d = pair

        # a / b * c / d = ac / bd
        self.assign(t(self._numerator * c), t(self._denominator * d))
        return self

    def __itruediv__(self, other):
        pair = self._operand(other)
        if pair is None:
            return NotImplemented
        t = self.dtype
        c, d = pair
        if c == 0:
            raise DivisionByZero("Division by zero.")

        # a / b / c / d = ad / bc
        self.assign(t(self._numerator * d), t(self._denominator * c))
        return self

    def increment(self) -> 'Rational':
        """
        Add exactly one whole unit in place.
        """
        self.assign(self.dtype(self._numerator + self._denominator), self._denominator)
        return self

    def decrement(self) -> 'Rational':
        """
        Subtract exactly one whole unit in place.
        """
        self.assign(self.dtype(self._numerator - self._denominator), self._denominator)
        return self

    # Binary arithmetic, the left operand is never changed

    def __add__(self, other):
        return self.copy().__iadd__(other)

    def __sub__(self, other):
        return self.copy().__isub__(other)

    def __mul__(self, other):
        return self.copy().__imul__(other)

    def __truediv__(self, other):
        return self.copy().__itruediv__(other)

    __radd__ = __add__
    __rmul__ = __mul__

    def __rsub__(self, other):
        if not isinstance(other, Integral):
            return NotImplemented
        return Rational(other, 1, self.dtype).__isub__(self)

    def __rtruediv__(self, other):
        if not isinstance(other, Integral):
            return NotImplemented
        return Rational(other, 1, self.dtype).__itruediv__(self)

    # Unary arithmetic

    def __pos__(self):
        return self.copy()

    def __neg__(self):
        return Rational(self.dtype.neg(self._numerator), self._denominator, self.dtype)

    def reciprocal(self) -> 'Rational':
        if self._numerator == 0:
            raise DivisionByZero("Reciprocal of zero.")
        return Rational(self._denominator, self._numerator, self.dtype)

    __invert__ = reciprocal

    def __abs__(self):
        return Rational(self.dtype(abs(self._numerator)), self._denominator, self.dtype)

    def __pow__(self, exponent, modulo=None):
        """
        Raise the numerator and denominator to an integer power independently. A negative exponent raises the
        reciprocal instead.
        """
        if modulo is not None or not isinstance(exponent, Integral):
            return NotImplemented
        base = self if exponent >= 0 else self.reciprocal()
        exponent = abs(int(exponent))
        t = self.dtype
        return Rational(t.pow(base._numerator, exponent), t.pow(base._denominator, exponent), t)

    # Conversion

    def evaluate(self, target=float):
        """
        Divide the numerator by the denominator after converting both to `target`. An `int` target divides with
        truncation toward zero, like integer division.
        """
        if target is int:
            return self.dtype.div(self._numerator, self._denominator)
        return target(self._numerator) / target(self._denominator)

    def __float__(self):
        return self.evaluate(float)

    def __int__(self):
        return self.evaluate(int)

    def __bool__(self):
        return self._numerator != 0

    def __str__(self):
        return '{}/{}'.format(self._numerator, self._denominator)

    def __repr__(self):
        return 'Rational({}, {}, {!r})'.format(self._numerator, self._denominator, self.dtype)
