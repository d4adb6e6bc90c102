import math
import struct
import sys
from typing import Dict

from rational import NonFinite, Overflow, Pair, ParseError, Underflow


class FloatFormat:
    def __init__(self, name: str, digits: int, max_exponent: int, code: str):
        """
        An IEEE-754 binary floating point format.
        :param name: Identifier of the format.
        :param digits: Number of significand bits, including the implicit one.
        :param max_exponent: One more than the largest binary exponent of a finite value.
        :param code: `struct` format character of the format, used to round values into it.
        """
        self.name = name
        self.digits = digits
        self.max_exponent = max_exponent
        self.code = code

    def round(self, value: float) -> float:
        """
        Round a Python float to the nearest value of this format.
        """
        if self.code == 'd':
            return value
        try:
            return struct.unpack(self.code, struct.pack(self.code, value))[0]
        except OverflowError:
            raise Overflow("{} is out of range for {} precision".format(value, self.name))

    def __str__(self):
        return self.name


DOUBLE = FloatFormat('double', sys.float_info.mant_dig, sys.float_info.max_exp, 'd')
SINGLE = FloatFormat('single', 24, 128, 'f')
HALF = FloatFormat('half', 11, 16, 'e')

FORMATS: Dict[str, FloatFormat] = {f.name: f for f in [DOUBLE, SINGLE, HALF]}


def lookup(name: str) -> FloatFormat:
    if name not in FORMATS:
        raise ParseError("Float format '{}' not defined.".format(name))
    return FORMATS[name]


def decompose(value: float, fmt: FloatFormat = DOUBLE) -> Pair:
    """
    Split a finite float into an integer numerator and denominator whose quotient is exactly the value. The value is
    first rounded to `fmt`. The pair is not reduced, and its denominator is always a power of two.

    Normal values are decomposed exactly. Subnormals, below 2^(2 - max_exponent), are scaled to a denominator of
    2^(max_exponent - 1) first, dropping the low bits of the numerator, so they may lose precision or vanish entirely.

    :param value: The float to decompose.
    :param fmt: Format the value is taken to be in.
    :return: (numerator, denominator)
    """
    if not math.isfinite(value):
        raise NonFinite("Value can not be infinite or NaN: {}".format(value))

    significand, exponent = math.frexp(fmt.round(value))
    numerator = int(significand * 2.0 ** fmt.digits)
    denominator = 1
    exponent -= fmt.digits

    if exponent > 0:
        numerator <<= exponent
    elif exponent < 0:
        exponent = -exponent
        limit = fmt.max_exponent - 1
        if exponent >= limit - 1 + fmt.digits:
            # truncate toward zero, as integer division does
            scaled = abs(numerator) >> (exponent - limit)
            numerator = scaled if numerator >= 0 else -scaled
            denominator <<= limit
            if numerator == 0:
                raise Underflow("Value evaluates to zero due to being too small: {}".format(value))
        else:
            denominator <<= exponent

    return numerator, denominator
