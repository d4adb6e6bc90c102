from math import gcd
from operator import index
from typing import Dict

from rational import Overflow, ParseError


class IntegerType:
    def __init__(self, name: str, bits: int, signed: bool, wrap: bool = False):
        """
        Describe a fixed-width integer which numerators and denominators are stored in.
        :param name: Identifier of the type, e.g. `int32`.
        :param bits: Width of the type in bits.
        :param signed: Whether negative values can be represented.
        :param wrap: If true, out of range results wrap around (two's complement) instead of raising `Overflow`.
        """
        self.name = name
        self.bits = bits
        self.signed = signed
        self.wrap = wrap

        if signed:
            self.min = -(1 << (bits - 1))
            self.max = (1 << (bits - 1)) - 1
        else:
            self.min = 0
            self.max = (1 << bits) - 1

    def __call__(self, value) -> int:
        """
        Bring an exact integer result into the range of this type according to the overflow policy.
        """
        value = index(value)
        if self.min <= value <= self.max:
            return value
        if not self.wrap:
            raise Overflow("{} does not fit in {}".format(value, self.name))

        value &= (1 << self.bits) - 1
        if value > self.max:
            value -= 1 << self.bits
        return value

    def wrapping(self) -> 'IntegerType':
        """
        The same width and signedness, with wraparound on overflow.
        """
        return IntegerType(self.name, self.bits, self.signed, wrap=True)

    def checked(self) -> 'IntegerType':
        return IntegerType(self.name, self.bits, self.signed, wrap=False)

    def div(self, a: int, b: int) -> int:
        """
        Integer division truncating toward zero, as fixed-width hardware division does.
        """
        q = abs(a) // abs(b)
        return self(q if (a < 0) == (b < 0) else -q)

    def neg(self, a: int) -> int:
        return self(-a)

    def gcd(self, a: int, b: int) -> int:
        """
        Non-negative greatest common divisor. Only used as a divisor, so it is not brought into range; gcd(min, min) is
        one past the maximum of a signed type.
        """
        return gcd(a, b)

    def pow(self, a: int, exponent: int) -> int:
        if self.wrap:
            return self(pow(a, exponent, 1 << self.bits))
        # give up before building a huge intermediate that could never fit
        if abs(a) > 1 and (abs(a).bit_length() - 1) * exponent > self.bits:
            raise Overflow("{}^{} does not fit in {}".format(a, exponent, self.name))
        return self(a ** exponent)

    def __eq__(self, other):
        if not isinstance(other, IntegerType):
            return NotImplemented
        return (self.bits, self.signed, self.wrap) == (other.bits, other.signed, other.wrap)

    def __hash__(self):
        return hash((self.bits, self.signed, self.wrap))

    def __str__(self):
        return self.name

    def __repr__(self):
        return '{}{}'.format(self.name, '.wrapping()' if self.wrap else '')


INT8 = IntegerType('int8', 8, True)
INT16 = IntegerType('int16', 16, True)
INT32 = IntegerType('int32', 32, True)
INT64 = IntegerType('int64', 64, True)
UINT8 = IntegerType('uint8', 8, False)
UINT16 = IntegerType('uint16', 16, False)
UINT32 = IntegerType('uint32', 32, False)
UINT64 = IntegerType('uint64', 64, False)

DEFAULT_TYPE = INT64

TYPES: Dict[str, IntegerType] = {
    t.name: t for t in [INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64]
}

# C names of the integer types, as found on LP64 platforms.
ALIASES: Dict[str, IntegerType] = {
    'int': INT32,
    'long': INT64,
    'long long': INT64,
    'unsigned': UINT32,
    'unsigned int': UINT32,
    'unsigned long': UINT64,
    'unsigned long long': UINT64,
}


def lookup(name: str) -> IntegerType:
    """
    Find an integer type by its name or C alias.
    :param name: Name such as `int32` or `unsigned long`.
    :return: The matching type, always with the checked overflow policy.
    """
    key = ' '.join(str(name).lower().split())
    if key in TYPES:
        return TYPES[key]
    if key in ALIASES:
        return ALIASES[key]
    raise ParseError("Integer type '{}' not defined.".format(name))
