import pytest

from rational import Overflow, ParseError
from rational.integer import INT8, INT16, INT32, INT64, UINT8, UINT64, lookup


def test_ranges() -> None:
    assert (INT8.min, INT8.max) == (-128, 127)
    assert (UINT8.min, UINT8.max) == (0, 255)
    assert INT64.max == 2 ** 63 - 1
    assert UINT64.max == 2 ** 64 - 1


def test_checked_policy() -> None:
    assert INT16(-32768) == -32768
    with pytest.raises(Overflow):
        INT16(32768)
    with pytest.raises(Overflow):
        UINT8(-1)
    with pytest.raises(TypeError):
        INT32(1.5)


def test_wrapping_policy() -> None:
    wrapping = INT8.wrapping()
    assert wrapping(128) == -128
    assert wrapping(-129) == 127
    assert wrapping(256) == 0
    assert UINT8.wrapping()(-1) == 255
    assert wrapping.checked() == INT8
    assert wrapping != INT8


def test_truncating_division() -> None:
    assert INT32.div(7, 2) == 3
    assert INT32.div(-7, 2) == -3
    assert INT32.div(7, -2) == -3
    assert INT32.div(-7, -2) == 3


def test_negation_and_gcd() -> None:
    assert INT8.neg(5) == -5
    with pytest.raises(Overflow):
        INT8.neg(-128)
    with pytest.raises(Overflow):
        UINT8.neg(1)
    assert INT32.gcd(-12, 18) == 6
    assert INT32.gcd(0, 7) == 7
    # one past int8 max, which only ever divides
    assert INT8.gcd(-128, -128) == 128


def test_power() -> None:
    assert INT32.pow(-3, 3) == -27
    with pytest.raises(Overflow):
        INT32.pow(2, 31)
    with pytest.raises(Overflow):
        INT32.pow(10, 10 ** 12)
    assert INT8.wrapping().pow(2, 7) == -128


def test_lookup() -> None:
    assert lookup('int16') is INT16
    assert lookup('long long') is INT64
    assert lookup('Unsigned   Long') is UINT64
    assert lookup('int') is INT32
    with pytest.raises(ParseError):
        lookup('int128')
