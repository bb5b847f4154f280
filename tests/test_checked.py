"""Test checked 64-bit arithmetic."""
import pytest

from arithmetic_expression_engine.common import checked
from arithmetic_expression_engine.common.checked import INT64_MAX, INT64_MIN
from arithmetic_expression_engine.common.errors import (
    DivisionByZeroError,
    Int64OverflowError,
    NegativeFactorialError,
)


@pytest.mark.parametrize("fn,a,b,expected", [
    (checked.add, 2, 3, 5),
    (checked.sub, 2, 3, -1),
    (checked.mul, -4, 3, -12),
    (checked.add, INT64_MAX, 0, INT64_MAX),
    (checked.sub, INT64_MIN, 0, INT64_MIN),
])
def test_basic_operations(fn, a, b, expected):
    """Checked operations return exact results inside the 64-bit range."""
    assert fn(a, b) == expected


@pytest.mark.parametrize("fn,a,b", [
    (checked.add, INT64_MAX, 1),
    (checked.sub, INT64_MIN, 1),
    (checked.mul, 2**32, 2**32),
    (checked.div, INT64_MIN, -1),
])
def test_overflow_is_detected(fn, a, b):
    """Results outside the 64-bit range raise instead of wrapping."""
    with pytest.raises(Int64OverflowError):
        fn(a, b)


@pytest.mark.parametrize("a,b,expected", [
    (7, 2, 3),
    (-7, 2, -3),
    (7, -2, -3),
    (-7, -2, 3),
])
def test_div_truncates_toward_zero(a, b, expected):
    """Division rounds toward zero whatever the signs."""
    assert checked.div(a, b) == expected


@pytest.mark.parametrize("a,b,expected", [
    (7, 3, 1),
    (-7, 3, -1),
    (7, -3, 1),
    (-7, -3, -1),
    (INT64_MIN, -1, 0),
])
def test_mod_takes_sign_of_dividend(a, b, expected):
    """The remainder carries the sign of the dividend."""
    assert checked.mod(a, b) == expected


@pytest.mark.parametrize("fn", [checked.div, checked.mod])
def test_division_by_zero(fn):
    """Dividing or taking a remainder by zero raises DivisionByZeroError."""
    with pytest.raises(DivisionByZeroError):
        fn(1, 0)


def test_division_by_zero_is_also_zero_division_error():
    """Callers catching the builtin exception still see the failure."""
    with pytest.raises(ZeroDivisionError):
        checked.div(1, 0)


@pytest.mark.parametrize("base,exp,expected", [
    (2, 10, 1024),
    (2, 0, 1),
    (0, 0, 1),
    (-3, 3, -27),
    (1, 10**12, 1),
    (-1, 10**12 + 1, -1),
    (2, 62, 2**62),
    (-2, 63, INT64_MIN),
    (2, -1, 0),
    (-1, -3, -1),
    (1, -5, 1),
])
def test_power(base, exp, expected):
    """Power handles zero, one, minus one, negative and large exponents."""
    assert checked.power(base, exp) == expected


def test_power_overflow():
    """2^63 does not fit in a signed 64-bit integer."""
    with pytest.raises(Int64OverflowError):
        checked.power(2, 63)


def test_power_zero_to_negative():
    """Zero to a negative exponent is a division by zero."""
    with pytest.raises(DivisionByZeroError):
        checked.power(0, -1)


def test_negate():
    """Negation is checked; only INT64_MIN overflows."""
    assert checked.negate(5) == -5
    with pytest.raises(Int64OverflowError):
        checked.negate(INT64_MIN)


@pytest.mark.parametrize("n,expected", [
    (0, 1),
    (1, 1),
    (5, 120),
    (20, 2432902008176640000),
])
def test_factorial(n, expected):
    """Factorial is the product 2..n, 1 below 2."""
    assert checked.factorial(n) == expected


def test_factorial_overflow():
    """21! does not fit in 64 bits."""
    with pytest.raises(Int64OverflowError):
        checked.factorial(21)


def test_factorial_negative():
    """Negative factorial is rejected and reports its value."""
    with pytest.raises(NegativeFactorialError) as exc_info:
        checked.factorial(-3)
    assert exc_info.value.value == -3
