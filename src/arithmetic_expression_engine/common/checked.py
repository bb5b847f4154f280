"""Signed 64-bit integer arithmetic with overflow detection."""
from typing import Annotated

from pydantic import Field

from arithmetic_expression_engine.common.errors import (
    DivisionByZeroError,
    Int64OverflowError,
    NegativeFactorialError,
)

INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# Pydantic field type for values that must fit in 64 signed bits
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


def to_int64(value: int, operation: str = "conversion") -> int:
    """
    Return ``value`` unchanged if it fits in 64 signed bits.

    :param int value: Exact integer result
    :param str operation: Description used in the error message

    :return: The same value
    :rtype: int
    :raises Int64OverflowError: If the value is out of range
    """
    if value < INT64_MIN or value > INT64_MAX:
        raise Int64OverflowError(operation)
    return value


def add(a: int, b: int) -> int:
    """
    Checked addition.

    :param int a: Left operand
    :param int b: Right operand

    :return: a + b
    :rtype: int
    :raises Int64OverflowError: If the sum does not fit in 64 bits
    """
    return to_int64(a + b, f"{a} + {b}")


def sub(a: int, b: int) -> int:
    """
    Checked subtraction.

    :return: a - b
    :rtype: int
    :raises Int64OverflowError: If the difference does not fit in 64 bits
    """
    return to_int64(a - b, f"{a} - {b}")


def mul(a: int, b: int) -> int:
    """
    Checked multiplication.

    :return: a * b
    :rtype: int
    :raises Int64OverflowError: If the product does not fit in 64 bits
    """
    return to_int64(a * b, f"{a} * {b}")


def negate(value: int) -> int:
    """Checked sign change; only INT64_MIN overflows."""
    return to_int64(-value, f"-({value})")


def _truncating_div(a: int, b: int) -> int:
    # Python's // floors; 64-bit integer division truncates toward zero
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def div(a: int, b: int) -> int:
    """
    Divide truncating toward zero.

    :raises DivisionByZeroError: If ``b`` is zero
    :raises Int64OverflowError: For ``INT64_MIN / -1``
    """
    if b == 0:
        raise DivisionByZeroError(f"{a} / {b}")
    return to_int64(_truncating_div(a, b), f"{a} / {b}")


def mod(a: int, b: int) -> int:
    """
    Remainder with the sign of the dividend.

    The result always lies within the operands' range, so it is not overflow-checked.

    :raises DivisionByZeroError: If ``b`` is zero
    """
    if b == 0:
        raise DivisionByZeroError(f"{a} % {b}")
    return a - b * _truncating_div(a, b)


def power(base: int, exp: int) -> int:
    """
    Raise ``base`` to ``exp`` by repeated checked multiplication.

    A negative exponent follows integer division: ``1 / base**-exp`` truncated.

    :param int base: Base
    :param int exp: Exponent

    :return: Exact 64-bit result
    :rtype: int
    :raises Int64OverflowError: If any intermediate product overflows
    :raises DivisionByZeroError: For zero raised to a negative exponent
    """
    if exp < 0:
        if base == 0:
            raise DivisionByZeroError(f"{base} ^ {exp}")
        if base == 1:
            return 1
        if base == -1:
            return 1 if exp % 2 == 0 else -1
        return 0

    # |base| <= 1 never overflows, and the loop could be arbitrarily long
    if base in (0, 1):
        return 1 if exp == 0 else base
    if base == -1:
        return 1 if exp % 2 == 0 else -1

    result = 1
    for _ in range(exp):
        result = to_int64(result * base, f"{base} ^ {exp}")
    return result


def factorial(n: int) -> int:
    """
    Checked product of ``2..n`` (1 when ``n < 2``).

    :raises NegativeFactorialError: If ``n`` is negative
    :raises Int64OverflowError: If the product overflows
    """
    if n < 0:
        raise NegativeFactorialError(n)
    result = 1
    for i in range(2, n + 1):
        result = to_int64(result * i, f"{n}!")
    return result
