"""Test summation over a range of variable values."""
import pytest

from arithmetic_expression_engine.combinatorics.summation import Summation
from arithmetic_expression_engine.common.errors import Int64OverflowError, UndefinedVariableError
from arithmetic_expression_engine.core.expression import Expression


@pytest.mark.parametrize("expr,start,end,expected", [
    ("k^2", 1, 10, 385),
    ("k", 1, 10, 55),
    ("2*k + 1", 0, 4, 25),
    ("k!", 0, 3, 10),
    ("k", 5, 4, 0),
])
def test_summation(expr, start, end, expected):
    """Sums over the inclusive range, 0 for an empty range."""
    total = Summation(start=start, end=end, expression=Expression.from_string(expr))
    assert total.as_int64() == expected


def test_custom_variable_name():
    """The summation variable can be renamed."""
    e = Expression()
    e.add_variable("j")
    assert Summation(start=1, end=3, expression=e, variable="j").as_int64() == 6


def test_binding_replaces_stored_variables():
    """The summation binding replaces the expression's own."""
    e = Expression.from_string("k", {"k": 100})
    assert Summation(start=1, end=2, expression=e).as_int64() == 3


def test_errors_propagate():
    """A failing term fails the whole sum."""
    e = Expression.from_string("k")
    with pytest.raises(UndefinedVariableError):
        Summation(start=1, end=2, expression=e, variable="j").as_int64()


def test_sum_overflow():
    """The running total is overflow-checked."""
    e = Expression.from_string("9223372036854775807")
    with pytest.raises(Int64OverflowError):
        Summation(start=1, end=2, expression=e).as_int64()


def test_summation_as_numeric_value():
    """A summation can be used as a numeric value in another expression."""
    outer = Expression.from_string("2 *")
    outer.add_numeric_value(Summation(start=1, end=10, expression=Expression.from_string("k")))
    assert outer.evaluate() == 110
    assert str(outer) == "2 * sum(k=1..10, k)"
