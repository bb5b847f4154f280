"""Test postfix evaluation."""
import pytest

from arithmetic_expression_engine.common.errors import (
    ContainsParenthesisError,
    DivisionByZeroError,
    Int64OverflowError,
    MissingOperandError,
    MissingOperandsError,
    NegativeFactorialError,
    NotOneValueOnStackError,
    UndefinedVariableError,
)
from arithmetic_expression_engine.core.evaluator import evaluate_postfix
from arithmetic_expression_engine.core.tokens import (
    BinaryOp,
    BinaryOperator,
    LeftParen,
    Number,
    NumericValue,
    PostfixOp,
    RightParen,
    UnaryOp,
    UnaryOperator,
    Variable,
)

ADD = BinaryOp(op=BinaryOperator.ADD)
SUB = BinaryOp(op=BinaryOperator.SUB)
MUL = BinaryOp(op=BinaryOperator.MUL)
DIV = BinaryOp(op=BinaryOperator.DIV)
EXP = BinaryOp(op=BinaryOperator.EXP)
POW = BinaryOp(op=BinaryOperator.POW)
NEG = UnaryOp(op=UnaryOperator.NEG)
PLUS = UnaryOp(op=UnaryOperator.PLUS)
FACT = PostfixOp()


def n(value: int) -> Number:
    return Number(value=value)


class CountingValue:
    """Numeric capability recording how often it is asked for its value."""

    def __init__(self, value: int):
        self.value = value
        self.calls = 0

    def as_int64(self) -> int:
        self.calls += 1
        return self.value


@pytest.mark.parametrize("postfix,expected", [
    ([n(2), n(3), ADD], 5),
    ([n(2), n(3), n(5), MUL, ADD], 17),
    ([n(2), n(3), n(5), ADD, MUL], 16),
    ([n(2), n(3), EXP, n(4), EXP], 4096),
    ([n(2), n(3), POW], 8),
    ([n(7), n(2), SUB], 5),
    ([n(5), PLUS], 5),
    ([n(5), FACT], 120),
    ([n(3), FACT, FACT], 720),
    ([n(-7), n(2), DIV], -3),
])
def test_evaluate(postfix, expected):
    """Postfix sequences evaluate to the expected value."""
    assert evaluate_postfix(postfix) == expected


def test_negation_chain():
    """60 / -(2 + -(1 + 1) * 2) + 3 * 2 evaluates to 36."""
    postfix = [
        n(60), n(2), n(1), n(1), ADD, NEG, n(2), MUL, ADD, NEG, DIV,
        n(3), n(2), MUL, ADD,
    ]
    assert evaluate_postfix(postfix) == 36


def test_right_associative_power_overflows():
    """2 ^ (3 ^ 4) = 2 ^ 81 does not fit in 64 bits."""
    with pytest.raises(Int64OverflowError):
        evaluate_postfix([n(2), n(3), n(4), EXP, EXP])


def test_variables_are_looked_up():
    """Variables take their value from the bindings."""
    assert evaluate_postfix([Variable(name="k"), n(2), EXP], {"k": 3}) == 9


def test_undefined_variable():
    """A variable without binding raises UndefinedVariableError with its name."""
    with pytest.raises(UndefinedVariableError) as exc_info:
        evaluate_postfix([Variable(name="x")], {"k": 1})
    assert exc_info.value.name == "x"


def test_numeric_value_is_resolved_once():
    """A numeric value is asked for its value once, during evaluation."""
    value = CountingValue(6)
    token = NumericValue(value=value)
    assert value.calls == 0
    assert evaluate_postfix([token, n(7), MUL]) == 42
    assert value.calls == 1


@pytest.mark.parametrize("paren", [LeftParen(), RightParen()])
def test_parenthesis_is_rejected(paren):
    """Parentheses cannot appear in a postfix sequence."""
    with pytest.raises(ContainsParenthesisError) as exc_info:
        evaluate_postfix([n(1), paren])
    assert exc_info.value.position == 1


def test_binary_operator_missing_operands():
    """A binary operator needs two values on the stack."""
    with pytest.raises(MissingOperandsError):
        evaluate_postfix([n(2), ADD])


@pytest.mark.parametrize("operator", [NEG, FACT])
def test_missing_operand(operator):
    """Unary and postfix operators need one value on the stack."""
    with pytest.raises(MissingOperandError):
        evaluate_postfix([operator])


@pytest.mark.parametrize("postfix,count", [
    ([], 0),
    ([n(1), n(2)], 2),
])
def test_not_one_value_on_stack(postfix, count):
    """Evaluation must end with exactly one value."""
    with pytest.raises(NotOneValueOnStackError) as exc_info:
        evaluate_postfix(postfix)
    assert exc_info.value.count == count


def test_negative_factorial_is_rejected():
    """Factorial of a negative value raises NegativeFactorialError."""
    with pytest.raises(NegativeFactorialError):
        evaluate_postfix([n(3), NEG, FACT])


def test_division_by_zero():
    """Dividing or taking a remainder by zero raises DivisionByZeroError."""
    with pytest.raises(DivisionByZeroError):
        evaluate_postfix([n(1), n(0), DIV])
