"""Test the token kinds legal after a partial expression."""
import pytest

from arithmetic_expression_engine.core.legality import (
    AFTER_OPERAND,
    OPERAND_START,
    TokenKind,
    allowed_next,
    kind_of,
)
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

K = TokenKind


def test_empty_expression():
    """An empty expression expects the start of an operand."""
    assert allowed_next(None, 0) == K.DIGIT | K.NUMBER | K.NUMERIC_VALUE | K.VARIABLE | K.LEFT_PAREN | K.UNARY_OPERATOR


@pytest.mark.parametrize("last", [
    LeftParen(),
    BinaryOp(op=BinaryOperator.MUL),
    UnaryOp(op=UnaryOperator.NEG),
])
@pytest.mark.parametrize("parens", [0, 2])
def test_operand_expected(last, parens):
    """After an opening paren or an operator, only operand starts are legal."""
    assert allowed_next(last, parens) == OPERAND_START


@pytest.mark.parametrize("last", [
    RightParen(),
    NumericValue(value=4),
    Variable(name="k"),
    PostfixOp(),
])
def test_after_complete_operand(last):
    """After a complete operand, operators and closing parens are legal."""
    assert allowed_next(last, 0) == AFTER_OPERAND
    assert allowed_next(last, 1) == AFTER_OPERAND | K.RIGHT_PAREN


def test_after_nonzero_number():
    """A non-zero number may grow, be followed by operators or close a group."""
    assert allowed_next(Number(value=7), 0) == K.DIGIT | K.POSTFIX_OPERATOR | K.BINARY_OPERATOR
    assert K.RIGHT_PAREN in allowed_next(Number(value=7), 1)
    assert K.NUMBER not in allowed_next(Number(value=7), 1)


def test_after_zero_number_allows_replacement():
    """A literal 0 may also be replaced by a number or numeric value."""
    allowed = allowed_next(Number(value=0), 0)
    assert allowed == K.DIGIT | K.POSTFIX_OPERATOR | K.BINARY_OPERATOR | K.NUMBER | K.NUMERIC_VALUE
    assert K.RIGHT_PAREN not in allowed
    assert K.RIGHT_PAREN in allowed_next(Number(value=0), 3)


def test_binary_operator_never_first():
    """Binary operators never start an operand."""
    assert K.BINARY_OPERATOR not in allowed_next(None, 0)
    assert K.BINARY_OPERATOR not in allowed_next(BinaryOp(op=BinaryOperator.ADD), 0)


@pytest.mark.parametrize("token,kind", [
    (LeftParen(), K.LEFT_PAREN),
    (RightParen(), K.RIGHT_PAREN),
    (BinaryOp(op=BinaryOperator.ADD), K.BINARY_OPERATOR),
    (UnaryOp(op=UnaryOperator.PLUS), K.UNARY_OPERATOR),
    (PostfixOp(), K.POSTFIX_OPERATOR),
    (Number(value=1), K.NUMBER),
    (NumericValue(value=1), K.NUMERIC_VALUE),
    (Variable(name="k"), K.VARIABLE),
])
def test_kind_of(token, kind):
    """Each token maps to its own kind."""
    assert kind_of(token) == kind
