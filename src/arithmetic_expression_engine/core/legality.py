"""Token kinds legal to append after the current partial expression."""
from enum import Flag, auto
from typing import Optional

from arithmetic_expression_engine.core.tokens import (
    BinaryOp,
    LeftParen,
    Number,
    NumericValue,
    PostfixOp,
    RightParen,
    Token,
    UnaryOp,
    Variable,
)


class TokenKind(Flag):
    DIGIT = auto()
    NUMBER = auto()
    NUMERIC_VALUE = auto()
    VARIABLE = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    BINARY_OPERATOR = auto()
    UNARY_OPERATOR = auto()
    POSTFIX_OPERATOR = auto()


# Anything that may start an operand
OPERAND_START = (
    TokenKind.LEFT_PAREN
    | TokenKind.DIGIT
    | TokenKind.NUMBER
    | TokenKind.NUMERIC_VALUE
    | TokenKind.VARIABLE
    | TokenKind.UNARY_OPERATOR
)

# Anything that may follow a complete operand
AFTER_OPERAND = TokenKind.BINARY_OPERATOR | TokenKind.POSTFIX_OPERATOR


def allowed_next(last_token: Optional[Token], unmatched_parens: int) -> TokenKind:
    """
    Compute the set of token kinds that may follow ``last_token``.

    :param Optional[Token] last_token: Trailing token, or None for an empty expression
    :param int unmatched_parens: Count of left parentheses not yet closed

    :return: Legal token kinds
    :rtype: TokenKind
    """
    if last_token is None:
        return OPERAND_START

    closing = TokenKind.RIGHT_PAREN if unmatched_parens > 0 else TokenKind(0)

    if isinstance(last_token, (LeftParen, BinaryOp, UnaryOp)):
        return OPERAND_START
    if isinstance(last_token, Number):
        allowed = TokenKind.DIGIT | AFTER_OPERAND | closing
        if last_token.value == 0:
            # A literal 0 may still be replaced by a number or numeric value
            allowed |= TokenKind.NUMBER | TokenKind.NUMERIC_VALUE
        return allowed
    if isinstance(last_token, (RightParen, NumericValue, Variable, PostfixOp)):
        return AFTER_OPERAND | closing
    raise TypeError(f"Unknown token {last_token!r}")


def kind_of(token: Token) -> TokenKind:
    """Return the kind a whole token is appended as."""
    if isinstance(token, LeftParen):
        return TokenKind.LEFT_PAREN
    if isinstance(token, RightParen):
        return TokenKind.RIGHT_PAREN
    if isinstance(token, BinaryOp):
        return TokenKind.BINARY_OPERATOR
    if isinstance(token, UnaryOp):
        return TokenKind.UNARY_OPERATOR
    if isinstance(token, PostfixOp):
        return TokenKind.POSTFIX_OPERATOR
    if isinstance(token, Number):
        return TokenKind.NUMBER
    if isinstance(token, NumericValue):
        return TokenKind.NUMERIC_VALUE
    if isinstance(token, Variable):
        return TokenKind.VARIABLE
    raise TypeError(f"Unknown token {token!r}")
