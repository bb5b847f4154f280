"""Evaluate postfix token sequences with checked 64-bit arithmetic."""
from typing import List, Mapping, Optional, Sequence

from arithmetic_expression_engine.common.errors import (
    ContainsParenthesisError,
    MissingOperandError,
    MissingOperandsError,
    NotOneValueOnStackError,
    UndefinedVariableError,
)
from arithmetic_expression_engine.common.logger import logger
from arithmetic_expression_engine.core.capability import resolve_int64
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


def evaluate_postfix(tokens: Sequence[Token], variables: Optional[Mapping[str, int]] = None) -> int:
    """
    Evaluate a postfix token sequence using a value stack.

    :param Sequence[Token] tokens: Tokens in postfix order
    :param Optional[Mapping[str, int]] variables: Variable bindings

    :return: Result of the expression
    :rtype: int
    :raises ContainsParenthesisError: If a parenthesis is found
    :raises MissingOperandsError: If a binary operator lacks operands
    :raises MissingOperandError: If a unary or postfix operator lacks its operand
    :raises UndefinedVariableError: If a variable has no binding
    :raises NotOneValueOnStackError: If the sequence does not reduce to one value
    :raises Int64OverflowError: If any step overflows
    """
    bindings: Mapping[str, int] = variables if variables is not None else {}
    stack: List[int] = []

    for idx, token in enumerate(tokens):
        if isinstance(token, (LeftParen, RightParen)):
            raise ContainsParenthesisError(str(token), idx)

        elif isinstance(token, Number):
            stack.append(token.value)

        elif isinstance(token, NumericValue):
            stack.append(resolve_int64(token.value))

        elif isinstance(token, Variable):
            if token.name not in bindings:
                raise UndefinedVariableError(token.name)
            stack.append(resolve_int64(bindings[token.name]))

        elif isinstance(token, BinaryOp):
            # Operator requires two operands; rhs is the most recent
            if len(stack) < 2:
                raise MissingOperandsError(str(token), idx)
            rhs: int = stack.pop()
            lhs: int = stack.pop()
            stack.append(token.apply(lhs, rhs))

        elif isinstance(token, (UnaryOp, PostfixOp)):
            if not stack:
                raise MissingOperandError(str(token), idx)
            stack.append(token.apply(stack.pop()))

        else:
            raise TypeError(f"Unknown token {token!r} at position {idx}")

    if len(stack) != 1:
        raise NotOneValueOnStackError(len(stack))

    logger.debug("Evaluated to %d", stack[0])
    return stack[0]
