"""Convert infix token sequences to postfix order."""
import logging
from typing import List, Sequence

from arithmetic_expression_engine.common.errors import UnmatchedParenError
from arithmetic_expression_engine.common.logger import logger
from arithmetic_expression_engine.core.tokens import (
    BinaryOp,
    BinaryOperator,
    LeftParen,
    Number,
    NumericValue,
    PostfixOp,
    RightParen,
    Token,
    UnaryOp,
    Variable,
    format_tokens,
)

_EXP_MARKER = BinaryOp(op=BinaryOperator.EXP)


def infix_to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """
    Convert an infix token sequence into Reverse Polish Notation with the Shunting-yard algorithm.

    Rules:
        - Operands and postfix operators go straight to the output.
        - A binary operator first pops every stacked operator of higher or equal
          precedence, then is pushed. ``pow`` is pushed as the lower-precedence
          ``exp`` marker, so a following ``^`` never pops it (right-to-left grouping).
        - Prefix unary operators are pushed without popping anything.
        - A right parenthesis pops down to its left parenthesis, then pops the
          unary operators applying to the closed group.
        - Left parentheses still open at the end are closed implicitly.

    Examples:
        - Infix: 2 + 3 * 5    -> Postfix: 2 3 5 * +
        - Infix: 2 ^ 3 ^ 4    -> Postfix: 2 3 4 ^ ^

    :param Sequence[Token] tokens: Infix tokens, legal per the legality rules

    :return: Tokens in postfix order
    :rtype: List[Token]
    :raises UnmatchedParenError: If a right parenthesis has no matching left parenthesis
    """
    output: List[Token] = []
    stack: List[Token] = []

    for idx, token in enumerate(tokens):
        if isinstance(token, LeftParen):
            stack.append(token)

        elif isinstance(token, RightParen):
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if not stack:
                raise UnmatchedParenError(idx)
            # Discard the left parenthesis
            stack.pop()
            while stack and isinstance(stack[-1], UnaryOp):
                output.append(stack.pop())

        elif isinstance(token, BinaryOp):
            # Parentheses have precedence 0, so the loop stops at them
            while stack and stack[-1].precedence >= token.precedence:
                output.append(stack.pop())
            stack.append(_EXP_MARKER if token.op is BinaryOperator.POW else token)

        elif isinstance(token, UnaryOp):
            stack.append(token)

        elif isinstance(token, (Number, NumericValue, Variable, PostfixOp)):
            output.append(token)

        else:
            raise TypeError(f"Unknown token {token!r} at position {idx}")

    # Drain the stack (top first), dropping left parentheses never closed
    while stack:
        top = stack.pop()
        if not isinstance(top, LeftParen):
            output.append(top)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Postfix: %s", format_tokens(output))
    return output
