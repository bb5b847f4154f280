"""Stateful builder of infix expressions, validated one token at a time."""
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, PrivateAttr

from arithmetic_expression_engine.common import checked
from arithmetic_expression_engine.common.checked import Int64
from arithmetic_expression_engine.common.errors import IllegalTokenError, Int64OverflowError
from arithmetic_expression_engine.common.logger import logger
from arithmetic_expression_engine.core.capability import NumericLike
from arithmetic_expression_engine.core.converter import infix_to_postfix
from arithmetic_expression_engine.core.evaluator import evaluate_postfix
from arithmetic_expression_engine.core.legality import TokenKind, allowed_next, kind_of
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
    UnaryOperator,
    Variable,
    format_tokens,
)

# The single variable name accepted by the string grammar
RESERVED_VARIABLE = "k"

# Mapping of operator characters accepted by the string grammar
OPERATOR_CHARS: Dict[str, BinaryOperator] = {
    "+": BinaryOperator.ADD,
    "-": BinaryOperator.SUB,
    "*": BinaryOperator.MUL,
    "/": BinaryOperator.DIV,
    "%": BinaryOperator.MOD,
    "^": BinaryOperator.POW,
}

# Binary operators that fall back to a prefix sign where no binary operator is legal
SIGN_OPERATORS: Dict[BinaryOperator, UnaryOperator] = {
    BinaryOperator.ADD: UnaryOperator.PLUS,
    BinaryOperator.SUB: UnaryOperator.NEG,
}


class Expression(BaseModel):
    """
    Infix expression built token by token.

    Every append is checked against the legality rules, so the token sequence is
    always a well-formed prefix of a valid expression. Digits typed after a number
    grow that number in place. If a number overflows 64 bits while growing, the
    expression is latched invalid: further mutations are ignored and ``evaluate``
    raises the overflow until ``reset`` is called. Parsing a string fails outright
    on such an overflow.

    Examples:
        >>> Expression.from_string("60 / -(2 + -(1 + 1) * 2) + 3 * 2").evaluate()
        36
    """

    tokens: List[Token] = Field(default_factory=list, description="Infix tokens in reading order")
    variables: Dict[str, Int64] = Field(default_factory=dict, description="Variable bindings")

    _unmatched_parens: int = PrivateAttr(default=0)
    _latched: Optional[Int64OverflowError] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        # Replay supplied tokens through the legality checks
        supplied = list(self.tokens)
        self.tokens = []
        for token in supplied:
            self.append(token)

    @classmethod
    def from_string(cls, text: str, variables: Optional[Mapping[str, int]] = None) -> "Expression":
        """
        Parse an infix string such as ``"23 + 45"`` or ``"k^2 + 3!"``.

        Spaces are ignored. ``+`` and ``-`` become signs where a binary operator is not legal.

        :param str text: Expression using digits, ``+ - * / % ^ !``, parentheses and ``k``
        :param Optional[Mapping[str, int]] variables: Variable bindings

        :return: Parsed expression
        :rtype: Expression
        :raises IllegalTokenError: On the first character that is unknown or illegal at its position
        :raises Int64OverflowError: As soon as a literal overflows 64 bits
        """
        expression = cls(variables=dict(variables or {}))
        for idx, ch in enumerate(text):
            if ch == " ":
                continue
            try:
                if ch in "0123456789":
                    expression.add_digit(int(ch))
                elif ch == RESERVED_VARIABLE:
                    expression.add_variable(ch)
                elif ch == "(":
                    expression.add_left_paren()
                elif ch == ")":
                    expression.add_right_paren()
                elif ch == "!":
                    expression.add_factorial()
                elif ch in OPERATOR_CHARS:
                    expression.add_operator(OPERATOR_CHARS[ch])
                else:
                    raise IllegalTokenError(ch, idx)
            except IllegalTokenError as exc:
                raise IllegalTokenError(ch, idx) from exc
            # A latched expression ignores changes, so the rest could not be checked
            if expression._latched is not None:
                raise Int64OverflowError(expression._latched.operation) from expression._latched
        return expression

    @property
    def allowed_tokens(self) -> TokenKind:
        """Token kinds that may be appended next."""
        return allowed_next(self.tokens[-1] if self.tokens else None, self._unmatched_parens)

    @property
    def unmatched_parens(self) -> int:
        """Count of left parentheses not yet closed."""
        return self._unmatched_parens

    @property
    def is_valid(self) -> bool:
        """False once a digit overflow has latched the expression invalid."""
        return self._latched is None

    @property
    def error(self) -> Optional[str]:
        """Message of the latched overflow, if any."""
        return None if self._latched is None else str(self._latched)

    def _accepts_mutation(self) -> bool:
        """Return False (and log) while the expression is latched invalid."""
        if self._latched is not None:
            logger.warning("Expression is invalid (%s), ignoring change", self._latched)
            return False
        return True

    def _require(self, kind: TokenKind, token: Any) -> None:
        """Raise IllegalTokenError unless ``kind`` is legal next."""
        if kind not in self.allowed_tokens:
            raise IllegalTokenError(token, len(self.tokens))

    def _replace_zero_or_append(self, token: Token) -> None:
        """Replace a trailing literal 0 with ``token``, otherwise append it."""
        last = self.tokens[-1] if self.tokens else None
        if isinstance(last, Number) and last.value == 0:
            self.tokens[-1] = token
        else:
            self.tokens.append(token)

    def append(self, token: Token) -> None:
        """
        Append a pre-built token, dispatching on its kind.

        :param Token token: Token to append
        :raises IllegalTokenError: If the token is not legal here
        """
        if not self._accepts_mutation():
            return
        self._require(kind_of(token), token)

        if isinstance(token, LeftParen):
            self.add_left_paren()
        elif isinstance(token, RightParen):
            self.add_right_paren()
        elif isinstance(token, BinaryOp):
            if token.op is BinaryOperator.EXP:
                raise IllegalTokenError(token, len(self.tokens))
            self.tokens.append(token)
        elif isinstance(token, UnaryOp):
            self.add_unary_operator(token.op)
        elif isinstance(token, PostfixOp):
            self.add_factorial()
        elif isinstance(token, Number):
            self.add_number(token.value)
        elif isinstance(token, NumericValue):
            self.add_numeric_value(token.value)
        elif isinstance(token, Variable):
            self.add_variable(token.name)

    def add_digit(self, digit: int) -> None:
        """
        Append a decimal digit, growing a trailing number in place.

        :param int digit: Digit between 0 and 9
        :raises IllegalTokenError: If a digit is not legal here
        """
        if not 0 <= digit <= 9:
            raise ValueError(f"Digit must be between 0 and 9, got {digit}")
        if not self._accepts_mutation():
            return
        self._require(TokenKind.DIGIT, digit)

        last = self.tokens[-1] if self.tokens else None
        if not isinstance(last, Number):
            self.tokens.append(Number(value=digit))
            return

        try:
            shifted = checked.mul(last.value, 10)
            grown = checked.add(shifted, digit) if last.value >= 0 else checked.sub(shifted, digit)
        except Int64OverflowError as exc:
            logger.warning("Number overflowed while adding digit %d, expression latched invalid", digit)
            self._latched = exc
            return
        self.tokens[-1] = Number(value=grown)

    def add_number(self, value: int) -> None:
        """Append a whole number, replacing a trailing literal 0."""
        checked.to_int64(value, f"number {value}")
        if not self._accepts_mutation():
            return
        self._require(TokenKind.NUMBER, value)
        self._replace_zero_or_append(Number(value=value))

    def add_numeric_value(self, value: NumericLike) -> None:
        """Append a numeric capability value, replacing a trailing literal 0."""
        if not self._accepts_mutation():
            return
        self._require(TokenKind.NUMERIC_VALUE, value)
        self._replace_zero_or_append(NumericValue(value=value))

    def add_variable(self, name: str = RESERVED_VARIABLE) -> None:
        """
        Append a variable reference.

        :param str name: Variable name, bound at evaluation time
        :raises IllegalTokenError: If a variable is not legal here
        """
        if not self._accepts_mutation():
            return
        self._require(TokenKind.VARIABLE, name)
        self.tokens.append(Variable(name=name))

    def add_operator(self, op: BinaryOperator) -> None:
        """
        Append ``op`` as a binary operator, or as a prefix sign for ``+``/``-`` where binary is illegal.

        :param BinaryOperator op: Surface operator (``EXP`` is internal and rejected)
        :raises IllegalTokenError: If neither form is legal here
        """
        if op is BinaryOperator.EXP:
            raise IllegalTokenError(op.value, len(self.tokens))
        if not self._accepts_mutation():
            return
        allowed = self.allowed_tokens
        if TokenKind.BINARY_OPERATOR in allowed:
            self.tokens.append(BinaryOp(op=op))
        elif op in SIGN_OPERATORS and TokenKind.UNARY_OPERATOR in allowed:
            self.tokens.append(UnaryOp(op=SIGN_OPERATORS[op]))
        else:
            raise IllegalTokenError(op.value, len(self.tokens))

    def add_unary_operator(self, op: UnaryOperator) -> None:
        """
        Append a prefix sign.

        :param UnaryOperator op: Sign to append
        :raises IllegalTokenError: If a prefix sign is not legal here
        """
        if not self._accepts_mutation():
            return
        self._require(TokenKind.UNARY_OPERATOR, op.value)
        self.tokens.append(UnaryOp(op=op))

    def add_factorial(self) -> None:
        """
        Append the postfix factorial operator.

        :raises IllegalTokenError: If it does not follow a complete operand
        """
        if not self._accepts_mutation():
            return
        self._require(TokenKind.POSTFIX_OPERATOR, "!")
        self.tokens.append(PostfixOp())

    def add_left_paren(self) -> None:
        """
        Open a parenthesized group.

        :raises IllegalTokenError: If a group cannot start here
        """
        if not self._accepts_mutation():
            return
        self._require(TokenKind.LEFT_PAREN, "(")
        self.tokens.append(LeftParen())
        self._unmatched_parens += 1

    def add_right_paren(self) -> None:
        """
        Close the innermost open group.

        :raises IllegalTokenError: If no group is open or the group has no complete operand yet
        """
        if not self._accepts_mutation():
            return
        self._require(TokenKind.RIGHT_PAREN, ")")
        self.tokens.append(RightParen())
        self._unmatched_parens -= 1

    def delete_last(self) -> None:
        """
        Undo the last keystroke.

        A multi-digit trailing number loses its last digit; any other trailing
        token is removed. Nothing happens on an empty expression.
        """
        if not self._accepts_mutation() or not self.tokens:
            return
        last = self.tokens[-1]
        if isinstance(last, Number) and abs(last.value) >= 10:
            self.tokens[-1] = Number(value=checked.div(last.value, 10))
            return
        self.tokens.pop()
        if isinstance(last, LeftParen):
            self._unmatched_parens -= 1
        elif isinstance(last, RightParen):
            self._unmatched_parens += 1

    def reset(self) -> None:
        """Clear tokens, parenthesis count and the invalid latch; bindings are kept."""
        self.tokens = []
        self._unmatched_parens = 0
        self._latched = None

    def evaluate(self, variables: Optional[Mapping[str, int]] = None) -> int:
        """
        Convert to postfix and evaluate.

        :param Optional[Mapping[str, int]] variables: Bindings that replace (not merge with) the stored ones

        :return: 64-bit result
        :rtype: int
        :raises ExpressionError: If the expression is latched invalid or evaluation fails
        """
        if self._latched is not None:
            raise Int64OverflowError(self._latched.operation) from self._latched
        postfix = infix_to_postfix(self.tokens)
        return evaluate_postfix(postfix, variables if variables is not None else self.variables)

    def __str__(self) -> str:
        return format_tokens(self.tokens)
