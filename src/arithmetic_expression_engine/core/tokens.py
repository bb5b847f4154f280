"""
Lexical units of an infix or postfix expression.

A token is one of a closed set of frozen pydantic models, discriminated by
their ``kind`` field. Operators carry a precedence used only by the
infix-to-postfix conversion.
"""
from enum import Enum
from typing import Annotated, Any, Callable, Dict, Iterable, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from arithmetic_expression_engine.common import checked
from arithmetic_expression_engine.common.checked import Int64
from arithmetic_expression_engine.core.capability import is_numeric


class BinaryOperator(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    # Surface power operator, written by callers
    POW = "pow"
    # Internal right-associative marker pushed in place of POW during conversion
    EXP = "exp"


class UnaryOperator(str, Enum):
    PLUS = "plus"
    NEG = "neg"


class PostfixOperator(str, Enum):
    FACTORIAL = "factorial"


# Type alias for checked binary functions (taking two int64, returning an int64)
BinaryFn = Callable[[int, int], int]

# Mapping of binary operators to (precedence, symbol, checked function).
# EXP must stay strictly below POW and above the multiplicative level.
BINARY_OPERATORS: Dict[BinaryOperator, Tuple[int, str, BinaryFn]] = {
    BinaryOperator.ADD: (1, "+", checked.add),
    BinaryOperator.SUB: (1, "-", checked.sub),
    BinaryOperator.MUL: (2, "*", checked.mul),
    BinaryOperator.DIV: (2, "/", checked.div),
    BinaryOperator.MOD: (2, "%", checked.mod),
    BinaryOperator.EXP: (4, "^", checked.power),
    BinaryOperator.POW: (5, "^", checked.power),
}

UNARY_PRECEDENCE = 3
POSTFIX_PRECEDENCE = 4

UNARY_SYMBOLS: Dict[UnaryOperator, str] = {
    UnaryOperator.PLUS: "+",
    UnaryOperator.NEG: "-",
}

POSTFIX_SYMBOLS: Dict[PostfixOperator, str] = {
    PostfixOperator.FACTORIAL: "!",
}


class _Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def precedence(self) -> int:
        """Precedence used by the infix-to-postfix conversion; 0 for operands and parentheses."""
        return 0


class LeftParen(_Token):
    kind: Literal["left_paren"] = "left_paren"

    def __str__(self) -> str:
        return "("


class RightParen(_Token):
    kind: Literal["right_paren"] = "right_paren"

    def __str__(self) -> str:
        return ")"


class BinaryOp(_Token):
    kind: Literal["binary"] = "binary"
    op: BinaryOperator

    @property
    def precedence(self) -> int:
        return BINARY_OPERATORS[self.op][0]

    def apply(self, lhs: int, rhs: int) -> int:
        """
        Apply the checked operation.

        :param int lhs: Left operand
        :param int rhs: Right operand

        :return: Result of the operation
        :rtype: int
        :raises Int64OverflowError: If the result does not fit in 64 bits
        """
        return BINARY_OPERATORS[self.op][2](lhs, rhs)

    def __str__(self) -> str:
        return BINARY_OPERATORS[self.op][1]


class UnaryOp(_Token):
    kind: Literal["unary"] = "unary"
    op: UnaryOperator

    @property
    def precedence(self) -> int:
        return UNARY_PRECEDENCE

    def apply(self, value: int) -> int:
        """Negate ``value`` (checked) or pass it through."""
        if self.op is UnaryOperator.NEG:
            return checked.negate(value)
        return value

    def __str__(self) -> str:
        return UNARY_SYMBOLS[self.op]


class PostfixOp(_Token):
    kind: Literal["postfix"] = "postfix"
    op: PostfixOperator = PostfixOperator.FACTORIAL

    @property
    def precedence(self) -> int:
        return POSTFIX_PRECEDENCE

    def apply(self, value: int) -> int:
        """
        Factorial of ``value``.

        :raises NegativeFactorialError: If ``value`` is negative
        :raises Int64OverflowError: If the product overflows
        """
        return checked.factorial(value)

    def __str__(self) -> str:
        return POSTFIX_SYMBOLS[self.op]


class Number(_Token):
    kind: Literal["number"] = "number"
    value: Int64

    def __str__(self) -> str:
        return str(self.value)


class NumericValue(_Token):
    """Opaque value produced by an external collaborator (e.g. a combinatoric formula)."""

    kind: Literal["numeric_value"] = "numeric_value"
    value: Any

    @field_validator("value")
    def value_must_be_numeric(cls, v: Any) -> Any:
        """Ensure the value is an integer or exposes ``as_int64``."""
        if not is_numeric(v):
            raise ValueError(f"{v!r} cannot produce a 64-bit integer")
        return v

    def __str__(self) -> str:
        # Display never evaluates the capability
        return str(self.value)


class Variable(_Token):
    kind: Literal["variable"] = "variable"
    name: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.name


Token = Annotated[
    Union[LeftParen, RightParen, BinaryOp, UnaryOp, PostfixOp, Number, NumericValue, Variable],
    Field(discriminator="kind"),
]


def format_tokens(tokens: Iterable[Any]) -> str:
    """
    Join the display forms of tokens with single spaces.

    :param Iterable tokens: Tokens in reading order

    :return: Display string, e.g. ``"2 3 5 * +"``
    :rtype: str
    """
    return " ".join(str(token) for token in tokens)
