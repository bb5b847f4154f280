"""Error taxonomy raised while building, converting and evaluating expressions."""
from typing import Any


class ExpressionError(ValueError):
    """Base class of every failure detected by the engine."""


class IllegalTokenError(ExpressionError):
    """A character or token is not legal at its position."""

    def __init__(self, token: Any, position: int) -> None:
        self.token = token
        self.position = position
        super().__init__(f"Illegal token {str(token)!r} at position {position}")


class UnmatchedParenError(ExpressionError):
    """A right parenthesis has no matching left parenthesis."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Right parenthesis at position {position} has no matching left parenthesis")


class ContainsParenthesisError(ExpressionError):
    """A parenthesis reached the postfix evaluator."""

    def __init__(self, paren: str, position: int) -> None:
        self.paren = paren
        self.position = position
        super().__init__(f"Postfix sequence contains {paren!r} at position {position}")


class MissingOperandsError(ExpressionError):
    """A binary operator found fewer than two values on the stack."""

    def __init__(self, operator: str, position: int) -> None:
        self.operator = operator
        self.position = position
        super().__init__(f"Binary operator {operator!r} at position {position} is missing operands")


class MissingOperandError(ExpressionError):
    """A unary or postfix operator found an empty stack."""

    def __init__(self, operator: str, position: int) -> None:
        self.operator = operator
        self.position = position
        super().__init__(f"Operator {operator!r} at position {position} is missing its operand")


class UndefinedVariableError(ExpressionError):
    """A variable was referenced without a binding."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No value bound to variable {name!r}")


class NotOneValueOnStackError(ExpressionError):
    """Evaluation finished with zero or several values on the stack."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Expected exactly one value on the stack, found {count}")


class Int64OverflowError(ExpressionError, OverflowError):
    """An arithmetic step left the signed 64-bit range."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"64-bit overflow in {operation}")


class DivisionByZeroError(ExpressionError, ZeroDivisionError):
    """Integer division or remainder by zero."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Division by zero in {operation}")


class NegativeFactorialError(ExpressionError):
    """Factorial applied to a negative value."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Factorial of negative value {value} is undefined")
