"""Sum an expression over a range of values of its variable."""
from pydantic import BaseModel, ConfigDict, Field

from arithmetic_expression_engine.common import checked
from arithmetic_expression_engine.core.expression import RESERVED_VARIABLE, Expression


class Summation(BaseModel):
    """
    Sum of ``expression`` for ``variable`` bound to each integer of ``start..end`` (inclusive).

    The binding replaces the expression's own variables during each evaluation.
    An empty range (``end < start``) sums to 0.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., description="First value of the variable")
    end: int = Field(..., description="Last value of the variable, inclusive")
    expression: Expression = Field(..., description="Expression to sum")
    variable: str = Field(default=RESERVED_VARIABLE, min_length=1, description="Summation variable")

    def as_int64(self) -> int:
        """
        Evaluate and add every term with checked addition.

        :return: Sum of the terms
        :rtype: int
        :raises ExpressionError: If a term fails or the sum overflows
        """
        total = 0
        for value in range(self.start, self.end + 1):
            term = self.expression.evaluate({self.variable: value})
            total = checked.add(total, term)
        return total

    def __str__(self) -> str:
        return f"sum({self.variable}={self.start}..{self.end}, {self.expression})"
