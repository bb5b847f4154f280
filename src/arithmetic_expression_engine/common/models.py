"""Pydantic models for expression requests and evaluation results."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from arithmetic_expression_engine.common.checked import Int64


class OperationRequest(BaseModel):
    """A single expression line to evaluate."""

    expression: str = Field(..., description="Infix expression as a string")
    line: int = Field(default=1, ge=1, description="Line number in the input")


class OperationResult(BaseModel):
    """Outcome of evaluating one expression: a result or an error, never both."""

    line: int = Field(..., ge=1, description="Line number in the input")
    expression: str = Field(..., description="Original expression")
    result: Optional[Int64] = Field(default=None, description="Evaluated 64-bit result")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "OperationResult":
        """Ensure exactly one of result and error is set."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of result or error must be set")
        return self

    @property
    def succeeded(self) -> bool:
        """True if the expression evaluated without error."""
        return self.error is None

    def to_line(self) -> str:
        """
        Render the outcome as an output file line.

        :return: ``"<expr> = <result>"`` or ``"<expr> -> ERROR: <message>"``
        :rtype: str
        """
        if self.succeeded:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
