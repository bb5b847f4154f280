"""Evaluate a batch of expressions and write one result line per expression."""
from pathlib import Path
from typing import Dict, Iterable, List

from pydantic import BaseModel, Field

from arithmetic_expression_engine.common.checked import Int64
from arithmetic_expression_engine.common.errors import ExpressionError
from arithmetic_expression_engine.common.logger import logger
from arithmetic_expression_engine.common.models import OperationRequest, OperationResult
from arithmetic_expression_engine.core.expression import Expression


class BatchEvaluator(BaseModel):
    """
    Evaluate expressions one by one.

    Features:
        - Each expression gets its own Expression instance.
        - Results are written to disk as soon as each expression is evaluated.
        - A failing expression produces an error line and does not stop the batch.
    """

    output_file: Path = Field(..., description="Path to write evaluation results")
    variables: Dict[str, Int64] = Field(default_factory=dict, description="Variable bindings for every expression")

    def evaluate_request(self, request: OperationRequest) -> OperationResult:
        """
        Parse and evaluate a single expression.

        :param OperationRequest request: Expression and its line number

        :return: Result or error for the expression
        :rtype: OperationResult
        """
        logger.info(f"🧮🏁 Evaluating line {request.line}: {request.expression}")
        try:
            expression = Expression.from_string(request.expression, self.variables)
            result = expression.evaluate()
        except ExpressionError as exc:
            logger.error(
                f"🧮❌ Line {request.line} failed: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {request.expression!r}"
            )
            return OperationResult(line=request.line, expression=request.expression, error=str(exc))

        logger.info(f"🧮✅ Line {request.line} = {result}")
        return OperationResult(line=request.line, expression=request.expression, result=result)

    def run(self, expressions: Iterable[str]) -> List[OperationResult]:
        """
        Evaluate every expression, writing each outcome to ``output_file`` immediately.

        :param Iterable[str] expressions: Expression lines in input order

        :return: Outcomes in input order
        :rtype: List[OperationResult]
        """
        results: List[OperationResult] = []
        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(expressions, start=1):
                outcome = self.evaluate_request(OperationRequest(expression=expr, line=line_number))
                results.append(outcome)
                f_out.write(outcome.to_line() + "\n")
                f_out.flush()

        failed = sum(1 for outcome in results if not outcome.succeeded)
        logger.info(f"✉️ {len(results)} results written to {self.output_file} ({failed} errors)")
        return results
