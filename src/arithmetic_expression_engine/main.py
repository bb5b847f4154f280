"""
Command-line entrypoint.

This script either:
- evaluates a single expression given with ``-e`` and prints the result
- evaluates every line of an expressions file (or archive) and writes a results file
"""
import argparse
from pathlib import Path
import sys
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, FilePath, ValidationError, model_validator

from arithmetic_expression_engine.batch.loader import ExpressionLoader
from arithmetic_expression_engine.batch.runner import BatchEvaluator
from arithmetic_expression_engine.common.checked import Int64
from arithmetic_expression_engine.common.errors import ExpressionError
from arithmetic_expression_engine.common.logger import configure_logging, logger
from arithmetic_expression_engine.core.expression import Expression


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : Optional[FilePath]
        Path to the file containing expressions, one per line.
    expression : Optional[str]
        Single expression to evaluate.
    variables : Dict[str, Int64]
        Variable bindings.
    log_level : str
        Logging level name.
    """

    file_path: Optional[FilePath] = None
    expression: Optional[str] = None
    variables: Dict[str, Int64] = {}
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @model_validator(mode="after")
    def exactly_one_input(self) -> "CliArgs":
        """Ensure exactly one of file_path and expression is given."""
        if (self.file_path is None) == (self.expression is None):
            raise ValueError("Provide either an expressions file or -e EXPRESSION")
        return self


def parse_variable(binding: str) -> Tuple[str, str]:
    """
    Split a ``NAME=VALUE`` binding.

    :raises argparse.ArgumentTypeError: If the binding has no ``=``
    """
    name, sep, value = binding.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {binding!r}")
    return name.strip(), value.strip()


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(description="Integer arithmetic expression evaluator")
    parser.add_argument("file_path", nargs="?", help="Path to a .txt, .zip, .tar.xz or .7z file of expressions")
    parser.add_argument("-e", "--expression", help="Single expression to evaluate")
    parser.add_argument(
        "--var",
        dest="variables",
        action="append",
        type=parse_variable,
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (repeatable)",
    )
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            expression=args.expression,
            variables=dict(args.variables),
            log_level=args.log_level.upper(),
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path next to the input file.

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    input: resources/operations.txt
    output: resources/operations_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(suffix.replace(".", "_") for suffix in input_path.suffixes)
    if input_path.suffix == ".txt":
        suffix_safe = ""
    return input_path.with_name(f"{input_path.name.split('.')[0]}{suffix_safe}_results.txt")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    :return: Process exit code
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    if cli_args.expression is not None:
        try:
            result = Expression.from_string(cli_args.expression, cli_args.variables).evaluate()
        except ExpressionError as exc:
            logger.error(f"🧮❌ {exc}")
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        print(result)
        return 0

    input_path = Path(cli_args.file_path)
    output_path = build_output_path(input_path)
    expressions = ExpressionLoader().read_expressions(input_path)
    results = BatchEvaluator(output_file=output_path, variables=cli_args.variables).run(expressions)
    print(output_path)
    return 0 if all(outcome.succeeded for outcome in results) else 1


if __name__ == "__main__":
    sys.exit(main())
