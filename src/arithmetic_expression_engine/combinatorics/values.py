"""Combinatoric values usable as numeric tokens in an expression."""
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_expression_engine.combinatorics import formulas
from arithmetic_expression_engine.common.checked import to_int64


class CombinatoricValue(BaseModel):
    """
    A counting formula applied to ``n`` and ``k``.

    The value is computed only when ``as_int64`` is called, and must fit in 64 bits.
    """

    # Make the Pydantic instance immutable (read-only), values are shared between tokens
    model_config = ConfigDict(frozen=True)

    symbol: ClassVar[str] = "?"

    n: int = Field(..., ge=0, description="First argument")
    k: int = Field(..., ge=0, description="Second argument")

    def compute(self) -> int:
        """Exact, unbounded value of the formula."""
        raise NotImplementedError

    def as_int64(self) -> int:
        """
        Compute the value.

        :return: Exact value
        :rtype: int
        :raises Int64OverflowError: If the value does not fit in 64 bits
        """
        return to_int64(self.compute(), str(self))

    def __str__(self) -> str:
        return f"{self.symbol}({self.n}, {self.k})"


class Combinations(CombinatoricValue):
    symbol: ClassVar[str] = "C"

    def compute(self) -> int:
        return formulas.combinations(self.n, self.k)


class Falling(CombinatoricValue):
    symbol: ClassVar[str] = "P"

    def compute(self) -> int:
        return formulas.falling(self.n, self.k)


class Multichoose(CombinatoricValue):
    symbol: ClassVar[str] = "MC"

    def compute(self) -> int:
        return formulas.multichoose(self.n, self.k)


class MultichooseOnto(CombinatoricValue):
    symbol: ClassVar[str] = "MCO"

    def compute(self) -> int:
        return formulas.multichoose_onto(self.n, self.k)


class PermutationsWithRepetition(CombinatoricValue):
    symbol: ClassVar[str] = "PR"

    def compute(self) -> int:
        return formulas.permutations_with_repetition(self.n, self.k)


class Injection(CombinatoricValue):
    symbol: ClassVar[str] = "INJ"

    def compute(self) -> int:
        return formulas.injection(self.n, self.k)


class OntoFunctions(CombinatoricValue):
    symbol: ClassVar[str] = "ONTO"

    def compute(self) -> int:
        return formulas.onto_functions(self.n, self.k)


class Stirling2(CombinatoricValue):
    symbol: ClassVar[str] = "S"

    def compute(self) -> int:
        return formulas.stirling2(self.n, self.k)


class MultiStirling2(CombinatoricValue):
    symbol: ClassVar[str] = "MS"

    def compute(self) -> int:
        return formulas.multi_stirling2(self.n, self.k)


class IntegerPartition(CombinatoricValue):
    symbol: ClassVar[str] = "p"

    def compute(self) -> int:
        return formulas.integer_partition(self.n, self.k)


class MultiPartition(CombinatoricValue):
    symbol: ClassVar[str] = "MP"

    def compute(self) -> int:
        return formulas.multi_partition(self.n, self.k)
