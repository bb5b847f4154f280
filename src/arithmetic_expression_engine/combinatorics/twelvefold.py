"""The twelvefold way: counting ways to place balls into boxes."""
from enum import Enum
from typing import Callable, Dict, Tuple

from arithmetic_expression_engine.combinatorics.values import (
    Combinations,
    CombinatoricValue,
    Falling,
    Injection,
    IntegerPartition,
    MultiPartition,
    Multichoose,
    MultichooseOnto,
    MultiStirling2,
    OntoFunctions,
    PermutationsWithRepetition,
    Stirling2,
)


class Constraint(str, Enum):
    ANY = "any"
    INJECTIVE = "injective"
    SURJECTIVE = "surjective"


# Builds the value for (balls, boxes)
Builder = Callable[[int, int], CombinatoricValue]

# (balls distinct, boxes distinct, constraint) -> value builder
TWELVEFOLD: Dict[Tuple[bool, bool, Constraint], Builder] = {
    (True, True, Constraint.ANY): lambda b, x: PermutationsWithRepetition(n=x, k=b),
    (True, True, Constraint.INJECTIVE): lambda b, x: Falling(n=x, k=b),
    (True, True, Constraint.SURJECTIVE): lambda b, x: OntoFunctions(n=b, k=x),
    (False, True, Constraint.ANY): lambda b, x: Multichoose(n=x, k=b),
    (False, True, Constraint.INJECTIVE): lambda b, x: Combinations(n=x, k=b),
    (False, True, Constraint.SURJECTIVE): lambda b, x: MultichooseOnto(n=x, k=b),
    (True, False, Constraint.ANY): lambda b, x: MultiStirling2(n=b, k=x),
    (True, False, Constraint.INJECTIVE): lambda b, x: Injection(n=b, k=x),
    (True, False, Constraint.SURJECTIVE): lambda b, x: Stirling2(n=b, k=x),
    (False, False, Constraint.ANY): lambda b, x: MultiPartition(n=b, k=x),
    (False, False, Constraint.INJECTIVE): lambda b, x: Injection(n=b, k=x),
    (False, False, Constraint.SURJECTIVE): lambda b, x: IntegerPartition(n=b, k=x),
}


def twelvefold(
    balls: int,
    boxes: int,
    balls_distinct: bool,
    boxes_distinct: bool,
    constraint: Constraint = Constraint.ANY,
) -> CombinatoricValue:
    """
    Select the counting formula for placing ``balls`` into ``boxes``.

    :param int balls: Number of balls
    :param int boxes: Number of boxes
    :param bool balls_distinct: True if balls are labelled
    :param bool boxes_distinct: True if boxes are labelled
    :param Constraint constraint: Any placement, at most one ball per box, or no empty box

    :return: Unevaluated value, usable as a numeric token
    :rtype: CombinatoricValue
    """
    return TWELVEFOLD[(balls_distinct, boxes_distinct, Constraint(constraint))](balls, boxes)
