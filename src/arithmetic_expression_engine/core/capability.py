"""Values that can produce a signed 64-bit integer."""
from typing import Protocol, Union, runtime_checkable

from arithmetic_expression_engine.common.checked import to_int64


@runtime_checkable
class NumericCapability(Protocol):
    """Any value able to yield a 64-bit integer on demand."""

    def as_int64(self) -> int:
        ...


NumericLike = Union[int, NumericCapability]


def is_numeric(value: object) -> bool:
    """Return True for plain integers (not bools) and numeric capabilities."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, NumericCapability))


def resolve_int64(value: NumericLike) -> int:
    """
    Produce the 64-bit integer held by ``value``.

    :param NumericLike value: Plain integer or numeric capability

    :return: Range-checked integer
    :rtype: int
    :raises TypeError: If ``value`` is neither
    :raises Int64OverflowError: If the produced integer does not fit in 64 bits
    """
    if not is_numeric(value):
        raise TypeError(f"{value!r} cannot produce a 64-bit integer")
    if isinstance(value, int):
        return to_int64(value)
    return to_int64(value.as_int64(), str(value))
