from typing import Optional, Sequence

from fieldpoly.algebra import FieldElement
from fieldpoly.errors import InvalidSizeError


def log2_capacity(capacity: int, log_capacity: Optional[int] = None) -> int:
    """
    Validates a (capacity, log2 capacity) pair and returns the log2.

    When log_capacity is omitted it is derived from capacity. Raises
    InvalidSizeError if capacity is not a positive power of two or if the
    supplied log_capacity does not match it.
    """
    if capacity < 1 or (capacity & (capacity - 1)) != 0:
        raise InvalidSizeError(f"capacity must be a power of two, got {capacity}")
    log = capacity.bit_length() - 1
    if log_capacity is not None and log_capacity != log:
        raise InvalidSizeError(
            f"log capacity {log_capacity} does not match capacity {capacity}"
        )
    return log


def add_arrays(
    lhs: Sequence[FieldElement], rhs: Sequence[FieldElement]
) -> list[FieldElement]:
    """
    Elementwise sum. rhs may be shorter than lhs, in which case it is treated
    as zero-extended.
    """
    if len(lhs) < len(rhs):
        raise InvalidSizeError(
            f"first operand ({len(lhs)}) must be at least as long as the second ({len(rhs)})"
        )
    return [a + b for a, b in zip(lhs, rhs)] + list(lhs[len(rhs) :])


def sub_arrays(
    lhs: Sequence[FieldElement], rhs: Sequence[FieldElement]
) -> list[FieldElement]:
    if len(lhs) < len(rhs):
        raise InvalidSizeError(
            f"first operand ({len(lhs)}) must be at least as long as the second ({len(rhs)})"
        )
    return [a - b for a, b in zip(lhs, rhs)] + list(lhs[len(rhs) :])


def neg_array(values: Sequence[FieldElement]) -> list[FieldElement]:
    return [-v for v in values]


def scalar_multiply(
    values: Sequence[FieldElement], scalar: FieldElement
) -> list[FieldElement]:
    return [v * scalar for v in values]


def pointwise_multiply(
    lhs: Sequence[FieldElement], rhs: Sequence[FieldElement]
) -> list[FieldElement]:
    if len(lhs) != len(rhs):
        raise InvalidSizeError(
            f"cannot multiply sequences of length {len(lhs)} and {len(rhs)} pointwise"
        )
    return [a * b for a, b in zip(lhs, rhs)]


def last_nonzero_index(values: Sequence[FieldElement]) -> int:
    """
    Highest index holding a non-zero value, 0 if every value is zero.
    """
    for i in range(len(values) - 1, 0, -1):
        if not values[i].is_zero():
            return i
    return 0
