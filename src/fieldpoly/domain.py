import logging
from typing import Iterator, Optional, Sequence

from fieldpoly.algebra import Field, FieldElement
from fieldpoly.arrays import log2_capacity
from fieldpoly.errors import DomainTooSmallError, InvalidDomainError, InvalidSizeError

logger = logging.getLogger(__name__)


class Domain:
    """
    The powers 1, r, r^2, ..., r^(N-1) of a primitive N-th root of unity r.

    A domain of capacity N also serves every transform of capacity M <= N by
    striding through its elements with step N / M, since r^(N/M) is a
    primitive M-th root of unity.

    The constructor does not check the elements: use `generate` to build a
    domain, or call `validate` on one that came from elsewhere.
    """

    def __init__(
        self, elements: Sequence[FieldElement], log_capacity: Optional[int] = None
    ):
        if len(elements) == 0:
            raise InvalidSizeError("domain must have at least one element")
        self.log_capacity = log2_capacity(len(elements), log_capacity)
        self.elements = tuple(elements)
        self.field = self.elements[0].field

    @staticmethod
    def from_raw(
        elements: Sequence[FieldElement], log_capacity: Optional[int] = None
    ) -> "Domain":
        return Domain(elements, log_capacity)

    @staticmethod
    def generate(
        field: Field, capacity: int, log_capacity: Optional[int] = None
    ) -> "Domain":
        log2_capacity(capacity, log_capacity)
        root = field.primitive_nth_root(capacity)
        logger.debug("generating domain of capacity %d over %r", capacity, field)

        elements = [field.one]
        for _ in range(1, capacity):
            elements.append(elements[-1] * root)
        return Domain(elements, log_capacity)

    @property
    def capacity(self) -> int:
        return len(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[FieldElement]:
        return iter(self.elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.elements == other.elements

    def __hash__(self) -> int:
        return hash(self.elements)

    def __repr__(self) -> str:
        return f"Domain(capacity={self.capacity}, root={self.primitive_root()})"

    def primitive_root(self) -> FieldElement:
        if self.capacity == 1:
            return self.elements[0]
        return self.elements[1]

    def root(self, index: int) -> FieldElement:
        return self.elements[index]

    def stride(self, capacity: int) -> int:
        """
        Step through `elements` that yields the roots of a transform of the
        given capacity.
        """
        log2_capacity(capacity)
        if capacity > self.capacity:
            raise DomainTooSmallError(
                f"domain of capacity {self.capacity} cannot serve capacity {capacity}"
            )
        return self.capacity // capacity

    def points(self, capacity: Optional[int] = None) -> list[FieldElement]:
        """
        The evaluation points of a transform of the given capacity, i.e. the
        powers of a primitive capacity-th root of unity.
        """
        if capacity is None:
            return list(self.elements)
        return list(self.elements[:: self.stride(capacity)])

    def validate(self) -> bool:
        """
        Checks that elements[i] == elements[1]^i, that no power before the
        N-th is 1 and that the N-th power is 1. Together these establish that
        elements[1] is a primitive N-th root of unity.
        """
        one = self.field.one
        if self.elements[0] != one:
            raise InvalidDomainError("domain must start at 1")
        if self.capacity == 1:
            return True

        generator = self.elements[1]
        current = generator
        for i in range(1, self.capacity):
            if current == one:
                raise InvalidDomainError(
                    f"root has order {i}, expected {self.capacity}"
                )
            if self.elements[i] != current:
                raise InvalidDomainError(f"element {i} is not the {i}-th power of the root")
            current = current * generator
        if current != one:
            raise InvalidDomainError(f"root does not have order {self.capacity}")

        logger.debug("validated domain of capacity %d", self.capacity)
        return True
