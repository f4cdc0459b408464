from typing import Optional, Sequence, Union

from fieldpoly.algebra import Field, FieldElement
from fieldpoly.arrays import (
    add_arrays,
    log2_capacity,
    neg_array,
    pointwise_multiply,
    scalar_multiply,
    sub_arrays,
)
from fieldpoly.domain import Domain
from fieldpoly.errors import CapacityOverflowError, DomainTooSmallError, InvalidSizeError
from fieldpoly.ntt import intt
from fieldpoly.univariate import Polynomial


class LagrangePolynomial:
    """
    A polynomial of degree < N given by its values at the N-th roots of unity
    of some domain, in the domain's order.

    The domain itself is not stored. Operations combining two instances, and
    `intt`, are only meaningful when both came from the same domain.
    """

    def __init__(
        self,
        field: Field,
        evals: Sequence[Union[FieldElement, int]],
        log_capacity: Optional[int] = None,
    ):
        self.log_capacity = log2_capacity(len(evals), log_capacity)
        self.field = field
        self.evals = [field.element(e) for e in evals]

    @staticmethod
    def from_slice(
        field: Field,
        values: Sequence[Union[FieldElement, int]],
        capacity: int,
        log_capacity: Optional[int] = None,
    ) -> "LagrangePolynomial":
        log2_capacity(capacity, log_capacity)
        if len(values) > capacity:
            raise CapacityOverflowError(
                f"{len(values)} evaluations do not fit in capacity {capacity}"
            )
        return LagrangePolynomial(
            field, list(values) + [field.zero] * (capacity - len(values))
        )

    @staticmethod
    def zero(field: Field, capacity: int) -> "LagrangePolynomial":
        return LagrangePolynomial.from_slice(field, [], capacity)

    @property
    def capacity(self) -> int:
        return len(self.evals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LagrangePolynomial):
            return NotImplemented
        return self.evals == other.evals

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return "Lagrange[" + ",".join(str(e) for e in self.evals) + "]"

    def _check_capacity(self, other: "LagrangePolynomial"):
        if self.capacity != other.capacity:
            raise InvalidSizeError(
                f"cannot combine evaluations of capacity {self.capacity} and {other.capacity}"
            )

    def add(self, other: "LagrangePolynomial") -> "LagrangePolynomial":
        self._check_capacity(other)
        return LagrangePolynomial(self.field, add_arrays(self.evals, other.evals))

    def sub(self, other: "LagrangePolynomial") -> "LagrangePolynomial":
        self._check_capacity(other)
        return LagrangePolynomial(self.field, sub_arrays(self.evals, other.evals))

    def negate(self) -> "LagrangePolynomial":
        return LagrangePolynomial(self.field, neg_array(self.evals))

    def scale(self, scalar: Union[FieldElement, int]) -> "LagrangePolynomial":
        return LagrangePolynomial(
            self.field, scalar_multiply(self.evals, self.field.element(scalar))
        )

    def multiply(self, other: "LagrangePolynomial") -> "LagrangePolynomial":
        """
        Pointwise product of the evaluations.

        This is the true polynomial product only if the capacity is larger than
        the degree of that product; otherwise it represents the product modulo
        x^N - 1. No check is made here.
        """
        self._check_capacity(other)
        return LagrangePolynomial(self.field, pointwise_multiply(self.evals, other.evals))

    def __add__(self, other: "LagrangePolynomial") -> "LagrangePolynomial":
        if not isinstance(other, LagrangePolynomial):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "LagrangePolynomial") -> "LagrangePolynomial":
        if not isinstance(other, LagrangePolynomial):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> "LagrangePolynomial":
        return self.negate()

    def __mul__(
        self, other: Union["LagrangePolynomial", FieldElement, int]
    ) -> "LagrangePolynomial":
        if isinstance(other, LagrangePolynomial):
            return self.multiply(other)
        if not isinstance(other, (int, FieldElement)):
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Union[FieldElement, int]) -> "LagrangePolynomial":
        return self.__mul__(other)

    def intt(self, domain: Domain) -> Polynomial:
        if domain.capacity < self.capacity:
            raise DomainTooSmallError(
                f"domain of capacity {domain.capacity} is too small for capacity {self.capacity}"
            )
        return Polynomial(self.field, intt(self.evals, domain))
