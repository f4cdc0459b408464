import logging
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from fieldpoly.algebra import Field, FieldElement
from fieldpoly.arrays import (
    add_arrays,
    last_nonzero_index,
    log2_capacity,
    neg_array,
    scalar_multiply,
    sub_arrays,
)
from fieldpoly.domain import Domain
from fieldpoly.errors import (
    CapacityOverflowError,
    DegreeError,
    DivisionByZeroPolynomialError,
    DivisionCertificationError,
    DomainTooSmallError,
    InvalidSizeError,
)
from fieldpoly.ntt import ntt

if TYPE_CHECKING:
    from fieldpoly.lagrange import LagrangePolynomial

logger = logging.getLogger(__name__)


class Polynomial:
    """
    A polynomial in coefficient form with a fixed power-of-two capacity.

    coefficients[i] is the coefficient of x^i. Slots above the degree are zero
    and only reserve room; every operation returns a new instance.
    """

    def __init__(
        self,
        field: Field,
        coefficients: Sequence[Union[FieldElement, int]],
        log_capacity: Optional[int] = None,
    ):
        self.log_capacity = log2_capacity(len(coefficients), log_capacity)
        self.field = field
        self.coefficients = [field.element(c) for c in coefficients]

    @staticmethod
    def from_slice(
        field: Field,
        values: Sequence[Union[FieldElement, int]],
        capacity: int,
        log_capacity: Optional[int] = None,
    ) -> "Polynomial":
        log2_capacity(capacity, log_capacity)
        if len(values) > capacity:
            raise CapacityOverflowError(
                f"{len(values)} coefficients do not fit in capacity {capacity}"
            )
        return Polynomial(field, list(values) + [field.zero] * (capacity - len(values)))

    @staticmethod
    def zero(field: Field, capacity: int) -> "Polynomial":
        return Polynomial.from_slice(field, [], capacity)

    @staticmethod
    def one(field: Field, capacity: int) -> "Polynomial":
        return Polynomial.from_slice(field, [field.one], capacity)

    @staticmethod
    def monomial(coefficient: FieldElement, power: int, capacity: int) -> "Polynomial":
        """
        coefficient * x^power
        """
        field = coefficient.field
        return Polynomial.from_slice(field, [field.zero] * power + [coefficient], capacity)

    @staticmethod
    def vanishing_polynomial(point: FieldElement, capacity: int) -> "Polynomial":
        """
        x - point, the polynomial whose only root is point.
        """
        field = point.field
        return Polynomial.from_slice(field, [-point, field.one], capacity)

    @property
    def capacity(self) -> int:
        return len(self.coefficients)

    @property
    def degree(self) -> int:
        """
        Index of the highest non-zero coefficient; 0 for the zero polynomial.
        """
        return last_nonzero_index(self.coefficients)

    @property
    def leading_coefficient(self) -> FieldElement:
        return self.coefficients[self.degree]

    def is_zero(self) -> bool:
        return all(c.is_zero() for c in self.coefficients)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, FieldElement)):
            return self.degree == 0 and self.coefficients[0] == other
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.capacity == other.capacity and self.coefficients == other.coefficients

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return "[" + ",".join(str(c) for c in self.coefficients) + "]"

    def _constant(self, value: Union[FieldElement, int]) -> "Polynomial":
        return Polynomial(self.field, [value])

    def add(self, other: "Polynomial") -> "Polynomial":
        return Polynomial(self.field, add_arrays(self.coefficients, other.coefficients))

    def sub(self, other: "Polynomial") -> "Polynomial":
        return Polynomial(self.field, sub_arrays(self.coefficients, other.coefficients))

    def negate(self) -> "Polynomial":
        return Polynomial(self.field, neg_array(self.coefficients))

    def scale(self, scalar: Union[FieldElement, int]) -> "Polynomial":
        """
        Multiplies every coefficient by scalar.
        """
        return Polynomial(
            self.field, scalar_multiply(self.coefficients, self.field.element(scalar))
        )

    def __add__(self, other: Union["Polynomial", FieldElement, int]) -> "Polynomial":
        if isinstance(other, (int, FieldElement)):
            other = self._constant(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Union["Polynomial", FieldElement, int]) -> "Polynomial":
        if isinstance(other, (int, FieldElement)):
            other = self._constant(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> "Polynomial":
        return self.negate()

    def __mul__(self, other: Union[FieldElement, int]) -> "Polynomial":
        if isinstance(other, Polynomial):
            raise TypeError(
                "polynomial products need a domain, use multiply or multiply_mod"
            )
        if not isinstance(other, (int, FieldElement)):
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Union[FieldElement, int]) -> "Polynomial":
        return self.__mul__(other)

    def evaluate(self, point: Union[FieldElement, int]) -> FieldElement:
        point = self.field.element(point)
        xi = self.field.one
        value = self.field.zero
        for c in self.coefficients:
            value = value + c * xi
            xi = xi * point
        return value

    def evaluate_domain(
        self, domain: Sequence[Union[FieldElement, int]]
    ) -> list[FieldElement]:
        return [self.evaluate(d) for d in domain]

    def shift_up_by_x(self) -> "Polynomial":
        """
        Multiplies by x, moving every coefficient up one slot.
        """
        if not self.coefficients[-1].is_zero():
            raise CapacityOverflowError(
                f"multiplying by x overflows capacity {self.capacity}"
            )
        return Polynomial(self.field, [self.field.zero] + self.coefficients[:-1])

    def expand(self, capacity: int) -> "Polynomial":
        log2_capacity(capacity)
        if capacity < self.capacity:
            raise InvalidSizeError(
                f"cannot expand capacity {self.capacity} to smaller {capacity}"
            )
        return Polynomial.from_slice(self.field, self.coefficients, capacity)

    def reduce(self, capacity: int) -> "Polynomial":
        """
        Drops the slots at index >= capacity, which must all be zero.
        """
        log2_capacity(capacity)
        if capacity > self.capacity:
            raise InvalidSizeError(
                f"cannot reduce capacity {self.capacity} to larger {capacity}"
            )
        if any(not c.is_zero() for c in self.coefficients[capacity:]):
            raise CapacityOverflowError(
                f"polynomial of degree {self.degree} does not fit in capacity {capacity}"
            )
        return Polynomial(self.field, self.coefficients[:capacity])

    def ntt(self, domain: Domain) -> "LagrangePolynomial":
        from fieldpoly.lagrange import LagrangePolynomial

        if domain.capacity < self.capacity:
            raise DomainTooSmallError(
                f"domain of capacity {domain.capacity} is too small for capacity {self.capacity}"
            )
        return LagrangePolynomial(self.field, ntt(self.coefficients, domain))

    def multiply(self, other: "Polynomial", domain: Domain) -> "Polynomial":
        """
        The full product self * other, with twice self's capacity.

        Both operands are zero-padded to the doubled capacity before the
        transform, so the cyclic convolution computed in evaluation form does
        not wrap around. The domain must therefore have at least twice self's
        capacity.
        """
        if self.capacity < other.capacity:
            raise InvalidSizeError(
                f"capacity {self.capacity} cannot multiply larger capacity {other.capacity}"
            )
        product_capacity = 2 * self.capacity
        if domain.capacity < product_capacity:
            raise DomainTooSmallError(
                f"domain of capacity {domain.capacity} is too small for a product of capacity {product_capacity}"
            )
        lhs = self.expand(product_capacity).ntt(domain)
        rhs = other.expand(product_capacity).ntt(domain)
        return lhs.multiply(rhs).intt(domain)

    def multiply_mod(self, other: "Polynomial", domain: Domain) -> "Polynomial":
        """
        The product self * other reduced modulo x^N - 1, where N is self's
        capacity. Terms of degree >= N wrap around to degree - N.
        """
        if self.capacity < other.capacity:
            raise InvalidSizeError(
                f"capacity {self.capacity} cannot multiply larger capacity {other.capacity}"
            )
        lhs = self.ntt(domain)
        rhs = other.expand(self.capacity).ntt(domain)
        return lhs.multiply(rhs).intt(domain)

    def long_divide(
        self, other: "Polynomial", domain: Domain
    ) -> Tuple["Polynomial", "Polynomial"]:
        """
        Schoolbook long division. Returns (quotient, remainder), both with
        self's capacity.

        Each round cancels the leading term of the remainder, so its degree
        strictly drops until it is below other's degree or the remainder is
        zero. The result is not checked here, see `certify_division`.
        """
        if other.is_zero():
            raise DivisionByZeroPolynomialError("cannot divide by zero polynomial")

        quotient = Polynomial.zero(self.field, self.capacity)
        remainder = self
        while remainder.degree >= other.degree and not remainder.is_zero():
            coefficient = remainder.leading_coefficient / other.leading_coefficient
            shift = remainder.degree - other.degree
            monomial = Polynomial.monomial(coefficient, shift, self.capacity)
            quotient = quotient.add(monomial)
            subtractee = _product(monomial, other, domain).reduce(self.capacity)
            remainder = remainder.sub(subtractee)
        return quotient, remainder

    def certify_division(
        self,
        other: "Polynomial",
        quotient: "Polynomial",
        remainder: "Polynomial",
        domain: Domain,
    ) -> bool:
        """
        Checks that other * quotient + remainder == self and that the remainder
        has lower degree than other (or is zero when other is a constant).
        """
        product = _product(other, quotient, domain)
        try:
            recomputed = product.add(remainder).reduce(self.capacity)
        except CapacityOverflowError as e:
            raise DivisionCertificationError(
                "divisor * quotient + remainder exceeds the dividend's capacity"
            ) from e
        if recomputed != self:
            raise DivisionCertificationError(
                "divisor * quotient + remainder does not equal the dividend"
            )

        if other.degree == 0:
            if not remainder.is_zero():
                raise DivisionCertificationError(
                    "remainder of division by a constant must be zero"
                )
        elif remainder.degree >= other.degree:
            raise DivisionCertificationError(
                f"remainder degree {remainder.degree} is not below divisor degree {other.degree}"
            )
        return True

    def divide(
        self, other: "Polynomial", domain: Domain
    ) -> Tuple["Polynomial", "Polynomial"]:
        """
        Returns (quotient, remainder) with self == other * quotient + remainder.

        The long division result is recomputed through the NTT product before
        it is returned, so a wrong result surfaces as
        DivisionCertificationError rather than a silently bad quotient.
        """
        if other.is_zero():
            raise DivisionByZeroPolynomialError("cannot divide by zero polynomial")
        if self.degree < other.degree:
            raise DegreeError(
                f"cannot divide degree {self.degree} by larger degree {other.degree}"
            )
        product_capacity = 2 * max(self.capacity, other.capacity)
        if domain.capacity < product_capacity:
            raise DomainTooSmallError(
                f"domain of capacity {domain.capacity} is too small for a product of capacity {product_capacity}"
            )

        quotient, remainder = self.long_divide(other, domain)
        self.certify_division(other, quotient, remainder, domain)
        logger.debug(
            "divided degree %d by degree %d: quotient degree %d, remainder degree %d",
            self.degree,
            other.degree,
            quotient.degree,
            remainder.degree,
        )
        return quotient, remainder


def _product(lhs: Polynomial, rhs: Polynomial, domain: Domain) -> Polynomial:
    # multiply wants the larger capacity on the left
    if lhs.capacity < rhs.capacity:
        lhs, rhs = rhs, lhs
    return lhs.multiply(rhs, domain)
