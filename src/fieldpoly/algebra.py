from typing import Optional, Union

from fieldpoly.errors import InvalidSizeError


def xgcd(x, y):
    """
    Extended Euclidean Algorithm, see https://en.wikipedia.org/wiki/Extended_Euclidean_algorithm
    """
    old_r, r = x, y
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t

    return old_s, old_t, old_r  # a, b, g


class FieldDivisionError(ValueError, ZeroDivisionError):
    pass


class FieldElement:
    def __init__(self, value: int, field: "Field"):
        self.value = value % field.p
        self.field = field

    def _coerce(self, other: object) -> Optional["FieldElement"]:
        if isinstance(other, int):
            return FieldElement(other, self.field)
        if isinstance(other, FieldElement):
            return other
        return None

    def __add__(self, right: Union["FieldElement", int]) -> "FieldElement":
        right = self._coerce(right)
        if right is None:
            return NotImplemented
        return self.field.add(self, right)

    def __radd__(self, left: int) -> "FieldElement":
        left = self._coerce(left)
        if left is None:
            return NotImplemented
        return self.field.add(left, self)

    def __mul__(self, right: Union["FieldElement", int]) -> "FieldElement":
        right = self._coerce(right)
        if right is None:
            return NotImplemented
        return self.field.multiply(self, right)

    def __rmul__(self, left: int) -> "FieldElement":
        left = self._coerce(left)
        if left is None:
            return NotImplemented
        return self.field.multiply(left, self)

    def __sub__(self, right: Union["FieldElement", int]) -> "FieldElement":
        right = self._coerce(right)
        if right is None:
            return NotImplemented
        return self.field.subtract(self, right)

    def __rsub__(self, left: int) -> "FieldElement":
        left = self._coerce(left)
        if left is None:
            return NotImplemented
        return self.field.subtract(left, self)

    def __truediv__(self, right: Union["FieldElement", int]) -> "FieldElement":
        right = self._coerce(right)
        if right is None:
            return NotImplemented
        return self.field.divide(self, right)

    def __rtruediv__(self, left: Union[int, "FieldElement"]) -> "FieldElement":
        left = self._coerce(left)
        if left is None:
            return NotImplemented
        return self.field.divide(left, self)

    def __neg__(self) -> "FieldElement":
        return self.field.negate(self)

    def __pow__(self, exponent: int) -> "FieldElement":
        acc = self.field.one
        val = self
        for i in bin(exponent)[2:]:
            acc *= acc
            if i != "0":
                acc *= val
        return acc

    def inverse(self) -> "FieldElement":
        return self.field.inverse(self)

    def is_zero(self) -> bool:
        return self.value == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            other = FieldElement(other, self.field)
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field.eq(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{self.value}"

    def __hash__(self) -> int:
        return hash(self.value)


class Field:
    PRIME = 1 + 407 * (1 << 119)
    BN254_PRIME = (
        21888242871839275222246405745257275088548364400416034343698204186575808495617
    )

    # modulus -> (root of unity, log2 of its order)
    ROOTS_OF_UNITY = {
        PRIME: (85408008396924667383611388730472331217, 119),
        BN254_PRIME: (
            19103219067921713944291392827692070036145651957329286315305642004821462161904,
            28,
        ),
    }

    def __init__(self, p: int):
        self.p = p

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.p == other.p

    def __hash__(self) -> int:
        return hash(self.p)

    def __repr__(self) -> str:
        return f"Field({self.p})"

    @property
    def zero(self) -> FieldElement:
        return FieldElement(0, self)

    @property
    def one(self) -> FieldElement:
        return FieldElement(1, self)

    def element(self, value: Union[FieldElement, int]) -> FieldElement:
        if isinstance(value, FieldElement):
            if value.field != self:
                raise ValueError("element belongs to a different field")
            return value
        return FieldElement(value, self)

    def multiply(self, left: FieldElement, right: FieldElement) -> FieldElement:
        return FieldElement(left.value * right.value, self)

    def eq(self, left: FieldElement, right: FieldElement) -> bool:
        return left.value == right.value

    def add(self, left: FieldElement, right: FieldElement) -> FieldElement:
        return FieldElement(left.value + right.value, self)

    def subtract(self, left: FieldElement, right: FieldElement) -> FieldElement:
        return FieldElement(left.value - right.value, self)

    def negate(self, operand: FieldElement) -> FieldElement:
        return FieldElement(-operand.value, self)

    def inverse(self, operand: FieldElement) -> FieldElement:
        return self.divide(self.one, operand)

    def divide(self, left: FieldElement, right: FieldElement) -> FieldElement:
        if right.is_zero():
            raise FieldDivisionError("Cannot divide by zero")
        a, *_ = xgcd(right.value, self.p)
        return FieldElement(left.value * a, self)

    @staticmethod
    def default() -> "Field":
        return Field(Field.PRIME)

    @staticmethod
    def bn254() -> "Field":
        return Field(Field.BN254_PRIME)

    @property
    def two_adicity(self) -> int:
        """
        log2 of the order of the largest power-of-two root of unity known for
        this field.
        """
        if self.p not in Field.ROOTS_OF_UNITY:
            raise ValueError("Unknown field, can't return root of unity.")
        return Field.ROOTS_OF_UNITY[self.p][1]

    def primitive_nth_root(self, n: int) -> FieldElement:
        """
        Squares the table root down until its order is n. Each squaring halves
        the order, so this takes two_adicity - log2(n) steps.
        """
        max_log_order = self.two_adicity
        if n < 1 or (n & (n - 1)) != 0:
            raise InvalidSizeError(f"{n=} is not a power of two")
        if n > 1 << max_log_order:
            raise InvalidSizeError(
                f"Field does not have nth root of unity where n > 2^{max_log_order}."
            )
        root = FieldElement(Field.ROOTS_OF_UNITY[self.p][0], self)
        order = 1 << max_log_order
        while order != n:
            root = root**2
            order = order // 2
        return root
