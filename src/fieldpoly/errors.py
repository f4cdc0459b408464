class PolynomialError(ValueError):
    pass


class InvalidSizeError(PolynomialError):
    """
    Capacity is not a power of two, its log2 does not match, or two operands
    have capacities that cannot be combined.
    """


class CapacityOverflowError(PolynomialError):
    """
    A non-zero coefficient would not fit in the target capacity.
    """


class DivisionByZeroPolynomialError(PolynomialError, ZeroDivisionError):
    pass


class DomainTooSmallError(PolynomialError):
    pass


class InvalidDomainError(PolynomialError):
    """
    The domain elements are not the successive powers of a primitive root of
    unity of the domain's order.
    """


class DegreeError(PolynomialError):
    pass


class DivisionCertificationError(PolynomialError):
    """
    divisor * quotient + remainder did not reproduce the dividend.
    """
