from typing import Sequence

from fieldpoly.algebra import FieldElement
from fieldpoly.arrays import log2_capacity
from fieldpoly.domain import Domain


def bit_reverse_index(index: int, log_n: int) -> int:
    result = 0
    for _ in range(log_n):
        result = (result << 1) | (index & 1)
        index >>= 1
    return result


def bit_reverse(values: Sequence[FieldElement], log_n: int) -> list[FieldElement]:
    """
    Returns a copy of values where the entry at index i is moved to the index
    obtained by reversing the low log_n bits of i.
    """
    n = len(values)
    log2_capacity(n, log_n)
    result = list(values)
    for i in range(n):
        result[bit_reverse_index(i, log_n)] = values[i]
    return result


def _butterfly(
    values: Sequence[FieldElement], domain: Domain, log_n: int, inverse: bool
) -> list[FieldElement]:
    n = len(values)
    log2_capacity(n, log_n)
    step = domain.stride(n)
    coeffs = list(values)
    one = domain.field.one

    for stage in range(1, log_n + 1):
        block_size = 1 << stage
        half = block_size // 2
        num_blocks = n // block_size
        twiddle = domain.root(num_blocks * step)
        if inverse:
            twiddle = twiddle.inverse()

        for j in range(num_blocks):
            wp = one
            for k in range(half):
                idx = j * block_size + k
                idx2 = idx + half
                u = coeffs[idx]
                v = coeffs[idx2] * wp
                coeffs[idx] = u + v
                coeffs[idx2] = u - v
                wp = wp * twiddle

    return coeffs


def butterfly_forward(
    values: Sequence[FieldElement], domain: Domain, log_n: int
) -> list[FieldElement]:
    """
    Iterative radix-2 Cooley-Tukey pass (decimation in time).

    Parameters:
        values: the coefficients of a polynomial in bit-reversed order
        domain: a domain of capacity at least len(values); a larger domain is
                strided so that its root is raised to a primitive len(values)-th
                root of unity
        log_n: log2 of len(values)

    Returns:
        The evaluations of the polynomial at the len(values)-th roots of unity,
        in natural order.

    Raises:
        InvalidSizeError: if len(values) is not 2^log_n
        DomainTooSmallError: if the domain has fewer elements than values
    """
    return _butterfly(values, domain, log_n, inverse=False)


def butterfly_inverse(
    values: Sequence[FieldElement], domain: Domain, log_n: int
) -> list[FieldElement]:
    """
    Same pass as `butterfly_forward` with inverted twiddle factors, followed by
    a scaling by 1/n. Undoes `butterfly_forward` when applied to its
    bit-reversed output.
    """
    coeffs = _butterfly(values, domain, log_n, inverse=True)
    n_inverse = domain.field.element(len(values)).inverse()
    return [c * n_inverse for c in coeffs]


def ntt(values: Sequence[FieldElement], domain: Domain) -> list[FieldElement]:
    """
    Number Theoretic Transform: coefficients -> evaluations on the
    len(values)-th roots of unity of the domain.
    """
    log_n = log2_capacity(len(values))
    return butterfly_forward(bit_reverse(values, log_n), domain, log_n)


def intt(values: Sequence[FieldElement], domain: Domain) -> list[FieldElement]:
    """
    Inverse Number Theoretic Transform: evaluations -> coefficients.
    """
    log_n = log2_capacity(len(values))
    return butterfly_inverse(bit_reverse(values, log_n), domain, log_n)
