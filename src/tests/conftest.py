import pytest
from hypothesis import settings
from hypothesis import strategies as st
from hypothesis.strategies import register_type_strategy

from fieldpoly.algebra import Field, FieldElement
from fieldpoly.domain import Domain
from fieldpoly.univariate import Polynomial

# Field arithmetic is pure Python, transforms of a few dozen points can be slow.
settings.register_profile("fieldpoly", deadline=None, max_examples=50)
settings.load_profile("fieldpoly")

MAX_LOG_CAPACITY = 4


@pytest.fixture(scope="session")
def field():
    return Field.default()


@pytest.fixture(scope="session")
def domain(field: Field):
    # Large enough for products of the largest generated polynomials.
    return Domain.generate(field, 1 << (MAX_LOG_CAPACITY + 2))


register_type_strategy(
    FieldElement,
    st.integers(min_value=0, max_value=Field.PRIME - 1).map(
        lambda value: FieldElement(value, Field.default())
    ),
)

register_type_strategy(
    Polynomial,
    st.integers(min_value=0, max_value=MAX_LOG_CAPACITY).flatmap(
        lambda log_capacity: st.lists(
            st.from_type(FieldElement),
            min_size=1 << log_capacity,
            max_size=1 << log_capacity,
        ).map(lambda coefficients: Polynomial(Field.default(), coefficients))
    ),
)


def polynomials(capacity: int, max_degree=None):
    """
    Polynomials of a fixed capacity, optionally with zeros above max_degree.
    """
    size = capacity if max_degree is None else min(capacity, max_degree + 1)
    return st.lists(st.from_type(FieldElement), min_size=size, max_size=size).map(
        lambda values: Polynomial.from_slice(Field.default(), values, capacity)
    )
