"""
Shared pytest fixtures for the projection engine test suite.

Every fixture returns a fresh immutable PropertyRecord; the memoized
projection cache is cleared around each test so tests never share state.
"""
import pytest

from core.schema import PropertyRecord
from pm.aggregator import clear_projection_cache


# ---------------------------------------------------------------------------
# Cache lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_cache():
    clear_projection_cache()
    yield
    clear_projection_cache()


# ---------------------------------------------------------------------------
# Property records
# ---------------------------------------------------------------------------

def make_record(**overrides):
    values = dict(
        identifier='house-1',
        name='Starter House',
        property_value=600_000.0,
        down_payment=150_000.0,
        annual_appreciation=6.0,
        property_tax_rate=0.51,
        monthly_rent=2_500.0,
        rental_appreciation=5.0,
        interest_rate=4.5,
        loan_term=30,
    )
    values.update(overrides)
    return PropertyRecord(**values)


@pytest.fixture
def starter_house():
    """The calculator's default house: 600k, 150k down, 4.5% over 30 years."""
    return make_record()


@pytest.fixture
def duplex():
    return make_record(
        identifier='duplex-1',
        name='Duplex',
        property_value=420_000.0,
        down_payment=84_000.0,
        annual_appreciation=3.5,
        property_tax_rate=1.1,
        monthly_rent=3_400.0,
        rental_appreciation=2.5,
        interest_rate=6.25,
        loan_term=15,
    )


@pytest.fixture
def zero_rate_house():
    return make_record(identifier='zero-rate', interest_rate=0.0, loan_term=15)


@pytest.fixture
def cash_purchase():
    return make_record(identifier='cash', down_payment=600_000.0)
