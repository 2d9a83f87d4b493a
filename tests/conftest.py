import matplotlib

matplotlib.use("Agg")

import pytest

from aiyagari import FirmParams, Household, HouseholdParams


@pytest.fixture
def params():
    """A coarse grid that solves quickly."""
    return HouseholdParams(a_max=20.0, a_size=40)


@pytest.fixture
def household(params):
    return Household(params)


@pytest.fixture
def firm():
    return FirmParams(A=1.0, N=1.0, α=0.33, δ=0.05)


@pytest.fixture
def solution(household):
    household.set_prices(0.03, 0.956)
    return household.solve()
