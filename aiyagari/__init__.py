"""
Aiyagari (1994): uninsured idiosyncratic risk and aggregate saving.

Households face idiosyncratic productivity shocks, can save in a single
riskless asset and cannot borrow.  Their savings make up the capital stock
rented by a competitive Cobb-Douglas firm.  The package builds the
household's discrete dynamic program, solves it with quantecon's DiscreteDP
and searches for the interest rate that clears the capital market.

    >>> import aiyagari as ai
    >>> am = ai.Household(ai.HouseholdParams(a_max=20.0))
    >>> eq = ai.compute_equilibrium(am, ai.FirmParams())
    >>> eq.r, eq.K
"""

from .config import (EquilibriumConfig, FirmParams, HouseholdParams,
                     SolverConfig, Utility)
from .equilibrium import (EquilibriumResult, aggregate_capital,
                          capital_supply_curve, compute_equilibrium,
                          excess_supply, household_at_rate,
                          prices_to_capital_stock)
from .errors import (AiyagariError, BracketError, ConfigurationError,
                     DomainError, EquilibriumError, RootNotConvergedError,
                     SolverConvergenceError)
from .firm import capital_demand, r_to_w, rd
from .grids import ShockChain, StateSpace, make_asset_grid
from .household import Household, HouseholdSolution, stationary_distribution

__version__ = "0.1.0"

__all__ = [
    "AiyagariError",
    "BracketError",
    "ConfigurationError",
    "DomainError",
    "EquilibriumConfig",
    "EquilibriumError",
    "EquilibriumResult",
    "FirmParams",
    "Household",
    "HouseholdParams",
    "HouseholdSolution",
    "RootNotConvergedError",
    "ShockChain",
    "SolverConfig",
    "SolverConvergenceError",
    "StateSpace",
    "Utility",
    "aggregate_capital",
    "capital_demand",
    "capital_supply_curve",
    "compute_equilibrium",
    "excess_supply",
    "household_at_rate",
    "make_asset_grid",
    "prices_to_capital_stock",
    "r_to_w",
    "rd",
    "stationary_distribution",
]
