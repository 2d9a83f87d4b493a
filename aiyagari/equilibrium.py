"""
Stationary general equilibrium of the Aiyagari economy.

Households supply capital through their savings and firms demand it.  At a
given interest rate r:

    1. Determine the wage w(r) from the firm's first order conditions;
    2. Solve the households' savings problem at prices (r, w);
    3. Compute the stationary distribution μ induced by the optimal policy;
    4. Compute capital supply as the mean of asset holdings under μ.

The equilibrium interest rate r* equates this supply with the firm's capital
demand.  We find it with Brent's method applied to the excess supply of
capital on a bracket [r_lo, r_hi].
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from scipy.optimize import brentq

from .config import EquilibriumConfig, FirmParams
from .errors import AiyagariError, BracketError, RootNotConvergedError
from .firm import capital_demand, r_to_w, rd
from .household import Household, HouseholdSolution

logger = logging.getLogger(__name__)


def aggregate_capital(s_vals, stationary):
    """
    Mean asset holdings under the stationary distribution.

    Parameters
    ----------
    s_vals : array_like(float, ndim=2)
        State values, column 0 holds assets
    stationary : array_like(float, ndim=1)
        Stationary probability of each state
    """
    return float(np.dot(np.asarray(s_vals)[:, 0], stationary))


def household_at_rate(am, r, firm=None, solver=None):
    """
    Reset the household's prices to (r, w(r)) and solve its problem.
    """
    w = r_to_w(r, firm)
    am.set_prices(r, w)
    return am.solve(solver)


def prices_to_capital_stock(am, r, firm=None, solver=None):
    """
    Map prices to the induced level of capital stock.

    Parameters:
    ----------

    am : Household
        An instance of Household
    r : float
        The interest rate
    firm : FirmParams, optional
    solver : SolverConfig, optional
    """
    solution = household_at_rate(am, r, firm, solver)
    return aggregate_capital(am.s_vals, solution.stationary)


def excess_supply(am, r, firm=None, solver=None):
    """Capital supplied by households minus capital demanded by firms."""
    return prices_to_capital_stock(am, r, firm, solver) - capital_demand(r, firm)


def capital_supply_curve(am, r_vals, firm=None, solver=None):
    """
    Trace out capital supply over a grid of interest rates.

    Returns
    -------
    k_vals : ndarray
        Capital supplied at each r in `r_vals`
    demand : ndarray
        Interest rate at which firms demand exactly k_vals
    """
    r_vals = np.asarray(r_vals, dtype=float)
    k_vals = np.empty(r_vals.size)
    for i, r in enumerate(r_vals):
        k_vals[i] = prices_to_capital_stock(am, r, firm, solver)
    return k_vals, rd(k_vals, firm)


@dataclass
class EquilibriumResult:
    """
    Outcome of the equilibrium search.

    `K` is capital demanded by firms at r*, `K_supply` capital supplied by
    households at r*.  They differ by `residual` because capital supply is a
    step function of r on a discrete asset grid.  `history` holds a tuple
    (r, supply, demand) for every evaluation made by the root finder.
    """

    r: float
    w: float
    K: float
    K_supply: float
    residual: float
    iterations: int
    function_calls: int
    solution: HouseholdSolution
    history: list = field(default_factory=list)


def compute_equilibrium(am=None, firm=None, config=None, solver=None):
    """
    Find the interest rate at which capital supply equals capital demand.

    Parameters
    ----------
    am : Household, optional
        The household whose savings make up the capital stock.  Its prices
        are overwritten during the search.
    firm : FirmParams, optional
    config : EquilibriumConfig, optional
        Bracket and tolerances
    solver : SolverConfig, optional
        Passed through to the household problem

    Returns
    -------
    EquilibriumResult

    Raises
    ------
    BracketError
        If excess supply has the same sign at both ends of the bracket
    RootNotConvergedError
        If brentq does not converge within `config.max_iter` iterations
    """
    am = am if am is not None else Household()
    firm = firm if firm is not None else FirmParams()
    config = config if config is not None else EquilibriumConfig()

    if config.r_lo + firm.δ <= 0:
        raise BracketError(
            f"r_lo + δ must be positive. Got r_lo={config.r_lo}, δ={firm.δ}"
        )

    history = []

    def f(r):
        supply = prices_to_capital_stock(am, r, firm, solver)
        demand = capital_demand(r, firm)
        history.append((r, supply, demand))
        logger.debug("r=%.8f  K_supply=%.6f  K_demand=%.6f  excess=%+.6e",
                     r, supply, demand, supply - demand)
        return supply - demand

    try:
        r_star, info = brentq(f, config.r_lo, config.r_hi,
                              xtol=config.xtol, rtol=config.rtol,
                              maxiter=config.max_iter,
                              full_output=True, disp=False)
    except AiyagariError:
        raise
    except ValueError as exc:
        ends = [s - d for _, s, d in history[:2]]
        if len(ends) == 2 and np.sign(ends[0]) == np.sign(ends[1]):
            raise BracketError(
                f"Excess supply has the same sign at r_lo={config.r_lo} ({ends[0]:+.6e}) "
                f"and r_hi={config.r_hi} ({ends[1]:+.6e})"
            ) from exc
        raise

    if not info.converged:
        raise RootNotConvergedError(
            f"brentq did not converge in {config.max_iter} iterations: {info.flag}"
        )

    # extra evaluation to report the household side at r*
    w_star = r_to_w(r_star, firm)
    solution = household_at_rate(am, r_star, firm, solver)
    K_supply = aggregate_capital(am.s_vals, solution.stationary)
    K = capital_demand(r_star, firm)

    logger.info("Equilibrium r=%.6f, w=%.6f, K=%.6f after %d evaluations",
                r_star, w_star, K, info.function_calls)

    return EquilibriumResult(
        r=r_star,
        w=w_star,
        K=K,
        K_supply=K_supply,
        residual=K_supply - K,
        iterations=info.iterations,
        function_calls=info.function_calls,
        solution=solution,
        history=history,
    )
