"""
The household's savings problem as a discrete dynamic program.

A Household maps the parameters of the asset accumulation problem into the
reward array R and the transition array Q required by quantecon's
DiscreteDP, and thereby solves for the optimal policy.

    R[s_i, a_j]        utility of consumption in state s_i when choosing a_j
    Q[s_i, a_j, s_i']  probability of moving to state s_i' from s_i under a_j

The state is s = (a, z), assets and productivity, and the action is the
choice of next period assets a' on the same grid as a.  See grids.py for the
enumeration of states.
"""

import logging
from dataclasses import dataclass

import numpy as np
import quantecon as qe
from numba import jit
from quantecon.markov import DiscreteDP

from .config import HouseholdParams, SolverConfig
from .errors import SolverConvergenceError
from .grids import ShockChain, StateSpace
from .utility import u

logger = logging.getLogger(__name__)


class Household:
    """
    This class takes the parameters that define a household asset accumulation
    problem and computes the corresponding reward and transition matrices R
    and Q required to generate an instance of DiscreteDP.

    Q depends only on the shock chain and the grids, so it is built once and
    frozen.  R depends on prices and is rebuilt, into a fresh array, every
    time `set_prices` is called.

    Parameters
    ----------
    params : HouseholdParams, optional
        Defaults to HouseholdParams()
    """

    def __init__(self, params=None):
        if params is None:
            params = HouseholdParams()
        self.params = params

        # Store values, set up grids over a and z
        self.r, self.w, self.β = params.r, params.w, params.β
        self.utility = params.utility
        self.Π, self.z_vals = params.Π, params.z_vals
        self.space = StateSpace.from_params(params)
        self.a_vals = self.space.a_vals
        self.a_size, self.z_size = self.space.a_size, self.space.z_size
        self.s_vals, self.s_i_vals = self.space.s_vals, self.space.s_i_vals
        self.n = self.space.n

        # Build the array Q
        self.Q = np.zeros((self.n, self.a_size, self.n))
        self.build_Q()
        self.Q.flags.writeable = False

        # Build the array R
        self.build_R()

    def __repr__(self):
        return (f"Household(r={self.r}, w={self.w}, β={self.β}, "
                f"a_size={self.a_size}, z_size={self.z_size})")

    @property
    def chain(self):
        return ShockChain(self.Π, self.z_vals)

    def set_prices(self, r, w):
        """
        Use this method to reset prices. Calling the method will trigger a
        re-build of R.
        """
        self.r, self.w = r, w
        self.build_R()

    def build_Q(self):
        populate_Q(self.Q, self.a_size, self.z_size, np.array(self.Π))

    def build_R(self):
        self.R = np.full((self.n, self.a_size), -np.inf)
        populate_R(self.R,
                   self.a_size,
                   self.z_size,
                   np.array(self.a_vals),
                   np.array(self.z_vals),
                   self.r,
                   self.w,
                   self.utility.σ,
                   self.utility.is_log)
        return self.R

    def consumption(self, s_i, a_j):
        """Consumption implied by choosing a_vals[a_j] in state s_i."""
        a, z = self.s_vals[s_i]
        return self.w * z + (1 + self.r) * a - self.a_vals[a_j]

    def ddp(self):
        return DiscreteDP(self.R, self.Q, self.β)

    def solve(self, solver=None):
        """
        Solve the household problem at the current prices.

        Parameters
        ----------
        solver : SolverConfig, optional
            Method and iteration budget for DiscreteDP.solve

        Returns
        -------
        HouseholdSolution

        Raises
        ------
        SolverConvergenceError
            If the solver stopped before reaching the fixed point, or the
            induced Markov chain has no proper stationary distribution
        """
        if solver is None:
            solver = SolverConfig()
        ddp = self.ddp()
        if solver.method == "policy_iteration":
            results = ddp.solve(method=solver.method, max_iter=solver.max_iter)
            # sigma is optimal iff it is greedy with respect to its own value
            v_sigma = ddp.evaluate_policy(results.sigma)
            converged = np.array_equal(ddp.compute_greedy(v_sigma), results.sigma)
        else:
            # One spare sweep: quantecon reports num_iter == max_iter both when
            # the last allowed sweep converged and when none did
            results = ddp.solve(method=solver.method, max_iter=solver.max_iter + 1,
                                epsilon=solver.epsilon)
            converged = results.num_iter <= solver.max_iter
        if not converged:
            raise SolverConvergenceError(
                f"{solver.method} did not converge in {solver.max_iter} iterations "
                f"at r={self.r}, w={self.w}"
            )
        logger.debug("%s converged in %d iterations at r=%.6f, w=%.6f",
                     solver.method, results.num_iter, self.r, self.w)

        # A correctly functioning solver never picks a -inf reward
        chosen = self.R[np.arange(self.n), results.sigma]
        if not np.all(np.isfinite(chosen)):
            bad = np.flatnonzero(~np.isfinite(chosen))
            raise SolverConvergenceError(
                f"Policy selects infeasible actions in states {bad[:10].tolist()}"
            )

        return HouseholdSolution(
            r=self.r,
            w=self.w,
            v=results.v,
            sigma=results.sigma,
            num_iter=results.num_iter,
            mc=results.mc,
            stationary=stationary_distribution(results.mc),
            space=self.space,
        )


def stationary_distribution(mc, tol=1e-10):
    """
    Stationary distribution μ = μ P of a policy-induced Markov chain.

    If the chain has several recurrent classes the first distribution
    reported by quantecon is used.
    """
    dists = mc.stationary_distributions
    if len(dists) > 1:
        logger.warning("Markov chain has %d stationary distributions, using the first",
                       len(dists))
    μ = np.asarray(dists[0])
    if not np.all(np.isfinite(μ)) or np.any(μ < -tol) or abs(μ.sum() - 1) > 1e-8:
        raise SolverConvergenceError("Stationary distribution is not a probability vector")
    return μ


@dataclass
class HouseholdSolution:
    """
    Optimal behaviour of a household at prices (r, w).

    `v`, `sigma` and `stationary` are indexed by the linear state index; the
    `*_star` properties reshape them into (z_size, a_size) arrays, one row per
    productivity level.
    """

    r: float
    w: float
    v: np.ndarray
    sigma: np.ndarray
    num_iter: int
    mc: qe.MarkovChain
    stationary: np.ndarray
    space: StateSpace

    @property
    def a_star(self):
        """Optimal next period assets, in asset values."""
        return self.space.to_grid(self.space.a_vals[self.sigma])

    @property
    def c_star(self):
        """Optimal consumption."""
        a, z = self.space.s_vals[:, 0], self.space.s_vals[:, 1]
        c = self.w * z + (1 + self.r) * a - self.space.a_vals[self.sigma]
        return self.space.to_grid(c)

    @property
    def v_star(self):
        return self.space.to_grid(self.v)

    def distribution(self):
        """Stationary probability of each (z, a) pair."""
        return self.space.to_grid(self.stationary)

    def asset_marginal(self):
        """Stationary distribution of assets, summing over z."""
        return asset_marginal(self.stationary, self.space.a_size, self.space.z_size)


# Do the hard work using JIT-ed functions

@jit(nopython=True)
def populate_R(R, a_size, z_size, a_vals, z_vals, r, w, σ, is_log):
    n = a_size * z_size
    for s_i in range(n):
        a_i = s_i // z_size
        z_i = s_i % z_size
        a = a_vals[a_i]
        z = z_vals[z_i]
        for new_a_i in range(a_size):
            a_new = a_vals[new_a_i]
            c = w * z + (1 + r) * a - a_new
            if c > 0:
                R[s_i, new_a_i] = u(c, σ, is_log)


@jit(nopython=True)
def populate_Q(Q, a_size, z_size, Π):
    n = a_size * z_size
    for s_i in range(n):
        z_i = s_i % z_size
        for a_i in range(a_size):
            for next_z_i in range(z_size):
                Q[s_i, a_i, a_i*z_size + next_z_i] = Π[z_i, next_z_i]


@jit(nopython=True)
def asset_marginal(s_probs, a_size, z_size):
    a_probs = np.zeros(a_size)
    for a_i in range(a_size):
        for z_i in range(z_size):
            a_probs[a_i] += s_probs[a_i*z_size + z_i]
    return a_probs
