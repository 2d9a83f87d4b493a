"""
Discretization of the household state space.

The state of a household is a pair (a, z) of current assets and current
productivity.  We need to enumerate the state space S as a sequence
S = {0, ..., n - 1}.  To this end, (a_i, z_i) index pairs are mapped to s_i
indices according to the rule

    s_i = a_i * z_size + z_i

To invert this map, use

    a_i = s_i // z_size  (integer division)
    z_i = s_i % z_size

"""

from dataclasses import dataclass

import numpy as np
import quantecon as qe

from .config import HouseholdParams, check_stochastic_matrix
from .errors import ConfigurationError


def make_asset_grid(a_min, a_max, a_size):
    """
    Linearly spaced grid from a_min to a_max (both included).
    """
    if int(a_size) != a_size or a_size < 2:
        raise ConfigurationError(f"a_size must be an integer >= 2. Got {a_size}")
    if not a_min < a_max:
        raise ConfigurationError(
            f"a_min must be below a_max. Got a_min={a_min}, a_max={a_max}"
        )
    a_vals = np.linspace(a_min, a_max, int(a_size))
    a_vals.flags.writeable = False
    return a_vals


@dataclass(frozen=True, eq=False)
class ShockChain:
    """
    Finite Markov chain for the exogenous productivity shock z.

    Parameters
    ----------
    Π : array_like(float, ndim=2)
        Row-stochastic transition matrix, Π[i, j] = Prob(z' = z_j | z = z_i)
    z_vals : array_like(float, ndim=1)
        The productivity level of each state
    """

    Π: np.ndarray
    z_vals: np.ndarray

    def __post_init__(self):
        Π = check_stochastic_matrix(self.Π)
        z_vals = np.array(self.z_vals, dtype=float)
        if z_vals.ndim != 1 or z_vals.size != Π.shape[0]:
            raise ConfigurationError(
                f"z_vals must hold one value per state of Π ({Π.shape[0]}). "
                f"Got shape {z_vals.shape}"
            )
        z_vals.flags.writeable = False
        object.__setattr__(self, "Π", Π)
        object.__setattr__(self, "z_vals", z_vals)

    @property
    def z_size(self):
        return self.z_vals.size

    @property
    def mc(self):
        return qe.MarkovChain(self.Π, self.z_vals)

    def stationary_distribution(self):
        """Long-run distribution of z alone."""
        return self.mc.stationary_distributions[0]

    def household_params(self, **kwargs):
        """HouseholdParams whose income process is this chain."""
        return HouseholdParams(Π=self.Π, z_vals=self.z_vals, **kwargs)

    @classmethod
    def symmetric(cls, persistence=0.9, z_vals=(0.1, 1.0)):
        """Two-state chain that stays put with probability `persistence`."""
        if not 0 <= persistence <= 1:
            raise ConfigurationError(f"persistence must lie in [0, 1]. Got {persistence}")
        p = persistence
        return cls([[p, 1 - p], [1 - p, p]], z_vals)

    @classmethod
    def from_markov_chain(cls, mc, exp=False):
        z_vals = np.exp(mc.state_values) if exp else mc.state_values
        return cls(mc.P, z_vals)

    @classmethod
    def tauchen(cls, n, ρ, σ_e, μ=0.0, n_std=3, exp=True):
        """
        Discretize z = exp(y), y' = μ + ρ y + ε, ε ~ N(0, σ_e**2) with Tauchen's
        method.  Set ``exp=False`` to use the levels of y directly.
        """
        mc = qe.markov.tauchen(n=n, rho=ρ, sigma=σ_e, mu=μ, n_std=n_std)
        return cls.from_markov_chain(mc, exp=exp)

    @classmethod
    def rouwenhorst(cls, n, ρ, σ_e, μ=0.0, exp=True):
        """Same process as `tauchen`, discretized with Rouwenhorst's method."""
        mc = qe.markov.rouwenhorst(n=n, rho=ρ, sigma=σ_e, mu=μ)
        return cls.from_markov_chain(mc, exp=exp)


class StateSpace:
    """
    Enumeration of all (a, z) pairs.

    Row s_i of `s_vals` holds the values (a, z) of state s_i and row s_i of
    `s_i_vals` holds the indices (a_i, z_i) of the same state in their own
    grids.
    """

    def __init__(self, a_vals, z_vals):
        self.a_vals = np.asarray(a_vals, dtype=float)
        self.z_vals = np.asarray(z_vals, dtype=float)
        self.a_size = self.a_vals.size
        self.z_size = self.z_vals.size
        if self.a_size < 2:
            raise ConfigurationError(f"a_size must be >= 2. Got {self.a_size}")
        if self.z_size < 1:
            raise ConfigurationError("The shock chain needs at least one state")
        if np.any(np.diff(self.a_vals) <= 0):
            raise ConfigurationError("The asset grid must be strictly increasing")
        self.n = self.a_size * self.z_size

        a_i = np.repeat(np.arange(self.a_size), self.z_size)
        z_i = np.tile(np.arange(self.z_size), self.a_size)
        self.s_i_vals = np.column_stack((a_i, z_i))
        self.s_vals = np.column_stack((self.a_vals[a_i], self.z_vals[z_i]))
        for arr in (self.s_i_vals, self.s_vals):
            arr.flags.writeable = False

    @classmethod
    def from_params(cls, params):
        a_vals = make_asset_grid(params.a_min, params.a_max, params.a_size)
        return cls(a_vals, params.z_vals)

    def encode(self, a_i, z_i):
        """Linear state index of the pair (a_i, z_i)."""
        if not (0 <= a_i < self.a_size and 0 <= z_i < self.z_size):
            raise IndexError(f"({a_i}, {z_i}) is outside the {self.a_size}x{self.z_size} grid")
        return a_i * self.z_size + z_i

    def decode(self, s_i):
        """Pair (a_i, z_i) of grid indices for linear state index s_i."""
        if not 0 <= s_i < self.n:
            raise IndexError(f"State index {s_i} is outside 0..{self.n - 1}")
        return divmod(s_i, self.z_size)

    def to_grid(self, x):
        """Reshape a vector indexed by state into a (z_size, a_size) array."""
        return np.asarray(x).reshape(self.a_size, self.z_size).T
