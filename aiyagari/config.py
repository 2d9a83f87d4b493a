"""
Parameter containers for households, firms and the equilibrium search.

Every container is a frozen dataclass with named, defaulted fields.  Values
are checked once, in ``__post_init__``, so that the numerical code further
down never has to second-guess its inputs.  Use ``dataclasses.replace`` to
derive a variant, e.g. ``replace(HouseholdParams(), a_max=20.0)``.
"""

import math
from dataclasses import dataclass, field
from typing import Literal, Optional

import numpy as np

from .errors import ConfigurationError

UTILITY_KINDS = ("log", "crra")
DDP_METHODS = ("policy_iteration", "value_iteration", "modified_policy_iteration")

# value iteration contracts at rate β, so it needs far more sweeps
DEFAULT_MAX_ITER = {
    "policy_iteration": 250,
    "value_iteration": 2000,
    "modified_policy_iteration": 250,
}


@dataclass(frozen=True)
class Utility:
    """
    Period utility of consumption.

    ``kind="log"`` is u(c) = log(c); ``kind="crra"`` is
    u(c) = (c**(1 - σ) - 1) / (1 - σ).  The log case is its own variant
    rather than the σ == 1 limit of the CRRA formula, so no code compares
    floats for equality to decide which branch to take.
    """

    kind: Literal["log", "crra"] = "log"
    σ: float = 1.0

    def __post_init__(self):
        if self.kind not in UTILITY_KINDS:
            raise ConfigurationError(
                f"Unknown utility kind {self.kind!r}. Valid options: {UTILITY_KINDS}"
            )
        if not math.isfinite(self.σ) or self.σ < 0:
            raise ConfigurationError(f"σ must be finite and >= 0. Got {self.σ}")
        if self.kind == "log":
            if self.σ != 1.0:
                raise ConfigurationError(
                    f"Log utility has σ = 1. Got σ={self.σ}, use Utility.crra(σ)"
                )
        elif self.σ == 1.0:
            raise ConfigurationError("CRRA with σ = 1 is log utility, use Utility.log()")

    @classmethod
    def log(cls):
        return cls("log", 1.0)

    @classmethod
    def crra(cls, σ):
        return cls("crra", float(σ))

    @classmethod
    def from_sigma(cls, σ):
        """Pick the log variant for σ == 1 and CRRA otherwise."""
        return cls.log() if σ == 1 else cls.crra(σ)

    @property
    def is_log(self):
        return self.kind == "log"


def _frozen_array(values, name, ndim):
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be numeric. Got {values!r}") from exc
    if arr.ndim != ndim:
        raise ConfigurationError(f"{name} must be {ndim}-dimensional. Got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(f"{name} contains non-finite values")
    arr.flags.writeable = False
    return arr


def check_stochastic_matrix(Π, tol=1e-10):
    """
    Validate a transition matrix and return it as a read-only float array.

    Raises
    ------
    ConfigurationError
        If Π is not square, has negative entries, or a row does not sum to
        one within ``tol``.
    """
    Π = _frozen_array(Π, "Π", 2)
    if Π.shape[0] < 1 or Π.shape[0] != Π.shape[1]:
        raise ConfigurationError(f"Π must be a non-empty square matrix. Got shape {Π.shape}")
    if np.any(Π < 0):
        raise ConfigurationError("Π has negative entries")
    row_sums = Π.sum(axis=1)
    bad = np.flatnonzero(np.abs(row_sums - 1) > tol)
    if bad.size:
        raise ConfigurationError(
            f"Rows {bad.tolist()} of Π do not sum to 1: {row_sums[bad].tolist()}"
        )
    return Π


@dataclass(frozen=True, eq=False)
class HouseholdParams:
    """
    Parameters of the household savings problem.

    Attributes
    ----------
    r : float
        Interest rate
    w : float
        Wage
    β : float
        Discount factor, 0 < β < 1
    utility : Utility
        Period utility of consumption
    Π : array_like(float, ndim=2)
        Transition matrix of the exogenous shock z
    z_vals : array_like(float, ndim=1)
        Values of the exogenous shock z
    a_min, a_max : float
        Bounds of the asset grid
    a_size : int
        Number of asset grid points, at least 2
    """

    r: float = 0.01
    w: float = 1.0
    β: float = 0.96
    utility: Utility = field(default_factory=Utility.log)
    Π: np.ndarray = field(default_factory=lambda: [[0.9, 0.1], [0.1, 0.9]])
    z_vals: np.ndarray = field(default_factory=lambda: [0.1, 1.0])
    a_min: float = 1e-10
    a_max: float = 18.0
    a_size: int = 200

    def __post_init__(self):
        if not 0 < self.β < 1:
            raise ConfigurationError(f"β must lie in (0, 1). Got {self.β}")
        if not isinstance(self.utility, Utility):
            raise ConfigurationError(f"utility must be a Utility. Got {self.utility!r}")
        if int(self.a_size) != self.a_size or self.a_size < 2:
            raise ConfigurationError(f"a_size must be an integer >= 2. Got {self.a_size}")
        if not (math.isfinite(self.a_min) and math.isfinite(self.a_max)):
            raise ConfigurationError("Asset bounds must be finite")
        if self.a_min >= self.a_max:
            raise ConfigurationError(
                f"a_min must be below a_max. Got a_min={self.a_min}, a_max={self.a_max}"
            )
        if not (math.isfinite(self.r) and math.isfinite(self.w)):
            raise ConfigurationError(f"Prices must be finite. Got r={self.r}, w={self.w}")

        Π = check_stochastic_matrix(self.Π)
        z_vals = _frozen_array(self.z_vals, "z_vals", 1)
        if z_vals.size != Π.shape[0]:
            raise ConfigurationError(
                f"z_vals has {z_vals.size} values but Π has {Π.shape[0]} states"
            )
        object.__setattr__(self, "Π", Π)
        object.__setattr__(self, "z_vals", z_vals)
        object.__setattr__(self, "a_size", int(self.a_size))

    @property
    def z_size(self):
        return self.z_vals.size


@dataclass(frozen=True)
class FirmParams:
    """
    Cobb-Douglas technology Y = A K**α N**(1 - α) with depreciation δ.
    """

    A: float = 1.0
    N: float = 1.0
    α: float = 0.33
    δ: float = 0.05

    def __post_init__(self):
        if not self.A > 0:
            raise ConfigurationError(f"A must be positive. Got {self.A}")
        if not self.N > 0:
            raise ConfigurationError(f"N must be positive. Got {self.N}")
        if not 0 < self.α < 1:
            raise ConfigurationError(f"α must lie in (0, 1). Got {self.α}")
        if not 0 < self.δ < 1:
            raise ConfigurationError(f"δ must lie in (0, 1). Got {self.δ}")


@dataclass(frozen=True)
class SolverConfig:
    """
    Settings handed to quantecon's DiscreteDP.solve.

    `max_iter` defaults to a budget suited to `method`, see DEFAULT_MAX_ITER.
    """

    method: str = "policy_iteration"
    max_iter: Optional[int] = None
    epsilon: float = 1e-6

    def __post_init__(self):
        if self.method not in DDP_METHODS:
            raise ConfigurationError(
                f"Unknown method {self.method!r}. Valid options: {DDP_METHODS}"
            )
        if self.max_iter is None:
            object.__setattr__(self, "max_iter", DEFAULT_MAX_ITER[self.method])
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1. Got {self.max_iter}")
        if not self.epsilon > 0:
            raise ConfigurationError(f"epsilon must be positive. Got {self.epsilon}")


@dataclass(frozen=True)
class EquilibriumConfig:
    """
    Bracket and tolerances for the search over the interest rate.

    The search stops once brentq has narrowed the bracket below
    ``xtol + rtol * |r|``.
    """

    r_lo: float = 0.005
    r_hi: float = 0.04
    xtol: float = 1e-8
    rtol: float = 4 * np.finfo(float).eps
    max_iter: int = 100

    def __post_init__(self):
        if not (math.isfinite(self.r_lo) and math.isfinite(self.r_hi)):
            raise ConfigurationError("Bracket endpoints must be finite")
        if self.r_lo >= self.r_hi:
            raise ConfigurationError(
                f"r_lo must be below r_hi. Got r_lo={self.r_lo}, r_hi={self.r_hi}"
            )
        if not self.xtol > 0:
            raise ConfigurationError(f"xtol must be positive. Got {self.xtol}")
        if self.rtol < 4 * np.finfo(float).eps:
            raise ConfigurationError(f"rtol is too small. Got {self.rtol}")
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1. Got {self.max_iter}")
