"""
Exceptions raised by the aiyagari package.

All of them derive from AiyagariError, so callers that only want to know
whether the computation failed can catch that one class.
"""


class AiyagariError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AiyagariError, ValueError):
    """Invalid model parameters: grids, shock chains, preferences, brackets."""


class DomainError(AiyagariError, ValueError):
    """A firm pricing function was evaluated outside its domain."""


class SolverConvergenceError(AiyagariError, RuntimeError):
    """The dynamic program or the stationary distribution did not converge."""


class EquilibriumError(AiyagariError, RuntimeError):
    """The search for the equilibrium interest rate failed."""


class BracketError(EquilibriumError):
    """Excess supply of capital does not change sign over the bracket."""


class RootNotConvergedError(EquilibriumError):
    """The root finder exhausted its iteration budget."""
