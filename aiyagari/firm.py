"""
Factor prices of a competitive firm.

Firms produce output by hiring capital and labor, act competitively and face
constant returns to scale with Cobb-Douglas technology

    Y = A K**α N**(1 - α)

and capital depreciating at rate δ.  The first order conditions of the firm's
problem are

    r = A α (N / K)**(1 - α) - δ
    w = A (1 - α) (N / K)**(-α)

Solving the first for N / K and substituting into the second pins down the
wage rate as a function of r.
"""

import numpy as np

from .config import FirmParams
from .errors import DomainError


def _check_rate(r, firm):
    r = np.asarray(r, dtype=float)
    if not np.all(np.isfinite(r)):
        raise DomainError(f"Interest rate must be finite. Got {r}")
    if np.any(r + firm.δ <= 0):
        raise DomainError(f"r + δ must be positive. Got r={r}, δ={firm.δ}")
    return r


def r_to_w(r, firm=None):
    """
    Equilibrium wages associated with a given interest rate r.

    Raises
    ------
    DomainError
        If r + δ <= 0
    """
    firm = firm or FirmParams()
    A, α, δ = firm.A, firm.α, firm.δ
    r = _check_rate(r, firm)
    w = A * (1 - α) * (A * α / (r + δ))**(α / (1 - α))
    return w if w.ndim else float(w)


def capital_demand(r, firm=None):
    """
    Capital demanded by firms at interest rate r, from the marginal product
    of capital condition: K = N (A α / (r + δ))**(1 / (1 - α)).

    Raises
    ------
    DomainError
        If r + δ <= 0
    """
    firm = firm or FirmParams()
    A, N, α, δ = firm.A, firm.N, firm.α, firm.δ
    r = _check_rate(r, firm)
    K = N * (A * α / (r + δ))**(1 / (1 - α))
    return K if K.ndim else float(K)


def rd(K, firm=None):
    """
    Inverse demand curve for capital.  The interest rate associated with a
    given demand for capital K.
    """
    firm = firm or FirmParams()
    A, N, α, δ = firm.A, firm.N, firm.α, firm.δ
    K = np.asarray(K, dtype=float)
    if np.any(K <= 0) or not np.all(np.isfinite(K)):
        raise DomainError(f"Capital must be positive and finite. Got {K}")
    r = A * α * (N / K)**(1 - α) - δ
    return r if r.ndim else float(r)
