# The Aiyagari Model: A replication

# We are going to replicate the results obtained by Aiyagari (1994) and understand its basic results.

# The model features:
    # Heterogeneous agents;
    # A single exogenous vehicle for borrowing and lending
    # Limits on amounts of individual agents may borrow

# The building blocks live in the `aiyagari` package:
    # aiyagari.household   -> the reward array R, the transition array Q and the DiscreteDP solve;
    # aiyagari.firm        -> wages and capital demand implied by the firm's FOCs;
    # aiyagari.equilibrium -> capital supply and the search for the equilibrium interest rate.

import logging

import matplotlib.pyplot as plt
import numpy as np

import aiyagari as ai
from aiyagari.plots import (plot_capital_market, plot_consumption, plot_policy,
                            plot_stationary_distribution)

# 1. Households

# Households are infinitely lived and consumers. They face idiosyncratic shocks and ex-ante, identical households face a common borrowing constraint.
# Households maximize expected lifetime utility, subject to the budget constraint
#     a' + c = w z + (1 + r) a,   c >= 0,   a >= a_min

# Our state is s_t = (a_t, z_t), a_t the assets and z_t the shock.
# The action is the choice of next period asset level a_{t+1}, on the same grid as a_t.
# R(s, a') is the utility of consumption, or -inf when consumption would not be positive.
# Q(s, a', s') is the probability of moving to s' = (a', z'), which is just Π(z, z') for the chosen a'.

# 2. Firms

# Firms produce output by hiring capital and labor, act competitively and face constant returns to scale.
# From the FOCs, w(r) = A (1 - α) (A α / (r + δ))^(α / (1 - α)) and K(r) = N (A α / (r + δ))^(1 / (1 - α)).

# Equilibrium

# We look for a Stationary Rational Expectations Equilibrium (SREE):
    # 1. Pick an interest rate r;
    # 2. Determine the corresponding wage rate w(r);
    # 3. Determine the common savings policy of the households given these prices;
    # 4. Compute capital supply as the mean of steady state assets given this savings policy;
    # 5. Compare with the firms' capital demand K(r), and adjust r until they coincide.


def partial_equilibrium(r=0.03, w=0.956):
    # As a 1st example, let's compute an optimal accumulation policy at fixed prices
    am = ai.Household(ai.HouseholdParams(a_max=20.0, r=r, w=w))
    results = am.solve()
    logging.info("Policy iteration converged in %d iterations", results.num_iter)

    plot_policy(results)
    plot_consumption(results)
    plot_stationary_distribution(results)
    plt.show()
    return results


def general_equilibrium(num_points=20):
    firm = ai.FirmParams(A=1.0, N=1.0, α=0.33, δ=0.05)
    am = ai.Household(ai.HouseholdParams(β=0.96, a_max=20.0))
    config = ai.EquilibriumConfig(r_lo=0.005, r_hi=0.04)

    # Aggregate supply and demand curves on a grid of interest rates
    r_vals = np.linspace(config.r_lo, config.r_hi, num_points)
    k_vals, demand = ai.capital_supply_curve(am, r_vals, firm)

    # Now let us properly solve the problem: excess supply changes sign on the bracket
    eq = ai.compute_equilibrium(am, firm, config)
    print(f"r* = {eq.r:.6f}, w* = {eq.w:.6f}, K* = {eq.K:.6f} "
          f"(supply {eq.K_supply:.6f}, {eq.function_calls} evaluations)")

    plot_capital_market(k_vals, r_vals, demand, equilibrium=eq)
    plt.show()
    return eq


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    partial_equilibrium()
    general_equilibrium()
