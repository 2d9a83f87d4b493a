from dataclasses import replace

import numpy as np
import pytest

from aiyagari import (Household, HouseholdParams, SolverConfig,
                      SolverConvergenceError, Utility)
from aiyagari.utility import u


def implied_consumption(am):
    a = am.s_vals[:, 0][:, None]
    z = am.s_vals[:, 1][:, None]
    return am.w * z + (1 + am.r) * a - am.a_vals[None, :]


def test_array_shapes(household):
    n, a_size = household.n, household.a_size
    assert household.R.shape == (n, a_size)
    assert household.Q.shape == (n, a_size, n)


@pytest.mark.parametrize("r, w", [(0.01, 1.0), (0.03, 0.956), (-0.02, 0.5)])
def test_reward_feasibility(household, r, w):
    household.set_prices(r, w)
    c = implied_consumption(household)
    finite = np.isfinite(household.R)
    assert np.all(c[finite] > 0)
    assert np.all(c[~finite] <= 0)
    assert np.all(household.R[~finite] == -np.inf)


def test_reward_values_log(household):
    c = implied_consumption(household)
    feasible = c > 0
    np.testing.assert_allclose(household.R[feasible], np.log(c[feasible]))


def test_reward_values_crra(params):
    am = Household(replace(params, utility=Utility.crra(2.0)))
    c = implied_consumption(am)
    feasible = c > 0
    np.testing.assert_allclose(am.R[feasible], (c[feasible]**(-1.0) - 1) / (-1.0))


def test_utility_kernel():
    assert u(1.0, 1.0, True) == 0.0
    assert u(np.e, 1.0, True) == pytest.approx(1.0)
    assert u(2.0, 2.0, False) == pytest.approx(0.5)
    assert u(3.0, 0.0, False) == pytest.approx(2.0)


def test_reward_rebuild_is_idempotent(household):
    household.set_prices(0.02, 1.1)
    first = household.R.copy()
    household.set_prices(0.02, 1.1)
    np.testing.assert_array_equal(first, household.R)


def test_reward_rebuild_allocates_fresh_array(household):
    old = household.R
    snapshot = old.copy()
    household.set_prices(0.04, 0.8)
    assert household.R is not old
    np.testing.assert_array_equal(old, snapshot)


def test_transition_rows_sum_to_one(household):
    np.testing.assert_allclose(household.Q.sum(axis=2), 1.0)


def test_transition_entries(household):
    z_size = household.z_size
    Π = household.Π
    for s_i in (0, 7, household.n - 1):
        z_i = s_i % z_size
        for a_j in (0, 3, household.a_size - 1):
            row = household.Q[s_i, a_j]
            for next_s_i in range(household.n):
                next_a_i, next_z_i = divmod(next_s_i, z_size)
                expected = Π[z_i, next_z_i] if next_a_i == a_j else 0.0
                assert row[next_s_i] == expected


def test_transition_array_is_frozen(household):
    before = household.Q.copy()
    with pytest.raises(ValueError):
        household.Q[0, 0, 0] = 1.0
    household.set_prices(0.035, 0.9)
    household.solve()
    np.testing.assert_array_equal(before, household.Q)


def test_solution_never_picks_infeasible_action(household, solution):
    chosen = household.R[np.arange(household.n), solution.sigma]
    assert np.all(np.isfinite(chosen))
    assert np.all(solution.c_star > 0)


def test_stationary_distribution(solution):
    μ = solution.stationary
    assert μ.shape == (solution.space.n,)
    assert np.all(μ >= -1e-12)
    assert μ.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(μ @ solution.mc.P, μ, atol=1e-10)


def test_solution_views(solution):
    space = solution.space
    shape = (space.z_size, space.a_size)
    assert solution.a_star.shape == shape
    assert solution.c_star.shape == shape
    assert solution.v_star.shape == shape
    assert solution.distribution().sum() == pytest.approx(1.0)

    marginal = solution.asset_marginal()
    assert marginal.shape == (space.a_size,)
    np.testing.assert_allclose(marginal, solution.distribution().sum(axis=0))


def test_modified_policy_iteration_agrees(household, solution):
    mpi = household.solve(SolverConfig(method="modified_policy_iteration", epsilon=1e-8))
    np.testing.assert_allclose(mpi.v, solution.v, atol=1e-5)


def test_solve_is_deterministic(household):
    first = household.solve()
    second = household.solve()
    np.testing.assert_array_equal(first.sigma, second.sigma)
    np.testing.assert_array_equal(first.v, second.v)
    np.testing.assert_array_equal(first.stationary, second.stationary)


def test_non_convergence_is_reported(household):
    with pytest.raises(SolverConvergenceError):
        household.solve(SolverConfig(method="policy_iteration", max_iter=1))


def test_infeasible_state_is_rejected():
    # Zero income at the lowest asset level leaves no positive consumption
    params = HouseholdParams(z_vals=[0.0, 1.0], a_min=0.0, a_max=5.0, a_size=10)
    with pytest.raises(ValueError):
        Household(params).solve()


def test_chain_property(household):
    np.testing.assert_array_equal(household.chain.Π, household.Π)


def test_value_iteration_agrees(household, solution):
    vi = household.solve(SolverConfig(method="value_iteration", epsilon=1e-10))
    assert vi.num_iter <= SolverConfig(method="value_iteration").max_iter
    np.testing.assert_array_equal(vi.sigma, solution.sigma)
    np.testing.assert_allclose(vi.v, solution.v, atol=1e-6)


@pytest.mark.parametrize("method", ["value_iteration", "modified_policy_iteration"])
def test_exact_iteration_budget_is_enough(household, method):
    needed = household.solve(SolverConfig(method=method, max_iter=100000)).num_iter
    exact = household.solve(SolverConfig(method=method, max_iter=needed))
    assert exact.num_iter == needed
    with pytest.raises(SolverConvergenceError):
        household.solve(SolverConfig(method=method, max_iter=needed - 1))
