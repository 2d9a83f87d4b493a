import numpy as np
import pytest

from aiyagari import ConfigurationError, ShockChain, StateSpace, make_asset_grid


def test_asset_grid():
    a_vals = make_asset_grid(1e-10, 20.0, 200)
    assert a_vals.size == 200
    assert a_vals[0] == 1e-10
    assert a_vals[-1] == 20.0
    assert np.all(np.diff(a_vals) > 0)


@pytest.mark.parametrize("a_min, a_max, a_size", [
    (0.0, 1.0, 1),
    (1.0, 1.0, 10),
    (2.0, 1.0, 10),
])
def test_asset_grid_invalid(a_min, a_max, a_size):
    with pytest.raises(ConfigurationError):
        make_asset_grid(a_min, a_max, a_size)


@pytest.mark.parametrize("a_size, z_size", [(2, 1), (5, 2), (17, 3), (40, 7)])
def test_state_index_round_trip(a_size, z_size):
    space = StateSpace(np.linspace(0, 1, a_size), np.arange(1, z_size + 1))
    assert space.n == a_size * z_size
    for s_i in range(space.n):
        assert space.encode(*space.decode(s_i)) == s_i


@pytest.mark.parametrize("a_size, z_size", [(5, 2), (9, 4)])
def test_state_tables_agree(a_size, z_size):
    a_vals = np.linspace(0, 4, a_size)
    z_vals = np.linspace(0.5, 1.5, z_size)
    space = StateSpace(a_vals, z_vals)

    # Every pair appears exactly once
    pairs = {tuple(row) for row in space.s_i_vals}
    assert len(pairs) == space.n

    # Row s_i of both tables describes the same state
    np.testing.assert_array_equal(space.s_vals[:, 0], a_vals[space.s_i_vals[:, 0]])
    np.testing.assert_array_equal(space.s_vals[:, 1], z_vals[space.s_i_vals[:, 1]])
    for s_i in range(space.n):
        assert tuple(space.s_i_vals[s_i]) == space.decode(s_i)


def test_state_space_rejects_bad_grids():
    with pytest.raises(ConfigurationError):
        StateSpace([0.0], [1.0])
    with pytest.raises(ConfigurationError):
        StateSpace([0.0, 1.0], [])
    with pytest.raises(ConfigurationError):
        StateSpace([0.0, 2.0, 1.0], [1.0])


def test_encode_out_of_range():
    space = StateSpace(np.linspace(0, 1, 4), [0.1, 1.0])
    with pytest.raises(IndexError):
        space.encode(4, 0)
    with pytest.raises(IndexError):
        space.decode(space.n)


def test_to_grid():
    space = StateSpace(np.linspace(0, 1, 3), [0.1, 1.0])
    x = np.arange(space.n)
    grid = space.to_grid(x)
    assert grid.shape == (2, 3)
    for s_i in range(space.n):
        a_i, z_i = space.decode(s_i)
        assert grid[z_i, a_i] == s_i


def test_symmetric_chain():
    chain = ShockChain.symmetric(0.9)
    np.testing.assert_allclose(chain.Π, [[0.9, 0.1], [0.1, 0.9]])
    np.testing.assert_allclose(chain.stationary_distribution(), [0.5, 0.5])
    with pytest.raises(ConfigurationError):
        ShockChain.symmetric(1.5)


def test_chain_rejects_non_stochastic():
    with pytest.raises(ConfigurationError):
        ShockChain([[0.5, 0.4], [0.1, 0.9]], [0.1, 1.0])


@pytest.mark.parametrize("method", [ShockChain.tauchen, ShockChain.rouwenhorst])
def test_discretized_ar1(method):
    chain = method(7, 0.9, 0.1)
    assert chain.z_size == 7
    assert chain.Π.shape == (7, 7)
    np.testing.assert_allclose(chain.Π.sum(axis=1), 1.0)
    assert np.all(chain.z_vals > 0)
    assert np.all(np.diff(chain.z_vals) > 0)


def test_chain_to_household_params():
    chain = ShockChain.rouwenhorst(3, 0.8, 0.2)
    params = chain.household_params(a_max=10.0, a_size=20)
    assert params.z_size == 3
    np.testing.assert_array_equal(params.z_vals, chain.z_vals)
    assert params.a_max == 10.0
