"""
Figures for household solutions and the capital market.

Each function draws on `ax` (a new figure if omitted) and returns the Axes.
"""

import matplotlib.pyplot as plt
import numpy as np


def _axes(ax, figsize=(9, 9)):
    if ax is None:
        _, ax = plt.subplots(figsize=figsize)
    return ax


def plot_policy(solution, ax=None):
    """Next period assets against current assets, one line per z."""
    ax = _axes(ax)
    a_vals, z_vals = solution.space.a_vals, solution.space.z_vals
    a_star = solution.a_star
    ax.plot(a_vals, a_vals, 'k--')  # 45 degrees
    for i in range(solution.space.z_size):
        lb = f'$z = {z_vals[i]:.2}$'
        ax.plot(a_vals, a_star[i, :], lw=2, alpha=0.6, label=lb)
    ax.set_xlabel('current assets')
    ax.set_ylabel('next period assets')
    ax.legend(loc='upper left')
    return ax


def plot_consumption(solution, ax=None):
    ax = _axes(ax)
    a_vals, z_vals = solution.space.a_vals, solution.space.z_vals
    c_star = solution.c_star
    for i in range(solution.space.z_size):
        ax.plot(a_vals, c_star[i, :], lw=2, alpha=0.6, label=f'$z = {z_vals[i]:.2}$')
    ax.set_xlabel('current assets')
    ax.set_ylabel('consumption')
    ax.legend(loc='upper left')
    return ax


def plot_stationary_distribution(solution, ax=None):
    """Stationary probability of each asset level, one bar series per z."""
    ax = _axes(ax, figsize=(11, 6))
    a_vals, z_vals = solution.space.a_vals, solution.space.z_vals
    dist = solution.distribution()
    width = np.diff(a_vals).min()
    for i in range(solution.space.z_size):
        ax.bar(a_vals, dist[i, :], width=width, alpha=0.6, label=f'$z = {z_vals[i]:.2}$')
    ax.set_xlabel('assets')
    ax.set_ylabel('probability')
    ax.legend(loc='upper right')
    return ax


def plot_capital_market(k_vals, r_vals, demand, equilibrium=None, ax=None):
    """
    Supply and demand for capital, as produced by `capital_supply_curve`.
    Marks the equilibrium when an EquilibriumResult is given.
    """
    ax = _axes(ax, figsize=(11, 8))
    ax.plot(k_vals, r_vals, lw=2, alpha=0.6, label='supply of capital')
    ax.plot(k_vals, demand, lw=2, alpha=0.6, label='demand for capital')
    if equilibrium is not None:
        ax.axvline(equilibrium.K, color='k', lw=1)
        ax.axhline(equilibrium.r, color='k', lw=1)
        ax.set_title(f'GE at r = {equilibrium.r:.3f}, K = {equilibrium.K:.3f}')
    ax.grid()
    ax.set_xlabel('capital')
    ax.set_ylabel('interest rate')
    ax.legend(loc='upper right')
    return ax
