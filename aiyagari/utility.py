"""
Period utility kernels used while filling the reward array.
"""

import numpy as np
from numba import jit


@jit(nopython=True)
def u(c, σ, is_log):
    """
    Utility of consumption c > 0: log(c) when `is_log`, otherwise CRRA with
    coefficient of relative risk aversion σ.
    """
    if is_log:
        return np.log(c)
    return (c**(1 - σ) - 1) / (1 - σ)

