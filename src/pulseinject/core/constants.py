"""
Constants used by the laser source models.

The speed of light comes from ``scipy.constants`` (CODATA).  Everything is
stored as NumPy float64 so the values can be frozen into numba kernels as
globals.
"""
import numpy as np
from scipy import constants as _sc


class Constants:
    """
    Constants of the plane-wave source.

    Attributes
    ----------
    twopi : float
        2*pi, converts frequency to angular frequency.
    sqrt2 : float
        Square root of 2; Gaussian width factor and circular split.
    c0 : float
        Speed of light in vacuum (m/s), the default propagation speed.
    """
    twopi = np.float64(2.0 * np.pi)
    sqrt2 = np.float64(np.sqrt(2.0))
    c0 = np.float64(_sc.c)


twopi = Constants.twopi
sqrt2 = Constants.sqrt2
c0 = Constants.c0
