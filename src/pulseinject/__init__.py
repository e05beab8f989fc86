"""
pulseinject: laser source terms for electromagnetic plasma simulations.

This package provides the time-dependent electric field of an incident
plane-wave laser pulse (Gaussian ramps, optional plateau, charge-neutral
integration correction) for injection at the boundary of a field grid.
"""

# Import main sub-packages
from . import core
from . import libpulseinject
from . import laser

__all__ = [
    "core",
    "libpulseinject",
    "laser",
]
