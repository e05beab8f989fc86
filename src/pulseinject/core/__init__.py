"""Core utilities for pulseinject."""

# Import modules themselves (allows: from pulseinject.core import constants)
from . import constants

__all__ = [
    "constants",
]
