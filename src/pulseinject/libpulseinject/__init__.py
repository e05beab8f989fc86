"""libpulseinject sub-package for shared utilities."""

# Import modules themselves (allows: from pulseinject.libpulseinject import logger)
from . import logger

__all__ = [
    "logger",
]
