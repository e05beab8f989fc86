"""
Logging for the pulseinject package.

Every module logs through ``get_logger(__name__)`` so the whole package
hangs off one ``pulseinject`` logger.  Two levels below DEBUG carry the
high-volume output of the source:

* DEBUG2 (9): one record per injected step.
* DEBUG3 (8): the derived pulse timings of each new parameter set.

Usage
-----
>>> from pulseinject.libpulseinject.logger import get_logger, setup, DEBUG2
>>> setup(DEBUG2)
>>> log = get_logger(__name__)
>>> log.debug2("step %d injected", 12)
"""

import logging
import sys

DEBUG2 = 9
DEBUG3 = 8

logging.addLevelName(DEBUG2, "DEBUG2")
logging.addLevelName(DEBUG3, "DEBUG3")

ROOT_NAME = "pulseinject"
LOG_FORMAT = "%(levelname)-7s %(name)s: %(message)s"


class _InjectLogger(logging.Logger):
    """Logger with ``debug2`` (per-step) and ``debug3`` (timing) methods."""

    def debug2(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG2):
            self._log(DEBUG2, msg, args, **kwargs)

    def debug3(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG3):
            self._log(DEBUG3, msg, args, **kwargs)


logging.setLoggerClass(_InjectLogger)


def get_logger(name: str | None = None) -> _InjectLogger:
    """Return a logger under the ``pulseinject`` hierarchy."""
    return logging.getLogger(name or ROOT_NAME)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the level of the package logger.

    *level* is a level number or name, including ``"DEBUG2"`` and
    ``"DEBUG3"``.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name!r}")
    get_logger().setLevel(level)


def setup(level: int | str = logging.INFO, stream=None) -> None:
    """Attach a stream handler to the package logger and set its level.

    A handler is added only on the first call; later calls just change
    the level.
    """
    root = get_logger()
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    set_level(level)
