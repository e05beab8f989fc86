"""
Simulation clock for laser injection.

This module provides the temporal grid structure (ts type) that turns the
integer step index handed to the laser evaluator into elapsed run time,
plus the reader and writer for clock parameter files.

The clock spans [t, tf] with step dt.  The step index n counts from the
start of the simulation, so the run time of step n is

    runTime = dt * n

and the number of remaining steps is Nt = round((tf - t) / dt).
"""

import numpy as np
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# File I/O helper
# ---------------------------------------------------------------------------
def GetFileToken(file_handle):
    """Read the first whitespace-delimited token of the next line.

    Parameter files hold one value per line; anything after the value
    (a ``!`` or ``:`` comment) is ignored.

    Raises
    ------
    ValueError
        At end of file, on an empty line or on a comment-only line.
    """
    line = file_handle.readline()
    if not line:
        raise ValueError("Unexpected end of file while reading parameter")
    parts = line.split()
    if not parts:
        raise ValueError(f"Empty line in parameter file: {line!r}")
    token = parts[0]
    if token.startswith("!"):
        raise ValueError(f"Comment-only line: {line!r}")
    return token


def GetFileParam(file_handle):
    """Read a single numeric parameter from a file handle."""
    token = GetFileToken(file_handle)
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"Cannot parse numeric parameter: {token!r}") from None


# ---------------------------------------------------------------------------
# Data structure
# ---------------------------------------------------------------------------
@dataclass
class ts:
    """
    Simulation clock.

    Attributes
    ----------
    t : float
        Current simulation time (s).
    tf : float
        Final simulation time (s).
    dt : float
        Time step size (s).
    n : int
        Current time-step index.
    """
    t: float
    tf: float
    dt: float
    n: int


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------
def readtimeparams_sub(fh, time):
    """Read clock parameters from an open file handle.

    Expected format (one value per line, optional trailing comments)::

        0.0         ! t
        100e-15     ! tf
        0.5e-15     ! dt
        0           ! n

    Parameters
    ----------
    fh : file-like
        Readable text stream.
    time : ts
        Clock to populate (modified in-place).
    """
    time.t = GetFileParam(fh)
    time.tf = GetFileParam(fh)
    time.dt = GetFileParam(fh)
    time.n = int(GetFileParam(fh))
    if time.dt <= 0.0:
        raise ValueError(f"Time step dt must be positive, got {time.dt!r}")


def ReadTimeParams(filename, time):
    """Read clock parameters from a named file into *time*."""
    with open(filename, "r") as fh:
        readtimeparams_sub(fh, time)


def writetimeparams_sub(fh, time):
    """Write clock parameters to an open file handle."""
    fh.write(f"{time.t:25.14E} : Current time of simulation. (s)\n")
    fh.write(f"{time.tf:25.14E} : Final time of simulation. (s)\n")
    fh.write(f"{time.dt:25.14E} : Time pixel size [dt]. (s)\n")
    fh.write(f"{time.n:25d} : Current time index.\n")


def WriteTimeParams(filename, time):
    """Write clock parameters to a named file."""
    with open(filename, "w") as fh:
        writetimeparams_sub(fh, time)


# ---------------------------------------------------------------------------
# Computed quantities
# ---------------------------------------------------------------------------
def RunTime(step, dt):
    """Elapsed time of step index *step*: dt * step  (s)."""
    return dt * step


def CalcNt(time):
    """Compute number of remaining time steps: round((tf - t) / dt).

    Returns
    -------
    int
        Number of time steps from current time to final time.
    """
    return int(round((time.tf - time.t) / time.dt))


def Advance(time, dn=1):
    """Advance the clock by *dn* steps (modified in-place).

    The time is recomputed from the index rather than accumulated, so a
    long run does not drift away from dt * n.
    """
    time.n = time.n + dn
    time.t = RunTime(time.n, time.dt)


# ---------------------------------------------------------------------------
# Array generation
# ---------------------------------------------------------------------------
def GetStepArray(time):
    """Step indices from the current step to the final time.

    Returns
    -------
    numpy.ndarray
        1-D int64 array of length CalcNt(time) + 1, covering both ends of
        the window.  Empty if tf lies before t.
    """
    Nt = CalcNt(time)
    if Nt < 0:
        return np.array([], dtype=np.int64)
    return time.n + np.arange(Nt + 1, dtype=np.int64)


def GetTArray(time):
    """Run times dt * n for every step of :func:`GetStepArray`."""
    return RunTime(GetStepArray(time).astype(float), time.dt)
