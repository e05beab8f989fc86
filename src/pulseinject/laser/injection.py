"""
Plane-wave laser injection helpers.

Evaluates the plane-wave source over a simulation clock, measures its time
integral, and adds it to the injection plane of a field grid.

1. **LaserTimeSeries** evaluates the field at every step of a clock.
2. **FieldTimeIntegral** integrates that series with the trapezoidal rule.
   For a charge-neutral source the result is close to zero on every
   component.
3. **InjectPlaneWave** adds the source to one y-plane of a field array of
   shape (3, Nx, Ny, Nz), one evaluation per transverse cell.  The caller
   owns the grid and decides when in the update cycle to call it.
"""

import numpy as np

from ..libpulseinject.logger import get_logger
from .planewave import LaserLongitudinal, LaserLongitudinalSteps, LaserTransversal
from .typelaser import CalcPulseDuration
from .typetime import GetStepArray, RunTime, ts

log = get_logger(__name__)


def _check_clock(pulse, time):
    """The clock must tick with the same dt the laser was configured with."""
    if not np.isclose(time.dt, pulse.dt, rtol=1e-12, atol=0.0):
        raise ValueError(
            f"Clock time step {time.dt!r} does not match laser time step {pulse.dt!r}"
        )


def ClockForPulse(pulse, nsigma=6.0):
    """Build a clock from step 0 to the end of the pulse.

    Parameters
    ----------
    pulse : pws
        Laser parameters.
    nsigma : float, default 6.0
        Passed to :func:`CalcPulseDuration`.

    Returns
    -------
    ts
        Clock with t = 0, n = 0 and tf covering the ramp-down.
    """
    return ts(t=0.0, tf=CalcPulseDuration(pulse, nsigma), dt=pulse.dt, n=0)


def LaserTimeSeries(pulse, time):
    """Field at every step of the clock window.

    Parameters
    ----------
    pulse : pws
        Laser parameters.
    time : ts
        Clock; its dt must equal pulse.dt.

    Returns
    -------
    t : numpy.ndarray
        Run times (s), shape (N,).
    E : numpy.ndarray
        Field vectors (V/m), shape (N, 3).
    """
    _check_clock(pulse, time)
    steps = GetStepArray(time)
    log.debug("Evaluating plane-wave laser for %d steps", steps.size)
    t = RunTime(steps.astype(float), pulse.dt)
    return t, LaserLongitudinalSteps(steps, pulse)


def FieldTimeIntegral(pulse, time):
    """Trapezoidal time integral of the field over the clock window.

    Returns
    -------
    numpy.ndarray
        Integral of (Ex, Ey, Ez) dt, shape (3,)  (V s / m).
    """
    t, E = LaserTimeSeries(pulse, time)
    if t.size < 2:
        return np.zeros(3, dtype=float)
    return np.trapezoid(E, t, axis=0)


def InjectPlaneWave(E, currentStep, pulse, x, z, plane=0):
    """Add the laser field to one y-plane of a field array.

    The field at (x[i], plane, z[k]) is incremented by
    ``LaserTransversal(elong, phase, x[i], z[k])`` where ``elong`` is the
    longitudinal field of *currentStep*.

    Parameters
    ----------
    E : numpy.ndarray
        Real field array of shape (3, Nx, Ny, Nz), modified in-place.
    currentStep : int
        Simulation step index.
    pulse : pws
        Laser parameters.
    x : array_like
        Transverse x coordinates, length Nx (m).
    z : array_like
        Transverse z coordinates, length Nz (m).
    plane : int, default 0
        Index of the injection plane along y.

    Returns
    -------
    FieldSample
        The longitudinal sample that was injected.
    """
    x = np.asarray(x, dtype=float)
    z = np.asarray(z, dtype=float)
    if E.ndim != 4 or E.shape[0] != 3:
        raise ValueError(f"Field array must have shape (3, Nx, Ny, Nz), got {E.shape}")
    if E.shape[1] != x.size or E.shape[3] != z.size:
        raise ValueError(
            f"Coordinate lengths ({x.size}, {z.size}) do not match field shape {E.shape}"
        )
    if not -E.shape[2] <= plane < E.shape[2]:
        raise ValueError(f"Injection plane {plane} outside y extent {E.shape[2]}")

    sample = LaserLongitudinal(currentStep, pulse)
    for k in range(z.size):
        for i in range(x.size):
            E[:, i, plane, k] += LaserTransversal(sample.E, sample.phase, x[i], z[k])
    log.debug2("Step %d injected into y-plane %d: E = (%.6e, %.6e, %.6e)",
               currentStep, plane, sample.E[0], sample.E[1], sample.E[2])
    return sample
