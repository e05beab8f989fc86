"""
Plane-wave laser parameter structure.

This module provides the immutable parameter structure (pws type) of the
incident plane-wave laser, the polarisation selector, configuration-time
validation, derived physical quantities and the parameter-file reader and
writer.

Physics reference:
    The pulse is built from a Gaussian ramp-up of duration
    0.5 * ramp_init * tau, an optional flat plateau of length plateau, and a
    Gaussian ramp-down:

        endUpramp     = 0.5 * ramp_init * tau
        startDownramp = endUpramp + plateau

    Derived quantities:
        k0     = 2pi / lam            (wave number)
        nu0    = c / lam              (optical frequency)
        omega0 = 2pi c / lam          (angular frequency)
        T0     = lam / c              (oscillation period)

    The field integrates to zero over the whole pulse only if the plateau
    spans a whole number of oscillation periods (plateau = m * T0).  This
    is a property of the pulse model, not a numerical error.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from ..core.constants import c0, twopi
from ..libpulseinject.logger import get_logger
from .typetime import GetFileParam, GetFileToken

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Polarisation selector
# ---------------------------------------------------------------------------
class Polarisation(IntEnum):
    """Which field components carry the oscillation.

    The pulse propagates along y; LINEAR_X drives component 0 and
    LINEAR_Z drives component 2.  CIRCULAR splits the pulse over both
    with a quarter-period phase lag.
    """
    LINEAR_X = 0
    LINEAR_Z = 1
    CIRCULAR = 2


_POL_NAMES = {
    "linear_x": Polarisation.LINEAR_X,
    "linearx": Polarisation.LINEAR_X,
    "x": Polarisation.LINEAR_X,
    "linear_z": Polarisation.LINEAR_Z,
    "linearz": Polarisation.LINEAR_Z,
    "z": Polarisation.LINEAR_Z,
    "circular": Polarisation.CIRCULAR,
}


def ParsePolarisation(pol):
    """Resolve a polarisation selector.

    Parameters
    ----------
    pol : Polarisation, int or str
        Enum member, integer code (0, 1, 2) or case-insensitive name
        (``"linear_x"``, ``"linear_z"``, ``"circular"``).

    Returns
    -------
    Polarisation

    Raises
    ------
    ValueError
        If *pol* does not name a known polarisation.
    """
    if isinstance(pol, Polarisation):
        return pol
    if isinstance(pol, bool):
        raise ValueError(f"Unknown polarisation: {pol!r}")
    if isinstance(pol, str):
        key = pol.strip().lower()
        if key in _POL_NAMES:
            return _POL_NAMES[key]
        try:
            pol = int(key)
        except ValueError:
            raise ValueError(f"Unknown polarisation: {pol!r}") from None
    if isinstance(pol, float):
        if not pol.is_integer():
            raise ValueError(f"Unknown polarisation: {pol!r}")
        pol = int(pol)
    try:
        return Polarisation(pol)
    except (ValueError, TypeError):
        raise ValueError(f"Unknown polarisation: {pol!r}") from None


# ---------------------------------------------------------------------------
# Data structure
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class pws:
    """
    Plane-wave laser parameter structure.

    Fixed for the lifetime of a run; every evaluation reads it and none
    modifies it.  Use ``dataclasses.replace`` to derive a variant.

    Attributes
    ----------
    lam : float
        Vacuum wavelength of the field (m).
    Amp : float
        Peak field amplitude E0 (V/m).
    tau : float
        Pulse duration, the Gaussian width of the ramps (s).
    ramp_init : float
        Ramp-up length in units of tau/2; endUpramp = 0.5*ramp_init*tau.
    plateau : float
        Duration of the flat plateau between the ramps (s).
    phase : float
        Initial phase phi0 of the oscillation (rad).
    pol : Polarisation
        Polarisation selector.
    dt : float
        Simulation time step (s).
    c : float
        Propagation speed (m/s).
    """
    lam: float
    Amp: float
    tau: float
    ramp_init: float
    plateau: float = 0.0
    phase: float = 0.0
    pol: Polarisation = Polarisation.LINEAR_X
    dt: float = 1.0
    c: float = float(c0)


def ValidateLaserParams(pulse):
    """Check the invariants of a parameter set.

    Raises
    ------
    ValueError
        Naming the first offending field.
    """
    for name in ("lam", "Amp", "tau", "ramp_init", "plateau", "phase", "dt", "c"):
        value = getattr(pulse, name)
        if not math.isfinite(value):
            raise ValueError(f"Laser parameter {name} must be finite, got {value!r}")
    for name in ("lam", "tau", "dt", "c"):
        value = getattr(pulse, name)
        if value <= 0.0:
            raise ValueError(f"Laser parameter {name} must be positive, got {value!r}")
    for name in ("ramp_init", "plateau"):
        value = getattr(pulse, name)
        if value < 0.0:
            raise ValueError(f"Laser parameter {name} must be non-negative, got {value!r}")
    if not isinstance(pulse.pol, Polarisation):
        raise ValueError(f"Laser parameter pol must be a Polarisation, got {pulse.pol!r}")


def MakeLaserParams(lam, Amp, tau, ramp_init, plateau=0.0, phase=0.0,
                    pol=Polarisation.LINEAR_X, dt=1.0, c=c0):
    """Build a validated parameter set.

    Numeric arguments are coerced to float and *pol* is resolved with
    :func:`ParsePolarisation`, so an unknown polarisation is rejected here
    rather than at evaluation time.

    Returns
    -------
    pws
    """
    pulse = pws(
        lam=float(lam),
        Amp=float(Amp),
        tau=float(tau),
        ramp_init=float(ramp_init),
        plateau=float(plateau),
        phase=float(phase),
        pol=ParsePolarisation(pol),
        dt=float(dt),
        c=float(c),
    )
    ValidateLaserParams(pulse)
    log.debug3(
        "Laser parameters: endUpramp=%g startDownramp=%g omega0=%g pol=%s",
        CalcEndUpramp(pulse), CalcStartDownramp(pulse), CalcOmega0(pulse),
        pulse.pol.name,
    )
    return pulse


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------
def readlaserparams_sub(fh):
    """Read laser parameters from an open file handle.

    Expected file format (one value per line, optional trailing comments)::

        800e-9      ! lambda
        1.0e12      ! Amp
        5.0e-15     ! tau
        4.0         ! ramp_init
        0.0         ! plateau
        0.0         ! phase
        linear_x    ! pol
        1.0e-17     ! dt
        299792458.0 ! c

    Parameters
    ----------
    fh : file-like
        Readable text stream positioned at the first parameter line.

    Returns
    -------
    pws
        Validated parameter set.
    """
    lam = GetFileParam(fh)
    Amp = GetFileParam(fh)
    tau = GetFileParam(fh)
    ramp_init = GetFileParam(fh)
    plateau = GetFileParam(fh)
    phase = GetFileParam(fh)
    pol = GetFileToken(fh)
    dt = GetFileParam(fh)
    c = GetFileParam(fh)
    return MakeLaserParams(lam, Amp, tau, ramp_init, plateau=plateau,
                           phase=phase, pol=pol, dt=dt, c=c)


def ReadLaserParams(filename):
    """Read laser parameters from a named file.

    Parameters
    ----------
    filename : str
        Path to the parameter file.

    Returns
    -------
    pws
        Validated parameter set.
    """
    with open(filename, "r") as fh:
        pulse = readlaserparams_sub(fh)
    log.info("Read laser parameters from %s", filename)
    return pulse


def writelaserparams_sub(fh, pulse):
    """Write laser parameters to an open file handle.

    Parameters
    ----------
    fh : file-like
        Writable text stream.
    pulse : pws
        Parameter set to write.
    """
    fh.write(f"{pulse.lam:25.14E} : The laser wavelength. (m)\n")
    fh.write(f"{pulse.Amp:25.14E} : The field amplitude. (V/m)\n")
    fh.write(f"{pulse.tau:25.14E} : The pulse duration. (s)\n")
    fh.write(f"{pulse.ramp_init:25.14E} : The ramp-up length in units of tau/2.\n")
    fh.write(f"{pulse.plateau:25.14E} : The plateau length. (s)\n")
    fh.write(f"{pulse.phase:25.14E} : The initial phase. (rad)\n")
    fh.write(f"{pulse.pol.name.lower():>25s} : The polarisation.\n")
    fh.write(f"{pulse.dt:25.14E} : The time step. (s)\n")
    fh.write(f"{pulse.c:25.14E} : The propagation speed. (m/s)\n")


def WriteLaserParams(filename, pulse):
    """Write laser parameters to a named file.

    Parameters
    ----------
    filename : str
        Path to the output file.
    pulse : pws
        Parameter set to write.
    """
    with open(filename, "w") as fh:
        writelaserparams_sub(fh, pulse)


# ---------------------------------------------------------------------------
# Derived quantities
# ---------------------------------------------------------------------------
def CalcK0(pulse):
    """Wave number k0 = 2*pi / lambda  (rad/m)."""
    return twopi / pulse.lam


def CalcFreq0(pulse):
    """Optical frequency nu0 = c / lambda  (Hz)."""
    return pulse.c / pulse.lam


def CalcOmega0(pulse):
    """Angular frequency omega0 = 2*pi*c / lambda  (rad/s)."""
    return twopi * pulse.c / pulse.lam


def CalcPeriod(pulse):
    """Oscillation period T0 = lambda / c  (s)."""
    return pulse.lam / pulse.c


def CalcEndUpramp(pulse):
    """End of the ramp-up, 0.5 * ramp_init * tau  (s).

    This is also the time origin of the oscillation phase.
    """
    return 0.5 * pulse.ramp_init * pulse.tau


def CalcStartDownramp(pulse):
    """Start of the ramp-down, endUpramp + plateau  (s)."""
    return CalcEndUpramp(pulse) + pulse.plateau


def CalcPulseDuration(pulse, nsigma=6.0):
    """Time at which the ramp-down has decayed to exp(-nsigma^2/4) of Amp.

    The envelope after startDownramp is exp(-(t - t0)^2 / (4 tau^2)), so
    nsigma is counted in units of sqrt(2) * tau.

    Parameters
    ----------
    nsigma : float, default 6.0
        Number of (sqrt(2) * tau) widths past startDownramp.
    """
    return CalcStartDownramp(pulse) + nsigma * math.sqrt(2.0) * pulse.tau
