"""
Plane-wave laser source (use periodic transverse boundaries).

Computes the electric field of an incident plane-wave pulse at the
injection plane as a function of the simulation step.  There is no
transverse envelope.

Physics reference:
    Start from a Gaussian-enveloped potential

        Phi(x) = Phi0 * exp(-0.5 * (x - x0)^2 / sigma^2) * cos(k (x - x0) - phi)

    and take E = dPhi/dx.  Because E is an exact derivative of a function
    that vanishes at +-infinity, the integral of E over all x is zero for
    any phase phi.  With t = x/c, (x - x0)/sigma = (t - t0)/tau and
    omega/k = c the field becomes an oscillation plus a correction term
    proportional to the local slope of the envelope:

        E(t) = E0 * env(t) * [sin(omega (t - t0) + phi)
                              + f(t) * cos(omega (t - t0) + phi)]

    with env(t) = exp(-0.5 * ((t - t0) / (tau sqrt2))^2) on the ramps and
    f(t) = (t - t0) / (2 tau^2).  Between the ramps the envelope is held
    at E0 and f = 0.

    The zero-integral property is exact only for a purely Gaussian pulse.
    With a plateau the field integrates to zero only if the plateau length
    is a whole number of oscillation periods.

The arithmetic lives in one jitted kernel that the scalar evaluator and
the batch evaluator share, so both give bit-identical results.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from numba import jit

from ..core.constants import sqrt2
from .typelaser import CalcEndUpramp, CalcOmega0, CalcStartDownramp, Polarisation


class EnvelopeRegime(IntEnum):
    """Part of the pulse a run time falls into."""
    UPRAMP = 0
    PLATEAU = 1
    DOWNRAMP = 2


# Integer codes seen by the kernels
_UPRAMP = int(EnvelopeRegime.UPRAMP)
_PLATEAU = int(EnvelopeRegime.PLATEAU)
_DOWNRAMP = int(EnvelopeRegime.DOWNRAMP)
_LINEAR_X = int(Polarisation.LINEAR_X)
_LINEAR_Z = int(Polarisation.LINEAR_Z)
_CIRCULAR = int(Polarisation.CIRCULAR)

# exp(-a) is below the smallest float64 subnormal for a > 745
_EXP_CUTOFF = 745.0


@dataclass(frozen=True)
class Envelope:
    """
    Envelope state at one run time.

    Attributes
    ----------
    envelope : float
        Field amplitude after the Gaussian ramps (V/m).
    correction : float
        Integration-correction factor multiplying cos(theta).
    regime : EnvelopeRegime
        Ramp or plateau label.
    """
    envelope: float
    correction: float
    regime: EnvelopeRegime


@dataclass(frozen=True, eq=False)
class FieldSample:
    """
    Laser field at the injection plane for one step.

    Attributes
    ----------
    E : numpy.ndarray
        Field vector (Ex, Ey, Ez), float64, shape (3,).
    phase : float
        Reserved for a chirped-pulse model; always 0.0 for the plane wave.
    """
    E: np.ndarray
    phase: float = 0.0


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------
@jit(nopython=True)
def _envelope_jit(runTime, Amp, tau, endUpramp, startDownramp):
    """JIT-compiled envelope calculator.  Returns (envelope, correction, regime)."""
    envelope = Amp
    correction = 0.0
    regime = _PLATEAU
    if runTime > startDownramp or runTime < endUpramp:
        if runTime > startDownramp:
            t0 = startDownramp
            regime = _DOWNRAMP
        else:
            t0 = endUpramp
            regime = _UPRAMP
        exponent = (runTime - t0) / tau / sqrt2
        arg = 0.5 * exponent * exponent
        if arg > _EXP_CUTOFF:
            envelope = 0.0
        else:
            envelope = Amp * math.exp(-arg)
        correction = (runTime - t0) / (2.0 * tau * tau)
    return envelope, correction, regime


@jit(nopython=True)
def _laser_longitudinal_jit(runTime, Amp, tau, endUpramp, startDownramp,
                            omega, phase0, pol, elong):
    """JIT-compiled field evaluator.  Writes (Ex, Ey, Ez) into *elong*."""
    elong[0] = 0.0
    elong[1] = 0.0
    elong[2] = 0.0

    envelope, correction, regime = _envelope_jit(runTime, Amp, tau, endUpramp, startDownramp)
    # saturated tail: skip the carrier so an unbounded correction cannot give NaN
    if envelope == 0.0:
        return

    t_and_phase = omega * (runTime - endUpramp) + phase0
    s = math.sin(t_and_phase)
    c = math.cos(t_and_phase)

    if pol == _LINEAR_X:
        elong[0] = envelope * (s + c * correction)
    elif pol == _LINEAR_Z:
        elong[2] = envelope * (s + c * correction)
    elif pol == _CIRCULAR:
        elong[0] = envelope / sqrt2 * (s + c * correction)
        elong[2] = envelope / sqrt2 * (c - s * correction)


@jit(nopython=True)
def _laser_steps_jit(steps, dt, Amp, tau, endUpramp, startDownramp,
                     omega, phase0, pol, out):
    """JIT-compiled batch evaluator over an array of step indices."""
    for i in range(steps.shape[0]):
        _laser_longitudinal_jit(dt * steps[i], Amp, tau, endUpramp, startDownramp,
                                omega, phase0, pol, out[i])


def _kernel_args(pulse):
    """Unpack a parameter set into the scalar arguments of the kernels."""
    return (
        float(pulse.Amp),
        float(pulse.tau),
        float(CalcEndUpramp(pulse)),
        float(CalcStartDownramp(pulse)),
        float(CalcOmega0(pulse)),
        float(pulse.phase),
        int(pulse.pol),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def CalcEnvelope(runTime, pulse):
    """Envelope amplitude, correction factor and regime at *runTime*.

    Parameters
    ----------
    runTime : float
        Elapsed simulation time (s).
    pulse : pws
        Laser parameters.

    Returns
    -------
    Envelope

    Notes
    -----
    A run time exactly on either threshold belongs to the plateau.  The
    envelope and its slope are continuous across both thresholds.
    """
    envelope, correction, regime = _envelope_jit(
        float(runTime), float(pulse.Amp), float(pulse.tau),
        float(CalcEndUpramp(pulse)), float(CalcStartDownramp(pulse)),
    )
    return Envelope(envelope, correction, EnvelopeRegime(regime))


def CalcPhase(runTime, pulse):
    """Oscillation phase theta = omega0 * (runTime - endUpramp) + phi0  (rad)."""
    return CalcOmega0(pulse) * (runTime - CalcEndUpramp(pulse)) + pulse.phase


def LaserLongitudinal(currentStep, pulse):
    """Calculate the longitudinal field distribution at one step.

    Parameters
    ----------
    currentStep : int
        Simulation step index; the run time is pulse.dt * currentStep.
    pulse : pws
        Laser parameters.

    Returns
    -------
    FieldSample
        Field vector and the (unused) phase output.
    """
    elong = np.zeros(3, dtype=np.float64)
    _laser_longitudinal_jit(float(pulse.dt) * int(currentStep), *_kernel_args(pulse), elong)
    return FieldSample(E=elong, phase=0.0)


def LaserLongitudinalSteps(steps, pulse):
    """Evaluate the longitudinal field for many steps at once.

    Parameters
    ----------
    steps : array_like of int
        Step indices.
    pulse : pws
        Laser parameters.

    Returns
    -------
    numpy.ndarray
        Field vectors, shape (len(steps), 3).  Row i equals
        ``LaserLongitudinal(steps[i], pulse).E``.
    """
    steps = np.ascontiguousarray(steps, dtype=np.int64).ravel()
    out = np.zeros((steps.shape[0], 3), dtype=np.float64)
    _laser_steps_jit(steps, float(pulse.dt), *_kernel_args(pulse), out)
    return out


def LaserTransversal(elong, phase, posX, posZ):
    """Calculate the transverse field distribution.

    A plane wave has no transverse envelope, so the longitudinal field is
    returned unchanged at every transverse position.

    Parameters
    ----------
    elong : numpy.ndarray
        Longitudinal field vector.
    phase : float
        Phase output of :func:`LaserLongitudinal`.
    posX, posZ : float
        Transverse position of the cell (m).
    """
    return elong
