"""laser sub-package: plane-wave laser source for field injection."""

# Import modules themselves (allows: from pulseinject.laser import planewave)
from . import typelaser
from . import typetime
from . import planewave
from . import injection

from .typelaser import (
    Polarisation,
    pws,
    MakeLaserParams,
    ParsePolarisation,
    ValidateLaserParams,
    ReadLaserParams,
    WriteLaserParams,
)
from .typetime import ts
from .planewave import (
    Envelope,
    EnvelopeRegime,
    FieldSample,
    CalcEnvelope,
    CalcPhase,
    LaserLongitudinal,
    LaserLongitudinalSteps,
    LaserTransversal,
)
from .injection import (
    ClockForPulse,
    FieldTimeIntegral,
    InjectPlaneWave,
    LaserTimeSeries,
)

__all__ = [
    "typelaser",
    "typetime",
    "planewave",
    "injection",
    "Polarisation",
    "pws",
    "MakeLaserParams",
    "ParsePolarisation",
    "ValidateLaserParams",
    "ReadLaserParams",
    "WriteLaserParams",
    "ts",
    "Envelope",
    "EnvelopeRegime",
    "FieldSample",
    "CalcEnvelope",
    "CalcPhase",
    "LaserLongitudinal",
    "LaserLongitudinalSteps",
    "LaserTransversal",
    "ClockForPulse",
    "FieldTimeIntegral",
    "InjectPlaneWave",
    "LaserTimeSeries",
]
