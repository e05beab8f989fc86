"""
Test suite for typelaser.py module.

Tests the plane-wave parameter structure (pws), polarisation parsing,
configuration validation, derived quantities and parameter-file I/O.
"""

import dataclasses
import logging
import math
import os
import tempfile
from io import StringIO

import numpy as np
import pytest


try:
    from pulseinject.laser import typelaser as tl
    from pulseinject.libpulseinject.logger import DEBUG3

    _IMPORT_ERROR = None
except Exception as exc:  # noqa: BLE001
    tl = None
    _IMPORT_ERROR = str(exc)

needs_typelaser = pytest.mark.skipif(
    tl is None,
    reason=f"typelaser could not be imported: {_IMPORT_ERROR}",
)

c0 = 299792458.0
twopi = 2.0 * np.pi


def _make_pulse(**overrides):
    """Return a representative 800 nm pulse."""
    params = dict(
        lam=800e-9,
        Amp=1.0e12,
        tau=5.0e-15,
        ramp_init=8.0,
        plateau=0.0,
        phase=0.0,
        pol="linear_x",
        dt=1.0e-17,
    )
    params.update(overrides)
    return tl.MakeLaserParams(**params)


@needs_typelaser
class TestPolarisation:
    """Test ParsePolarisation."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("linear_x", "LINEAR_X"),
            ("LINEAR_Z", "LINEAR_Z"),
            (" Circular ", "CIRCULAR"),
            ("x", "LINEAR_X"),
            ("z", "LINEAR_Z"),
            (0, "LINEAR_X"),
            (1, "LINEAR_Z"),
            (2, "CIRCULAR"),
            ("2", "CIRCULAR"),
            (1.0, "LINEAR_Z"),
        ],
    )
    def test_accepted(self, value, expected):
        assert tl.ParsePolarisation(value) is tl.Polarisation[expected]

    def test_enum_passthrough(self):
        assert tl.ParsePolarisation(tl.Polarisation.CIRCULAR) is tl.Polarisation.CIRCULAR

    @pytest.mark.parametrize("value", ["elliptical", "", 3, -1, 1.5, None, True, False])
    def test_rejected(self, value):
        with pytest.raises(ValueError, match="polarisation"):
            tl.ParsePolarisation(value)


@needs_typelaser
class TestPWSDataclass:
    """Test the pws dataclass and MakeLaserParams."""

    def test_creation(self):
        p = _make_pulse()
        assert p.lam == 800e-9
        assert p.Amp == 1.0e12
        assert p.tau == 5.0e-15
        assert p.ramp_init == 8.0
        assert p.plateau == 0.0
        assert p.phase == 0.0
        assert p.pol is tl.Polarisation.LINEAR_X
        assert p.dt == 1.0e-17

    def test_default_speed_of_light(self):
        assert np.isclose(_make_pulse().c, c0, rtol=1e-15)

    def test_coerces_to_float(self):
        p = tl.MakeLaserParams(lam=1, Amp=2, tau=3, ramp_init=4, dt=1, c=1)
        assert isinstance(p.lam, float)
        assert isinstance(p.ramp_init, float)

    def test_frozen(self):
        p = _make_pulse()
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.lam = 1e-6

    def test_replace_derives_variant(self):
        p = _make_pulse()
        q = dataclasses.replace(p, plateau=10e-15)
        assert q.plateau == 10e-15
        assert p.plateau == 0.0


@needs_typelaser
class TestValidation:
    """Invalid configuration is rejected with ValueError."""

    @pytest.mark.parametrize(
        "field, value",
        [
            ("lam", 0.0),
            ("lam", -800e-9),
            ("tau", 0.0),
            ("tau", -1e-15),
            ("dt", 0.0),
            ("c", 0.0),
            ("ramp_init", -1.0),
            ("plateau", -1e-15),
        ],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValueError, match=field):
            _make_pulse(**{field: value})

    @pytest.mark.parametrize("field", ["lam", "Amp", "tau", "phase", "dt"])
    def test_non_finite(self, field):
        for value in (math.nan, math.inf):
            with pytest.raises(ValueError, match="finite"):
                _make_pulse(**{field: value})

    def test_unknown_polarisation(self):
        with pytest.raises(ValueError):
            _make_pulse(pol="radial")

    def test_validate_direct(self):
        p = tl.pws(lam=800e-9, Amp=1.0, tau=-1.0, ramp_init=1.0)
        with pytest.raises(ValueError, match="tau"):
            tl.ValidateLaserParams(p)

    def test_validate_rejects_raw_pol(self):
        p = tl.pws(lam=800e-9, Amp=1.0, tau=1.0, ramp_init=1.0, pol=7)
        with pytest.raises(ValueError, match="pol"):
            tl.ValidateLaserParams(p)

    def test_zero_ramp_and_amplitude_allowed(self):
        p = _make_pulse(ramp_init=0.0, Amp=0.0)
        assert p.ramp_init == 0.0
        assert p.Amp == 0.0


@needs_typelaser
class TestDerivedQuantities:
    """Test CalcK0, CalcOmega0, CalcPeriod and the ramp thresholds."""

    def test_calck0(self):
        assert np.isclose(tl.CalcK0(_make_pulse()), twopi / 800e-9, rtol=1e-12)

    def test_calcfreq0(self):
        assert np.isclose(tl.CalcFreq0(_make_pulse()), c0 / 800e-9, rtol=1e-12)

    def test_calcomega0(self):
        assert np.isclose(tl.CalcOmega0(_make_pulse()), twopi * c0 / 800e-9, rtol=1e-12)

    def test_omega0_uses_configured_speed(self):
        p = _make_pulse(lam=0.8, c=1.0)
        assert np.isclose(tl.CalcOmega0(p), twopi / 0.8, rtol=1e-12)

    def test_period(self):
        p = _make_pulse()
        assert np.isclose(tl.CalcPeriod(p) * tl.CalcFreq0(p), 1.0, rtol=1e-12)

    def test_end_upramp(self):
        p = _make_pulse(lam=0.8, tau=10.0, ramp_init=2.0, dt=1.0, c=1.0)
        assert tl.CalcEndUpramp(p) == 10.0

    def test_start_downramp(self):
        p = _make_pulse(plateau=20e-15)
        assert np.isclose(tl.CalcStartDownramp(p), 20e-15 + 20e-15, rtol=1e-12)

    def test_pulse_duration(self):
        p = _make_pulse(plateau=20e-15)
        expected = 40e-15 + 6.0 * math.sqrt(2.0) * 5e-15
        assert np.isclose(tl.CalcPulseDuration(p), expected, rtol=1e-12)
        assert tl.CalcPulseDuration(p, nsigma=2.0) < tl.CalcPulseDuration(p)

    @pytest.mark.parametrize("lam", [400e-9, 800e-9, 1550e-9, 10.6e-6])
    def test_k0_omega0_relation(self, lam):
        """k0 * c == omega0 for any wavelength."""
        p = _make_pulse(lam=lam)
        assert np.isclose(tl.CalcK0(p) * p.c, tl.CalcOmega0(p), rtol=1e-12)


@needs_typelaser
class TestFileIO:
    """Test reading / writing laser parameter files."""

    def _params_text(self, pol="circular"):
        return (
            "800e-9      ! lambda\n"
            "1.0e12      ! Amp\n"
            "5.0e-15     ! tau\n"
            "8.0         ! ramp_init\n"
            "2.67e-15    ! plateau\n"
            "0.5         ! phase\n"
            f"{pol}      ! pol\n"
            "1.0e-17     ! dt\n"
            "299792458.0 ! c\n"
        )

    def test_readlaserparams_sub(self):
        p = tl.readlaserparams_sub(StringIO(self._params_text()))
        assert np.isclose(p.lam, 800e-9, rtol=1e-12)
        assert np.isclose(p.Amp, 1.0e12, rtol=1e-12)
        assert np.isclose(p.tau, 5.0e-15, rtol=1e-12)
        assert p.ramp_init == 8.0
        assert np.isclose(p.plateau, 2.67e-15, rtol=1e-12)
        assert p.phase == 0.5
        assert p.pol is tl.Polarisation.CIRCULAR
        assert np.isclose(p.dt, 1.0e-17, rtol=1e-12)
        assert p.c == c0

    def test_integer_polarisation_code(self):
        p = tl.readlaserparams_sub(StringIO(self._params_text(pol="1")))
        assert p.pol is tl.Polarisation.LINEAR_Z

    def test_bad_polarisation(self):
        with pytest.raises(ValueError):
            tl.readlaserparams_sub(StringIO(self._params_text(pol="radial")))

    def test_truncated_file(self):
        text = "".join(self._params_text().splitlines(keepends=True)[:5])
        with pytest.raises(ValueError, match="end of file"):
            tl.readlaserparams_sub(StringIO(text))

    def test_empty_line(self):
        text = self._params_text().replace("8.0         ! ramp_init\n", "\n")
        with pytest.raises(ValueError, match="Empty line"):
            tl.readlaserparams_sub(StringIO(text))

    def test_comment_line(self):
        text = "! a comment\n" + self._params_text()
        with pytest.raises(ValueError, match="Comment-only"):
            tl.readlaserparams_sub(StringIO(text))

    def test_non_numeric(self):
        text = self._params_text().replace("1.0e12 ", "bright ")
        with pytest.raises(ValueError, match="numeric"):
            tl.readlaserparams_sub(StringIO(text))

    def test_invalid_values_rejected(self):
        text = self._params_text().replace("5.0e-15 ", "-5.0e-15")
        with pytest.raises(ValueError, match="tau"):
            tl.readlaserparams_sub(StringIO(text))

    def test_write_format(self):
        fh = StringIO()
        tl.writelaserparams_sub(fh, _make_pulse(pol="linear_z"))
        lines = fh.getvalue().splitlines()
        assert len(lines) == 9
        assert lines[6].split()[0] == "linear_z"
        assert "(m)" in lines[0]

    @pytest.mark.parametrize("pol", ["linear_x", "linear_z", "circular"])
    def test_roundtrip_file(self, pol):
        p = _make_pulse(pol=pol, plateau=13e-15, phase=-0.25)
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, suffix=".params"
        ) as fh:
            fname = fh.name

        try:
            tl.WriteLaserParams(fname, p)
            p2 = tl.ReadLaserParams(fname)
            for name in ("lam", "Amp", "tau", "ramp_init", "plateau", "phase", "dt", "c"):
                assert np.isclose(getattr(p2, name), getattr(p, name), rtol=1e-12)
            assert p2.pol is p.pol
        finally:
            os.unlink(fname)

    def test_read_logs(self, caplog):
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, suffix=".params"
        ) as fh:
            fh.write(self._params_text())
            fname = fh.name

        try:
            with caplog.at_level(logging.INFO, logger="pulseinject"):
                tl.ReadLaserParams(fname)
            assert "Read laser parameters" in caplog.text
        finally:
            os.unlink(fname)

    def test_thresholds_logged_at_debug3(self, caplog):
        with caplog.at_level(DEBUG3, logger="pulseinject"):
            _make_pulse(plateau=10e-15)
        records = [r for r in caplog.records if "endUpramp" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelname == "DEBUG3"

    def test_thresholds_hidden_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pulseinject"):
            _make_pulse()
        assert "endUpramp" not in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
