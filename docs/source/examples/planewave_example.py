import numpy as np
import matplotlib.pyplot as plt
import pulseinject.laser as laser
from pulseinject.libpulseinject import logger

logger.setup(level="INFO")

lam = 800e-9            # Wavelength (m)
Amp = 1e12              # Peak field (V/m)
tau = 5e-15             # Ramp width (s)
ramp_init = 12.0        # endUpramp = 6 tau
T0 = lam / 299792458.0  # Optical period (s)
dt = T0 / 40            # Time step (s)

pulses = {
    "linear_x": laser.MakeLaserParams(lam, Amp, tau, ramp_init, dt=dt, pol="linear_x"),
    "circular": laser.MakeLaserParams(lam, Amp, tau, ramp_init, dt=dt, pol="circular"),
    "plateau 7.5 T0": laser.MakeLaserParams(lam, Amp, tau, ramp_init, plateau=7.5 * T0, dt=dt),
    "plateau 8 T0": laser.MakeLaserParams(lam, Amp, tau, ramp_init, plateau=8.0 * T0, dt=dt),
}

fig, axes = plt.subplots(len(pulses), 1, figsize=(8, 10), sharex=True)
for ax, (label, pulse) in zip(axes, pulses.items()):
    clock = laser.ClockForPulse(pulse)
    t, E = laser.LaserTimeSeries(pulse, clock)
    integral = laser.FieldTimeIntegral(pulse, clock)
    scale = np.trapezoid(np.abs(E), t, axis=0).max()
    print(f"{label:>16s}: int E dt / int |E| dt = {np.abs(integral).max() / scale:.3e}")
    ax.plot(t * 1e15, E[:, 0], label="Ex")
    ax.plot(t * 1e15, E[:, 2], label="Ez")
    ax.set_ylabel("E (V/m)")
    ax.set_title(label)
    ax.legend(loc="upper right")

axes[-1].set_xlabel("t (fs)")
fig.tight_layout()
plt.show()
