"""
Berendsen thermostat implementation.

Velocity rescaling with exponential relaxation toward the target
temperature, with the per-step scale factor clamped.
"""
from typing import TYPE_CHECKING

import numpy as np

from nanoreactor.core.constants import (
    BERENDSEN_MAX_SCALE,
    BERENDSEN_MIN_SCALE,
    TEMPERATURE_EPSILON,
)

from .thermostat import Thermostat

if TYPE_CHECKING:
    from nanoreactor.core import AtomArena


class BerendsenThermostat(Thermostat):
    """
    Berendsen (weak coupling) thermostat.

    Rescales velocities each step to drive temperature toward target:
        v_new = v * lambda
        lambda = sqrt(1 + (dt/tau) * (T_target/T_current - 1))

    lambda is clamped to [0.9, 1.1] so a single step never changes the
    kinetic energy by more than about 20%.

    Attributes:
        tau: Coupling time constant in fs (larger = weaker coupling).

    Example:
        >>> thermostat = BerendsenThermostat(target_temperature=300.0, tau=20.0)
        >>> thermostat.apply(arena, dt=0.5)
    """

    def __init__(self, target_temperature: float, tau: float) -> None:
        """
        Initialize Berendsen thermostat.

        Args:
            target_temperature: Target temperature in K.
            tau: Coupling time constant in fs.
        """
        super().__init__(target_temperature)
        if tau <= 0:
            raise ValueError(f"Coupling time tau must be positive, got {tau}")
        self.tau = tau

    def scale_factor(self, current_temperature: float, dt: float) -> float:
        """
        Clamped rescaling factor for the given instantaneous temperature.

        Returns 1.0 for a frozen system (T below epsilon).
        """
        if current_temperature < TEMPERATURE_EPSILON:
            return 1.0

        ratio = self.target_temperature / current_temperature
        lambda_sq = max(1.0 + (dt / self.tau) * (ratio - 1.0), 0.0)
        return float(np.clip(np.sqrt(lambda_sq), BERENDSEN_MIN_SCALE, BERENDSEN_MAX_SCALE))

    def apply(self, arena: "AtomArena", dt: float) -> None:
        """
        Apply Berendsen velocity rescaling.

        Args:
            arena: Atom state.
            dt: Current time step in fs.
        """
        current_temp = arena.compute_temperature()
        if current_temp < TEMPERATURE_EPSILON:
            return
        arena.velocities *= self.scale_factor(current_temp, dt)

    def get_name(self) -> str:
        """Return thermostat name with parameters."""
        return f"Berendsen(T={self.target_temperature}, tau={self.tau})"
