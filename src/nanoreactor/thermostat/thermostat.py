"""
Abstract base class for thermostats.

This module provides the Thermostat ABC that defines the interface
for temperature control algorithms (NVE, Berendsen).
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nanoreactor.core import AtomArena


class Thermostat(ABC):
    """
    Abstract base for thermostats (Strategy Pattern).

    Thermostats control the temperature of the simulation by modifying
    velocities:
    - NoThermostat: NVE (constant energy)
    - BerendsenThermostat: Weak coupling, not proper NVT

    Attributes:
        target_temperature: Target temperature in K.

    Example:
        >>> from nanoreactor.thermostat import BerendsenThermostat
        >>> thermostat = BerendsenThermostat(target_temperature=300.0, tau=20.0)
        >>> thermostat.apply(arena, dt=0.5)
    """

    def __init__(self, target_temperature: float) -> None:
        """
        Initialize thermostat.

        Args:
            target_temperature: Target temperature in K.
        """
        if target_temperature < 0:
            raise ValueError(
                f"Target temperature must be non-negative, got {target_temperature}"
            )
        self.target_temperature = target_temperature

    @abstractmethod
    def apply(self, arena: "AtomArena", dt: float) -> None:
        """
        Apply thermostat to the atoms.

        Modifies arena.velocities to control temperature.

        Args:
            arena: Atom state.
            dt: Current time step size in fs.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this thermostat."""
        pass
