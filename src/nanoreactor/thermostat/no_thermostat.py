"""
No thermostat (NVE ensemble).
"""
from typing import TYPE_CHECKING

from .thermostat import Thermostat

if TYPE_CHECKING:
    from nanoreactor.core import AtomArena


class NoThermostat(Thermostat):
    """
    No thermostat - NVE (microcanonical) ensemble.

    Selected whenever the target temperature or the coupling time is
    zero. Velocities are left untouched.

    Example:
        >>> from nanoreactor.thermostat import NoThermostat
        >>> NoThermostat().apply(arena, dt=0.5)  # Does nothing
    """

    def __init__(self) -> None:
        super().__init__(target_temperature=0.0)

    def apply(self, arena: "AtomArena", dt: float) -> None:
        pass

    def get_name(self) -> str:
        """Return thermostat name."""
        return "NVE (No Thermostat)"
