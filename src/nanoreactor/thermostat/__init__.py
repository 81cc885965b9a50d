"""
Thermostat module for reactive simulations.

Provides temperature control algorithms:
- NoThermostat: NVE (constant energy)
- BerendsenThermostat: Weak coupling with a clamped scale factor
"""

from .berendsen import BerendsenThermostat
from .no_thermostat import NoThermostat
from .thermostat import Thermostat

__all__ = [
    "Thermostat",
    "NoThermostat",
    "BerendsenThermostat",
]
