"""
Live simulation configuration.

SimConfig is a plain dataclass; hosts replace it wholesale with
``merged()`` whenever a partial update arrives, so the engine always
sees a validated configuration between two steps.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from .errors import ConfigurationError

# camelCase names used by browser-style hosts
_ALIASES = {
    "targetTemp": "target_temperature",
    "confinementRadius": "confinement_radius",
    "confinementForce": "confinement_force",
    "thermostatTau": "thermostat_tau",
    "stepsPerUpdate": "steps_per_update",
    "maxDisplacement": "max_displacement",
}


@dataclass(frozen=True)
class SimConfig:
    """
    Simulation parameters.

    Attributes:
        dt: Timestep in fs.
        target_temperature: Thermostat target in K (0 disables the thermostat).
        confinement_radius: Reactor wall radius in Å.
        confinement_force: Wall force constant in eV/Å² (0 disables the wall).
        thermostat_tau: Berendsen coupling time in fs (0 disables the thermostat).
        steps_per_update: Steps per host run-loop tick.
        max_displacement: Per-step displacement bound in Å; velocities are
            clamped component-wise to max_displacement / dt.
    """

    dt: float = 0.5
    target_temperature: float = 300.0
    confinement_radius: float = 10.0
    confinement_force: float = 2.0
    thermostat_tau: float = 20.0
    steps_per_update: int = 10
    max_displacement: float = 0.05

    @property
    def thermostat_enabled(self) -> bool:
        return self.target_temperature > 0 and self.thermostat_tau > 0

    @property
    def max_velocity(self) -> float:
        """Velocity clamp in Å/fs."""
        return self.max_displacement / self.dt

    def validate(self) -> "SimConfig":
        """
        Check every field range.

        Returns:
            self, for chaining.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        for f in fields(self):
            if not math.isfinite(getattr(self, f.name)):
                raise ConfigurationError(f"{f.name} must be finite, got {getattr(self, f.name)}")
        if not self.dt > 0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.target_temperature < 0:
            raise ConfigurationError(
                f"target_temperature must be non-negative, got {self.target_temperature}"
            )
        if not self.confinement_radius > 0:
            raise ConfigurationError(
                f"confinement_radius must be positive, got {self.confinement_radius}"
            )
        if self.confinement_force < 0:
            raise ConfigurationError(
                f"confinement_force must be non-negative, got {self.confinement_force}"
            )
        if self.thermostat_tau < 0:
            raise ConfigurationError(
                f"thermostat_tau must be non-negative, got {self.thermostat_tau}"
            )
        if 0 < self.thermostat_tau < self.dt:
            raise ConfigurationError(
                f"thermostat_tau ({self.thermostat_tau}) must be 0 or >= dt ({self.dt})"
            )
        if int(self.steps_per_update) != self.steps_per_update or self.steps_per_update < 1:
            raise ConfigurationError(
                f"steps_per_update must be an integer >= 1, got {self.steps_per_update}"
            )
        if not self.max_displacement > 0:
            raise ConfigurationError(
                f"max_displacement must be positive, got {self.max_displacement}"
            )
        return self

    def merged(self, partial: Mapping[str, Any]) -> "SimConfig":
        """
        Return a validated copy with *partial* merged in.

        Keys may be snake_case field names or their camelCase aliases.
        ``None`` values are ignored.

        Raises:
            ConfigurationError: For unknown keys or out-of-range values.
        """
        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in partial.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            if value is None:
                continue
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"{key} must be a number, got {value!r}")
            if name == "steps_per_update":
                if not math.isfinite(number) or number != int(number):
                    raise ConfigurationError(
                        f"steps_per_update must be an integer >= 1, got {value}"
                    )
                number = int(number)
            changes[name] = number
        return replace(self, **changes).validate()

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SimConfig":
        return cls().merged(d)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
