"""
Shared payload schemas for the engine, service and command channel.

Defines the value objects the engine produces. Keeping them in one place
prevents drift between the direct service path and the message channel.
Snapshots hold copies; nothing here references engine internals.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Bond:
    """Covalent bond between atoms i < j."""

    i: int
    j: int
    order: int
    length: float

    def to_dict(self) -> Dict[str, Any]:
        return {"i": self.i, "j": self.j, "order": self.order, "length": self.length}


@dataclass(frozen=True)
class Species:
    """A molecular formula and how many molecules currently have it."""

    formula: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"formula": self.formula, "count": self.count}


@dataclass(frozen=True)
class EnergyRecord:
    """One point of the energy history."""

    step: int
    kinetic: float
    potential: float
    total: float
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "kinetic": self.kinetic,
            "potential": self.potential,
            "total": self.total,
            "temperature": self.temperature,
        }


@dataclass(eq=False)
class Snapshot:
    """Engine state after initialization or after one step."""

    elements: Tuple[str, ...]
    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    forces: NDArray[np.floating]
    bonds: List[Bond]
    species: List[Species]
    temperature: float
    kinetic_energy: float
    potential_energy: float
    step: int
    time: float
    ids: List[int] = field(default_factory=list)
    steps_per_second: float = 0.0

    @property
    def total_energy(self) -> float:
        return self.kinetic_energy + self.potential_energy

    @property
    def n_atoms(self) -> int:
        return len(self.elements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ids": list(self.ids),
            "elements": list(self.elements),
            "positions": self.positions.tolist(),
            "velocities": self.velocities.tolist(),
            "forces": self.forces.tolist(),
            "bonds": [b.to_dict() for b in self.bonds],
            "species": [s.to_dict() for s in self.species],
            "temperature": self.temperature,
            "kinetic_energy": self.kinetic_energy,
            "potential_energy": self.potential_energy,
            "total_energy": self.total_energy,
            "step": self.step,
            "time": self.time,
            "steps_per_second": self.steps_per_second,
        }
