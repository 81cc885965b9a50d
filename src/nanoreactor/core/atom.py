"""
Atom class for reactive simulations.

This module provides the Atom dataclass used to hand initial atoms
to the engine. Inside the engine, per-atom state lives in the
AtomArena arrays instead.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
from numpy.typing import NDArray

from .element_registry import elements


@dataclass
class Atom:
    """
    Represents a single input atom.

    Attributes:
        element: Chemical symbol ('H', 'C', 'N' or 'O').
        position: (3,) position in Å.
        velocity: (3,) velocity in Å/fs (default: at rest).
        mass: Atomic mass in amu (default: standard mass of the element).
        id: Identifier carried through to snapshots (default: -1).

    Example:
        >>> from nanoreactor.core import Atom
        >>> h = Atom('H', position=[0.37, 0.0, 0.0], id=1)
        >>> h.mass
        1.008
    """
    element: str
    position: NDArray[np.floating]
    velocity: NDArray[np.floating] = field(default_factory=lambda: np.zeros(3))
    mass: Optional[float] = None
    id: int = -1

    def __post_init__(self) -> None:
        """Validate atom properties after initialization."""
        if self.element not in elements:
            raise ValueError(
                f"Unsupported element '{self.element}', "
                f"expected one of {elements.symbols()}"
            )
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        if self.position.shape != (3,):
            raise ValueError(f"Position must be a 3-vector, got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be a 3-vector, got {self.velocity.shape}")
        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.velocity))):
            raise ValueError("Atom position and velocity must be finite")
        if self.mass is None:
            self.mass = elements.get_mass(self.element)
        if self.mass <= 0:
            raise ValueError(f"Atom mass must be positive, got {self.mass}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Atom":
        return cls(
            element=d["element"],
            position=d["position"],
            velocity=d.get("velocity", (0.0, 0.0, 0.0)),
            mass=d.get("mass"),
            id=int(d.get("id", -1)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "element": self.element,
            "position": [float(x) for x in self.position],
            "velocity": [float(x) for x in self.velocity],
            "mass": float(self.mass),
        }
