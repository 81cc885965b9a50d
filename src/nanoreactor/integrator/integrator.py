"""
Abstract base class for time integrators.

This module provides the Integrator ABC. Integrators here are split in
two halves so that the bond graph can be updated between the position
update and the force evaluation.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from numpy.typing import NDArray

if TYPE_CHECKING:
    from nanoreactor.core import AtomArena


class Integrator(ABC):
    """
    Abstract base for time integration algorithms (Strategy Pattern).

    A step is driven by the simulator as:
        1. integrate_positions(arena)
        2. (bond update, new forces written to arena.forces)
        3. integrate_velocities(arena, old_forces)

    Attributes:
        dt: Time step size in fs.
    """

    def __init__(self, dt: float) -> None:
        """
        Initialize integrator.

        Args:
            dt: Time step size in fs.
        """
        if dt <= 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        self.dt = dt

    @abstractmethod
    def integrate_positions(self, arena: "AtomArena") -> None:
        """Advance positions in place using arena.forces."""
        pass

    @abstractmethod
    def integrate_velocities(self, arena: "AtomArena", old_forces: NDArray) -> None:
        """Advance velocities in place from old and current forces."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this integrator."""
        pass
