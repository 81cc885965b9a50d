"""
Velocity Verlet integrator implementation.

Time-reversible and symplectic with good energy conservation. Masses
are converted from amu to eV·fs²/Å² before computing accelerations.
"""
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .integrator import Integrator

if TYPE_CHECKING:
    from nanoreactor.core import AtomArena


class VelocityVerlet(Integrator):
    """
    Velocity Verlet integrator.

    Algorithm (for each time step dt):
        1. r(t + dt) = r(t) + v(t)·dt + (1/2)·a(t)·dt²
        2. Compute a(t + dt) from new positions (done by the caller)
        3. v(t + dt) = v(t) + (1/2)·[a(t) + a(t + dt)]·dt

    Example:
        >>> from nanoreactor.integrator import VelocityVerlet
        >>> integrator = VelocityVerlet(dt=0.5)
        >>> old_forces = arena.forces.copy()
        >>> integrator.integrate_positions(arena)
        >>> arena.forces = calculator.compute_forces(arena, graph)
        >>> integrator.integrate_velocities(arena, old_forces)
    """

    def integrate_positions(self, arena: "AtomArena") -> None:
        """
        Full-step position update with the current (old) forces.

        Args:
            arena: Atom state; positions are updated in place.
        """
        dt = self.dt
        accelerations = arena.forces / arena.internal_masses()[:, np.newaxis]
        arena.positions += arena.velocities * dt + 0.5 * accelerations * dt * dt

    def integrate_velocities(self, arena: "AtomArena", old_forces: NDArray) -> None:
        """
        Velocity update from the average of old and new accelerations.

        Args:
            arena: Atom state; arena.forces must hold the new forces.
            old_forces: (N, 3) forces at the start of the step.
        """
        inv_mass = 1.0 / arena.internal_masses()[:, np.newaxis]
        arena.velocities += 0.5 * (old_forces + arena.forces) * inv_mass * self.dt

    @staticmethod
    def clamp_velocities(arena: "AtomArena", max_velocity: float) -> None:
        """
        Clamp every velocity component to [-max_velocity, max_velocity].

        Args:
            arena: Atom state; velocities are clamped in place.
            max_velocity: Component bound in Å/fs.
        """
        np.clip(arena.velocities, -max_velocity, max_velocity, out=arena.velocities)

    def get_name(self) -> str:
        """Return integrator name with timestep."""
        return f"VelocityVerlet(dt={self.dt})"
