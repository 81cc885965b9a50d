"""
Soft spherical confinement wall.

The reactor is a sphere of radius R centred on the origin. Atoms feel
nothing inside the onset radius; between the onset and R the spring
constant ramps up with a quintic smoothstep, and beyond R the full
constant applies.
"""
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import WALL_ONSET_FRACTION
from nanoreactor.core.vec3 import normalize_rows, row_lengths


def smoothstep5(t: NDArray[np.floating]) -> NDArray[np.floating]:
    """Quintic smoothstep t³(10 - 15t + 6t²) on [0, 1]."""
    t = np.clip(t, 0.0, 1.0)
    return t ** 3 * (10.0 - 15.0 * t + 6.0 * t ** 2)


class SoftSphericalWall:
    """
    Radial harmonic wall with a smooth onset.

    For an atom at distance r from the origin, past the onset 0.9·R:

        Δ = r - 0.9·R
        k_eff = k · smoothstep5((r - 0.9·R) / (0.1·R))
        F = -k_eff · Δ · r̂,  E = 0.5 · k_eff · Δ²

    A non-positive force constant disables the wall.

    Attributes:
        radius: Wall radius R in Å.
        force_constant: Spring constant k in eV/Å².

    Example:
        >>> wall = SoftSphericalWall(radius=10.0, force_constant=2.0)
        >>> forces, energy = wall.compute(positions)
    """

    def __init__(self, radius: float, force_constant: float) -> None:
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        self.radius = radius
        self.force_constant = force_constant

    @property
    def onset(self) -> float:
        """Radius at which the wall switches on."""
        return WALL_ONSET_FRACTION * self.radius

    @property
    def enabled(self) -> bool:
        return self.force_constant > 0

    def compute(
        self, positions: NDArray[np.floating]
    ) -> Tuple[NDArray[np.floating], float]:
        """
        Compute wall forces and energy.

        Args:
            positions: (N, 3) positions in Å.

        Returns:
            Tuple of ((N, 3) forces, total wall energy).
        """
        positions = np.asarray(positions, dtype=np.float64)
        forces = np.zeros_like(positions)
        if not self.enabled or len(positions) == 0:
            return forces, 0.0

        r = row_lengths(positions)
        outside = r > self.onset
        if not np.any(outside):
            return forces, 0.0

        r_out = r[outside]
        displacement = r_out - self.onset
        k_eff = self.force_constant * smoothstep5(displacement / (self.radius - self.onset))

        direction = normalize_rows(positions[outside])
        forces[outside] = -(k_eff * displacement)[:, np.newaxis] * direction

        energy = float(np.sum(0.5 * k_eff * displacement ** 2))
        return forces, energy

    def get_name(self) -> str:
        return f"SoftSphericalWall(R={self.radius}, k={self.force_constant})"
