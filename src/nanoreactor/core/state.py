"""
AtomArena: the per-atom state buffer of one engine instance.

This module provides the AtomArena dataclass holding contiguous arrays
for every dynamic and static per-atom quantity. The orchestrator owns
exactly one arena; kernels read and write its arrays in place and never
keep references of their own.
"""
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .atom import Atom
from .constants import AMU_TO_INTERNAL, BOLTZMANN_EV
from .element_registry import elements


@dataclass(eq=False)
class AtomArena:
    """
    Contiguous atom-state buffer.

    Attributes:
        elements: Element symbol per atom (fixed for the arena lifetime).
        positions: (N, 3) positions in Å.
        velocities: (N, 3) velocities in Å/fs.
        forces: (N, 3) forces in eV/Å.
        masses: (N,) masses in amu.
        ids: (N,) caller-supplied atom identifiers.
        time: Simulated time in fs (default: 0.0).
        step: Step counter (default: 0).

    Example:
        >>> arena = AtomArena.from_atoms([
        ...     Atom('H', [-0.37, 0, 0]), Atom('H', [0.37, 0, 0]),
        ... ])
        >>> arena.n_atoms
        2
    """
    elements: Tuple[str, ...]
    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    forces: NDArray[np.floating]
    masses: NDArray[np.floating]
    ids: NDArray[np.intp] = field(default_factory=lambda: np.zeros(0, dtype=np.intp))
    time: float = 0.0
    step: int = 0

    def __post_init__(self) -> None:
        """Validate array shapes and cache element type indices."""
        self.elements = tuple(self.elements)
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.velocities = np.asarray(self.velocities, dtype=np.float64)
        self.forces = np.asarray(self.forces, dtype=np.float64)
        self.masses = np.asarray(self.masses, dtype=np.float64)

        n = len(self.elements)
        if self.positions.shape != (n, 3):
            raise ValueError(
                f"Positions must be ({n}, 3) array, got shape {self.positions.shape}"
            )
        if self.velocities.shape != self.positions.shape:
            raise ValueError(
                f"Velocities shape {self.velocities.shape} must match "
                f"positions shape {self.positions.shape}"
            )
        if self.forces.shape != self.positions.shape:
            raise ValueError(
                f"Forces shape {self.forces.shape} must match "
                f"positions shape {self.positions.shape}"
            )
        if self.masses.shape != (n,):
            raise ValueError(f"Masses must be ({n},) array, got {self.masses.shape}")
        if np.any(self.masses <= 0):
            raise ValueError("All masses must be positive")

        if len(self.ids) == 0:
            self.ids = np.arange(n, dtype=np.intp)
        self.ids = np.asarray(self.ids, dtype=np.intp)
        self.type_indices = elements.type_indices(list(self.elements))

    @classmethod
    def from_atoms(cls, atoms: Sequence[Atom]) -> "AtomArena":
        """Copy a sequence of Atom objects into a fresh arena."""
        n = len(atoms)
        return cls(
            elements=tuple(a.element for a in atoms),
            positions=np.array([a.position for a in atoms], dtype=np.float64).reshape(n, 3),
            velocities=np.array([a.velocity for a in atoms], dtype=np.float64).reshape(n, 3),
            forces=np.zeros((n, 3)),
            masses=np.array([a.mass for a in atoms], dtype=np.float64),
            ids=np.array([a.id if a.id >= 0 else i for i, a in enumerate(atoms)], dtype=np.intp),
        )

    @property
    def n_atoms(self) -> int:
        """Return the number of atoms in the arena."""
        return len(self.elements)

    def internal_masses(self) -> NDArray[np.floating]:
        """(N,) masses in eV·fs²/Å²."""
        return self.masses * AMU_TO_INTERNAL

    def compute_kinetic_energy(self) -> float:
        """
        Compute total kinetic energy in eV.

        KE = (1/2) * Σ_i m_i * |v_i|²  with m in internal units.
        """
        m = self.internal_masses()
        return float(0.5 * np.sum(m[:, np.newaxis] * self.velocities ** 2))

    def compute_temperature(self) -> float:
        """
        Instantaneous temperature in K.

        T = 2 * KE / (3 * N * kB); an empty arena has T = 0.
        """
        if self.n_atoms == 0:
            return 0.0
        ke = self.compute_kinetic_energy()
        return 2.0 * ke / (3 * self.n_atoms * BOLTZMANN_EV)

    def get_momentum(self) -> NDArray[np.floating]:
        """(3,) total linear momentum Σ m·v (amu·Å/fs)."""
        return np.sum(self.masses[:, np.newaxis] * self.velocities, axis=0)

    def zero_momentum(self) -> None:
        """
        Remove center of mass velocity.

        Subtracts the mass-weighted mean velocity from every atom.
        Zero total mass is a no-op.
        """
        total_mass = float(np.sum(self.masses))
        if total_mass <= 0.0:
            return
        self.velocities -= self.get_momentum() / total_mass

    def get_center_of_mass(self) -> NDArray[np.floating]:
        """(3,) center of mass position."""
        total_mass = float(np.sum(self.masses))
        if total_mass <= 0.0:
            return np.zeros(3)
        return np.sum(self.masses[:, np.newaxis] * self.positions, axis=0) / total_mass

    def to_atoms(self) -> List[Atom]:
        """Copy the arena back out as Atom objects."""
        return [
            Atom(
                element=self.elements[i],
                position=self.positions[i].copy(),
                velocity=self.velocities[i].copy(),
                mass=float(self.masses[i]),
                id=int(self.ids[i]),
            )
            for i in range(self.n_atoms)
        ]

    def copy(self) -> "AtomArena":
        """Create a deep copy of the arena."""
        return AtomArena(
            elements=self.elements,
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            forces=self.forces.copy(),
            masses=self.masses.copy(),
            ids=self.ids.copy(),
            time=self.time,
            step=self.step,
        )

    def __repr__(self) -> str:
        """Return string representation of the arena."""
        return (
            f"AtomArena(n_atoms={self.n_atoms}, "
            f"species={sorted(set(self.elements))}, "
            f"step={self.step}, time={self.time})"
        )
