"""
Force calculator for reactive simulations.

This module provides the ForceCalculator class that evaluates every
unordered atom pair once, choosing the bonded (Morse) or non-bonded
(soft-core) potential from the bond graph, and adds the confinement
wall.
"""
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import DISTANCE_EPSILON
from nanoreactor.core.vec3 import row_lengths
from nanoreactor.potential import (
    MorsePotential,
    PairPotential,
    SoftCoreRepulsion,
    SoftSphericalWall,
)

if TYPE_CHECKING:
    from nanoreactor.bonding import BondGraph
    from nanoreactor.core import AtomArena


class ForceCalculator:
    """
    Computes forces and potential energy for the reactive force field.

    Pairs are taken from the upper triangle of the atom index matrix and
    evaluated in one vectorized batch per potential. For each pair the
    force on atom i is (dV/dr)·r̂_ij, where r̂_ij points from i to j, and
    atom j receives the opposite force.

    Attributes:
        bonded: Potential for pairs in the bond graph.
        nonbonded: Potential for all other pairs.
        wall: Spherical confinement wall.

    Example:
        >>> from nanoreactor.force import ForceCalculator
        >>> calculator = ForceCalculator(confinement_radius=10.0, confinement_force=2.0)
        >>> forces, energy = calculator.compute_forces_and_energy(arena, bond_graph)
    """

    def __init__(
        self,
        confinement_radius: float = 10.0,
        confinement_force: float = 2.0,
        bonded: Optional[PairPotential] = None,
        nonbonded: Optional[PairPotential] = None,
    ) -> None:
        """
        Initialize force calculator.

        Args:
            confinement_radius: Wall radius in Å.
            confinement_force: Wall force constant in eV/Å² (<= 0 disables it).
            bonded: Bonded pair potential (default: MorsePotential).
            nonbonded: Non-bonded pair potential (default: SoftCoreRepulsion).
        """
        self.bonded = bonded if bonded is not None else MorsePotential()
        self.nonbonded = nonbonded if nonbonded is not None else SoftCoreRepulsion()
        self.wall = SoftSphericalWall(confinement_radius, confinement_force)
        self._pair_cache: Dict[int, Tuple[NDArray[np.intp], NDArray[np.intp]]] = {}

    def configure_wall(self, radius: float, force_constant: float) -> None:
        """Replace the confinement wall parameters."""
        self.wall = SoftSphericalWall(radius, force_constant)

    def _pairs(self, n_atoms: int) -> Tuple[NDArray[np.intp], NDArray[np.intp]]:
        # Row-major (i < j) pair indices, reused while N is unchanged
        if n_atoms not in self._pair_cache:
            self._pair_cache[n_atoms] = np.triu_indices(n_atoms, k=1)
        return self._pair_cache[n_atoms]

    def compute_forces_and_energy(
        self,
        arena: "AtomArena",
        bond_graph: Optional["BondGraph"] = None,
    ) -> Tuple[NDArray[np.floating], float]:
        """
        Compute forces on all atoms and the total potential energy.

        Args:
            arena: Atom state (positions and element types are read).
            bond_graph: Current bonds; None treats every pair as non-bonded.

        Returns:
            Tuple of ((N, 3) forces in eV/Å, potential energy in eV).
        """
        positions = arena.positions
        n_atoms = arena.n_atoms
        forces = np.zeros((n_atoms, 3))
        energy = 0.0

        if n_atoms >= 2:
            i, j = self._pairs(n_atoms)
            rij = positions[j] - positions[i]
            r = row_lengths(rij)
            ti = arena.type_indices[i]
            tj = arena.type_indices[j]

            if bond_graph is not None:
                is_bonded = bond_graph.order[i, j] > 0
            else:
                is_bonded = np.zeros(len(r), dtype=bool)
            is_free = ~is_bonded

            pair_energy = np.zeros_like(r)
            dvdr = np.zeros_like(r)
            if np.any(is_bonded):
                pair_energy[is_bonded], dvdr[is_bonded] = self.bonded.evaluate(
                    r[is_bonded], ti[is_bonded], tj[is_bonded]
                )
            if np.any(is_free):
                pair_energy[is_free], dvdr[is_free] = self.nonbonded.evaluate(
                    r[is_free], ti[is_free], tj[is_free]
                )

            # Direction is undefined for coincident atoms
            coincident = r < DISTANCE_EPSILON
            dvdr[coincident] = 0.0
            safe_r = np.where(coincident, 1.0, r)

            pair_forces = (dvdr / safe_r)[:, np.newaxis] * rij
            np.add.at(forces, i, pair_forces)
            np.subtract.at(forces, j, pair_forces)
            energy += float(np.sum(pair_energy))

        wall_forces, wall_energy = self.wall.compute(positions)
        forces += wall_forces
        energy += wall_energy

        return forces, energy

    def compute_forces(
        self,
        arena: "AtomArena",
        bond_graph: Optional["BondGraph"] = None,
    ) -> NDArray[np.floating]:
        """Compute (N, 3) forces only."""
        forces, _ = self.compute_forces_and_energy(arena, bond_graph)
        return forces

    def compute_energy(
        self,
        arena: "AtomArena",
        bond_graph: Optional["BondGraph"] = None,
    ) -> float:
        """Compute the total potential energy only."""
        _, energy = self.compute_forces_and_energy(arena, bond_graph)
        return energy
