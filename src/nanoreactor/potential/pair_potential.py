"""
Abstract base class for pairwise potentials.

This module provides the PairPotential ABC used by the force calculator.
Potentials are evaluated on whole batches of pair distances at once and
return both the energy and its radial derivative; the force calculator
turns dV/dr into Cartesian forces.
"""
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import HARD_CORE_RADIUS, HARD_CORE_STIFFNESS


def hard_core(r: NDArray[np.floating]) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Short-range wall substituted below HARD_CORE_RADIUS.

    V(r) = k * (r0 - r)²,  dV/dr = -2k * (r0 - r)

    Returns:
        Tuple of (energy, dV/dr) arrays shaped like r.
    """
    gap = HARD_CORE_RADIUS - r
    return HARD_CORE_STIFFNESS * gap ** 2, -2.0 * HARD_CORE_STIFFNESS * gap


class PairPotential(ABC):
    """
    Abstract base for pairwise potentials (Strategy Pattern).

    Subclasses implement ``_evaluate`` for the smooth part of the curve.
    ``evaluate`` substitutes the hard core below ``HARD_CORE_RADIUS`` and
    zeroes everything beyond ``cutoff``.

    Example:
        >>> pot = MorsePotential()
        >>> energy, dvdr = pot.evaluate(r, type_i, type_j)
    """

    @abstractmethod
    def _evaluate(
        self,
        r: NDArray[np.floating],
        type_i: NDArray[np.intp],
        type_j: NDArray[np.intp],
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        """
        Energy and dV/dr for pairs at or beyond the hard-core radius.

        Args:
            r: (M,) pair distances in Å.
            type_i: (M,) element type index of the first atom.
            type_j: (M,) element type index of the second atom.

        Returns:
            Tuple of (energy, dV/dr), each (M,).
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this potential."""
        pass

    @property
    def cutoff(self) -> float:
        """
        Return the interaction cutoff distance.

        Subclasses should override this if they have a cutoff.
        """
        return float("inf")

    def evaluate(
        self,
        r: NDArray[np.floating],
        type_i: NDArray[np.intp],
        type_j: NDArray[np.intp],
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        """
        Evaluate the potential on a batch of pairs.

        Args:
            r: (M,) pair distances in Å.
            type_i: (M,) element type index of the first atom.
            type_j: (M,) element type index of the second atom.

        Returns:
            Tuple of (energy in eV, dV/dr in eV/Å), each (M,).
        """
        r = np.asarray(r, dtype=np.float64)
        type_i = np.asarray(type_i, dtype=np.intp)
        type_j = np.asarray(type_j, dtype=np.intp)
        energy = np.zeros_like(r)
        dvdr = np.zeros_like(r)

        core = r < HARD_CORE_RADIUS
        smooth = ~core & (r <= self.cutoff)

        if np.any(core):
            energy[core], dvdr[core] = hard_core(r[core])
        if np.any(smooth):
            energy[smooth], dvdr[smooth] = self._evaluate(
                r[smooth], type_i[smooth], type_j[smooth]
            )
        return energy, dvdr

    def compute_pair_energy(self, r: float, type_i: int, type_j: int) -> float:
        """
        Compute energy for a single pair at distance r.

        Args:
            r: Interatomic distance.
            type_i: Element type index of the first atom.
            type_j: Element type index of the second atom.

        Returns:
            Pair energy.
        """
        energy, _ = self.evaluate(np.array([r]), np.array([type_i]), np.array([type_j]))
        return float(energy[0])
