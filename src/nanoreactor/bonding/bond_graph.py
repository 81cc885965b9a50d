"""
Dynamic bond graph.

This module provides the BondGraph class that forms and breaks covalent
bonds from interatomic distances. Bond membership lives in a dense
symmetric int8 order matrix so the force loop can look it up without
hashing. Formation and breaking use different thresholds (hysteresis),
and no atom ever exceeds its element's maximum valence.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import (
    BREAK_FACTOR,
    DOUBLE_BOND_RATIO,
    FORM_FACTOR,
    SEED_FORM_FACTOR,
    TRIPLE_BOND_RATIO,
)
from nanoreactor.core.element_registry import elements as element_registry
from nanoreactor.core.schemas import Bond
from nanoreactor.core.vec3 import row_lengths
from nanoreactor.potential.parameters import covalent_sum_matrix

logger = logging.getLogger(__name__)


def bond_order_from_ratio(ratio: float) -> int:
    """
    Infer bond order from r / (covalent radius sum).

    Returns:
        3 below TRIPLE_BOND_RATIO, 2 below DOUBLE_BOND_RATIO, else 1.
    """
    if ratio < TRIPLE_BOND_RATIO:
        return 3
    if ratio < DOUBLE_BOND_RATIO:
        return 2
    return 1


@dataclass
class BondChanges:
    """Bonds formed and broken by one update, as (i, j) pairs with i < j."""
    formed: List[Tuple[int, int]] = field(default_factory=list)
    broken: List[Tuple[int, int]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.formed or self.broken)


class BondGraph:
    """
    Covalent bond set over a fixed list of atoms.

    A pair (i, j) forms a bond when neither atom is at its valence limit
    and r < factor · (covalent radius sum); ``seed_factor`` is used when
    seeding from raw geometry and ``form_factor`` during dynamics. A bond
    breaks when r > break_factor · (covalent radius sum). The order is
    fixed at formation; only the stored length is refreshed afterwards.

    Attributes:
        order: (N, N) symmetric int8 matrix, 0 for unbonded pairs.
        lengths: (N, N) symmetric matrix of stored bond lengths in Å.
        bond_counts: (N,) current number of bonds per atom.
        max_valence: (N,) valence limit per atom.

    Example:
        >>> graph = BondGraph(['H', 'H'])
        >>> graph.seed(np.array([[0.0, 0, 0], [0.74, 0, 0]]))
        >>> graph.bonds()
        [Bond(i=0, j=1, order=1, length=0.74)]
    """

    def __init__(
        self,
        elements: Sequence[str],
        form_factor: float = FORM_FACTOR,
        seed_factor: float = SEED_FORM_FACTOR,
        break_factor: float = BREAK_FACTOR,
    ) -> None:
        """
        Initialize an empty bond graph.

        Args:
            elements: Element symbol per atom.
            form_factor: Formation threshold factor during dynamics.
            seed_factor: Formation threshold factor for seeding.
            break_factor: Breaking threshold factor.

        Raises:
            ValueError: If a factor is non-positive or break_factor does not
                exceed both formation factors.
        """
        if form_factor <= 0 or seed_factor <= 0:
            raise ValueError(
                f"Formation factors must be positive, got {form_factor}, {seed_factor}"
            )
        if break_factor <= max(form_factor, seed_factor):
            raise ValueError(
                f"break_factor ({break_factor}) must exceed form_factor "
                f"({form_factor}) and seed_factor ({seed_factor})"
            )

        self.form_factor = form_factor
        self.seed_factor = seed_factor
        self.break_factor = break_factor

        self.elements = tuple(elements)
        types = element_registry.type_indices(list(self.elements))
        n = len(self.elements)

        self._covalent_sum = covalent_sum_matrix()[types[:, np.newaxis], types[np.newaxis, :]]
        self.max_valence = element_registry.max_valences()[types]
        self.order = np.zeros((n, n), dtype=np.int8)
        self.lengths = np.zeros((n, n))
        self.bond_counts = np.zeros(n, dtype=np.intp)
        self._upper = np.triu_indices(n, k=1)

    @property
    def n_atoms(self) -> int:
        return len(self.elements)

    @property
    def n_bonds(self) -> int:
        return int(np.count_nonzero(self.order[self._upper]))

    def covalent_sum(self, i: int, j: int) -> float:
        """Covalent radius sum of atoms i and j in Å."""
        return float(self._covalent_sum[i, j])

    def is_bonded(self, i: int, j: int) -> bool:
        return bool(self.order[i, j] > 0)

    def has_free_valence(self, i: int) -> bool:
        return bool(self.bond_counts[i] < self.max_valence[i])

    def clear(self) -> None:
        """Remove every bond."""
        self.order[:] = 0
        self.lengths[:] = 0.0
        self.bond_counts[:] = 0

    def try_form(self, i: int, j: int, r: float) -> bool:
        """
        Form a bond between i and j if both have free valence.

        The order is inferred from r / (covalent radius sum).

        Returns:
            True if a new bond was created.
        """
        if i == j or self.order[i, j] > 0:
            return False
        if not (self.has_free_valence(i) and self.has_free_valence(j)):
            return False

        order = bond_order_from_ratio(r / self._covalent_sum[i, j])
        self.order[i, j] = self.order[j, i] = order
        self.lengths[i, j] = self.lengths[j, i] = r
        self.bond_counts[i] += 1
        self.bond_counts[j] += 1
        return True

    def break_bond(self, i: int, j: int) -> bool:
        """
        Remove the bond between i and j.

        Returns:
            True if a bond existed.
        """
        if self.order[i, j] == 0:
            return False
        self.order[i, j] = self.order[j, i] = 0
        self.lengths[i, j] = self.lengths[j, i] = 0.0
        self.bond_counts[i] -= 1
        self.bond_counts[j] -= 1
        return True

    def _distances(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        i, j = self._upper
        rij = positions[j] - positions[i]
        return row_lengths(rij)

    def _form_pass(
        self, r: NDArray[np.floating], factor: float
    ) -> List[Tuple[int, int]]:
        # Candidates come out in row-major order; valence changes as we go
        i_idx, j_idx = self._upper
        threshold = factor * self._covalent_sum[i_idx, j_idx]
        candidates = np.nonzero((r < threshold) & (self.order[i_idx, j_idx] == 0))[0]

        formed = []
        for k in candidates:
            i, j = int(i_idx[k]), int(j_idx[k])
            if self.try_form(i, j, float(r[k])):
                formed.append((i, j))
        return formed

    def seed(self, positions: NDArray[np.floating]) -> List[Tuple[int, int]]:
        """
        Rebuild the bond set from raw geometry using ``seed_factor``.

        Returns:
            The (i, j) pairs that were bonded.
        """
        self.clear()
        if self.n_atoms < 2:
            return []
        formed = self._form_pass(self._distances(positions), self.seed_factor)
        logger.debug("Seeded %d bonds over %d atoms", len(formed), self.n_atoms)
        return formed

    def update(self, positions: NDArray[np.floating]) -> BondChanges:
        """
        Break stretched bonds, then form new ones.

        Stored lengths of surviving bonds are refreshed.

        Args:
            positions: (N, 3) current positions in Å.

        Returns:
            BondChanges listing the bonds that formed and broke.
        """
        changes = BondChanges()
        if self.n_atoms < 2:
            return changes

        i_idx, j_idx = self._upper
        r = self._distances(positions)
        bonded = self.order[i_idx, j_idx] > 0

        self.lengths[i_idx[bonded], j_idx[bonded]] = r[bonded]
        self.lengths[j_idx[bonded], i_idx[bonded]] = r[bonded]

        stretched = bonded & (r > self.break_factor * self._covalent_sum[i_idx, j_idx])
        for k in np.nonzero(stretched)[0]:
            i, j = int(i_idx[k]), int(j_idx[k])
            self.break_bond(i, j)
            changes.broken.append((i, j))

        changes.formed = self._form_pass(r, self.form_factor)

        for i, j in changes.broken:
            logger.debug("Bond broken: %s%d-%s%d", self.elements[i], i, self.elements[j], j)
        for i, j in changes.formed:
            logger.debug(
                "Bond formed: %s%d-%s%d (order %d)",
                self.elements[i], i, self.elements[j], j, self.order[i, j],
            )
        return changes

    def bonds(self) -> List[Bond]:
        """Current bonds as Bond records, in row-major (i, j) order."""
        i_idx, j_idx = self._upper
        present = np.nonzero(self.order[i_idx, j_idx])[0]
        return [
            Bond(
                i=int(i_idx[k]),
                j=int(j_idx[k]),
                order=int(self.order[i_idx[k], j_idx[k]]),
                length=float(self.lengths[i_idx[k], j_idx[k]]),
            )
            for k in present
        ]

    def __repr__(self) -> str:
        return f"BondGraph(n_atoms={self.n_atoms}, n_bonds={self.n_bonds})"
