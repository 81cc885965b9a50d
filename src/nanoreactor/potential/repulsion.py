"""
Soft-core repulsion for non-bonded pairs.
"""
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import (
    NONBONDED_CUTOFF,
    REPULSION_EPSILON,
    REPULSION_EXPONENT,
    REPULSION_SIGMA_SCALE,
)

from .pair_potential import PairPotential
from .parameters import repulsion_sigma_matrix


class SoftCoreRepulsion(PairPotential):
    """
    Purely repulsive inverse-power potential.

    V(r) = ε * (σ / r)^n,  σ = scale * (vdW_i + vdW_j)

    Zero beyond the cutoff. Keeps non-bonded atoms from overlapping
    without adding any attraction.

    Attributes:
        epsilon: Energy scale in eV.
        exponent: Power n.
        sigma_scale: Fraction of the vdW radius sum used as σ.

    Example:
        >>> rep = SoftCoreRepulsion()
        >>> rep.cutoff
        5.0
    """

    def __init__(
        self,
        epsilon: float = REPULSION_EPSILON,
        exponent: int = REPULSION_EXPONENT,
        sigma_scale: float = REPULSION_SIGMA_SCALE,
        cutoff: float = NONBONDED_CUTOFF,
    ) -> None:
        """
        Initialize repulsion.

        Args:
            epsilon: Energy scale in eV.
            exponent: Inverse-power exponent.
            sigma_scale: σ as a fraction of the vdW radius sum.
            cutoff: Interaction cutoff in Å.
        """
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        if exponent <= 0:
            raise ValueError(f"exponent must be positive, got {exponent}")
        if sigma_scale <= 0:
            raise ValueError(f"sigma_scale must be positive, got {sigma_scale}")
        if cutoff <= 0:
            raise ValueError(f"cutoff must be positive, got {cutoff}")

        self.epsilon = epsilon
        self.exponent = exponent
        self.sigma_scale = sigma_scale
        self._cutoff = cutoff
        self._sigma = repulsion_sigma_matrix(sigma_scale)

    @property
    def cutoff(self) -> float:
        """Return the cutoff distance."""
        return self._cutoff

    def _evaluate(
        self,
        r: NDArray[np.floating],
        type_i: NDArray[np.intp],
        type_j: NDArray[np.intp],
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        sigma = self._sigma[type_i, type_j]
        energy = self.epsilon * (sigma / r) ** self.exponent
        dvdr = -self.exponent * energy / r
        return energy, dvdr

    def get_name(self) -> str:
        """Return potential name with parameters."""
        return f"SoftCoreRepulsion(epsilon={self.epsilon}, n={self.exponent})"
