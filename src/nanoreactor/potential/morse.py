"""
Morse potential implementation.

Morse potential for bonded pairs, with per-element-pair parameters.
"""
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .pair_potential import PairPotential
from .parameters import morse_matrices


class MorsePotential(PairPotential):
    """
    Morse potential for covalent bonds.

    V(r) = De * [1 - exp(-α(r - re))]² - De

    The well bottom sits at -De, so a dissociated pair has zero energy.
    dV/dr = 2·De·α·exp(-α(r - re))·[1 - exp(-α(r - re))] is positive
    (attractive) for r > re and negative (repulsive) for r < re.

    Parameters are looked up per element pair from the Morse table;
    unlisted pairs get the weak default.

    Example:
        >>> from nanoreactor.potential import MorsePotential
        >>> morse = MorsePotential()
        >>> energy, dvdr = morse.evaluate(r, type_i, type_j)
    """

    def __init__(self) -> None:
        self._De, self._alpha, self._re = morse_matrices()

    def _evaluate(
        self,
        r: NDArray[np.floating],
        type_i: NDArray[np.intp],
        type_j: NDArray[np.intp],
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        De = self._De[type_i, type_j]
        alpha = self._alpha[type_i, type_j]
        re = self._re[type_i, type_j]

        exp_term = np.exp(-alpha * (r - re))
        energy = De * (1.0 - exp_term) ** 2 - De
        dvdr = 2.0 * De * alpha * exp_term * (1.0 - exp_term)
        return energy, dvdr

    def get_name(self) -> str:
        """Return potential name."""
        return "Morse"
