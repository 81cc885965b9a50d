"""
Per-element-pair force-field parameters.

Morse parameters are tabulated per unordered element pair; pairs that
are not listed fall back to a weak long-range default. The kernels use
(n_types, n_types) matrices built from the tables, indexed by element
type index.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import REPULSION_SIGMA_SCALE
from nanoreactor.core.element_registry import elements


@dataclass(frozen=True)
class MorseParameters:
    """
    Morse parameters for one element pair.

    Attributes:
        De: Well depth in eV.
        alpha: Width parameter in 1/Å.
        re: Equilibrium distance in Å.
    """
    De: float
    alpha: float
    re: float

    def __post_init__(self) -> None:
        if self.De <= 0:
            raise ValueError(f"De must be positive, got {self.De}")
        if self.alpha <= 0:
            raise ValueError(f"alpha must be positive, got {self.alpha}")
        if self.re <= 0:
            raise ValueError(f"re must be positive, got {self.re}")


DEFAULT_MORSE = MorseParameters(De=0.05, alpha=1.0, re=3.0)

# Keyed by alphabetically sorted symbol pair
MORSE_TABLE: Dict[Tuple[str, str], MorseParameters] = {
    ("H", "H"): MorseParameters(4.52, 1.94, 0.74),
    ("C", "C"): MorseParameters(3.60, 1.80, 1.54),
    ("C", "H"): MorseParameters(4.30, 1.85, 1.09),
    ("C", "N"): MorseParameters(3.17, 1.75, 1.47),
    ("C", "O"): MorseParameters(3.64, 2.00, 1.43),
    ("H", "N"): MorseParameters(3.92, 1.90, 1.01),
    ("H", "O"): MorseParameters(4.80, 2.10, 0.96),
    ("N", "N"): MorseParameters(9.79, 2.70, 1.10),
    ("N", "O"): MorseParameters(2.68, 1.80, 1.40),
    ("O", "O"): MorseParameters(5.12, 2.68, 1.21),
}


def get_morse_params(symbol_a: str, symbol_b: str) -> MorseParameters:
    """
    Look up Morse parameters for an element pair (order-insensitive).

    Example:
        >>> get_morse_params('H', 'C').re
        1.09
    """
    key = tuple(sorted((symbol_a, symbol_b)))
    return MORSE_TABLE.get(key, DEFAULT_MORSE)


def morse_matrices() -> Tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
    """
    Build symmetric (n_types, n_types) matrices of De, alpha and re.

    Returns:
        Tuple of (De, alpha, re) matrices.
    """
    symbols = elements.symbols()
    n = len(symbols)
    De = np.empty((n, n))
    alpha = np.empty((n, n))
    re = np.empty((n, n))
    for a, sa in enumerate(symbols):
        for b, sb in enumerate(symbols):
            params = get_morse_params(sa, sb)
            De[a, b] = params.De
            alpha[a, b] = params.alpha
            re[a, b] = params.re
    return De, alpha, re


def repulsion_sigma_matrix(scale: float = REPULSION_SIGMA_SCALE) -> NDArray[np.floating]:
    """(n_types, n_types) soft-core sigma = scale * (vdW_a + vdW_b)."""
    vdw = elements.vdw_radii()
    return scale * (vdw[:, np.newaxis] + vdw[np.newaxis, :])


def covalent_sum_matrix() -> NDArray[np.floating]:
    """(n_types, n_types) covalent radius sums used by the bond thresholds."""
    cov = elements.covalent_radii()
    return cov[:, np.newaxis] + cov[np.newaxis, :]
