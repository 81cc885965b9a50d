"""
Potential module for reactive simulations.

Available potentials:
- MorsePotential: Bonded pairs
- SoftCoreRepulsion: Non-bonded pairs
- SoftSphericalWall: Reactor confinement
"""

from .confinement import SoftSphericalWall, smoothstep5
from .morse import MorsePotential
from .pair_potential import PairPotential, hard_core
from .parameters import (
    DEFAULT_MORSE,
    MORSE_TABLE,
    MorseParameters,
    covalent_sum_matrix,
    get_morse_params,
    morse_matrices,
    repulsion_sigma_matrix,
)
from .repulsion import SoftCoreRepulsion

__all__ = [
    "PairPotential",
    "MorsePotential",
    "SoftCoreRepulsion",
    "SoftSphericalWall",
    "MorseParameters",
    "MORSE_TABLE",
    "DEFAULT_MORSE",
    "get_morse_params",
    "morse_matrices",
    "repulsion_sigma_matrix",
    "covalent_sum_matrix",
    "hard_core",
    "smoothstep5",
]
