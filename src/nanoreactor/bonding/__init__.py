"""
Bonding module: dynamic bond graph and species detection.
"""

from nanoreactor.core.schemas import Bond, Species

from .bond_graph import BondChanges, BondGraph, bond_order_from_ratio
from .species import connected_components, detect_species, hill_formula

__all__ = [
    "Bond",
    "BondChanges",
    "BondGraph",
    "Species",
    "bond_order_from_ratio",
    "connected_components",
    "detect_species",
    "hill_formula",
]
