"""
Minimizer module for overlap relief before dynamics.

Provides:
- SteepestDescent: Force-following descent with a capped step
"""

from .minimizer import MinimizationResult, Minimizer, max_atom_force
from .steepest_descent import SteepestDescent

__all__ = [
    "Minimizer",
    "MinimizationResult",
    "SteepestDescent",
    "max_atom_force",
]
