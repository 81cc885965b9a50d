"""
Force computation module.

Provides:
- ForceCalculator: Pairwise bonded/non-bonded forces plus the wall
"""

from .force_calculator import ForceCalculator

__all__ = [
    "ForceCalculator",
]
