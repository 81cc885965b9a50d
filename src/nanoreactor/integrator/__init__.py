"""
Integrator module for reactive simulations.

Provides time integration algorithms:
- VelocityVerlet: Standard symplectic integrator with velocity clamp
"""

from .integrator import Integrator
from .velocity_verlet import VelocityVerlet

__all__ = [
    "Integrator",
    "VelocityVerlet",
]
