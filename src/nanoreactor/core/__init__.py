"""
Core module for reactive simulations.

This module provides the fundamental classes:
- Atom: Input value object for one atom
- AtomArena: Contiguous per-atom state owned by the engine
- SimConfig: Live simulation configuration
- ElementRegistry: Table of supported elements (H, C, N, O)
- Bond, Species, Snapshot: Engine output payloads
"""

from .atom import Atom
from .config import SimConfig
from .constants import AMU_TO_INTERNAL, BOLTZMANN_EV
from .element_registry import ElementData, ElementRegistry, elements
from .errors import ConfigurationError, NotInitializedError
from .sampling import maxwell_boltzmann_velocities, maxwell_boltzmann_velocity
from .schemas import Bond, EnergyRecord, Snapshot, Species
from .state import AtomArena

__all__ = [
    # Classes
    "Atom",
    "AtomArena",
    "SimConfig",
    "ElementData",
    "ElementRegistry",
    "Bond",
    "Species",
    "EnergyRecord",
    "Snapshot",
    # Errors
    "ConfigurationError",
    "NotInitializedError",
    # Singleton instance
    "elements",
    # Sampling
    "maxwell_boltzmann_velocities",
    "maxwell_boltzmann_velocity",
    # Constants
    "AMU_TO_INTERNAL",
    "BOLTZMANN_EV",
]
