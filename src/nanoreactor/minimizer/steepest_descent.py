"""
Steepest Descent energy minimizer.

Moves atoms along their forces with a step size capped so that the
most strongly pushed atom moves a bounded distance.
"""
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core.constants import (
    RELAX_FORCE_TOL,
    RELAX_MAX_DISPLACEMENT,
    RELAX_MAX_STEP_SIZE,
    RELAX_MAX_STEPS,
)

from .minimizer import Minimizer, max_atom_force

if TYPE_CHECKING:
    from nanoreactor.bonding import BondGraph
    from nanoreactor.core import AtomArena
    from nanoreactor.force import ForceCalculator


class SteepestDescent(Minimizer):
    """
    Steepest Descent minimizer.

    Each step applies x += s·F with s = min(max_step_size,
    max_displacement / F_max), so no atom moves further than
    max_displacement in one step.

    Attributes:
        max_step_size: Upper bound on s in Å per eV/Å.
        max_displacement: Largest distance any atom moves per step in Å.

    Example:
        >>> from nanoreactor.minimizer import SteepestDescent
        >>> minimizer = SteepestDescent(force_tol=0.5, max_steps=300)
        >>> result = minimizer.minimize(arena, force_calculator, bond_graph)
    """

    def __init__(
        self,
        force_tol: float = RELAX_FORCE_TOL,
        max_steps: int = RELAX_MAX_STEPS,
        max_step_size: float = RELAX_MAX_STEP_SIZE,
        max_displacement: float = RELAX_MAX_DISPLACEMENT,
    ) -> None:
        """
        Initialize Steepest Descent minimizer.

        Args:
            force_tol: Convergence threshold on the max per-atom force norm.
            max_steps: Maximum number of minimization steps.
            max_step_size: Upper bound on the step factor.
            max_displacement: Per-step displacement bound in Å.

        Raises:
            ValueError: If step size parameters are non-positive.
        """
        super().__init__(force_tol=force_tol, max_steps=max_steps)

        if max_step_size <= 0:
            raise ValueError(f"max_step_size must be positive, got {max_step_size}")
        if max_displacement <= 0:
            raise ValueError(f"max_displacement must be positive, got {max_displacement}")

        self.max_step_size = max_step_size
        self.max_displacement = max_displacement

    def _step(
        self,
        arena: "AtomArena",
        force_calculator: "ForceCalculator",
        bond_graph: Optional["BondGraph"],
        forces: NDArray[np.floating],
    ) -> Tuple[NDArray[np.floating], float]:
        f_max = max_atom_force(forces)
        step_size = min(self.max_step_size, self.max_displacement / f_max)
        arena.positions += step_size * forces
        return force_calculator.compute_forces_and_energy(arena, bond_graph)

    def get_name(self) -> str:
        """Get human-readable name."""
        return f"SteepestDescent(force_tol={self.force_tol}, max_steps={self.max_steps})"
