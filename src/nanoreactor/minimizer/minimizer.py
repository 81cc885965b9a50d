"""
Abstract base class for energy minimizers.

This module provides the Minimizer ABC used to relieve atom overlaps
before dynamics, and the MinimizationResult dataclass.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from nanoreactor.bonding import BondGraph
    from nanoreactor.core import AtomArena
    from nanoreactor.force import ForceCalculator


def max_atom_force(forces: NDArray[np.floating]) -> float:
    """Largest per-atom force norm in eV/Å (0 for no atoms)."""
    if len(forces) == 0:
        return 0.0
    return float(np.sqrt(np.max(np.sum(forces ** 2, axis=1))))


@dataclass
class MinimizationResult:
    """
    Result of an energy minimization run.

    Attributes:
        converged: Whether the max force dropped below the tolerance.
        n_steps: Number of position updates taken.
        initial_energy: Potential energy before minimization.
        final_energy: Potential energy after minimization.
        max_force: Largest per-atom force norm at the final configuration.
        energy_history: Potential energy at each step.
        message: Human-readable description of the outcome.
    """
    converged: bool
    n_steps: int
    initial_energy: float
    final_energy: float
    max_force: float
    energy_history: List[float] = field(default_factory=list)
    message: str = ""


class Minimizer(ABC):
    """
    Abstract base for energy minimization algorithms (Strategy + Template Method).

    minimize() runs the convergence loop; subclasses provide _step().
    The bond graph is held fixed during minimization.

    Attributes:
        force_tol: Convergence threshold on the largest per-atom force norm.
        max_steps: Maximum number of minimization steps.

    Example:
        >>> from nanoreactor.minimizer import SteepestDescent
        >>> minimizer = SteepestDescent()
        >>> result = minimizer.minimize(arena, force_calculator, bond_graph)
        >>> print(result.converged, result.final_energy)
    """

    def __init__(self, force_tol: float, max_steps: int) -> None:
        """
        Initialize minimizer.

        Args:
            force_tol: Convergence threshold in eV/Å.
            max_steps: Maximum number of minimization steps.

        Raises:
            ValueError: If any parameter is non-positive.
        """
        if force_tol <= 0:
            raise ValueError(f"force_tol must be positive, got {force_tol}")
        if max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {max_steps}")

        self.force_tol = force_tol
        self.max_steps = max_steps

    def minimize(
        self,
        arena: "AtomArena",
        force_calculator: "ForceCalculator",
        bond_graph: Optional["BondGraph"] = None,
    ) -> MinimizationResult:
        """
        Minimize the potential energy of the atoms (template method).

        Process:
        1. Compute initial forces and energy
        2. Loop: check convergence -> _step()
        3. Zero velocities (minimized structure has no dynamics)
        4. Return MinimizationResult

        Args:
            arena: Atom state; positions and forces are updated in place.
            force_calculator: For computing forces and energy.
            bond_graph: Bonds to use while minimizing.

        Returns:
            MinimizationResult with convergence info and energy history.
        """
        forces, energy = force_calculator.compute_forces_and_energy(arena, bond_graph)
        arena.forces = forces
        energy_history = [energy]
        initial_energy = energy

        max_force = max_atom_force(forces)
        converged = max_force < self.force_tol
        n_steps = 0
        while not converged and n_steps < self.max_steps:
            forces, energy = self._step(arena, force_calculator, bond_graph, forces)
            arena.forces = forces
            energy_history.append(energy)
            n_steps += 1

            max_force = max_atom_force(forces)
            converged = max_force < self.force_tol

        arena.velocities = np.zeros_like(arena.velocities)

        if converged:
            message = f"Converged after {n_steps} steps"
        else:
            message = f"Did not converge after {n_steps} steps (max_force={max_force:.2e})"

        return MinimizationResult(
            converged=converged,
            n_steps=n_steps,
            initial_energy=initial_energy,
            final_energy=energy,
            max_force=max_force,
            energy_history=energy_history,
            message=message,
        )

    @abstractmethod
    def _step(
        self,
        arena: "AtomArena",
        force_calculator: "ForceCalculator",
        bond_graph: Optional["BondGraph"],
        forces: NDArray[np.floating],
    ) -> Tuple[NDArray[np.floating], float]:
        """
        Perform one minimization step (algorithm-specific).

        Must update arena.positions in place.

        Returns:
            Tuple of (new_forces, new_energy).
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this minimizer."""
        pass
