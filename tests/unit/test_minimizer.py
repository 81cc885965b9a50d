"""
Unit tests for minimizer module.
"""
import numpy as np
import pytest

from nanoreactor.bonding import BondGraph
from nanoreactor.core import Atom, AtomArena
from nanoreactor.force import ForceCalculator
from nanoreactor.minimizer import MinimizationResult, SteepestDescent, max_atom_force


@pytest.fixture
def overlapping_pair() -> AtomArena:
    """Two hydrogens squeezed to 0.5 Å, moving."""
    return AtomArena.from_atoms(
        [
            Atom("H", [-0.25, 0.0, 0.0], velocity=[0.01, 0.0, 0.0]),
            Atom("H", [0.25, 0.0, 0.0], velocity=[-0.01, 0.0, 0.0]),
        ]
    )


def separation(arena: AtomArena) -> float:
    return float(np.linalg.norm(arena.positions[1] - arena.positions[0]))


class TestMaxAtomForce:
    """Tests for the convergence measure."""

    def test_largest_row_norm(self) -> None:
        """Test the per-atom norm, not the component maximum."""
        forces = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 4.5]])
        assert max_atom_force(forces) == pytest.approx(5.0)

    def test_empty(self) -> None:
        """Test zero atoms."""
        assert max_atom_force(np.zeros((0, 3))) == 0.0


class TestSteepestDescent:
    """Tests for Steepest Descent minimizer."""

    def test_validation(self) -> None:
        """Test parameter checks."""
        with pytest.raises(ValueError):
            SteepestDescent(force_tol=0.0)
        with pytest.raises(ValueError):
            SteepestDescent(max_steps=0)
        with pytest.raises(ValueError):
            SteepestDescent(max_step_size=-0.1)
        with pytest.raises(ValueError):
            SteepestDescent(max_displacement=0.0)

    def test_relieves_overlap(self, overlapping_pair: AtomArena) -> None:
        """Test that an unbonded overlapping pair is pushed apart."""
        calculator = ForceCalculator()
        result = SteepestDescent().minimize(overlapping_pair, calculator)

        assert isinstance(result, MinimizationResult)
        assert result.converged
        assert result.message == f"Converged after {result.n_steps} steps"
        assert 0 < result.n_steps <= 300
        assert result.max_force < 0.5
        assert result.final_energy < result.initial_energy
        assert separation(overlapping_pair) > 1.0

    def test_displacement_bounded(self, overlapping_pair: AtomArena) -> None:
        """Test that no atom moves more than 0.2 Å in one step."""
        calculator = ForceCalculator()
        start = overlapping_pair.positions.copy()
        SteepestDescent(max_steps=1).minimize(overlapping_pair, calculator)
        moved = np.linalg.norm(overlapping_pair.positions - start, axis=1)
        assert np.all(moved <= 0.2 + 1e-12)
        np.testing.assert_allclose(moved, [0.2, 0.2])

    def test_zeroes_velocities(self, overlapping_pair: AtomArena) -> None:
        """Test that the relaxed structure is at rest."""
        SteepestDescent().minimize(overlapping_pair, ForceCalculator())
        np.testing.assert_array_equal(overlapping_pair.velocities, np.zeros((2, 3)))

    def test_forces_written_back(self, overlapping_pair: AtomArena) -> None:
        """Test that arena.forces matches the final configuration."""
        calculator = ForceCalculator()
        SteepestDescent().minimize(overlapping_pair, calculator)
        np.testing.assert_allclose(
            overlapping_pair.forces, calculator.compute_forces(overlapping_pair)
        )

    def test_already_converged(self) -> None:
        """Test zero steps for H2 at its bond length."""
        arena = AtomArena.from_atoms([Atom("H", [-0.37, 0, 0]), Atom("H", [0.37, 0, 0])])
        graph = BondGraph(arena.elements)
        graph.seed(arena.positions)
        result = SteepestDescent().minimize(arena, ForceCalculator(), graph)
        assert result.converged
        assert result.n_steps == 0
        assert result.energy_history == [result.initial_energy]

    def test_bonded_pair_relaxes_to_bond_length(self) -> None:
        """Test that the bond graph is honoured while minimizing."""
        arena = AtomArena.from_atoms([Atom("H", [-0.3, 0, 0]), Atom("H", [0.3, 0, 0])])
        graph = BondGraph(arena.elements)
        graph.seed(arena.positions)
        result = SteepestDescent().minimize(arena, ForceCalculator(), graph)
        assert result.converged
        assert separation(arena) == pytest.approx(0.74, abs=0.02)

    def test_step_limit(self, overlapping_pair: AtomArena) -> None:
        """Test the non-converged outcome."""
        result = SteepestDescent(max_steps=2).minimize(overlapping_pair, ForceCalculator())
        assert not result.converged
        assert result.n_steps == 2
        assert len(result.energy_history) == 3
        assert result.message.startswith("Did not converge after 2 steps")
