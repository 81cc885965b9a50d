"""
Unit tests for core module (element registry, atoms, arena, config, sampling).
"""
import numpy as np
import pytest

from nanoreactor.core import (
    AMU_TO_INTERNAL,
    BOLTZMANN_EV,
    Atom,
    AtomArena,
    ConfigurationError,
    ElementRegistry,
    SimConfig,
    elements,
    maxwell_boltzmann_velocities,
    maxwell_boltzmann_velocity,
)
from nanoreactor.core import vec3


class TestElementRegistry:
    """Tests for ElementRegistry."""

    def test_singleton(self) -> None:
        """Test that ElementRegistry is a singleton."""
        assert ElementRegistry() is ElementRegistry()
        assert ElementRegistry() is elements

    def test_supported_elements(self) -> None:
        """Test that exactly H, C, N, O are registered in index order."""
        assert elements.symbols() == ["H", "C", "N", "O"]
        assert len(elements) == 4
        assert "Fe" not in elements

    def test_element_data(self) -> None:
        """Test the tabulated element properties."""
        assert elements["H"].covalent_radius == 0.31
        assert elements["C"].max_valence == 4
        assert elements["N"].max_valence == 3
        assert elements["O"].vdw_radius == 1.52
        assert elements.get_mass("O") == pytest.approx(15.999)

    def test_type_indices(self) -> None:
        """Test mapping symbols to type indices."""
        np.testing.assert_array_equal(elements.type_indices(["O", "H", "C"]), [3, 0, 1])

    def test_unknown_element(self) -> None:
        """Test lookups of unsupported elements."""
        assert elements.get_element("Xx") is None
        with pytest.raises(KeyError):
            elements["Xx"]
        with pytest.raises(KeyError):
            elements.index_of("Xx")

    def test_visual_radius_floor(self) -> None:
        """Test that the render radius never drops below 0.25 Å."""
        assert elements["H"].visual_radius == pytest.approx(0.25)
        assert elements["C"].visual_radius == pytest.approx(0.462)
        assert elements.visual_radius("O") == pytest.approx(0.438)


class TestAtom:
    """Tests for Atom class."""

    def test_default_mass_from_registry(self) -> None:
        """Test that the mass defaults to the element mass."""
        atom = Atom("C", position=[0.0, 0.0, 0.0])
        assert atom.mass == pytest.approx(12.011)
        np.testing.assert_array_equal(atom.velocity, np.zeros(3))
        assert atom.id == -1

    def test_unsupported_element(self) -> None:
        """Test that unsupported elements are rejected."""
        with pytest.raises(ValueError, match="Unsupported element"):
            Atom("Fe", position=[0.0, 0.0, 0.0])

    def test_invalid_shape(self) -> None:
        """Test that non-3-vectors are rejected."""
        with pytest.raises(ValueError):
            Atom("H", position=[0.0, 0.0])

    def test_non_finite_position(self) -> None:
        """Test that NaN coordinates are rejected."""
        with pytest.raises(ValueError, match="finite"):
            Atom("H", position=[np.nan, 0.0, 0.0])

    def test_non_positive_mass(self) -> None:
        """Test that a zero mass is rejected."""
        with pytest.raises(ValueError):
            Atom("H", position=[0.0, 0.0, 0.0], mass=0.0)

    def test_dict_round_trip(self) -> None:
        """Test dictionary conversion."""
        atom = Atom("O", position=[1.0, 2.0, 3.0], velocity=[0.1, 0.0, 0.0], id=7)
        restored = Atom.from_dict(atom.to_dict())
        assert restored.element == "O"
        assert restored.id == 7
        np.testing.assert_allclose(restored.position, atom.position)
        np.testing.assert_allclose(restored.velocity, atom.velocity)


@pytest.fixture
def water_arena() -> AtomArena:
    """An O-H-H arena with some velocities."""
    atoms = [
        Atom("O", [0.0, 0.0, 0.0], velocity=[0.01, 0.0, 0.0]),
        Atom("H", [0.96, 0.0, 0.0], velocity=[0.0, 0.02, 0.0]),
        Atom("H", [0.0, 0.96, 0.0], velocity=[0.0, 0.0, -0.03]),
    ]
    return AtomArena.from_atoms(atoms)


class TestAtomArena:
    """Tests for AtomArena class."""

    def test_from_atoms(self, water_arena: AtomArena) -> None:
        """Test building an arena from atoms."""
        assert water_arena.n_atoms == 3
        assert water_arena.elements == ("O", "H", "H")
        np.testing.assert_array_equal(water_arena.ids, [0, 1, 2])
        np.testing.assert_array_equal(water_arena.type_indices, [3, 0, 0])
        np.testing.assert_array_equal(water_arena.forces, np.zeros((3, 3)))

    def test_explicit_ids_are_kept(self) -> None:
        """Test that caller ids survive the copy."""
        arena = AtomArena.from_atoms([Atom("H", [0, 0, 0], id=42), Atom("H", [1, 0, 0])])
        np.testing.assert_array_equal(arena.ids, [42, 1])

    def test_shape_validation(self) -> None:
        """Test that mismatched shapes are rejected."""
        with pytest.raises(ValueError):
            AtomArena(
                elements=("H", "H"),
                positions=np.zeros((2, 3)),
                velocities=np.zeros((3, 3)),
                forces=np.zeros((2, 3)),
                masses=np.ones(2),
            )

    def test_kinetic_energy(self) -> None:
        """Test KE = 1/2 m v^2 in eV."""
        arena = AtomArena.from_atoms([Atom("H", [0, 0, 0], velocity=[0.01, 0, 0], mass=1.0)])
        expected = 0.5 * AMU_TO_INTERNAL * 0.01 ** 2
        assert arena.compute_kinetic_energy() == pytest.approx(expected)

    def test_temperature(self) -> None:
        """Test T = 2 KE / (3 N kB)."""
        arena = AtomArena.from_atoms([Atom("H", [0, 0, 0], velocity=[0.01, 0, 0], mass=1.0)])
        ke = arena.compute_kinetic_energy()
        assert arena.compute_temperature() == pytest.approx(2 * ke / (3 * BOLTZMANN_EV))

    def test_empty_arena_temperature(self) -> None:
        """Test that an empty arena reports zero temperature."""
        assert AtomArena.from_atoms([]).compute_temperature() == 0.0

    def test_zero_momentum(self, water_arena: AtomArena) -> None:
        """Test that COM velocity is removed."""
        water_arena.zero_momentum()
        np.testing.assert_allclose(water_arena.get_momentum(), np.zeros(3), atol=1e-14)

    def test_center_of_mass(self) -> None:
        """Test mass-weighted center."""
        arena = AtomArena.from_atoms(
            [Atom("H", [0, 0, 0], mass=1.0), Atom("H", [3, 0, 0], mass=2.0)]
        )
        np.testing.assert_allclose(arena.get_center_of_mass(), [2.0, 0.0, 0.0])

    def test_copy_is_deep(self, water_arena: AtomArena) -> None:
        """Test that copies do not share arrays."""
        clone = water_arena.copy()
        clone.positions[0, 0] = 99.0
        assert water_arena.positions[0, 0] == 0.0

    def test_to_atoms(self, water_arena: AtomArena) -> None:
        """Test copying the arena back out as atoms."""
        atoms = water_arena.to_atoms()
        assert [a.element for a in atoms] == ["O", "H", "H"]
        np.testing.assert_allclose(atoms[1].position, [0.96, 0.0, 0.0])


class TestSimConfig:
    """Tests for SimConfig."""

    def test_defaults(self) -> None:
        """Test the default parameter set."""
        config = SimConfig()
        assert config.dt == 0.5
        assert config.target_temperature == 300.0
        assert config.confinement_radius == 10.0
        assert config.confinement_force == 2.0
        assert config.thermostat_tau == 20.0
        assert config.steps_per_update == 10
        assert config.max_displacement == 0.05
        assert config.max_velocity == pytest.approx(0.1)
        assert config.thermostat_enabled

    def test_merge_accepts_aliases(self) -> None:
        """Test merging camelCase and snake_case keys."""
        config = SimConfig().merged({"targetTemp": 1500, "dt": 0.25, "stepsPerUpdate": 5})
        assert config.target_temperature == 1500.0
        assert config.dt == 0.25
        assert config.steps_per_update == 5
        assert isinstance(config.steps_per_update, int)

    def test_merge_ignores_none(self) -> None:
        """Test that None values leave fields unchanged."""
        assert SimConfig().merged({"dt": None}).dt == 0.5

    def test_merge_does_not_mutate(self) -> None:
        """Test that merging returns a new object."""
        config = SimConfig()
        config.merged({"dt": 1.0})
        assert config.dt == 0.5

    @pytest.mark.parametrize(
        "partial",
        [
            {"dt": 0.0},
            {"dt": -1.0},
            {"target_temperature": -5.0},
            {"confinement_radius": 0.0},
            {"confinement_force": -1.0},
            {"thermostat_tau": 0.1},
            {"steps_per_update": 0},
            {"steps_per_update": 2.5},
            {"max_displacement": 0.0},
            {"dt": float("nan")},
            {"dt": "fast"},
            {"bogus": 1.0},
        ],
    )
    def test_merge_rejects_invalid(self, partial: dict) -> None:
        """Test that out-of-range values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            SimConfig().merged(partial)

    def test_disabled_thermostat(self) -> None:
        """Test that tau = 0 or T = 0 disables the thermostat."""
        assert not SimConfig(thermostat_tau=0.0).thermostat_enabled
        assert not SimConfig(target_temperature=0.0).thermostat_enabled

    def test_dict_round_trip(self) -> None:
        """Test from_dict / to_dict."""
        config = SimConfig.from_dict({"confinementRadius": 8.0})
        assert SimConfig.from_dict(config.to_dict()) == config


class TestMaxwellBoltzmann:
    """Tests for velocity sampling."""

    def test_shape_and_determinism(self) -> None:
        """Test that a seeded generator reproduces velocities."""
        masses = np.full(10, 1.008)
        v1 = maxwell_boltzmann_velocities(masses, 300.0, np.random.default_rng(5))
        v2 = maxwell_boltzmann_velocities(masses, 300.0, np.random.default_rng(5))
        assert v1.shape == (10, 3)
        np.testing.assert_array_equal(v1, v2)

    def test_zero_temperature(self) -> None:
        """Test that T = 0 gives zero velocities."""
        v = maxwell_boltzmann_velocities([1.0, 2.0], 0.0)
        np.testing.assert_array_equal(v, np.zeros((2, 3)))

    def test_variance_matches_temperature(self) -> None:
        """Test sigma^2 = kB T / m over many samples."""
        rng = np.random.default_rng(0)
        masses = np.full(20000, 12.011)
        v = maxwell_boltzmann_velocities(masses, 500.0, rng)
        expected = BOLTZMANN_EV * 500.0 / (12.011 * AMU_TO_INTERNAL)
        assert np.var(v) == pytest.approx(expected, rel=0.03)
        assert abs(np.mean(v)) < 0.05 * np.sqrt(expected)

    def test_single_velocity(self) -> None:
        """Test the single-atom wrapper."""
        v = maxwell_boltzmann_velocity(1.008, 300.0, np.random.default_rng(1))
        assert v.shape == (3,)

    def test_rejects_non_positive_mass(self) -> None:
        """Test that masses must be positive."""
        with pytest.raises(ValueError):
            maxwell_boltzmann_velocities([0.0], 300.0)


class TestVec3:
    """Tests for 3-vector helpers."""

    def test_arithmetic(self) -> None:
        """Test add/sub/scale/length."""
        a = vec3.vec(1.0, 2.0, 2.0)
        b = vec3.vec(1.0, 0.0, 0.0)
        np.testing.assert_allclose(vec3.add(a, b), [2.0, 2.0, 2.0])
        np.testing.assert_allclose(vec3.sub(a, b), [0.0, 2.0, 2.0])
        np.testing.assert_allclose(vec3.scale(b, 3.0), [3.0, 0.0, 0.0])
        assert vec3.length(a) == pytest.approx(3.0)
        assert vec3.distance(a, b) == pytest.approx(np.sqrt(8.0))

    def test_normalize_zero_vector(self) -> None:
        """Test that the zero vector normalizes to zero."""
        np.testing.assert_array_equal(vec3.normalize(np.zeros(3)), np.zeros(3))
        np.testing.assert_allclose(vec3.normalize(vec3.vec(0, 0, 5)), [0, 0, 1])

    def test_normalize_rows(self) -> None:
        """Test row-wise normalization with a zero row."""
        rows = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 0.0]])
        out = vec3.normalize_rows(rows)
        np.testing.assert_allclose(out, [[0.6, 0.8, 0.0], [0.0, 0.0, 0.0]])

    def test_row_lengths(self) -> None:
        """Test per-row norms of a stack."""
        rows = np.array([[3.0, 4.0, 0.0], [1.0, 2.0, 2.0], [0.0, 0.0, 0.0]])
        np.testing.assert_allclose(vec3.row_lengths(rows), [5.0, 3.0, 0.0])

    def test_random_in_sphere(self) -> None:
        """Test that samples lie strictly inside the sphere."""
        rng = np.random.default_rng(3)
        for _ in range(100):
            assert vec3.length(vec3.random_in_sphere(2.0, rng)) < 2.0

    def test_random_in_sphere_rejects_bad_radius(self) -> None:
        """Test that the radius must be positive."""
        with pytest.raises(ValueError):
            vec3.random_in_sphere(0.0)
