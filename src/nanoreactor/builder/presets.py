"""
Preset reactant mixtures.

Provides the molecule templates and named presets, and places the
preset's molecules at random inside the reactor sphere.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from nanoreactor.core import Atom, elements, maxwell_boltzmann_velocities
from nanoreactor.core.vec3 import random_in_sphere

# Molecule centers are drawn inside this fraction of the reactor radius
PLACEMENT_FRACTION = 0.65
MIN_MOLECULE_DISTANCE = 3.5  # Å between molecule centers
MAX_PLACEMENT_ATTEMPTS = 200


@dataclass(frozen=True)
class Preset:
    """
    A named reactant mixture.

    Attributes:
        id: Identifier used by hosts and the CLI.
        name: Display name.
        description: One-line description of the intended chemistry.
        molecules: (formula, count) pairs in placement order.
    """
    id: str
    name: str
    description: str
    molecules: Tuple[Tuple[str, int], ...]

    @property
    def n_atoms(self) -> int:
        return sum(len(MOLECULE_TEMPLATES[f]) * n for f, n in self.molecules)


# (element, offset in Å) per atom, relative to the molecule center
MOLECULE_TEMPLATES: Dict[str, Tuple[Tuple[str, Tuple[float, float, float]], ...]] = {
    "H2": (("H", (-0.37, 0.0, 0.0)), ("H", (0.37, 0.0, 0.0))),
    "O2": (("O", (-0.6, 0.0, 0.0)), ("O", (0.6, 0.0, 0.0))),
    "N2": (("N", (-0.55, 0.0, 0.0)), ("N", (0.55, 0.0, 0.0))),
    "CH4": (
        ("C", (0.0, 0.0, 0.0)),
        ("H", (0.63, 0.63, 0.63)),
        ("H", (-0.63, -0.63, 0.63)),
        ("H", (-0.63, 0.63, -0.63)),
        ("H", (0.63, -0.63, -0.63)),
    ),
    "H2O": (
        ("O", (0.0, 0.0, 0.0)),
        ("H", (0.76, 0.59, 0.0)),
        ("H", (-0.76, 0.59, 0.0)),
    ),
    "CO2": (
        ("C", (0.0, 0.0, 0.0)),
        ("O", (-1.16, 0.0, 0.0)),
        ("O", (1.16, 0.0, 0.0)),
    ),
    "NH3": (
        ("N", (0.0, 0.0, 0.38)),
        ("H", (0.94, 0.0, -0.13)),
        ("H", (-0.47, 0.81, -0.13)),
        ("H", (-0.47, -0.81, -0.13)),
    ),
}

PRESETS: Dict[str, Preset] = {
    p.id: p
    for p in (
        Preset(
            "hydrogen-combustion",
            "Hydrogen Combustion",
            "10 H2 + 5 O2 -> potential water formation",
            (("H2", 10), ("O2", 5)),
        ),
        Preset(
            "methane-combustion",
            "Methane Combustion",
            "5 CH4 + 10 O2 -> CO2 + H2O",
            (("CH4", 5), ("O2", 10)),
        ),
        Preset(
            "water-formation",
            "Water Formation",
            "8 H2 + 4 O2 -> H2O",
            (("H2", 8), ("O2", 4)),
        ),
        Preset(
            "ammonia-synthesis",
            "Ammonia Synthesis",
            "5 N2 + 15 H2 -> NH3",
            (("N2", 5), ("H2", 15)),
        ),
        Preset(
            "organic-mix",
            "Organic Mix",
            "3 CH4 + 3 H2O + 2 CO2",
            (("CH4", 3), ("H2O", 3), ("CO2", 2)),
        ),
    )
}


def get_preset(preset_id: str) -> Preset:
    """
    Look up a preset by id.

    Raises:
        ValueError: If the id is unknown.
    """
    if preset_id not in PRESETS:
        raise ValueError(
            f"Unknown preset '{preset_id}', expected one of {sorted(PRESETS)}"
        )
    return PRESETS[preset_id]


def rotate_about_axis(
    offsets: NDArray[np.floating], axis: int, angle: float
) -> NDArray[np.floating]:
    """
    Rotate (M, 3) offsets by angle about coordinate axis 0, 1 or 2.
    """
    a, b = [(1, 2), (0, 2), (0, 1)][axis]
    cos_a, sin_a = np.cos(angle), np.sin(angle)
    rotated = np.array(offsets, dtype=np.float64)
    rotated[:, a] = offsets[:, a] * cos_a - offsets[:, b] * sin_a
    rotated[:, b] = offsets[:, a] * sin_a + offsets[:, b] * cos_a
    return rotated


def _place_center(
    placed: List[NDArray[np.floating]],
    radius: float,
    rng: np.random.Generator,
) -> NDArray[np.floating]:
    # After MAX_PLACEMENT_ATTEMPTS the last candidate is accepted as is
    center = random_in_sphere(radius, rng)
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        if all(np.linalg.norm(center - c) >= MIN_MOLECULE_DISTANCE for c in placed):
            break
        center = random_in_sphere(radius, rng)
    return center


def generate_preset(
    preset_id: str,
    reactor_radius: float = 10.0,
    temperature: float = 300.0,
    rng: Optional[np.random.Generator] = None,
) -> List[Atom]:
    """
    Build the atoms of a preset.

    Molecule centers are rejection-sampled inside 0.65·R, each molecule
    is rotated by a random angle about a random coordinate axis, and
    velocities are drawn from the Maxwell-Boltzmann distribution.

    Args:
        preset_id: One of PRESETS.
        reactor_radius: Confinement radius R in Å.
        temperature: Temperature for the initial velocities in K.
        rng: Random generator (default: a fresh ``default_rng()``).

    Returns:
        Atoms with ids 0..N-1.

    Raises:
        ValueError: For an unknown preset id or non-positive radius.

    Example:
        >>> atoms = generate_preset('water-formation', 10.0, 300.0)
        >>> len(atoms)
        24
    """
    preset = get_preset(preset_id)
    if reactor_radius <= 0:
        raise ValueError(f"reactor_radius must be positive, got {reactor_radius}")
    rng = rng if rng is not None else np.random.default_rng()

    symbols: List[str] = []
    positions: List[NDArray[np.floating]] = []
    placed: List[NDArray[np.floating]] = []

    for formula, count in preset.molecules:
        template = MOLECULE_TEMPLATES[formula]
        template_offsets = np.array([offset for _, offset in template])
        for _ in range(count):
            center = _place_center(placed, PLACEMENT_FRACTION * reactor_radius, rng)
            placed.append(center)

            angle = rng.random() * 2.0 * np.pi
            axis = int(rng.integers(3))
            offsets = rotate_about_axis(template_offsets, axis, angle)

            for (symbol, _), offset in zip(template, offsets):
                symbols.append(symbol)
                positions.append(center + offset)

    masses = np.array([elements.get_mass(s) for s in symbols])
    velocities = maxwell_boltzmann_velocities(masses, temperature, rng)

    return [
        Atom(element=s, position=p, velocity=v, mass=m, id=k)
        for k, (s, p, v, m) in enumerate(zip(symbols, positions, velocities, masses))
    ]
