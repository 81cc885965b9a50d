"""
Maxwell-Boltzmann velocity sampling.

One sampler shared by engine initialization and preset generation.
Normal deviates come from an explicit Box-Muller transform so a seeded
``np.random.Generator`` reproduces the same velocities everywhere.
"""
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .constants import AMU_TO_INTERNAL, BOLTZMANN_EV


def box_muller(
    rng: np.random.Generator,
    shape: tuple,
) -> NDArray[np.floating]:
    """
    Standard normal deviates via the Box-Muller transform.

    u1 is drawn from (0, 1] so log(u1) is always finite.
    """
    u1 = 1.0 - rng.random(shape)
    u2 = rng.random(shape)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def maxwell_boltzmann_velocities(
    masses: ArrayLike,
    temperature: float,
    rng: Optional[np.random.Generator] = None,
) -> NDArray[np.floating]:
    """
    Sample velocities from the Maxwell-Boltzmann distribution.

    Each Cartesian component is normal with sigma = sqrt(kB·T / m),
    m converted from amu to eV·fs²/Å².

    Args:
        masses: (N,) masses in amu.
        temperature: Temperature in K; T <= 0 gives zero velocities.
        rng: Random generator (default: a fresh ``default_rng()``).

    Returns:
        (N, 3) velocities in Å/fs.
    """
    masses = np.atleast_1d(np.asarray(masses, dtype=np.float64))
    if np.any(masses <= 0):
        raise ValueError("Masses must be positive")
    if temperature <= 0:
        return np.zeros((len(masses), 3))

    rng = rng if rng is not None else np.random.default_rng()
    sigma = np.sqrt(BOLTZMANN_EV * temperature / (masses * AMU_TO_INTERNAL))
    return sigma[:, np.newaxis] * box_muller(rng, (len(masses), 3))


def maxwell_boltzmann_velocity(
    mass: float,
    temperature: float,
    rng: Optional[np.random.Generator] = None,
) -> NDArray[np.floating]:
    """Single-atom convenience wrapper returning a (3,) velocity."""
    return maxwell_boltzmann_velocities([mass], temperature, rng)[0]
