"""
Small 3-vector helpers on top of numpy.

Vectors are ``(3,)`` float arrays; the ``*_rows`` variants operate on
``(N, 3)`` stacks.
"""
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .constants import DISTANCE_EPSILON


def vec(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> NDArray[np.floating]:
    """Build a (3,) vector."""
    return np.array([x, y, z], dtype=np.float64)


def add(a: NDArray, b: NDArray) -> NDArray[np.floating]:
    return np.add(a, b, dtype=np.float64)


def sub(a: NDArray, b: NDArray) -> NDArray[np.floating]:
    return np.subtract(a, b, dtype=np.float64)


def scale(v: NDArray, s: float) -> NDArray[np.floating]:
    return np.multiply(v, s, dtype=np.float64)


def length(v: NDArray) -> float:
    return float(np.linalg.norm(v))


def distance(a: NDArray, b: NDArray) -> float:
    return length(sub(a, b))


def normalize(v: NDArray) -> NDArray[np.floating]:
    """Unit vector along v; the zero vector for |v| < epsilon."""
    norm = length(v)
    if norm < DISTANCE_EPSILON:
        return np.zeros(3)
    return np.asarray(v, dtype=np.float64) / norm


def row_lengths(v: NDArray) -> NDArray[np.floating]:
    """(N,) norms of an (N, 3) stack."""
    return np.sqrt(np.sum(np.asarray(v) ** 2, axis=1))


def normalize_rows(v: NDArray) -> NDArray[np.floating]:
    """Normalize each row of an (N, 3) stack; near-zero rows map to zero."""
    v = np.asarray(v, dtype=np.float64)
    norms = row_lengths(v)
    safe = np.where(norms < DISTANCE_EPSILON, 1.0, norms)
    out = v / safe[:, np.newaxis]
    out[norms < DISTANCE_EPSILON] = 0.0
    return out


def random_in_sphere(
    radius: float,
    rng: Optional[np.random.Generator] = None,
) -> NDArray[np.floating]:
    """
    Uniform random point strictly inside a sphere (rejection sampling).

    Args:
        radius: Sphere radius.
        rng: Random generator (default: a fresh ``default_rng()``).
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")
    rng = rng if rng is not None else np.random.default_rng()
    while True:
        point = (rng.random(3) * 2.0 - 1.0) * radius
        if np.dot(point, point) < radius * radius:
            return point
