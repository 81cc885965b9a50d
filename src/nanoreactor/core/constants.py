"""
Physical and force-field constants for reactive simulations.

Internal units: Å (length), fs (time), eV (energy), amu (mass on input),
K (temperature). Masses are converted to eV·fs²/Å² before F/m.
"""
from typing import Final

# Boltzmann constant in eV/K
BOLTZMANN_EV: Final[float] = 8.617333262e-5

# 1 amu expressed in eV·fs²/Å²
# (1.66053906660e-27 kg) / (1.602176634e-19 J * 1e-30 s² / 1e-20 m²)
AMU_TO_INTERNAL: Final[float] = 103.6428

# Pair distances below this are treated as coincident (zero force)
DISTANCE_EPSILON: Final[float] = 1e-10

# Temperatures below this are treated as a frozen system
TEMPERATURE_EPSILON: Final[float] = 1e-10

# Hard-core substitution V = HARD_CORE_STIFFNESS * (HARD_CORE_RADIUS - r)^2
HARD_CORE_RADIUS: Final[float] = 0.3  # Å
HARD_CORE_STIFFNESS: Final[float] = 25.0  # eV/Å²

# Non-bonded soft-core repulsion V = eps * (sigma / r)^8
REPULSION_EPSILON: Final[float] = 0.02  # eV
REPULSION_SIGMA_SCALE: Final[float] = 0.85  # sigma = scale * (vdW_i + vdW_j)
REPULSION_EXPONENT: Final[int] = 8
NONBONDED_CUTOFF: Final[float] = 5.0  # Å

# Bond-graph thresholds, in units of the covalent radius sum
SEED_FORM_FACTOR: Final[float] = 1.3
FORM_FACTOR: Final[float] = 1.2
BREAK_FACTOR: Final[float] = 2.0

# Bond order from r / (covalent radius sum)
TRIPLE_BOND_RATIO: Final[float] = 0.82
DOUBLE_BOND_RATIO: Final[float] = 0.92

# Soft wall switches on at this fraction of the confinement radius
WALL_ONSET_FRACTION: Final[float] = 0.9

# Berendsen scaling factor limits per application
BERENDSEN_MIN_SCALE: Final[float] = 0.9
BERENDSEN_MAX_SCALE: Final[float] = 1.1

# Initial overlap relief (steepest descent)
RELAX_FORCE_TOL: Final[float] = 0.5  # eV/Å
RELAX_MAX_STEPS: Final[int] = 300
RELAX_MAX_STEP_SIZE: Final[float] = 0.01  # Å per eV/Å
RELAX_MAX_DISPLACEMENT: Final[float] = 0.2  # Å
