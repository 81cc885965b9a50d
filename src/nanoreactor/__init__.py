"""
nanoreactor - Reactive Molecular Dynamics in a Confined Nano-Reactor.

A small reactive force-field engine for tens of H, C, N and O atoms
inside a soft spherical wall. Covalent bonds form and break as the
geometry changes, and chemical species are reported every step.

Main features:
- Morse bonded / soft-core non-bonded pair forces
- Dynamic bond graph with valence limits and hysteresis
- Velocity Verlet integration with Berendsen temperature control
- Hill-order species detection
- In-process command channel and worker thread for host UIs
"""

__version__ = "0.1.0"
__author__ = "nanoreactor Team"
