"""
Reactive simulation engine.

Brings together the atom arena, bond graph, force calculator,
integrator, thermostat and observers into one step-at-a-time engine.
The engine has no timers or threads; hosts call step() themselves.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from nanoreactor.bonding import BondChanges, BondGraph, detect_species
from nanoreactor.core import (
    Atom,
    AtomArena,
    NotInitializedError,
    SimConfig,
    Snapshot,
    maxwell_boltzmann_velocities,
)
from nanoreactor.force import ForceCalculator
from nanoreactor.integrator import VelocityVerlet
from nanoreactor.minimizer import Minimizer, SteepestDescent
from nanoreactor.observer import Observer
from nanoreactor.thermostat import BerendsenThermostat, NoThermostat, Thermostat

logger = logging.getLogger(__name__)


class ReactiveSimulator:
    """
    Reactive MD engine.

    Initialization:
    1. Copy atoms into a fresh arena, seed bonds, remove COM velocity
    2. Relieve overlaps by steepest descent, then re-seed bonds
    3. Assign Maxwell-Boltzmann velocities, remove COM velocity
    4. Compute initial forces

    Each step:
    1. Positions from old forces
    2. Bond graph update (break, then form)
    3. Forces and potential energy
    4. Velocities from old and new forces
    5. Velocity clamp
    6. Thermostat
    7. Species from the updated bond graph
    8. Advance step counter and time

    Attributes:
        config: Current simulation configuration.
        observers: Observers notified after every step.

    Example:
        >>> sim = ReactiveSimulator(SimConfig(target_temperature=300.0), seed=42)
        >>> sim.initialize([Atom('H', [-0.37, 0, 0]), Atom('H', [0.37, 0, 0])])
        >>> snapshot = sim.step()
        >>> snapshot.species
        [Species(formula='H2', count=1)]
    """

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        observers: Optional[List[Observer]] = None,
        minimizer: Optional[Minimizer] = None,
    ) -> None:
        """
        Initialize simulator.

        Args:
            config: Simulation configuration (default: SimConfig()).
            rng: Random generator for velocity sampling.
            seed: Seed for a fresh generator; ignored when rng is given.
            observers: Observers notified after each step.
            minimizer: Overlap relief (default: SteepestDescent()).
        """
        self.config = (config if config is not None else SimConfig()).validate()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.observers = observers or []
        self.minimizer = minimizer if minimizer is not None else SteepestDescent()

        self.force_calculator = ForceCalculator(
            self.config.confinement_radius, self.config.confinement_force
        )
        self.integrator = VelocityVerlet(self.config.dt)
        self.thermostat = self._make_thermostat(self.config)

        self._arena: Optional[AtomArena] = None
        self._bond_graph: Optional[BondGraph] = None
        self._potential_energy = 0.0

    @staticmethod
    def _make_thermostat(config: SimConfig) -> Thermostat:
        if config.thermostat_enabled:
            return BerendsenThermostat(config.target_temperature, config.thermostat_tau)
        return NoThermostat()

    @property
    def is_initialized(self) -> bool:
        return self._arena is not None

    @property
    def arena(self) -> AtomArena:
        """The engine's atom state."""
        return self._require_arena()

    @property
    def bond_graph(self) -> BondGraph:
        self._require_arena()
        return self._bond_graph

    @property
    def potential_energy(self) -> float:
        return self._potential_energy

    def _require_arena(self) -> AtomArena:
        if self._arena is None:
            raise NotInitializedError("Engine not initialized")
        return self._arena

    def get_config(self) -> SimConfig:
        return self.config

    def update_config(self, partial: Union[SimConfig, Mapping[str, Any]]) -> SimConfig:
        """
        Merge a partial configuration into the live one.

        Takes effect from the next step.

        Args:
            partial: A full SimConfig or a mapping of changed keys.

        Returns:
            The new configuration.

        Raises:
            ConfigurationError: If the merged configuration is invalid.
        """
        if isinstance(partial, SimConfig):
            new_config = partial.validate()
        else:
            new_config = self.config.merged(partial)

        self.config = new_config
        self.force_calculator.configure_wall(
            new_config.confinement_radius, new_config.confinement_force
        )
        self.integrator = VelocityVerlet(new_config.dt)
        self.thermostat = self._make_thermostat(new_config)
        logger.debug("Configuration updated: %s", new_config)
        return new_config

    def initialize(self, atoms: Sequence[Atom]) -> Snapshot:
        """
        Load atoms and prepare them for dynamics.

        Any previous state is discarded.

        Args:
            atoms: Initial atoms (copied, never referenced afterwards).

        Returns:
            Snapshot of the initialized state at step 0.
        """
        arena = AtomArena.from_atoms(atoms)
        bond_graph = BondGraph(arena.elements)

        bond_graph.seed(arena.positions)
        arena.zero_momentum()

        result = self.minimizer.minimize(arena, self.force_calculator, bond_graph)
        if result.converged:
            logger.debug("Overlap relief: %s", result.message)
        else:
            logger.warning("Overlap relief: %s", result.message)

        # Relaxed geometry can differ enough to change the bond set
        bond_graph.seed(arena.positions)

        arena.velocities = maxwell_boltzmann_velocities(
            arena.masses, self.config.target_temperature, self.rng
        )
        arena.zero_momentum()

        arena.forces, self._potential_energy = (
            self.force_calculator.compute_forces_and_energy(arena, bond_graph)
        )
        self._arena = arena
        self._bond_graph = bond_graph

        for observer in self.observers:
            observer.reset()

        logger.info(
            "Initialized %d atoms with %d bonds (T=%.1f K)",
            arena.n_atoms,
            bond_graph.n_bonds,
            arena.compute_temperature(),
        )
        return self.snapshot()

    def step(self) -> Snapshot:
        """
        Advance the simulation by one timestep.

        Returns:
            Snapshot computed after the thermostat.

        Raises:
            NotInitializedError: If initialize() has not been called.
        """
        arena = self._require_arena()
        bond_graph = self._bond_graph
        dt = self.config.dt

        old_forces = arena.forces.copy()
        self.integrator.integrate_positions(arena)

        changes = bond_graph.update(arena.positions)

        arena.forces, self._potential_energy = (
            self.force_calculator.compute_forces_and_energy(arena, bond_graph)
        )
        self.integrator.integrate_velocities(arena, old_forces)
        self.integrator.clamp_velocities(arena, self.config.max_velocity)

        self.thermostat.apply(arena, dt)

        arena.step += 1
        arena.time += dt

        snapshot = self.snapshot()
        self._notify(snapshot, changes)
        return snapshot

    def run(self, num_steps: int) -> Snapshot:
        """
        Run several steps.

        Returns:
            Snapshot after the last step (the current state if num_steps is 0).
        """
        if num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {num_steps}")
        snapshot = self.snapshot()
        for _ in range(num_steps):
            snapshot = self.step()
        return snapshot

    def snapshot(self) -> Snapshot:
        """
        Copy the current state into a Snapshot.

        Raises:
            NotInitializedError: If initialize() has not been called.
        """
        arena = self._require_arena()
        bonds = self._bond_graph.bonds()
        return Snapshot(
            elements=arena.elements,
            positions=arena.positions.copy(),
            velocities=arena.velocities.copy(),
            forces=arena.forces.copy(),
            bonds=bonds,
            species=detect_species(arena.elements, bonds),
            temperature=arena.compute_temperature(),
            kinetic_energy=arena.compute_kinetic_energy(),
            potential_energy=self._potential_energy,
            step=arena.step,
            time=arena.time,
            ids=[int(k) for k in arena.ids],
        )

    def _notify(self, snapshot: Snapshot, changes: BondChanges) -> None:
        for observer in self.observers:
            if snapshot.step % observer.interval == 0:
                observer.observe(snapshot, changes)
