"""
Backend service layer for nanoreactor.

Framework-independent session logic consumed by the command channel,
the worker thread and the CLI. No transport concern belongs here.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Mapping, Optional, Sequence

import numpy as np

from nanoreactor.core.atom import Atom
from nanoreactor.core.config import SimConfig
from nanoreactor.core.errors import NotInitializedError
from nanoreactor.core.schemas import EnergyRecord, Snapshot
from nanoreactor.observer import EnergyObserver
from nanoreactor.simulator import ReactiveSimulator

logger = logging.getLogger(__name__)

# Throughput is averaged over windows at least this long (seconds)
THROUGHPUT_WINDOW = 1.0


class ReactorService:
    """Stateful reactor backend.  One instance per session."""

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        history_size: int = 200,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._config = (config if config is not None else SimConfig()).validate()
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._history_size = history_size
        self._clock = clock

        self._simulator: Optional[ReactiveSimulator] = None
        self._energy_observer: Optional[EnergyObserver] = None
        self._running = False

        self._window_start = clock()
        self._window_steps = 0
        self._steps_per_second = 0.0

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_initialized(self) -> bool:
        return self._simulator is not None

    @property
    def config(self) -> SimConfig:
        return self._config

    @property
    def steps_per_second(self) -> float:
        return self._steps_per_second

    @property
    def simulator(self) -> ReactiveSimulator:
        return self._require_simulator()

    def _require_simulator(self) -> ReactiveSimulator:
        if self._simulator is None:
            raise NotInitializedError("Engine not initialized")
        return self._simulator

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def initialize(
        self,
        atoms: Sequence[Atom],
        config: Optional[Mapping[str, Any]] = None,
    ) -> Snapshot:
        """Build a fresh engine for *atoms* and return its initial state.

        *config* is merged into the session configuration first.
        """
        if config:
            self._config = self._config.merged(config)

        self._running = False
        energy_observer = EnergyObserver(interval=1, max_history=self._history_size)
        simulator = ReactiveSimulator(self._config, rng=self._rng, observers=[energy_observer])
        snapshot = simulator.initialize(atoms)
        self._simulator = simulator
        self._energy_observer = energy_observer
        self._reset_throughput()
        logger.info("Session initialized with %d atoms", snapshot.n_atoms)
        return snapshot

    def reset(
        self,
        atoms: Sequence[Atom],
        config: Optional[Mapping[str, Any]] = None,
    ) -> Snapshot:
        """Stop, then re-initialize with new atoms."""
        self.stop()
        logger.info("Session reset")
        return self.initialize(atoms, config)

    def start(self) -> None:
        self._require_simulator()
        if not self._running:
            self._running = True
            self._reset_throughput()
            logger.info("Run loop started")

    def stop(self) -> None:
        if self._running:
            self._running = False
            logger.info("Run loop stopped")

    # ------------------------------------------------------------------ #
    #  Stepping
    # ------------------------------------------------------------------ #

    def step(self) -> Snapshot:
        """Advance exactly one step, regardless of the run state."""
        snapshot = self._require_simulator().step()
        snapshot.steps_per_second = self._steps_per_second
        return snapshot

    def run_batch(self) -> Optional[Snapshot]:
        """Advance one batch of ``steps_per_update`` steps if running.

        Returns:
            Snapshot after the batch, or None when the loop is stopped.
        """
        if not self._running:
            return None
        simulator = self._require_simulator()
        n_steps = self._config.steps_per_update
        snapshot = simulator.run(n_steps)
        self._record_throughput(n_steps)
        snapshot.steps_per_second = self._steps_per_second
        return snapshot

    def update_config(self, partial: Mapping[str, Any]) -> SimConfig:
        """Merge *partial* into the live configuration.

        Batch size changes affect subsequent batches only.
        """
        self._config = self._config.merged(partial)
        if self._simulator is not None:
            self._simulator.update_config(self._config)
        return self._config

    # ------------------------------------------------------------------ #
    #  Energy data
    # ------------------------------------------------------------------ #

    def get_energy_history(self) -> List[EnergyRecord]:
        if self._energy_observer is None:
            return []
        return list(self._energy_observer.records)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _reset_throughput(self) -> None:
        self._window_start = self._clock()
        self._window_steps = 0

    def _record_throughput(self, n_steps: int) -> None:
        self._window_steps += n_steps
        now = self._clock()
        elapsed = now - self._window_start
        if elapsed >= THROUGHPUT_WINDOW:
            self._steps_per_second = self._window_steps / elapsed
            self._window_steps = 0
            self._window_start = now
