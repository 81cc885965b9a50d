"""
Observer module for monitoring simulation progress.

Provides the Observer pattern for energy history, reaction counting
and progress logging. Observers are notified by the simulator after
every step with the step's Snapshot and the bond changes of that step.
"""
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Deque, List, Optional

from nanoreactor.core.schemas import EnergyRecord

if TYPE_CHECKING:
    from nanoreactor.bonding import BondChanges
    from nanoreactor.core import Snapshot

logger = logging.getLogger(__name__)


class Observer(ABC):
    """
    Abstract base for simulation observers (Observer Pattern).

    Attributes:
        interval: How often to call observe() (in steps).

    Example:
        >>> observer = EnergyObserver(interval=10)
        >>> simulator = ReactiveSimulator(config, observers=[observer])
    """

    def __init__(self, interval: int = 1) -> None:
        """
        Initialize observer.

        Args:
            interval: Observation interval in steps. Default=1 (every step).
        """
        if interval < 1:
            raise ValueError(f"Interval must be >= 1, got {interval}")
        self.interval = interval

    @abstractmethod
    def observe(
        self,
        snapshot: "Snapshot",
        changes: Optional["BondChanges"] = None,
    ) -> None:
        """
        Record observation.

        Args:
            snapshot: State after the step.
            changes: Bonds formed and broken during the step.
        """
        pass

    def reset(self) -> None:
        """Forget everything recorded so far."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


class EnergyObserver(Observer):
    """
    Records energy components during simulation.

    Keeps at most ``max_history`` records; older ones are dropped.
    """

    def __init__(self, interval: int = 1, max_history: int = 200) -> None:
        """Initialize energy observer."""
        super().__init__(interval)
        if max_history < 1:
            raise ValueError(f"max_history must be >= 1, got {max_history}")
        self.max_history = max_history
        self.records: Deque[EnergyRecord] = deque(maxlen=max_history)

    def observe(
        self,
        snapshot: "Snapshot",
        changes: Optional["BondChanges"] = None,
    ) -> None:
        """Record energy values."""
        self.records.append(
            EnergyRecord(
                step=snapshot.step,
                kinetic=snapshot.kinetic_energy,
                potential=snapshot.potential_energy,
                total=snapshot.total_energy,
                temperature=snapshot.temperature,
            )
        )

    def reset(self) -> None:
        self.records.clear()

    @property
    def total_energies(self) -> List[float]:
        return [r.total for r in self.records]

    @property
    def temperatures(self) -> List[float]:
        return [r.temperature for r in self.records]

    def get_name(self) -> str:
        """Return observer name."""
        return f"EnergyObserver(interval={self.interval})"

    def get_energy_drift(self) -> float:
        """
        Compute relative energy drift over the retained history.

        Returns:
            (E_final - E_initial) / |E_initial|
        """
        if len(self.records) < 2:
            return 0.0
        E0 = self.records[0].total
        E_final = self.records[-1].total
        if abs(E0) < 1e-10:
            return 0.0
        return (E_final - E0) / abs(E0)


class ReactionObserver(Observer):
    """Counts bond formation and breaking events."""

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)
        self.bonds_formed = 0
        self.bonds_broken = 0

    def observe(
        self,
        snapshot: "Snapshot",
        changes: Optional["BondChanges"] = None,
    ) -> None:
        if changes is None:
            return
        self.bonds_formed += len(changes.formed)
        self.bonds_broken += len(changes.broken)

    def reset(self) -> None:
        self.bonds_formed = 0
        self.bonds_broken = 0

    def get_name(self) -> str:
        return f"ReactionObserver(interval={self.interval})"


class LoggingObserver(Observer):
    """
    Logs simulation progress.
    """

    def __init__(self, interval: int = 100, level: int = logging.INFO) -> None:
        """Initialize logging observer."""
        super().__init__(interval)
        self.level = level

    def observe(
        self,
        snapshot: "Snapshot",
        changes: Optional["BondChanges"] = None,
    ) -> None:
        """Log step info."""
        species = ", ".join(f"{s.formula}x{s.count}" for s in snapshot.species)
        logger.log(
            self.level,
            "Step %6d | T=%8.2f | PE=%12.4f | KE=%12.4f | E_total=%12.4f | %s",
            snapshot.step,
            snapshot.temperature,
            snapshot.potential_energy,
            snapshot.kinetic_energy,
            snapshot.total_energy,
            species,
        )

    def get_name(self) -> str:
        """Return observer name."""
        return f"LoggingObserver(interval={self.interval})"
