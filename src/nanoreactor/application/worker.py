"""Background worker that drives a CommandChannel on its own thread."""
from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable, Dict, Optional

from .command_channel import CommandChannel, Event

logger = logging.getLogger(__name__)

# ~30 state updates per second
DEFAULT_TICK_INTERVAL = 0.033


class SimulationWorker:
    """Run a command channel in a daemon thread.

    Commands are queued with :meth:`send` and handled in order on the
    worker thread. While the channel is running, one batch is issued per
    tick. Events go to *on_event* when given, otherwise to :attr:`outbox`.

    Example:
        >>> with SimulationWorker() as worker:
        ...     worker.send({"type": "INIT", "atoms": atoms})
        ...     worker.send({"type": "START"})
        ...     event = worker.outbox.get(timeout=5.0)
    """

    def __init__(
        self,
        channel: Optional[CommandChannel] = None,
        on_event: Optional[Callable[[Event], None]] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.channel = channel or CommandChannel()
        self.on_event = on_event
        self.tick_interval = tick_interval
        self.outbox: "queue.Queue[Event]" = queue.Queue()

        self._inbox: "queue.Queue[Dict[str, Any]]" = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "SimulationWorker":
        if self._thread is not None:
            raise RuntimeError("Worker already started")
        self._thread = threading.Thread(
            target=self._run_loop, name="nanoreactor-worker", daemon=True
        )
        self._thread.start()
        return self

    def send(self, message: Dict[str, Any]) -> None:
        """Queue a command for the worker thread."""
        self._inbox.put(message)

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the loop and join the thread."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> "SimulationWorker":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    # ------------------------------------------------------------------ #
    #  Worker thread
    # ------------------------------------------------------------------ #

    def _emit(self, events) -> None:
        for event in events:
            if self.on_event is not None:
                self.on_event(event)
            else:
                self.outbox.put(event)

    def _run_loop(self) -> None:
        next_tick = time.monotonic() + self.tick_interval
        while not self._stop_event.is_set():
            timeout = max(next_tick - time.monotonic(), 0.0)
            try:
                message = self._inbox.get(timeout=timeout)
            except queue.Empty:
                message = None

            try:
                if message is not None:
                    self._emit(self.channel.handle(message))

                if time.monotonic() >= next_tick:
                    next_tick = time.monotonic() + self.tick_interval
                    self._emit(self.channel.tick())
            except Exception:
                logger.exception("Worker iteration failed")

        self.channel.service.stop()
        logger.debug("Worker loop exited")
