"""Transport-agnostic command channel.

Wraps :class:`ReactorService` so that hosts pass plain dict commands and
receive plain dict events; no engine objects cross the boundary. Every
failure is reported as an ``ERROR`` event instead of an exception.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from nanoreactor.core.service import ReactorService

from .messages import (
    ErrorEvent,
    InitCommand,
    ReadyEvent,
    ResetCommand,
    StartCommand,
    StateUpdateEvent,
    StepCommand,
    StopCommand,
    UpdateConfigCommand,
    parse_command,
)

logger = logging.getLogger(__name__)

Event = Dict[str, Any]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


class CommandChannel:
    """In-process command/event channel, one instance per session."""

    def __init__(self, service: Optional[ReactorService] = None):
        self._svc = service or ReactorService()

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def service(self) -> ReactorService:
        return self._svc

    @property
    def is_running(self) -> bool:
        return self._svc.is_running

    # ------------------------------------------------------------------ #
    #  Commands
    # ------------------------------------------------------------------ #

    def handle(self, message: Dict[str, Any]) -> List[Event]:
        """Process one command and return the events it produced."""
        try:
            command = parse_command(message)
        except ValidationError as exc:
            text = _format_validation_error(exc)
            logger.warning("Rejected command: %s", text)
            return [ErrorEvent(message=text).to_dict()]

        try:
            return self._dispatch(command)
        except (ValueError, RuntimeError) as exc:
            logger.warning("%s failed: %s", command.type, exc)
            return [ErrorEvent(message=str(exc)).to_dict()]

    def _dispatch(self, command: Any) -> List[Event]:
        if isinstance(command, InitCommand):
            atoms = [a.to_atom() for a in command.atoms]
            snapshot = self._svc.initialize(atoms, command.config.to_partial())
            return [
                StateUpdateEvent.from_snapshot(snapshot).to_dict(),
                ReadyEvent().to_dict(),
            ]
        if isinstance(command, ResetCommand):
            atoms = [a.to_atom() for a in command.atoms]
            snapshot = self._svc.reset(atoms, command.config.to_partial())
            return [StateUpdateEvent.from_snapshot(snapshot).to_dict()]
        if isinstance(command, StartCommand):
            self._svc.start()
            return []
        if isinstance(command, StopCommand):
            self._svc.stop()
            return []
        if isinstance(command, StepCommand):
            snapshot = self._svc.step()
            return [StateUpdateEvent.from_snapshot(snapshot).to_dict()]
        if isinstance(command, UpdateConfigCommand):
            self._svc.update_config(command.config.to_partial())
            return []
        raise ValueError(f"Unhandled command: {command!r}")

    # ------------------------------------------------------------------ #
    #  Run loop
    # ------------------------------------------------------------------ #

    def tick(self) -> List[Event]:
        """Run one batch if the loop is running; emit its final state."""
        try:
            snapshot = self._svc.run_batch()
        except (ValueError, RuntimeError) as exc:
            self._svc.stop()
            logger.error("Batch failed: %s", exc)
            return [ErrorEvent(message=str(exc)).to_dict()]
        if snapshot is None:
            return []
        return [StateUpdateEvent.from_snapshot(snapshot).to_dict()]
