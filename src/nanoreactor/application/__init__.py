"""
Application layer: command channel and worker thread.
"""

from .command_channel import CommandChannel
from .messages import ConfigModel, parse_command
from .worker import SimulationWorker

__all__ = [
    "CommandChannel",
    "ConfigModel",
    "SimulationWorker",
    "parse_command",
]
