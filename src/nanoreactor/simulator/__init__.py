"""
Simulator module: the reactive engine orchestrator.
"""

from .simulator import ReactiveSimulator

__all__ = [
    "ReactiveSimulator",
]
