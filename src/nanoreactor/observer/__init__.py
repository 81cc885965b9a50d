"""
Observer module for monitoring simulation progress.
"""

from .observer import EnergyObserver, LoggingObserver, Observer, ReactionObserver

__all__ = [
    "Observer",
    "EnergyObserver",
    "ReactionObserver",
    "LoggingObserver",
]
