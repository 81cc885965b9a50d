"""Exception types raised at the engine boundary."""


class ConfigurationError(ValueError):
    """A simulation configuration value is out of range or unknown."""


class NotInitializedError(RuntimeError):
    """An engine operation was requested before initialize()."""
