"""
Configuration loader for YAML-based simulation setup.

Example file:

    simulation:
      dt: 0.5
      targetTemp: 1500
      confinementRadius: 8.0
    system:
      preset: hydrogen-combustion
      seed: 7
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from nanoreactor.core import ConfigurationError, SimConfig

from .presets import get_preset

DEFAULT_PRESET = "hydrogen-combustion"


@dataclass(frozen=True)
class RunSettings:
    """
    Everything needed to start a run.

    Attributes:
        config: Simulation configuration.
        preset: Preset id.
        seed: Random seed, or None for a fresh generator.
    """
    config: SimConfig
    preset: str = DEFAULT_PRESET
    seed: Optional[int] = None


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration (empty for an empty file).
    """
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def build_settings(data: Dict[str, Any]) -> RunSettings:
    """
    Build RunSettings from a configuration dictionary.

    Raises:
        ConfigurationError: For unknown sections or invalid values.
        ValueError: For an unknown preset id.
    """
    unknown = set(data) - {"simulation", "system"}
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {sorted(unknown)}")

    config = SimConfig.from_dict(data.get("simulation") or {})

    system = data.get("system") or {}
    preset = system.get("preset", DEFAULT_PRESET)
    get_preset(preset)

    seed = system.get("seed")
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            raise ConfigurationError(f"seed must be an integer, got {seed!r}")
    return RunSettings(config=config, preset=preset, seed=seed)


def load_config(path: Union[str, Path]) -> RunSettings:
    """
    Load run settings from a YAML file.

    Args:
        path: Path to YAML file.

    Returns:
        Validated RunSettings.
    """
    return build_settings(load_yaml(path))
