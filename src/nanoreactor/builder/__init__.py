"""
Builder module: presets and configuration files.
"""

from .config_loader import RunSettings, build_settings, load_config, load_yaml
from .presets import (
    MOLECULE_TEMPLATES,
    PRESETS,
    Preset,
    generate_preset,
    get_preset,
    rotate_about_axis,
)

__all__ = [
    "Preset",
    "PRESETS",
    "MOLECULE_TEMPLATES",
    "generate_preset",
    "get_preset",
    "rotate_about_axis",
    "RunSettings",
    "build_settings",
    "load_config",
    "load_yaml",
]
