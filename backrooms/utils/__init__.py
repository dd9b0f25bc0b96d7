"""Utility helpers shared across scripts and tooling."""

from .config import load_config_dict, load_config_any, load_sim_config

__all__ = [
    "load_config_dict",
    "load_config_any",
    "load_sim_config",
]
