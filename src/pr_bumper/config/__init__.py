"""Configuration management for pr-bumper."""

from __future__ import annotations

from pr_bumper.config.loader import load_config
from pr_bumper.config.models import (
    CiConfig,
    DependenciesConfig,
    DependenciesOutputConfig,
    GitUserConfig,
    PrBumperConfig,
    VcsConfig,
)

__all__ = [
    "CiConfig",
    "DependenciesConfig",
    "DependenciesOutputConfig",
    "GitUserConfig",
    "PrBumperConfig",
    "VcsConfig",
    "load_config",
]
