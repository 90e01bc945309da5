"""Configuration management for pr-release."""

from __future__ import annotations

from pr_release.config.loader import load_config
from pr_release.config.models import (
    ChangelogConfig,
    GitConfig,
    GitHubConfig,
    PublishConfig,
    ReleaseConfig,
)

__all__ = [
    "ChangelogConfig",
    "GitConfig",
    "GitHubConfig",
    "PublishConfig",
    "ReleaseConfig",
    "load_config",
]
