"""Version control integration."""

from __future__ import annotations

from pr_release.vcs.git import GitRepository

__all__ = ["GitRepository"]
