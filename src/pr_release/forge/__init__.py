"""Source hosting integrations."""

from __future__ import annotations

from pr_release.forge.github import GitHubClient

__all__ = ["GitHubClient"]
