"""Configuration models for pr-release.

Values come from ``[tool.pr-release]`` in pyproject.toml and are then
overridden by CI environment variables (see :mod:`pr_release.config.loader`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class GitHubConfig(BaseModel):
    """GitHub API access."""

    model_config = ConfigDict(extra="forbid")

    token: SecretStr | None = None
    owner: str | None = None
    repo: str | None = None
    api_url: str = "https://api.github.com"
    server_url: str = "https://github.com"
    timeout: float = Field(default=30.0, gt=0)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


class GitConfig(BaseModel):
    """Identity used for the release commit."""

    model_config = ConfigDict(extra="forbid")

    author_name: str | None = None
    author_email: str | None = None
    branch: str | None = None


class ChangelogConfig(BaseModel):
    """Changelog location."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Path("CHANGELOG.md")


class PublishConfig(BaseModel):
    """Package publishing after a release is created."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    tool: Literal["uv", "poetry", "twine"] = "uv"


class ReleaseConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    default_branch: str = "main"
    manifest_path: Path = Path("pyproject.toml")
    pr_message_path: Path = Path("pr_message.txt")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)

    @property
    def changelog_path(self) -> Path:
        return self.changelog.path
