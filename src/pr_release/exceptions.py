"""Exception hierarchy for pr-release.

Every error raised by the library derives from :class:`PrReleaseError` so the
CLI can convert any failure into a non-zero exit code in a single place.
"""

from __future__ import annotations


class PrReleaseError(Exception):
    """Base class for all pr-release errors."""


# Configuration


class ConfigError(PrReleaseError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml was found."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# Project / manifest


class ProjectError(PrReleaseError):
    """The project manifest could not be read or written."""


class VersionNotFoundError(ProjectError):
    """The manifest has no version field."""


# Changelog


class ChangelogError(PrReleaseError):
    """The changelog could not be read or written."""


# GitHub


class GitHubError(PrReleaseError):
    """A GitHub API request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PullRequestNotFoundError(GitHubError):
    """No open pull request matches the current branch."""


class EmptyPullRequestError(GitHubError):
    """The pull request has no description to parse."""


# Git


class GitError(PrReleaseError):
    """A git operation failed."""


# Publishing


class PublishError(PrReleaseError):
    """Building or uploading the package failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{super().__str__()}\n{self.stderr.strip()}"
        return super().__str__()
