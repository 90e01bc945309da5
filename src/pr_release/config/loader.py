"""Configuration loading.

Configuration is read once at process start. Precedence, lowest first:

1. Model defaults
2. ``[tool.pr-release]`` in pyproject.toml
3. Environment variables set by the CI provider
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pr_release.config.models import ReleaseConfig
from pr_release.exceptions import ConfigNotFoundError, ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

TOOL_SECTION = "pr-release"

# (config path, environment variables in order of preference)
ENV_VARIABLES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("github", "token"), ("GH_TOKEN", "GITHUB_TOKEN")),
    (("github", "owner"), ("CIRCLE_PROJECT_USERNAME", "GITHUB_REPOSITORY_OWNER")),
    (("github", "repo"), ("CIRCLE_PROJECT_REPONAME",)),
    (("github", "api_url"), ("GITHUB_API_URL",)),
    (("github", "server_url"), ("GITHUB_SERVER_URL",)),
    (("git", "author_name"), ("VERSION_RELEASE_GIT_AUTHOR_NAME", "CIRCLE_USERNAME")),
    (("git", "author_email"), ("VERSION_RELEASE_GIT_AUTHOR_EMAIL",)),
    (("git", "branch"), ("CIRCLE_BRANCH", "GITHUB_HEAD_REF")),
    (("publish", "enabled"), ("VERSION_RELEASE_PUBLISH",)),
)


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_tool_config(pyproject: Mapping[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.pr-release]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_SECTION, {}))


def config_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Build a nested config override from CI environment variables."""
    overrides: dict[str, Any] = {}

    for (section, key), names in ENV_VARIABLES:
        value = next((environ[name] for name in names if environ.get(name)), None)
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    # GitHub Actions exposes "owner/repo" as a single variable
    repository = environ.get("GITHUB_REPOSITORY", "")
    if "/" in repository:
        owner, repo = repository.split("/", 1)
        github = overrides.setdefault("github", {})
        github.setdefault("owner", owner)
        github.setdefault("repo", repo)

    return overrides


def _merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReleaseConfig:
    """Load configuration for the project at ``path``.

    A missing pyproject.toml is not an error; defaults and the
    environment are used instead.

    Args:
        path: Project directory (defaults to the working directory)
        environ: Environment mapping (defaults to ``os.environ``)

    Raises:
        ConfigValidationError: If a value is invalid
    """
    environ = os.environ if environ is None else environ

    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using defaults")
        data: dict[str, Any] = {}
    else:
        data = extract_tool_config(load_pyproject_toml(pyproject_path))

    data = _merge(data, config_from_env(environ))

    try:
        return ReleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e
