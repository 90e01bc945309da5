"""pyproject.toml version manipulation.

This module reads and updates the version number of the package
manifest. Formatting and comments are preserved by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pr_release.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

# Sections that may carry the version, in order of preference
VERSION_SECTIONS = ("project", "tool.poetry")

VERSION_LINE = re.compile(r'^(version\s*=\s*)["\'][^"\']+["\']', re.MULTILINE)


def _section_pattern(section: str) -> re.Pattern[str]:
    # The section body runs up to the next table header or EOF
    return re.compile(rf"^\[{re.escape(section)}\].*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def read_version(content: str) -> str | None:
    """Return the version declared in pyproject ``content``, if any."""
    for section in VERSION_SECTIONS:
        section_match = _section_pattern(section).search(content)
        if not section_match:
            continue
        version_match = re.search(
            r'^version\s*=\s*["\']([^"\']+)["\']', section_match.group(0), re.MULTILINE
        )
        if version_match:
            return version_match.group(1)
    return None


def replace_version(content: str, new_version: str) -> str:
    """Return ``content`` with the manifest version set to ``new_version``.

    Raises:
        VersionNotFoundError: If no version field exists
    """
    for section in VERSION_SECTIONS:
        pattern = _section_pattern(section)
        section_match = pattern.search(content)
        if not section_match or not VERSION_LINE.search(section_match.group(0)):
            continue

        updated_section = VERSION_LINE.sub(
            rf'\g<1>"{new_version}"', section_match.group(0), count=1
        )
        return content[: section_match.start()] + updated_section + content[section_match.end() :]

    raise VersionNotFoundError(
        "Could not find version to update. Expected [project].version or [tool.poetry].version."
    )


def get_pyproject_version(path: Path) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml

    Returns:
        Version string

    Raises:
        ProjectError: If the file cannot be read
        VersionNotFoundError: If version cannot be found
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Could not read {path}: {e}") from e

    version = read_version(content)
    if version is None:
        raise VersionNotFoundError(
            f"Could not find version in {path}. "
            "Expected [project].version or [tool.poetry].version."
        )
    return version


def update_pyproject_version(path: Path, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    Setting the version it already has is allowed and leaves the file
    content unchanged.

    Args:
        path: Path to pyproject.toml
        new_version: New version string to set

    Returns:
        Path to the updated pyproject.toml

    Raises:
        VersionNotFoundError: If version cannot be found
        ProjectError: If the file cannot be read or written
    """
    try:
        content = path.read_text(encoding="utf-8")
        path.write_text(replace_version(content, new_version), encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Could not update {path}: {e}") from e
    return path
