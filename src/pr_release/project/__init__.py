"""Project manifest and packaging helpers."""

from __future__ import annotations

from pr_release.project.publish import publish_package
from pr_release.project.pyproject import get_pyproject_version, update_pyproject_version

__all__ = [
    "get_pyproject_version",
    "publish_package",
    "update_pyproject_version",
]
