"""Core business logic for pr-release.

This module contains the fundamental building blocks:
- Semantic version cleaning and incrementing
- Conventional commit parsing and release type resolution
- Release note generation and changelog updates
- Release orchestration
"""

from __future__ import annotations

from pr_release.core.changelog import ReleaseNote, get_latest_note, parse_changelog, prepend_notes
from pr_release.core.commits import (
    DEFAULT_RELEASE_RULES,
    CommitRecord,
    ReleaseRule,
    classify_commit,
    parse_commit_message,
    parse_messages,
    resolve_release_type,
)
from pr_release.core.notes import generate_notes
from pr_release.core.release import UpdateResult, release_version, update_version
from pr_release.core.version import BumpType, clean_version, increment_version

__all__ = [
    # Commits
    "DEFAULT_RELEASE_RULES",
    # Version
    "BumpType",
    "CommitRecord",
    # Changelog
    "ReleaseNote",
    "ReleaseRule",
    # Release
    "UpdateResult",
    "classify_commit",
    "clean_version",
    "generate_notes",
    "get_latest_note",
    "increment_version",
    "parse_changelog",
    "parse_commit_message",
    "parse_messages",
    "prepend_notes",
    "release_version",
    "resolve_release_type",
    "update_version",
]
