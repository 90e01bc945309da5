"""Semantic version helpers.

Parsing, cleaning and incrementing are delegated to the ``semver``
library; this module only adds the bump-level vocabulary used by the
release rules and the "invalid means absent" policy for tags.
"""

from __future__ import annotations

import re
from enum import Enum

import semver

# Leading characters npm-style tags commonly carry: "v1.2.3", "=1.2.3", " v1.2.3 "
_TAG_PREFIX = re.compile(r"^[=v\s]+", re.IGNORECASE)


class BumpType(str, Enum):
    """Semantic version bump level."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def outranks(self, other: BumpType | None) -> bool:
        """Return True if this bump is strictly higher than ``other``.

        ``None`` (no release) ranks below every bump level.
        """
        if other is None:
            return True
        return self.rank > other.rank


_RANKS = {BumpType.PATCH: 1, BumpType.MINOR: 2, BumpType.MAJOR: 3}


def clean_version(tag: str | None) -> str | None:
    """Normalize a tag such as ``v1.2.3`` to ``1.2.3``.

    Returns None for missing or non-conforming tags instead of raising.
    """
    if not tag:
        return None

    candidate = _TAG_PREFIX.sub("", tag.strip())
    try:
        return str(semver.Version.parse(candidate))
    except ValueError:
        return None


def increment_version(version: str, bump: BumpType) -> str:
    """Increment ``version`` by ``bump``.

    Major resets minor and patch, minor resets patch, patch increments
    the patch component only. A prerelease is promoted to its release
    when that release already satisfies the bump, so ``1.2.3-rc.1``
    patches to ``1.2.3`` and ``2.0.0-rc.1`` majors to ``2.0.0``.

    Raises:
        ValueError: If ``version`` is not a valid semantic version
    """
    parsed = semver.Version.parse(version)

    if parsed.prerelease:
        release = parsed.finalize_version()
        if (
            bump is BumpType.PATCH
            or (bump is BumpType.MINOR and parsed.patch == 0)
            or (bump is BumpType.MAJOR and parsed.minor == 0 and parsed.patch == 0)
        ):
            return str(release)
        parsed = release

    if bump is BumpType.MAJOR:
        return str(parsed.bump_major())
    if bump is BumpType.MINOR:
        return str(parsed.bump_minor())
    return str(parsed.bump_patch())
