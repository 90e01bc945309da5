"""Tests for semantic version helpers."""

from __future__ import annotations

import pytest

from pr_release.core.version import BumpType, clean_version, increment_version


class TestCleanVersion:
    """Tests for clean_version()."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("  =v1.2.3 ", "1.2.3"),
            ("V2.0.0", "2.0.0"),
            ("1.0.0-beta.1", "1.0.0-beta.1"),
        ],
    )
    def test_valid_tags(self, tag, expected):
        assert clean_version(tag) == expected

    @pytest.mark.parametrize("tag", [None, "", "latest", "1.2", "v1", "release-1.2.3"])
    def test_invalid_tags_are_absent(self, tag):
        """Non-conforming tags are None, not errors."""
        assert clean_version(tag) is None


class TestIncrementVersion:
    """Tests for increment_version()."""

    def test_major_resets_minor_and_patch(self):
        assert increment_version("1.2.3", BumpType.MAJOR) == "2.0.0"

    def test_minor_resets_patch(self):
        assert increment_version("1.2.3", BumpType.MINOR) == "1.3.0"

    def test_patch(self):
        assert increment_version("1.2.3", BumpType.PATCH) == "1.2.4"

    @pytest.mark.parametrize(
        ("version", "bump", "expected"),
        [
            ("1.2.3-rc.1", BumpType.PATCH, "1.2.3"),
            ("1.2.0-rc.1", BumpType.MINOR, "1.2.0"),
            ("1.2.3-rc.1", BumpType.MINOR, "1.3.0"),
            ("2.0.0-beta.2", BumpType.MAJOR, "2.0.0"),
            ("1.2.0-beta.2", BumpType.MAJOR, "2.0.0"),
        ],
    )
    def test_prerelease_base(self, version, bump, expected):
        """A prerelease is promoted to its release when that satisfies the bump."""
        assert increment_version(version, bump) == expected

    def test_invalid_version_raises(self):
        with pytest.raises(ValueError):
            increment_version("not-a-version", BumpType.PATCH)


class TestBumpType:
    """Tests for BumpType ordering."""

    def test_order(self):
        assert BumpType.MAJOR.outranks(BumpType.MINOR)
        assert BumpType.MINOR.outranks(BumpType.PATCH)
        assert BumpType.PATCH.outranks(None)

    def test_not_strictly_higher(self):
        assert not BumpType.MINOR.outranks(BumpType.MINOR)
        assert not BumpType.PATCH.outranks(BumpType.MAJOR)

    def test_str(self):
        assert str(BumpType.MAJOR) == "major"
