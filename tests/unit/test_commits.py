"""Tests for conventional commit parsing and release type resolution."""

from __future__ import annotations

import pytest

from pr_release.core.commits import (
    DEFAULT_RELEASE_RULES,
    CommitRecord,
    ReleaseRule,
    classify_commit,
    parse_commit_message,
    parse_messages,
    resolve_release_type,
)
from pr_release.core.version import BumpType


def make_commit(commit_type: str | None = None, *, breaking: bool = False, revert: bool = False) -> CommitRecord:
    header = f"{commit_type}: change" if commit_type else "change"
    return CommitRecord(
        type=commit_type,
        subject="change",
        header=header,
        breaking=breaking,
        revert=revert,
    )


class TestParseCommitMessage:
    """Tests for parse_commit_message()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        commit = parse_commit_message("feat: add new feature")

        assert commit.is_conventional
        assert commit.type == "feat"
        assert commit.scope is None
        assert commit.subject == "add new feature"
        assert commit.body is None
        assert commit.footer is None
        assert not commit.breaking
        assert not commit.revert

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        commit = parse_commit_message("fix(api): handle null response")

        assert commit.type == "fix"
        assert commit.scope == "api"
        assert commit.subject == "handle null response"

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        commit = parse_commit_message("feat(core)!: change config format")

        assert commit.breaking
        assert commit.type == "feat"
        assert commit.scope == "core"
        assert commit.notes[0].text == "change config format"

    def test_parse_breaking_in_footer(self):
        """BREAKING CHANGE footer produces a note."""
        commit = parse_commit_message(
            "feat: new config loader\n\nReads TOML now.\n\nBREAKING CHANGE: INI files are no longer read"
        )

        assert commit.breaking
        assert commit.body == "Reads TOML now."
        assert commit.footer == "BREAKING CHANGE: INI files are no longer read"
        assert len(commit.notes) == 1
        assert commit.notes[0].title == "BREAKING CHANGE"
        assert commit.notes[0].text == "INI files are no longer read"

    def test_parse_breaking_with_hyphen(self):
        """BREAKING-CHANGE is accepted as a footer token."""
        commit = parse_commit_message("fix: x\n\nBREAKING-CHANGE: y")

        assert commit.breaking
        assert commit.notes[0].title == "BREAKING-CHANGE"

    def test_parse_references(self):
        """Issue references are collected with their action."""
        commit = parse_commit_message("feat(scope): broadcast $destroy event\n\nCloses #1")

        assert commit.footer == "Closes #1"
        assert len(commit.references) == 1
        reference = commit.references[0]
        assert reference.action == "Closes"
        assert reference.issue == "1"
        assert reference.raw == "#1"
        assert reference.prefix == "#"
        assert reference.owner is None

    def test_parse_cross_repository_reference(self):
        """owner/repo#N references keep owner and repository."""
        commit = parse_commit_message("fix: crash\n\nFixes acme/widgets#7")

        reference = commit.references[0]
        assert reference.owner == "acme"
        assert reference.repository == "widgets"
        assert reference.issue == "7"
        assert reference.action == "Fixes"

    def test_parse_revert(self):
        """Revert headers mark the commit as a revert."""
        commit = parse_commit_message('Revert "feat: add new feature"\n\nThis reverts commit abc123.')

        assert commit.revert
        assert commit.type is None
        assert commit.body == "This reverts commit abc123."

    @pytest.mark.parametrize(
        "message",
        [
            "Revert the flaky cache warmup",
            'Revert "feat: add new feature"',
            "revert: drop legacy endpoint",
        ],
    )
    def test_revert_requires_reverted_commit(self, message):
        """Without the "This reverts commit" line the message is not a revert."""
        commit = parse_commit_message(message)

        assert not commit.revert
        assert resolve_release_type([commit]) is None

    def test_parse_non_conventional(self):
        """Parse non-conventional commit."""
        commit = parse_commit_message("Updated the readme file")

        assert not commit.is_conventional
        assert commit.type is None
        assert commit.subject == "Updated the readme file"
        assert not commit.breaking


class TestParseMessages:
    """Tests for parse_messages()."""

    def test_split_on_separator(self, pr_description: str):
        """Messages are separated by === lines."""
        commits = parse_messages(pr_description)

        assert [c.type for c in commits] == ["feat", "fix", "chore"]
        assert commits[0].references[0].issue == "12"

    def test_blank_messages_skipped(self):
        """Empty chunks between separators are ignored."""
        commits = parse_messages("===\nfeat: a\n===\n\n===\n")

        assert len(commits) == 1

    def test_single_message_without_separator(self):
        """Text without separators is one message."""
        commits = parse_messages("fix: a\n\nsome details")

        assert len(commits) == 1
        assert commits[0].body == "some details"


class TestClassifyCommit:
    """Tests for classify_commit()."""

    @pytest.mark.parametrize(
        ("commit_type", "expected"),
        [
            ("feat", BumpType.MINOR),
            ("fix", BumpType.PATCH),
            ("refactor", BumpType.PATCH),
            ("ci", BumpType.PATCH),
            ("docs", BumpType.PATCH),
            ("style", BumpType.PATCH),
            ("chore", None),
            ("test", None),
            (None, None),
        ],
    )
    def test_type_rules(self, commit_type, expected):
        """Each type maps to its rule's bump."""
        assert classify_commit(DEFAULT_RELEASE_RULES, make_commit(commit_type)) == expected

    def test_breaking_rule_wins_over_type(self):
        """First matching rule is used: breaking comes before feat."""
        commit = make_commit("fix", breaking=True)
        assert classify_commit(DEFAULT_RELEASE_RULES, commit) == BumpType.MAJOR

    def test_revert_rule(self):
        """Reverts are a patch release."""
        assert classify_commit(DEFAULT_RELEASE_RULES, make_commit(revert=True)) == BumpType.PATCH

    def test_first_match_in_table_order(self):
        """Table order decides between matching rules."""
        rules = [
            ReleaseRule(type="feat", release=BumpType.PATCH),
            ReleaseRule(type="feat", release=BumpType.MAJOR),
        ]
        assert classify_commit(rules, make_commit("feat")) == BumpType.PATCH

    def test_empty_rules(self):
        """No rules means no release."""
        assert classify_commit([], make_commit("feat")) is None


class TestResolveReleaseType:
    """Tests for resolve_release_type()."""

    def test_empty_commits_returns_none(self):
        """Empty commit list means no release."""
        assert resolve_release_type([]) is None

    def test_feat_returns_minor(self, feat_commit: CommitRecord):
        assert resolve_release_type([feat_commit]) == BumpType.MINOR

    def test_fix_returns_patch(self, fix_commit: CommitRecord):
        assert resolve_release_type([fix_commit]) == BumpType.PATCH

    def test_breaking_returns_major(self, breaking_commit: CommitRecord):
        assert resolve_release_type([breaking_commit]) == BumpType.MAJOR

    @pytest.mark.parametrize("position", [0, 1, 2, 3])
    def test_breaking_takes_precedence(self, position: int):
        """A single breaking commit among fixes yields major wherever it is."""
        commits = [make_commit("fix"), make_commit("feat"), make_commit("docs")]
        commits.insert(position, make_commit(breaking=True))

        assert resolve_release_type(commits) == BumpType.MAJOR

    def test_feat_takes_precedence_over_fix(self, feat_commit: CommitRecord, fix_commit: CommitRecord):
        assert resolve_release_type([fix_commit, feat_commit, fix_commit]) == BumpType.MINOR

    def test_unknown_types_return_none(self):
        """Only unrecognized types means no release."""
        commits = [make_commit("chore"), make_commit("test"), make_commit(None)]
        assert resolve_release_type(commits) is None

    def test_fix_feat_breaking_scenario(self):
        """[fix, feat, breaking] resolves to major."""
        commits = [make_commit("fix"), make_commit("feat"), make_commit(breaking=True)]
        assert resolve_release_type(commits) == BumpType.MAJOR

    def test_custom_rules(self):
        """A custom rule table is honored."""
        rules = [ReleaseRule(type="perf", release=BumpType.MINOR)]
        assert resolve_release_type([make_commit("perf"), make_commit("feat")], rules) == BumpType.MINOR
