"""Conventional commit parsing and release type resolution.

Pull request descriptions hold one or more commit messages separated by
``===`` lines. Each message is parsed into a :class:`CommitRecord`, and
the records are classified against an ordered table of
:class:`ReleaseRule` objects to decide whether (and how) to bump the
version.

Supported header format::

    <type>[(scope)][!]: <subject>

    [optional body]

    [optional footer(s)]
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pr_release.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "==="

HEADER_PATTERN = re.compile(
    r"^(?P<type>\w+)"
    r"(?:\((?P<scope>[^()\r\n]*)\))?"
    r"(?P<breaking>!)?"
    r":\s+(?P<subject>.+)$"
)

# A revert names the reverted header and carries git's "This reverts commit <sha>." line
REVERT_PATTERN = re.compile(
    r'^(?:Revert|revert:)\s"?(?P<header>[\s\S]+?)"?\s*This reverts commit (?P<hash>\w*)\.',
    re.IGNORECASE,
)

NOTE_PATTERN = re.compile(r"^(?P<title>BREAKING[ -]CHANGE):\s*(?P<text>.*)$")

REFERENCE_ACTIONS = r"close[sd]?|fix(?:e[sd])?|resolve[sd]?"

FOOTER_REFERENCE_PATTERN = re.compile(rf"^(?:{REFERENCE_ACTIONS})\s+\S*#\d+", re.IGNORECASE)

REFERENCE_PATTERN = re.compile(
    rf"(?:(?P<action>{REFERENCE_ACTIONS})\s+)?"
    r"(?P<raw>(?:(?P<owner>[\w.-]+)/(?P<repository>[\w.-]+))?(?P<prefix>#)(?P<issue>\d+))",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Reference:
    """An issue reference such as ``Closes #12`` or ``owner/repo#3``."""

    issue: str
    raw: str
    action: str | None = None
    owner: str | None = None
    repository: str | None = None
    prefix: str = "#"


@dataclass(frozen=True)
class Note:
    """A footer note, e.g. ``BREAKING CHANGE: config format changed``."""

    title: str
    text: str


@dataclass(frozen=True)
class CommitRecord:
    """A commit message parsed against the conventional commit grammar.

    Attributes:
        type: Commit type (feat, fix, ...), None for non-conventional messages
        scope: Optional scope from ``type(scope):``
        subject: Header text after the colon, or the whole header
        header: First line of the message
        body: Free text between header and footer
        footer: Notes and issue references at the end of the message
        notes: Parsed footer notes (breaking changes)
        references: Issue references found anywhere in the message
        breaking: Whether the commit is a breaking change
        revert: Whether the commit reverts another commit
    """

    subject: str
    header: str
    type: str | None = None
    scope: str | None = None
    body: str | None = None
    footer: str | None = None
    notes: tuple[Note, ...] = ()
    references: tuple[Reference, ...] = ()
    breaking: bool = False
    revert: bool = False

    @property
    def is_conventional(self) -> bool:
        return self.type is not None


def parse_commit_message(message: str) -> CommitRecord:
    """Parse a single commit message.

    Args:
        message: Raw commit message (header, optional body and footer)

    Returns:
        Parsed commit record
    """
    lines = message.strip().splitlines()
    header = lines[0].strip() if lines else ""
    rest = lines[1:]

    match = HEADER_PATTERN.match(header)
    if match:
        commit_type = match.group("type")
        scope = match.group("scope") or None
        subject = match.group("subject").strip()
        bang = match.group("breaking") is not None
    else:
        commit_type = None
        scope = None
        subject = header
        bang = False

    footer_start = _find_footer_start(rest)
    body = "\n".join(rest[:footer_start]).strip() or None
    footer_lines = rest[footer_start:]
    footer = "\n".join(footer_lines).strip() or None

    notes = _parse_notes(footer_lines)
    if bang and not notes:
        notes = [Note(title="BREAKING CHANGE", text=subject)]

    return CommitRecord(
        type=commit_type,
        scope=scope,
        subject=subject,
        header=header,
        body=body,
        footer=footer,
        notes=tuple(notes),
        references=tuple(_parse_references(message)),
        breaking=bang or bool(notes),
        revert=REVERT_PATTERN.match(message.strip()) is not None,
    )


def parse_messages(text: str, separator: str = MESSAGE_SEPARATOR) -> list[CommitRecord]:
    """Parse a block of text holding several commit messages.

    Messages are separated by lines consisting only of ``separator``;
    blank messages are skipped.
    """
    pattern = re.compile(rf"^\s*{re.escape(separator)}\s*$", re.MULTILINE)
    return [parse_commit_message(chunk) for chunk in pattern.split(text) if chunk.strip()]


def _find_footer_start(lines: Sequence[str]) -> int:
    for index, line in enumerate(lines):
        stripped = line.strip()
        if NOTE_PATTERN.match(stripped) or FOOTER_REFERENCE_PATTERN.match(stripped):
            return index
    return len(lines)


def _parse_notes(footer_lines: Sequence[str]) -> list[Note]:
    notes: list[Note] = []
    current: list[str] | None = None
    title = ""

    for line in footer_lines:
        stripped = line.strip()
        note_match = NOTE_PATTERN.match(stripped)
        if note_match:
            if current is not None:
                notes.append(Note(title=title, text="\n".join(current).strip()))
            title = note_match.group("title")
            current = [note_match.group("text")]
        elif current is not None:
            # A blank line or a reference ends the note text
            if not stripped or FOOTER_REFERENCE_PATTERN.match(stripped):
                notes.append(Note(title=title, text="\n".join(current).strip()))
                current = None
            else:
                current.append(stripped)

    if current is not None:
        notes.append(Note(title=title, text="\n".join(current).strip()))
    return notes


def _parse_references(message: str) -> list[Reference]:
    references = []
    for match in REFERENCE_PATTERN.finditer(message):
        references.append(
            Reference(
                issue=match.group("issue"),
                raw=match.group("raw"),
                action=match.group("action"),
                owner=match.group("owner"),
                repository=match.group("repository"),
                prefix=match.group("prefix"),
            )
        )
    return references


# =============================================================================
# Release rules
# =============================================================================


@dataclass(frozen=True)
class ReleaseRule:
    """Maps a commit predicate to a bump level.

    Exactly one predicate is expected per rule: ``breaking``, ``revert``
    or ``type``.
    """

    release: BumpType
    breaking: bool = False
    revert: bool = False
    type: str | None = None

    def matches(self, commit: CommitRecord) -> bool:
        if self.breaking and commit.breaking:
            return True
        if self.revert and commit.revert:
            return True
        return self.type is not None and self.type == commit.type


DEFAULT_RELEASE_RULES: tuple[ReleaseRule, ...] = (
    ReleaseRule(breaking=True, release=BumpType.MAJOR),
    ReleaseRule(revert=True, release=BumpType.PATCH),
    ReleaseRule(type="feat", release=BumpType.MINOR),
    ReleaseRule(type="fix", release=BumpType.PATCH),
    ReleaseRule(type="refactor", release=BumpType.PATCH),
    ReleaseRule(type="ci", release=BumpType.PATCH),
    ReleaseRule(type="docs", release=BumpType.PATCH),
    ReleaseRule(type="style", release=BumpType.PATCH),
)


def classify_commit(rules: Iterable[ReleaseRule], commit: CommitRecord) -> BumpType | None:
    """Return the bump of the first rule matching ``commit``, or None."""
    for rule in rules:
        if rule.matches(commit):
            return rule.release
    return None


def resolve_release_type(
    commits: Iterable[CommitRecord],
    rules: Sequence[ReleaseRule] = DEFAULT_RELEASE_RULES,
) -> BumpType | None:
    """Return the highest bump implied by ``commits``.

    Args:
        commits: Parsed commit records
        rules: Ordered release rule table

    Returns:
        The highest bump level, or None when no commit warrants a release
    """
    release_type: BumpType | None = None

    for commit in commits:
        commit_release = classify_commit(rules, commit)
        if commit_release is not None and commit_release.outranks(release_type):
            release_type = commit_release

    if release_type is not None:
        logger.info("Release type detected: %s", release_type)
    return release_type
