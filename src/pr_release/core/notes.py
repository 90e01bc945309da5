"""Release note generation from parsed commits.

Renders one changelog section for the next version::

    ## 1.3.0 (18-10-2026)

    ### ✨ Features

    * **api:** add pagination (#12)
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date as date_type
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pr_release.core.commits import CommitRecord

DATE_FORMAT = "%d-%m-%Y"

TYPE_LABELS = {
    "feat": "### ✨ Features",
    "fix": "### 🐛 Bug Fixes",
    "perf": "### ⚡ Performance",
    "revert": "### ⏪ Reverts",
    "refactor": "### ♻️ Refactoring",
    "docs": "### 📚 Documentation",
    "style": "### 💄 Style",
    "ci": "### 🔧 CI",
}


def group_commits_by_type(commits: Iterable[CommitRecord]) -> dict[str, list[CommitRecord]]:
    """Group commits by type; non-conventional commits land under ``other``."""
    grouped: dict[str, list[CommitRecord]] = defaultdict(list)
    for commit in commits:
        grouped[commit.type or "other"].append(commit)
    return dict(grouped)


def format_commit_for_changelog(commit: CommitRecord, *, include_scope: bool = True) -> str:
    """Format a commit as a single changelog bullet."""
    scope = f"**{commit.scope}:** " if include_scope and commit.scope else ""
    line = f"* {scope}{commit.subject}"

    issues = [ref.raw for ref in commit.references]
    if issues:
        line += f" ({', '.join(dict.fromkeys(issues))})"
    return line


def generate_notes(
    commits: Iterable[CommitRecord],
    version: str,
    *,
    release_date: date_type | None = None,
) -> str:
    """Generate the changelog section for ``version``.

    Only commit types with a label are listed; breaking changes are
    listed first, using their note text.

    Args:
        commits: Parsed commit records
        version: Version being released
        release_date: Date shown in the heading, defaults to today

    Returns:
        Markdown section, without trailing newline
    """
    commits = list(commits)
    release_date = release_date or date_type.today()

    lines = [f"## {version} ({release_date.strftime(DATE_FORMAT)})", ""]

    breaking = [commit for commit in commits if commit.breaking]
    if breaking:
        lines.append("### ⚠️ BREAKING CHANGES")
        lines.append("")
        for commit in breaking:
            scope = f"**{commit.scope}:** " if commit.scope else ""
            texts = [note.text for note in commit.notes if note.text] or [commit.subject]
            lines.extend(f"* {scope}{text}" for text in texts)
        lines.append("")

    grouped = group_commits_by_type(commits)
    for commit_type, label in TYPE_LABELS.items():
        commits_of_type = grouped.get(commit_type, [])
        if not commits_of_type:
            continue

        lines.append(label)
        lines.append("")
        lines.extend(format_commit_for_changelog(commit) for commit in commits_of_type)
        lines.append("")

    return "\n".join(lines).strip()
