"""Changelog reading and writing.

The changelog is a markdown document made of version sections, newest
first. Each section starts with a level-two heading holding the version
and a human title::

    ## 1.1.0 (18-10-2026)

    ### ✨ Features

    * add pagination

New sections are prepended; the reader returns sections in document order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pr_release.exceptions import ChangelogError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SECTION_HEADING = re.compile(r"^##\s+(?P<title>.+?)\s*$")

VERSION_IN_TITLE = re.compile(
    r"\[?v?(?P<version>\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)\]?"
)


@dataclass(frozen=True)
class ReleaseNote:
    """One version section of the changelog.

    Attributes:
        version: Version found in the heading, e.g. ``1.0.0``
        title: Heading text without the ``##`` marker
        body: Section content below the heading
    """

    version: str
    title: str
    body: str


def prepend_notes(path: Path, notes: str) -> None:
    """Prepend ``notes`` to the changelog at ``path``.

    The file is created when missing. The new section is separated from
    the previous content by exactly one blank line. Calling this twice
    with the same notes stacks two identical sections.

    Args:
        path: Changelog file path
        notes: Rendered section to add

    Raises:
        ChangelogError: If the file cannot be read or written
    """
    if not notes:
        return

    content = render_prepended(path, notes)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Could not write {path}: {e}") from e


def render_prepended(path: Path, notes: str) -> str:
    """Return the changelog content with ``notes`` prepended, without writing.

    Raises:
        ChangelogError: If the existing file cannot be read
    """
    try:
        current = path.read_text(encoding="utf-8").strip() if path.exists() else ""
    except OSError as e:
        raise ChangelogError(f"Could not read {path}: {e}") from e

    if current:
        logger.info("Update %s", path)
    else:
        logger.info("Create %s", path)

    return f"{notes.strip()}\n" + (f"\n{current}\n" if current else "")


def parse_changelog(content: str) -> list[ReleaseNote]:
    """Parse changelog content into version sections.

    Level-two headings without a version (``## Unreleased``) close the
    previous section but are not returned.
    """
    sections: list[ReleaseNote] = []
    title: str | None = None
    version: str | None = None
    body: list[str] = []

    def flush() -> None:
        if title is not None and version is not None:
            sections.append(ReleaseNote(version=version, title=title, body="\n".join(body).strip()))

    for line in content.splitlines():
        heading = SECTION_HEADING.match(line)
        if heading:
            flush()
            title = heading.group("title")
            version_match = VERSION_IN_TITLE.search(title)
            version = version_match.group("version") if version_match else None
            body = []
        elif title is not None:
            body.append(line)

    flush()
    return sections


def get_latest_note(path: Path) -> ReleaseNote | None:
    """Return the newest version section of the changelog, if any."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Could not read {path}: {e}") from e

    sections = parse_changelog(content)
    return sections[0] if sections else None
