"""Release orchestration.

Two entry points, run by CI at different times:

- :func:`update_version` runs on pull request builds. It reads the PR
  description, decides the bump, and commits the new version and
  changelog section back to the branch.
- :func:`release_version` runs once the bump has landed. It turns the
  newest changelog section into a GitHub release and optionally
  publishes the package.

Both raise :class:`~pr_release.exceptions.PrReleaseError` subclasses on
fatal errors; deciding the process exit code is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from pr_release.core.changelog import get_latest_note, render_prepended
from pr_release.core.commits import DEFAULT_RELEASE_RULES, parse_messages, resolve_release_type
from pr_release.core.notes import generate_notes
from pr_release.core.version import clean_version, increment_version
from pr_release.exceptions import ChangelogError, GitError, GitHubError, PrReleaseError, ProjectError
from pr_release.project.publish import publish_package
from pr_release.project.pyproject import get_pyproject_version, replace_version

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date
    from pathlib import Path

    from pr_release.config.models import PublishConfig, ReleaseConfig
    from pr_release.core.changelog import ReleaseNote
    from pr_release.core.commits import CommitRecord, ReleaseRule
    from pr_release.core.version import BumpType
    from pr_release.forge.github import GitHubClient
    from pr_release.vcs.git import GitRepository

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "chore(release): updating version to {version} [skip ci]"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of :func:`update_version`.

    ``bump`` is None when no commit warranted a release; the remaining
    fields are then unset.
    """

    bump: BumpType | None
    previous_version: str | None = None
    version: str | None = None
    notes: str | None = None
    commit_sha: str | None = None

    @property
    def released(self) -> bool:
        return self.bump is not None


def read_pull_request_commits(description: str, message_path: Path) -> list[CommitRecord]:
    """Parse a PR description through the transient message file.

    The file is removed once parsed, even when parsing fails.
    """
    message_path.write_text(description, encoding="utf-8")
    try:
        commits = parse_messages(message_path.read_text(encoding="utf-8"))
    finally:
        message_path.unlink(missing_ok=True)

    logger.info("Parsed %d message(s) from pull request", len(commits))
    logger.debug("Parsed messages: %s", commits)
    return commits


def resolve_current_version(github: GitHubClient, manifest_path: Path) -> str:
    """Return the latest released version, falling back to the manifest."""
    version = github.get_latest_release_version()
    if version is not None:
        return version

    version = get_pyproject_version(manifest_path)
    logger.info("No release found, using version %s from %s", version, manifest_path.name)
    return version


def push_url(config: ReleaseConfig) -> str:
    """Build the authenticated HTTPS remote used for the release push."""
    server = urlsplit(config.github.server_url)
    token = config.github.token.get_secret_value() if config.github.token else None
    credentials = f"x-access-token:{token}@" if token else ""
    return f"{server.scheme}://{credentials}{server.netloc}/{config.github.slug}.git"


def _write(path: Path, content: str, error: type[PrReleaseError]) -> None:
    logger.info("Write %s", path.name)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise error(f"Could not write {path}: {e}") from e


def update_version(
    config: ReleaseConfig,
    project_path: Path,
    github: GitHubClient,
    repo: GitRepository,
    *,
    rules: Sequence[ReleaseRule] = DEFAULT_RELEASE_RULES,
    release_date: date | None = None,
) -> UpdateResult:
    """Bump the version and changelog from the branch's pull request.

    Steps, strictly in order:

    1. Fetch the PR description for the current branch
    2. Parse it into commit records
    3. Resolve the release type; stop here if there is none
    4. Find the current version (latest release, else the manifest)
    5. Increment it
    6. Generate the release notes
    7. Write the manifest and changelog
    8. Commit both files and push to the branch

    If writing, staging or committing fails, both files are restored. A failed
    push leaves the local commit and the written files in place.

    Raises:
        PullRequestNotFoundError: No open pull request for the branch
        EmptyPullRequestError: The pull request has no description
        PrReleaseError: Any later step failed
    """
    branch = config.git.branch or repo.current_branch()
    logger.info("Looking up pull request for %s", branch)

    description = github.get_pull_request_description(branch)
    commits = read_pull_request_commits(description, project_path / config.pr_message_path)

    bump = resolve_release_type(commits, rules)
    if bump is None:
        logger.info("No relevant change detected, the version will not be updated")
        return UpdateResult(bump=None)

    manifest_path = project_path / config.manifest_path
    changelog_path = project_path / config.changelog_path

    current_version = resolve_current_version(github, manifest_path)
    try:
        next_version = increment_version(current_version, bump)
    except ValueError as e:
        raise ProjectError(f"Current version {current_version!r} is not a semantic version") from e
    logger.info("Next version: %s -> %s (%s)", current_version, next_version, bump)

    notes = generate_notes(commits, next_version, release_date=release_date)
    logger.debug("Notes generated:\n%s", notes)

    # Render both files before touching the disk
    try:
        manifest_before = manifest_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectError(f"Could not read {manifest_path}: {e}") from e
    try:
        changelog_before = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else None
    except OSError as e:
        raise ChangelogError(f"Could not read {changelog_path}: {e}") from e
    manifest_after = replace_version(manifest_before, next_version)
    changelog_after = render_prepended(changelog_path, notes)

    try:
        _write(manifest_path, manifest_after, ProjectError)
        _write(changelog_path, changelog_after, ChangelogError)
        repo.add([manifest_path, changelog_path])
        commit_sha = repo.commit(
            COMMIT_MESSAGE.format(version=next_version),
            author_name=config.git.author_name,
            author_email=config.git.author_email,
        )
    except (GitError, ProjectError, ChangelogError):
        logger.warning("Update failed, restoring %s and %s", manifest_path.name, changelog_path.name)
        _write(manifest_path, manifest_before, ProjectError)
        if changelog_before is None:
            changelog_path.unlink(missing_ok=True)
        else:
            _write(changelog_path, changelog_before, ChangelogError)
        raise

    secret = config.github.token.get_secret_value() if config.github.token else None
    repo.push(push_url(config), branch, secret=secret)

    return UpdateResult(
        bump=bump,
        previous_version=current_version,
        version=next_version,
        notes=notes,
        commit_sha=commit_sha,
    )


def build_release(note: ReleaseNote, target_commitish: str) -> dict[str, Any]:
    """Build the GitHub release payload for a changelog section."""
    tag = f"v{note.version}"
    return {
        "tag_name": tag,
        "name": tag,
        "body": f"## {note.title}\n\n{note.body}",
        "target_commitish": target_commitish,
        "draft": False,
        "prerelease": False,
    }


def release_version(
    config: ReleaseConfig,
    project_path: Path,
    github: GitHubClient,
    *,
    publish: Callable[[Path, PublishConfig], None] = publish_package,
) -> dict[str, Any] | None:
    """Create a GitHub release from the newest changelog section.

    Returns None when there is nothing to release: no changelog, no
    version section, or the newest section is already released.

    A failed release request is logged and the unpublished payload is
    still returned; the package is only published after the release
    was created.

    Raises:
        ChangelogError: If the changelog cannot be read
        PublishError: If publishing the package fails
    """
    changelog_path = project_path / config.changelog_path
    if not changelog_path.exists():
        logger.info("No %s file found, no release will be generated", changelog_path.name)
        return None

    note = get_latest_note(changelog_path)
    if note is None:
        logger.info("No version section in %s, no release will be generated", changelog_path.name)
        return None

    latest_version = github.get_latest_release_version()
    if latest_version is not None and latest_version == clean_version(note.version):
        logger.info(
            "No changes between changelog last release and repository last release version, "
            "no release will be generated"
        )
        return None

    release = build_release(note, config.default_branch)

    try:
        github.create_release(release)
    except GitHubError as e:
        logger.warning("Could not create release %s: %s", release["tag_name"], e)
        return release

    logger.info("Created release %s", release["tag_name"])

    if config.publish.enabled:
        publish(project_path, config.publish)

    return release
