"""Git operations used by the release commit step."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from git import Actor, Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from pr_release.exceptions import GitError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class GitRepository:
    """A local git working tree."""

    def __init__(self, path: Path) -> None:
        try:
            self._repo = Repo(path, search_parent_directories=True)
        except InvalidGitRepositoryError as e:
            raise GitError(f"Not a git repository: {path}") from e
        except NoSuchPathError as e:
            raise GitError(f"Path does not exist: {path}") from e

    @property
    def path(self) -> Path:
        return Path(self._repo.working_tree_dir)

    def current_branch(self) -> str:
        """Return the checked out branch name.

        Raises:
            GitError: If HEAD is detached
        """
        try:
            return self._repo.active_branch.name
        except TypeError as e:
            raise GitError("HEAD is detached; set CIRCLE_BRANCH or GITHUB_HEAD_REF") from e

    def add(self, paths: Iterable[Path]) -> None:
        files = [str(path) for path in paths]
        try:
            self._repo.index.add(files)
        except (OSError, GitCommandError) as e:
            raise GitError(f"Could not stage {files}: {e}") from e
        logger.info("Staged files: %s", files)

    def commit(
        self,
        message: str,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> str:
        """Commit the staged changes and return the new commit SHA."""
        actor = Actor(author_name, author_email) if author_name and author_email else None
        try:
            commit = self._repo.index.commit(message, author=actor, committer=actor)
        except (ValueError, OSError, GitCommandError) as e:
            raise GitError(f"Could not commit: {e}") from e
        logger.info("Committed %s: %s", commit.hexsha[:7], message)
        return commit.hexsha

    def push(self, remote_url: str, branch: str, *, secret: str | None = None) -> None:
        """Push HEAD to ``branch`` on ``remote_url``.

        ``secret`` is masked out of error messages since it is usually
        embedded in the remote URL.
        """
        try:
            self._repo.git.push(remote_url, f"HEAD:{branch}")
        except GitCommandError as e:
            detail = (e.stderr or "").strip()
            if secret:
                detail = detail.replace(secret, "***")
            raise GitError(f"git push to {branch} failed with exit code {e.status}: {detail}") from e
        logger.info("Pushed to %s", branch)
