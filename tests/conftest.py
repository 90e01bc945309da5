"""Shared pytest fixtures for pr-release tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from git import Actor, Repo

from pr_release.config.models import GitConfig, GitHubConfig, ReleaseConfig
from pr_release.core.commits import CommitRecord, parse_commit_message

PYPROJECT = """\
[project]
name = "test-project"
version = "1.0.0"
description = "A test project"

[tool.pr-release]
default_branch = "main"
"""

# Keep CI variables of the machine running the tests out of load_config
CI_VARIABLES = (
    "GH_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_REPOSITORY_OWNER",
    "GITHUB_API_URL",
    "GITHUB_SERVER_URL",
    "GITHUB_HEAD_REF",
    "CIRCLE_PROJECT_USERNAME",
    "CIRCLE_PROJECT_REPONAME",
    "CIRCLE_USERNAME",
    "CIRCLE_BRANCH",
    "VERSION_RELEASE_GIT_AUTHOR_NAME",
    "VERSION_RELEASE_GIT_AUTHOR_EMAIL",
    "VERSION_RELEASE_PUBLISH",
)


@pytest.fixture(autouse=True)
def clean_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CI_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_git_repo_with_pyproject(tmp_path: Path) -> Path:
    """A git repository on branch ``feature/login`` with one commit."""
    repo = Repo.init(tmp_path)
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    repo.index.add(["pyproject.toml"])
    actor = Actor("Test", "test@test.com")
    repo.index.commit("chore: initial commit", author=actor, committer=actor)
    repo.git.checkout("-b", "feature/login")
    return tmp_path


@pytest.fixture
def config() -> ReleaseConfig:
    return ReleaseConfig(
        github=GitHubConfig(token="s3cret", owner="acme", repo="widgets"),
        git=GitConfig(author_name="Release Bot", author_email="bot@acme.dev", branch="feature/login"),
    )


@pytest.fixture
def feat_commit() -> CommitRecord:
    return parse_commit_message("feat: add user authentication\n\nCloses #12")


@pytest.fixture
def fix_commit() -> CommitRecord:
    return parse_commit_message("fix(core): handle null response")


@pytest.fixture
def breaking_commit() -> CommitRecord:
    return parse_commit_message("refactor!: drop Python 3.10 support")


@pytest.fixture
def pr_description() -> str:
    return (
        "feat(api): add pagination\n"
        "\n"
        "Closes #12\n"
        "===\n"
        "fix: handle empty pages\n"
        "===\n"
        "chore: bump dev dependencies\n"
    )
