"""GitHub REST API client.

Covers the three endpoints the release flow needs:

- ``GET /repos/{owner}/{repo}/pulls`` to find the branch's pull request
- ``GET /repos/{owner}/{repo}/releases/latest`` for the published version
- ``POST /repos/{owner}/{repo}/releases`` to cut a release
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from pr_release.core.version import clean_version
from pr_release.exceptions import EmptyPullRequestError, GitHubError, PullRequestNotFoundError

if TYPE_CHECKING:
    from pr_release.config.models import GitHubConfig

logger = logging.getLogger(__name__)


class GitHubClient:
    """Thin wrapper around a :class:`requests.Session` for one repository."""

    def __init__(self, config: GitHubConfig, session: requests.Session | None = None) -> None:
        if not config.owner or not config.repo:
            raise GitHubError("GitHub owner and repository must be configured")

        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if config.token is not None:
            self.session.headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"

    @property
    def repo_path(self) -> str:
        return f"/repos/{self.config.owner}/{self.config.repo}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.config.api_url.rstrip('/')}{path}"
        logger.debug("%s %s %s", method, url, params or "")

        try:
            response = self.session.request(
                method, url, params=params, json=payload, timeout=self.config.timeout
            )
        except requests.RequestException as e:
            raise GitHubError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("message", response.text) if isinstance(body, dict) else response.text
            raise GitHubError(
                f"{method} {path} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GitHubError(
                f"{method} {path} returned a non-JSON response",
                status_code=response.status_code,
            ) from e

    def list_pull_requests(self, branch: str) -> list[dict[str, Any]]:
        """List open pull requests whose head is ``owner:branch``."""
        return self._request(
            "GET",
            f"{self.repo_path}/pulls",
            params={"head": f"{self.config.owner}:{branch}", "state": "open"},
        )

    def get_pull_request_description(self, branch: str) -> str:
        """Return the description of the open pull request for ``branch``.

        Raises:
            PullRequestNotFoundError: If no pull request has ``branch`` as head
            EmptyPullRequestError: If the pull request has no description
            GitHubError: If the request fails
        """
        pulls = self.list_pull_requests(branch)
        if not pulls:
            raise PullRequestNotFoundError("No pull request found")

        logger.debug("Pull requests: %s", [pull.get("url") for pull in pulls])

        pull = next((p for p in pulls if p.get("head", {}).get("ref") == branch), None)
        if pull is None:
            raise PullRequestNotFoundError(f'No pull request found for "{branch}"')

        description = pull.get("body") or ""
        if not description.strip():
            raise EmptyPullRequestError("No description found on pull request")
        return description

    def get_latest_release_version(self) -> str | None:
        """Return the version of the latest release, or None.

        Request failures and tags that are not semantic versions are
        treated as "no release".
        """
        try:
            release = self._request("GET", f"{self.repo_path}/releases/latest")
        except GitHubError as e:
            logger.warning("Could not find the latest release: %s", e)
            return None

        tag = release.get("tag_name") if isinstance(release, dict) else None
        version = clean_version(tag)
        logger.info("Last version detected: %s", version)
        return version

    def create_release(self, release: dict[str, Any]) -> dict[str, Any]:
        """Create a release from ``release`` (tag_name, name, body, ...).

        Raises:
            GitHubError: If the request fails
        """
        logger.info("Creating release %s", release.get("tag_name"))
        return self._request("POST", f"{self.repo_path}/releases", payload=release)
