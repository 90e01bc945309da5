"""Implementation of the 'update' command.

The update command bumps the version and changelog from the pull
request description and pushes them back to the branch.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from pr_release.config import load_config
from pr_release.core.release import update_version
from pr_release.exceptions import EmptyPullRequestError, PrReleaseError, PullRequestNotFoundError
from pr_release.forge import GitHubClient
from pr_release.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_update(path: str | None, console: Console, err_console: Console) -> None:
    """Run the update command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except PrReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        github = GitHubClient(config.github)
        repo = GitRepository(project_path)
        result = update_version(config, project_path, github, repo)
    except (PullRequestNotFoundError, EmptyPullRequestError) as e:
        console.print(f"[yellow]{e}, exiting process[/]")
        raise SystemExit(1) from e
    except Exception as e:
        err_console.print(f"[red]Error while updating version:[/] {e}")
        raise SystemExit(1) from e

    if not result.released:
        console.print("[yellow]No relevant change detected, the version will not be updated.[/]")
        return

    console.print(
        Panel(
            f"[green]Updated version {result.previous_version} → {result.version}[/]\n\n"
            f"  • Release type: [cyan]{result.bump}[/]\n"
            f"  • Commit: [cyan]{(result.commit_sha or '')[:7]}[/]",
            title="[green]Update Complete[/]",
            border_style="green",
        )
    )
