"""Implementation of the 'release' command.

The release command creates a GitHub release from the newest changelog
section and optionally publishes the package.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pr_release.config import load_config
from pr_release.core.release import release_version
from pr_release.exceptions import PrReleaseError
from pr_release.forge import GitHubClient

if TYPE_CHECKING:
    from rich.console import Console


def run_release(
    path: str | None,
    publish: bool | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        publish: Override the configured publish flag (None keeps it)
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(project_path)
    except PrReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    if publish is not None:
        config = config.model_copy(
            update={"publish": config.publish.model_copy(update={"enabled": publish})}
        )

    try:
        github = GitHubClient(config.github)
        release = release_version(config, project_path, github)
    except Exception as e:
        err_console.print(f"[red]Error while releasing version:[/] {e}")
        raise SystemExit(1) from e

    if release is None:
        console.print("[yellow]Nothing to release.[/]")
        return

    console.print(f"[green]Release {release['tag_name']}[/] targeting [cyan]{release['target_commitish']}[/]")
