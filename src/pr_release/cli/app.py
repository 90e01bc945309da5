"""Command line interface for pr-release."""

from __future__ import annotations

import logging

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from pr_release import __version__
from pr_release.cli.commands.release import run_release
from pr_release.cli.commands.update import run_update

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Enable debug level logging
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # Keep third-party request logging quiet unless debugging
    for name in ("urllib3", "git"):
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(__version__, prog_name="pr-release")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Semantic-version releases driven by pull request descriptions."""
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(verbose)


@cli.command()
@click.option("--path", type=click.Path(exists=True, file_okay=False), help="Project directory.")
def update(path: str | None) -> None:
    """Bump version and changelog from the branch's pull request."""
    run_update(path, console, err_console)


@cli.command()
@click.option("--path", type=click.Path(exists=True, file_okay=False), help="Project directory.")
@click.option(
    "--publish/--no-publish",
    default=None,
    help="Publish the package after creating the release (overrides config).",
)
def release(path: str | None, publish: bool | None) -> None:
    """Create a GitHub release from the newest changelog section."""
    run_release(path, publish, console, err_console)


def main() -> None:
    cli()
