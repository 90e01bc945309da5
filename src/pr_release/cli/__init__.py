"""Command line interface for pr-release."""

from __future__ import annotations

from pr_release.cli.app import cli, main

__all__ = ["cli", "main"]
