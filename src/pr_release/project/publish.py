"""Package publishing.

Builds and uploads the package with the tool selected in
``[tool.pr-release.publish]``. Commands run as subprocesses in the
project directory; credentials come from the tool's own environment
variables (``UV_PUBLISH_TOKEN``, ``POETRY_PYPI_TOKEN_PYPI``,
``TWINE_PASSWORD``) or trusted publishing.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import TYPE_CHECKING

from pr_release.exceptions import PublishError

if TYPE_CHECKING:
    from pathlib import Path

    from pr_release.config.models import PublishConfig

logger = logging.getLogger(__name__)


def build_commands(tool: str, project_path: Path) -> list[list[str]]:
    """Return the commands that build and upload the package with ``tool``."""
    if tool == "uv":
        return [["uv", "build"], ["uv", "publish"]]
    if tool == "poetry":
        return [["poetry", "publish", "--build"]]
    if tool == "twine":
        # dist/ only exists once the build command has run
        return [[sys.executable, "-m", "build"], ["twine", "upload", str(project_path / "dist" / "*")]]
    raise PublishError(f"Unsupported publish tool: {tool}")


def publish_package(project_path: Path, config: PublishConfig) -> None:
    """Build and upload the package.

    Args:
        project_path: Directory containing pyproject.toml
        config: Publish configuration

    Raises:
        PublishError: If a command is missing or exits non-zero
    """
    for args in build_commands(config.tool, project_path):
        command = " ".join(args)
        logger.info("Running %s", command)

        try:
            result = subprocess.run(
                args,
                cwd=project_path,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise PublishError(f"{args[0]} not found. Install it to publish with {config.tool}.") from e
        except subprocess.CalledProcessError as e:
            raise PublishError(
                f"{command} failed with exit code {e.returncode}", stderr=e.stderr
            ) from e

        if result.stdout:
            logger.debug(result.stdout.strip())
