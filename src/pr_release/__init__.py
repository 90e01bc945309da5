"""pr-release: semantic-version releases driven by pull request descriptions."""

from __future__ import annotations

__version__ = "0.1.0"
