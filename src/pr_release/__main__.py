"""Allow running as ``python -m pr_release``."""

from pr_release.cli import main

if __name__ == "__main__":
    main()
