"""Application entry point."""

from __future__ import annotations

import sys


def main() -> None:
    """Launch Kifu from the command line."""
    from kifu.ui.bootstrap import run_cli

    sys.exit(run_cli())


if __name__ == "__main__":
    main()
