"""
CLI entry point using Typer.

Provides commands for the bench program:
- init / update-maxes / status: profile and starting maxes
- program / day / explain / export: the generated plan
- log-session / show-log: training log
- progress: max history and charts
"""

from .app import app
from .commands import analysis, planning, profile, sessions  # noqa: F401  registers commands

__all__ = ["app"]


if __name__ == "__main__":
    app()
