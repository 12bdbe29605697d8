"""CLI package for appblock.

This package contains the Typer application and all subcommands.
"""

from appblock.cli.main import app

__all__ = ["app"]
