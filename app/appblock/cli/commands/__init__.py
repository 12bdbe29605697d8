"""CLI commands for appblock.

This package contains all subcommand implementations.
"""

from appblock.cli.commands import block, config, history, rules

__all__ = ["block", "config", "history", "rules"]
