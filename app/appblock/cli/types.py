"""Shared types and utilities for CLI commands.

This module provides the helpers every command uses to reach the
configuration loaded by the main callback and to build the engine
components from it.
"""

from enum import Enum

import typer

from appblock.core.config import AppBlockConfig, ConfigError, load_config
from appblock.rules.grouping import RuleGrouper
from appblock.rules.naming import RuleNamer
from appblock.stores.base import RuleStore
from appblock.stores.netsh import NetshRuleStore
from appblock.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> AppBlockConfig:
    """Get the configuration loaded by the main callback.

    Falls back to loading the default config file when the command runs
    without the main callback (e.g. when invoked directly in tests).

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config = obj.get("config")
    if isinstance(config, AppBlockConfig):
        return config

    try:
        return load_config(obj.get("config_path"))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_store(config: AppBlockConfig, dry_run: bool = False) -> RuleStore:
    """Create the firewall store, exiting if it cannot be used.

    Raises:
        typer.Exit: If the firewall backend is not available.
    """
    store = NetshRuleStore(dry_run=dry_run, timeout=config.command_timeout)
    if not store.is_available():
        print_error("netsh is not available. appblock manages the Windows Firewall only.")
        raise typer.Exit(code=1)
    return store


def get_grouper(config: AppBlockConfig, store: RuleStore) -> RuleGrouper:
    """Create a RuleGrouper sharing the configured naming convention."""
    return RuleGrouper(store, RuleNamer.from_config(config))
