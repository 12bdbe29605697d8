"""Block command implementation.

Creates inbound and outbound block rules for every executable found
under an application's directory.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from appblock.cli.display import (
    create_results_table,
    create_skipped_table,
    print_apply_summary,
)
from appblock.cli.types import get_config, get_grouper, get_store
from appblock.filesystem.scanner import InvalidPathError, ScanError, validate_root
from appblock.models.application import Application
from appblock.models.rule import RuleRecord
from appblock.rules.grouping import RuleGrouper
from appblock.rules.history import record_block, record_removal
from appblock.rules.manager import RuleManager
from appblock.rules.naming import SEPARATOR, RuleNamer
from appblock.stores.base import StoreError
from appblock.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def _remove_existing(
    grouper: RuleGrouper,
    application: str,
    replace: bool | None,
    dry_run: bool,
) -> None:
    """Offer to remove rules already present for the application.

    Raises:
        typer.Exit: If the store cannot be queried or the removal fails.
    """
    try:
        existing = grouper.records_for_application(grouper.list_owned_rules(), application)
    except StoreError as e:
        print_error(f"Cannot query firewall rules: {e}")
        raise typer.Exit(code=1) from e

    if not existing:
        return

    if replace is None:
        replace = typer.confirm(
            f"{len(existing)} rule(s) already exist for '{application}'. Remove them first?",
            default=False,
        )

    if not replace:
        print_info(f"Keeping {len(existing)} existing rule(s) for '{application}'.")
        return

    try:
        removed = grouper.remove_for_application(existing, application)
    except StoreError as e:
        for failure in e.failures:
            print_warning(failure)
        print_error(str(e))
        if not dry_run:
            _record_removal(existing, application, success=False)
        raise typer.Exit(code=1) from e

    if dry_run:
        print_info(f"Dry-run: would remove {len(removed)} existing rule(s).")
    else:
        _record_removal(removed, application, success=True)
        print_success(f"Removed {len(removed)} existing rule(s) for '{application}'.")


def _record_removal(records: list[RuleRecord], application: str, success: bool) -> None:
    """Record a removal to history, warning instead of failing."""
    try:
        record_removal(records, application, success=success)
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record to history: {e}")


def block(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Application name used in every rule name."),
    ],
    root: Annotated[
        Path,
        typer.Argument(help="Directory scanned recursively for executables."),
    ],
    extensions: Annotated[
        list[str] | None,
        typer.Option(
            "--ext",
            "-e",
            help="Extension glob to block (repeatable, e.g. -e '*.exe' -e '*.dll').",
        ),
    ] = None,
    exclude_keywords: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude-keyword",
            "-k",
            help="Skip files whose name contains this text (repeatable, case-insensitive).",
        ),
    ] = None,
    exclude_files: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude-file",
            "-x",
            help="Skip files with exactly this name (repeatable).",
        ),
    ] = None,
    replace: Annotated[
        bool | None,
        typer.Option(
            "--replace/--keep",
            help="Remove or keep existing rules for NAME without asking.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without changing the firewall.",
        ),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=32,
            help="Files processed concurrently (default from config).",
        ),
    ] = None,
) -> None:
    """Block network access for every executable of an application.

    Creates one inbound and one outbound block rule per matching file.
    Rules that already exist are left untouched, so running the command
    twice is safe.

    Examples:
        appblock block MyGame "C:\\Games\\MyGame"
        appblock block MyGame "C:\\Games\\MyGame" -e '*.exe' -e '*.dll'
        appblock block MyGame "C:\\Games\\MyGame" -k crash -x launcher.exe
        appblock block MyGame "C:\\Games\\MyGame" --replace --dry-run
    """
    config = get_config(ctx)

    try:
        application = Application(
            name=name,
            root_path=root,
            extensions=tuple(extensions or config.default_extensions),
            excluded_keywords=tuple(exclude_keywords or config.default_excluded_keywords),
            excluded_files=tuple(exclude_files or config.default_excluded_files),
        )
        validate_root(application.root_path)
    except ValidationError as e:
        print_error(f"Invalid arguments: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e
    except InvalidPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if SEPARATOR in application.name:
        print_warning(
            f"Application names containing '{SEPARATOR.strip()}' surrounded by spaces "
            "are listed under their first part only."
        )

    if len(f"{config.rule_prefix}{application.name}{SEPARATOR}") >= config.max_name_length:
        print_warning(
            "Application name is too long to be recovered from rule names; "
            "its rules will be listed under 'Unknown Application'."
        )

    store = get_store(config, dry_run=dry_run)
    namer = RuleNamer.from_config(config)

    _remove_existing(get_grouper(config, store), application.name, replace, dry_run)

    manager = RuleManager(store, namer, workers=workers or config.workers)

    try:
        result = manager.apply(application)
    except (InvalidPathError, ScanError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result.skipped:
        console.print(create_skipped_table(result.skipped))

    if not result.outcomes:
        print_info(f"No files to block under {application.root_path}.")
        return

    console.print(create_results_table(result, dry_run=dry_run))
    print_apply_summary(result, dry_run=dry_run)

    if not dry_run:
        try:
            record_block(result)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if result.failed_files:
        raise typer.Exit(code=1)
