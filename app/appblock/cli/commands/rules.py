"""Rule listing and removal commands.

Provides commands to list the rules appblock created, grouped by
application, and to remove them per application or all at once.
"""

import json
from typing import Annotated

import typer

from appblock.cli.display import (
    create_groups_table,
    create_rules_table,
    records_to_dicts,
)
from appblock.cli.types import OutputFormat, get_config, get_grouper, get_store
from appblock.models.rule import RuleRecord
from appblock.rules.grouping import RuleGrouper
from appblock.rules.history import record_removal
from appblock.stores.base import StoreError
from appblock.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List and remove appblock firewall rules.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _load_owned(grouper: RuleGrouper) -> list[RuleRecord]:
    """Query every rule carrying the appblock prefix.

    Raises:
        typer.Exit: If the firewall cannot be queried.
    """
    try:
        return grouper.list_owned_rules()
    except StoreError as e:
        print_error(f"Cannot query firewall rules: {e}")
        raise typer.Exit(code=1) from e


@app.command("list")
def list_rules(
    ctx: typer.Context,
    application: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="Show the individual rules of one application.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List blocked applications and their rules.

    Examples:
        appblock rules list
        appblock rules list --app MyGame
        appblock rules list --format json
    """
    config = get_config(ctx)
    grouper = get_grouper(config, get_store(config))
    records = _load_owned(grouper)

    if application is not None:
        selected = grouper.records_for_application(records, application)
        if output_format == OutputFormat.JSON:
            console.print_json(json.dumps(records_to_dicts(selected)))
            return
        if not selected:
            print_info(f"No rules found for '{application}'.")
            return
        console.print(create_rules_table(selected, title=f"Rules for {application}"))
        return

    groups = grouper.group_by_application(records)
    if output_format == OutputFormat.JSON:
        data = {name: records_to_dicts(group) for name, group in groups.items()}
        console.print_json(json.dumps(data))
        return

    if not groups:
        print_info("No appblock rules found.")
        return

    console.print(create_groups_table(groups))
    console.print(f"\n[dim]{len(records)} rule(s) for {len(groups)} application(s)[/dim]")


@app.command()
def remove(
    ctx: typer.Context,
    application: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="Remove the rules of one application.",
        ),
    ] = None,
    remove_all: Annotated[
        bool,
        typer.Option("--all", help="Remove every rule created by appblock."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove appblock rules for one application or all of them.

    Examples:
        appblock rules remove --app MyGame
        appblock rules remove --all --yes
        appblock rules remove --all --dry-run
    """
    if (application is None) == (not remove_all):
        print_error("Specify exactly one of --app NAME or --all.")
        raise typer.Exit(code=1)

    config = get_config(ctx)
    grouper = get_grouper(config, get_store(config, dry_run=dry_run))
    records = _load_owned(grouper)

    if application is not None:
        targets = grouper.records_for_application(records, application)
        label = f"'{application}'"
    else:
        targets = records
        label = "all applications"

    if not targets:
        print_info(f"No rules to remove for {label}.")
        return

    console.print(create_rules_table(targets, title=f"Rules to remove for {label}"))

    if not dry_run and not yes:
        confirmed = typer.confirm(f"\nRemove {len(targets)} rule(s)?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        if application is not None:
            grouper.remove_for_application(records, application)
        else:
            grouper.remove_all(records)
    except StoreError as e:
        for failure in e.failures:
            print_warning(failure)
        print_error(str(e))
        if not dry_run:
            _record(targets, application, success=False)
        raise typer.Exit(code=1) from e

    if dry_run:
        print_info(f"Dry-run: would remove {len(targets)} rule(s) for {label}.")
        return

    _record(targets, application, success=True)
    print_success(f"Removed {len(targets)} rule(s) for {label}.")


def _record(records: list[RuleRecord], application: str | None, success: bool) -> None:
    """Record a removal to history, warning instead of failing."""
    try:
        record_removal(records, application, success=success)
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not record to history: {e}")
