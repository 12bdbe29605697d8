"""Shared Rich display functions for rules and results.

Provides reusable table builders and summary printers for the block and
rules commands.
"""

from collections.abc import Sequence

from rich.table import Table

from appblock.models.application import SkippedCandidate
from appblock.models.result import ApplyResult, RuleOutcome
from appblock.models.rule import Direction, RuleRecord
from appblock.utils.formatting import console, print_success, print_warning


def _outcome_cell(outcome: RuleOutcome) -> str:
    """Format one directional outcome."""
    if outcome.error is not None:
        return "[error]FAIL[/error]"
    if outcome.created:
        return "[blocked]created[/blocked]"
    return "[existing]exists[/existing]"


def create_results_table(result: ApplyResult, dry_run: bool = False) -> Table:
    """Create a Rich table with one row per processed file.

    Args:
        result: Result of a blocking run.
        dry_run: Whether this was a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    title = f"Rules for {result.application}"
    if dry_run:
        title += " (Dry Run)"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("File", no_wrap=True)
    table.add_column("Inbound", width=8)
    table.add_column("Outbound", width=8)
    table.add_column("Message")

    for outcome in result.outcomes:
        status = "[success]OK[/success]" if outcome.success else "[error]FAIL[/error]"
        table.add_row(
            status,
            f"[rule.name]{outcome.candidate.file_name}[/]",
            _outcome_cell(outcome.inbound),
            _outcome_cell(outcome.outbound),
            f"[muted]{'; '.join(outcome.errors)}[/muted]",
        )

    return table


def create_skipped_table(skipped: Sequence[SkippedCandidate]) -> Table:
    """Create a Rich table listing files excluded from blocking."""
    table = Table(
        title="Skipped Files",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("File", no_wrap=True, style="skipped")
    table.add_column("Reason", style="muted")

    for item in skipped:
        table.add_row(item.candidate.full_path, item.description)

    return table


def print_apply_summary(result: ApplyResult, dry_run: bool = False) -> None:
    """Print the blocked/failed/skipped counts of a blocking run."""
    prefix = "Dry-run: " if dry_run else ""
    if result.failed_files == 0:
        print_success(
            f"{prefix}{result.created_pairs} file(s) blocked, "
            f"{result.skipped_files} skipped for {result.application}."
        )
    else:
        console.print(
            f"\n{prefix}[success]{result.created_pairs} blocked[/success], "
            f"[error]{result.failed_files} failed[/error], "
            f"[muted]{result.skipped_files} skipped[/muted]"
        )
        print_warning("Some rules could not be created. Run as Administrator?")


def create_groups_table(groups: dict[str, list[RuleRecord]]) -> Table:
    """Create a Rich table summarizing rules per application."""
    table = Table(
        title="Blocked Applications",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Application", no_wrap=True, style="rule.name")
    table.add_column("Rules", justify="right")
    table.add_column("Inbound", justify="right", style="direction.in")
    table.add_column("Outbound", justify="right", style="direction.out")

    for application, records in sorted(groups.items(), key=lambda item: item[0].lower()):
        inbound = sum(1 for r in records if r.direction == Direction.INBOUND)
        table.add_row(
            application,
            str(len(records)),
            str(inbound),
            str(len(records) - inbound),
        )

    return table


def create_rules_table(records: Sequence[RuleRecord], title: str) -> Table:
    """Create a Rich table listing individual rules."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Rule", no_wrap=True, style="rule.name")
    table.add_column("Dir", width=8)
    table.add_column("Program", style="rule.program")

    for record in records:
        style = "direction.in" if record.direction == Direction.INBOUND else "direction.out"
        table.add_row(
            record.display_name,
            f"[{style}]{record.direction.value}[/{style}]",
            record.program_path or "-",
        )

    return table


def records_to_dicts(records: Sequence[RuleRecord]) -> list[dict[str, str | None]]:
    """Convert records to JSON-serializable dictionaries."""
    return [
        {
            "name": r.display_name,
            "direction": r.direction.value,
            "program": r.program_path,
        }
        for r in records
    ]
