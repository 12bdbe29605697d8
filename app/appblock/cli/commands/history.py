"""History command for viewing past rule changes.

This module provides the `appblock history` command for viewing the
rules appblock created and removed over time.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from appblock.core.state import StateManager
from appblock.models.history import HistoryEntry
from appblock.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of firewall rule changes.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    application: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="Only show entries for this application.",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of firewall rule changes.

    Examples:
        appblock history              # Show last 20 entries
        appblock history -n 50        # Show last 50 entries
        appblock history --app MyGame
        appblock history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    state = StateManager()
    if application is None:
        entries = state.get_history(limit=limit)
    else:
        entries = [e for e in state.get_history() if e.application == application][:limit]

    if not entries:
        print_info("No history entries found.")
        return

    if json_output:
        _print_json(entries)
    else:
        _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as Rich table.

    Args:
        entries: List of history entries to display.
    """
    table = Table(title="Rule History", header_style="bold_header", border_style="border")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Action", style="success")
    table.add_column("Application", style="rule.name")
    table.add_column("Rules", justify="right")
    table.add_column("OK?")

    for entry in entries:
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            entry.action_type.value,
            entry.application or "-",
            str(len(entry.items)),
            "[success]Yes[/]" if entry.success else "[error]No[/]",
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp as YYYY-MM-DD HH:MM."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")


def _print_json(entries: list[HistoryEntry]) -> None:
    """Print history as JSON for scripting."""
    output = [entry.to_dict() for entry in entries]
    console.print_json(json.dumps(output))
