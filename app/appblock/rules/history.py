"""History recording for rule changes.

Records created and removed rules to the shared history file, giving
users an audit trail of every firewall change appblock made.
"""

from collections.abc import Sequence

from appblock.core.state import StateManager
from appblock.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)
from appblock.models.result import ApplyResult
from appblock.models.rule import RuleRecord


def record_block(
    result: ApplyResult,
    state: StateManager | None = None,
) -> HistoryEntry | None:
    """Record the rules created by a blocking run.

    Pre-existing rules are not recorded since nothing changed for them.

    Args:
        result: Result of RuleManager.apply().
        state: State manager to write to (default location if None).

    Returns:
        The recorded entry, or None if no rule was created.
    """
    items = [
        HistoryItem(name=spec.display_name, direction=spec.direction, program=spec.program_path)
        for spec in result.new_rules
    ]
    if not items:
        return None

    entry = create_history_entry(
        action_type=HistoryActionType.BLOCK,
        items=items,
        application=result.application,
        success=result.failed_files == 0,
        metadata={
            "created_pairs": result.created_pairs,
            "failed_files": result.failed_files,
            "skipped_files": result.skipped_files,
        },
    )
    (state or StateManager()).record_action(entry)
    return entry


def record_removal(
    records: Sequence[RuleRecord],
    application: str | None = None,
    success: bool = True,
    state: StateManager | None = None,
) -> HistoryEntry | None:
    """Record removed rules.

    Args:
        records: Rules that were passed to the store for deletion.
        application: Application whose rules were removed, or None when
            every owned rule was removed.
        success: Whether the store reported no failures.
        state: State manager to write to (default location if None).

    Returns:
        The recorded entry, or None if records is empty.
    """
    if not records:
        return None

    action_type = HistoryActionType.REMOVE if application else HistoryActionType.REMOVE_ALL
    entry = create_history_entry(
        action_type=action_type,
        items=[
            HistoryItem(name=r.display_name, direction=r.direction, program=r.program_path)
            for r in records
        ],
        application=application,
        success=success,
    )
    (state or StateManager()).record_action(entry)
    return entry
