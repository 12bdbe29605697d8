"""Data models for appblock.

This module exports the core data structures used throughout the application.
"""

from appblock.models.application import (
    Application,
    FileCandidate,
    SkippedCandidate,
    SkipReason,
)
from appblock.models.history import (
    HistoryActionType,
    HistoryEntry,
    HistoryItem,
    create_history_entry,
)
from appblock.models.result import ApplyResult, FileOutcome, RuleOutcome
from appblock.models.rule import (
    MAX_DISPLAY_NAME_LENGTH,
    CreateStatus,
    Direction,
    RuleAction,
    RuleProfile,
    RuleRecord,
    RuleSpec,
)

__all__ = [
    "MAX_DISPLAY_NAME_LENGTH",
    "Application",
    "ApplyResult",
    "CreateStatus",
    "Direction",
    "FileCandidate",
    "FileOutcome",
    "HistoryActionType",
    "HistoryEntry",
    "HistoryItem",
    "RuleAction",
    "RuleOutcome",
    "RuleProfile",
    "RuleRecord",
    "RuleSpec",
    "SkipReason",
    "SkippedCandidate",
    "create_history_entry",
]
