"""History entry model for auditing firewall changes.

This module defines data structures for recording the rules appblock
created or removed in a history file.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from appblock.models.rule import Direction


class HistoryActionType(str, Enum):
    """Type of action recorded in history.

    Attributes:
        BLOCK: Rules created for an application.
        REMOVE: Rules removed for one application.
        REMOVE_ALL: Every rule owned by appblock removed.
    """

    BLOCK = "block"
    REMOVE = "remove"
    REMOVE_ALL = "remove_all"


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """Single rule affected by an action.

    Attributes:
        name: Rule display name.
        direction: Direction of the rule.
        program: Program path the rule applies to, if known.
    """

    name: str
    direction: Direction
    program: str | None = None

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.name:
            msg = "Rule name cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "name": self.name,
            "direction": self.direction.value,
        }
        if self.program is not None:
            result["program"] = self.program
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryItem":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If direction is invalid.
        """
        return cls(
            name=data["name"],
            direction=Direction(data["direction"]),
            program=data.get("program"),
        )


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single action in history.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the action occurred (ISO 8601 format with timezone).
        action_type: Type of action (block, remove, remove_all).
        application: Application name the action targeted, if any.
        items: Rules affected by this action.
        success: Whether the action completed without failures.
        metadata: Additional context (command, counts, ...).
    """

    id: str
    timestamp: str
    action_type: HistoryActionType
    application: str | None
    items: tuple[HistoryItem, ...]
    success: bool = True
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.items:
            msg = "History entry must have at least one item"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "action_type": self.action_type.value,
            "application": self.application,
            "items": [item.to_dict() for item in self.items],
            "success": self.success,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If action_type or item data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            action_type=HistoryActionType(data["action_type"]),
            application=data.get("application"),
            items=tuple(HistoryItem.from_dict(item) for item in data["items"]),
            success=data.get("success", True),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "HistoryEntry":
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_history_entry(
    action_type: HistoryActionType,
    items: list[HistoryItem],
    application: str | None = None,
    success: bool = True,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Create a new HistoryEntry with a generated ID and current timestamp.

    Raises:
        ValueError: If items list is empty.
    """
    if not items:
        msg = "Cannot create history entry with no items"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        action_type=action_type,
        application=application,
        items=tuple(items),
        success=success,
        metadata=metadata or {},
    )
