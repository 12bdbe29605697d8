"""Firewall rule models.

This module defines the rules appblock asks the store to create
(RuleSpec) and the read-only view of rules already present in the
store (RuleRecord).
"""

from dataclasses import dataclass
from enum import Enum

# Display names longer than this are rejected by the firewall store.
MAX_DISPLAY_NAME_LENGTH = 255


class Direction(str, Enum):
    """Traffic direction a rule applies to.

    Attributes:
        INBOUND: Incoming connections.
        OUTBOUND: Outgoing connections.
    """

    INBOUND = "Inbound"
    OUTBOUND = "Outbound"

    @property
    def netsh_value(self) -> str:
        """Value used for the netsh ``dir=`` argument."""
        return "in" if self == Direction.INBOUND else "out"

    @classmethod
    def from_netsh(cls, value: str) -> "Direction":
        """Parse the ``Direction:`` field printed by ``netsh show rule``.

        Raises:
            ValueError: If the value is not a known direction.
        """
        normalized = value.strip().lower()
        if normalized in ("in", "inbound"):
            return cls.INBOUND
        if normalized in ("out", "outbound"):
            return cls.OUTBOUND
        msg = f"Unknown rule direction: {value!r}"
        raise ValueError(msg)


class RuleAction(str, Enum):
    """Action taken on matching traffic."""

    BLOCK = "block"


class RuleProfile(str, Enum):
    """Firewall profiles a rule is active in."""

    ANY = "any"


class CreateStatus(str, Enum):
    """Outcome of a successful create request.

    Attributes:
        CREATED: The store created a new rule.
        ALREADY_EXISTS: A rule with the same display name was present.
    """

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """A block rule to be created in the store.

    Attributes:
        display_name: Unique rule name, also the only ownership marker.
        direction: Inbound or outbound.
        program_path: Executable the rule applies to.
        action: Always BLOCK.
        profile: Always ANY.
    """

    display_name: str
    direction: Direction
    program_path: str
    action: RuleAction = RuleAction.BLOCK
    profile: RuleProfile = RuleProfile.ANY

    def __post_init__(self) -> None:
        """Validate rule data after initialization."""
        if not self.display_name:
            msg = "Rule display name cannot be empty"
            raise ValueError(msg)
        if len(self.display_name) > MAX_DISPLAY_NAME_LENGTH:
            msg = (
                f"Rule display name exceeds {MAX_DISPLAY_NAME_LENGTH} characters "
                f"({len(self.display_name)})"
            )
            raise ValueError(msg)
        if not self.program_path:
            msg = "Rule program path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RuleRecord:
    """A rule that already exists in the store.

    Records are only observed and deleted, never modified.

    Attributes:
        display_name: Rule name as reported by the store.
        program_path: Program the rule applies to (None if not program-scoped).
        direction: Inbound or outbound.
    """

    display_name: str
    program_path: str | None
    direction: Direction
