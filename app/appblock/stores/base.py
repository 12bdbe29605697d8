"""Abstract base class for firewall rule stores.

This module defines the RuleStore interface that every firewall backend
must implement. The store is treated as opaque: it can create a rule,
list rules by name or glob, and delete rules.
"""

import fnmatch
from abc import ABC, abstractmethod
from collections.abc import Sequence

from appblock.core.errors import AppBlockError
from appblock.models.rule import CreateStatus, RuleRecord, RuleSpec

_GLOB_CHARS = frozenset("*?[")


class StoreError(AppBlockError):
    """Raised when a rule store call fails.

    Attributes:
        failures: Individual failure messages when several operations of
            one batch failed.
    """

    def __init__(self, message: str, failures: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.failures = list(failures)


def is_pattern(name_or_pattern: str) -> bool:
    """Check if a query string contains glob characters."""
    return any(ch in _GLOB_CHARS for ch in name_or_pattern)


def matches(display_name: str, name_or_pattern: str, *, exact: bool = False) -> bool:
    """Match a display name against an exact name or a glob.

    Matching is case-sensitive so that "AppBlocker Rule - *" never picks
    up rules created by other tools with a differently cased prefix.
    With exact=True, glob characters are taken literally.
    """
    if not exact and is_pattern(name_or_pattern):
        return fnmatch.fnmatchcase(display_name, name_or_pattern)
    return display_name == name_or_pattern


class RuleStore(ABC):
    """Abstract base class for all firewall rule stores.

    Attributes:
        dry_run: If True, mutations are only simulated.

    Example:
        >>> store = NetshRuleStore()
        >>> if store.is_available():
        ...     for record in store.query_rules("AppBlocker Rule - *"):
        ...         print(record.display_name)
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the store.

        Args:
            dry_run: If True, only simulate create and delete calls.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if store is in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this firewall backend can be used on the system."""

    @abstractmethod
    def create_rule(self, spec: RuleSpec) -> CreateStatus:
        """Create a block rule.

        Args:
            spec: Rule to create.

        Returns:
            CREATED, or ALREADY_EXISTS if the backend reports a duplicate.

        Raises:
            StoreError: If the rule could not be created.
        """

    @abstractmethod
    def query_rules(self, name_or_pattern: str, *, exact: bool = False) -> list[RuleRecord]:
        """List rules by exact display name or glob pattern.

        Args:
            name_or_pattern: Exact name, or a glob using *, ? or [.
            exact: If True, treat name_or_pattern literally even when it
                contains glob characters.

        Returns:
            Matching rules (empty if none).

        Raises:
            StoreError: If the store could not be queried.
        """

    @abstractmethod
    def delete_rules(self, records: Sequence[RuleRecord]) -> None:
        """Delete rules as one batch.

        Every record is attempted; failures are collected and reported
        together.

        Args:
            records: Rules to delete.

        Raises:
            StoreError: If any deletion failed.
        """

    def rule_exists(self, display_name: str) -> bool:
        """Check if a rule with exactly this display name exists.

        Raises:
            StoreError: If the store could not be queried.
        """
        records = self.query_rules(display_name, exact=True)
        return any(r.display_name == display_name for r in records)
