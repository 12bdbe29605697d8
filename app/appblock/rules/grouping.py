"""Discovery, grouping and removal of rules created by appblock.

The firewall has no notion of which application a rule belongs to, so
ownership is recovered from display names through RuleNamer. Every owned
rule is assigned to exactly one group; names that don't follow the
convention fall into UNKNOWN_APPLICATION instead of being dropped.
"""

import logging
from collections.abc import Iterable, Sequence

from appblock.models.rule import RuleRecord
from appblock.rules.naming import RuleNamer
from appblock.stores.base import RuleStore

logger = logging.getLogger(__name__)

UNKNOWN_APPLICATION = "Unknown Application"


class RuleGrouper:
    """Lists, groups and removes rules owned by appblock.

    Store errors are not caught here: a failed query or delete aborts
    the listing or removal it belongs to.

    Args:
        store: Firewall backend.
        namer: Rule naming convention used to recover application names.
    """

    def __init__(self, store: RuleStore, namer: RuleNamer) -> None:
        self._store = store
        self._namer = namer

    def list_owned_rules(self) -> list[RuleRecord]:
        """Query the store for every rule carrying the appblock prefix.

        Raises:
            StoreError: If the store could not be queried.
        """
        records = self._store.query_rules(self._namer.owned_pattern)
        logger.debug("Found %d owned rules", len(records))
        return records

    def application_of(self, record: RuleRecord) -> str:
        """Application group a record belongs to."""
        return self._namer.application_of(record.display_name) or UNKNOWN_APPLICATION

    def group_by_application(
        self,
        records: Iterable[RuleRecord],
    ) -> dict[str, list[RuleRecord]]:
        """Group records by recovered application name.

        Groups appear in first-seen order; records keep their input order.

        Returns:
            Mapping of application name to its records.
        """
        groups: dict[str, list[RuleRecord]] = {}
        for record in records:
            groups.setdefault(self.application_of(record), []).append(record)
        return groups

    def records_for_application(
        self,
        records: Iterable[RuleRecord],
        application: str,
    ) -> list[RuleRecord]:
        """Select the records group_by_application() would put under application."""
        return [r for r in records if self.application_of(r) == application]

    def remove_all(self, records: Sequence[RuleRecord]) -> None:
        """Delete records as a single batch.

        Raises:
            StoreError: If any deletion failed.
        """
        if not records:
            return
        logger.info("Removing %d rules", len(records))
        self._store.delete_rules(records)

    def remove_for_application(
        self,
        records: Sequence[RuleRecord],
        application: str,
    ) -> list[RuleRecord]:
        """Delete the records belonging to one application as a single batch.

        Removing an application's rules before applying it again is how
        rules are replaced; there is no in-place update.

        Returns:
            The records that were removed (empty if none matched).

        Raises:
            StoreError: If any deletion failed.
        """
        selected = self.records_for_application(records, application)
        if not selected:
            logger.info("No rules found for application %s", application)
            return []

        logger.info("Removing %d rules for application %s", len(selected), application)
        self._store.delete_rules(selected)
        return selected
