"""Unit tests for RuleGrouper."""

import pytest
from fakes import InMemoryRuleStore

from appblock.models.rule import Direction
from appblock.rules.grouping import UNKNOWN_APPLICATION, RuleGrouper
from appblock.rules.naming import RuleNamer
from appblock.stores.base import StoreError


@pytest.fixture
def grouper(store: InMemoryRuleStore, namer: RuleNamer) -> RuleGrouper:
    """Create RuleGrouper on the in-memory store."""
    return RuleGrouper(store, namer)


@pytest.fixture
def populated(store: InMemoryRuleStore, namer: RuleNamer) -> InMemoryRuleStore:
    """Store with two applications, a malformed owned rule and a foreign rule."""
    for app, file_name in (("Foo", "a.exe"), ("Foo", "b.exe"), ("Bar", "c.exe")):
        for direction in Direction:
            store.add(namer.name(app, file_name, direction), direction)
    store.add("AppBlocker Rule - garbage")
    store.add("Core Networking - DNS (UDP-Out)", Direction.OUTBOUND)
    return store


class TestRuleGrouperListing:
    """Tests for listing and grouping."""

    def test_lists_only_owned_rules(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Rules without the prefix are never listed."""
        records = grouper.list_owned_rules()

        assert len(records) == 7
        assert all(r.display_name.startswith("AppBlocker Rule - ") for r in records)

    def test_groups_by_application(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Every owned rule lands in exactly one group."""
        records = grouper.list_owned_rules()

        groups = grouper.group_by_application(records)

        assert list(groups) == ["Foo", "Bar", UNKNOWN_APPLICATION]
        assert len(groups["Foo"]) == 4
        assert len(groups["Bar"]) == 2
        assert [r.display_name for r in groups[UNKNOWN_APPLICATION]] == [
            "AppBlocker Rule - garbage"
        ]
        assert sum(len(g) for g in groups.values()) == len(records)

    def test_empty_store(self, grouper: RuleGrouper) -> None:
        """No rules means no groups."""
        assert grouper.group_by_application(grouper.list_owned_rules()) == {}

    def test_records_for_application(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Selection matches the group of the same name."""
        records = grouper.list_owned_rules()

        selected = grouper.records_for_application(records, "Bar")

        assert selected == grouper.group_by_application(records)["Bar"]

    def test_application_names_are_case_sensitive(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """'foo' and 'Foo' are different applications."""
        assert grouper.records_for_application(grouper.list_owned_rules(), "foo") == []

    def test_query_failure_propagates(
        self, grouper: RuleGrouper, store: InMemoryRuleStore
    ) -> None:
        """Store errors abort the listing."""
        store.fail_query = True

        with pytest.raises(StoreError):
            grouper.list_owned_rules()


class TestRuleGrouperRemoval:
    """Tests for removing rules."""

    def test_remove_all(self, grouper: RuleGrouper, populated: InMemoryRuleStore) -> None:
        """remove_all deletes every owned rule in a single batch."""
        grouper.remove_all(grouper.list_owned_rules())

        assert len(populated.delete_calls) == 1
        assert grouper.list_owned_rules() == []
        assert [r.display_name for r in populated.rules] == ["Core Networking - DNS (UDP-Out)"]

    def test_remove_all_empty_is_noop(
        self, grouper: RuleGrouper, store: InMemoryRuleStore
    ) -> None:
        """Nothing to remove means no store call."""
        grouper.remove_all([])

        assert store.delete_calls == []

    def test_remove_for_application(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Only the selected application's rules are removed."""
        removed = grouper.remove_for_application(grouper.list_owned_rules(), "Foo")

        assert len(removed) == 4
        remaining = grouper.group_by_application(grouper.list_owned_rules())
        assert "Foo" not in remaining
        assert len(remaining["Bar"]) == 2
        assert UNKNOWN_APPLICATION in remaining

    def test_truncated_application_only_in_unknown_group(
        self, grouper: RuleGrouper, store: InMemoryRuleStore, namer: RuleNamer
    ) -> None:
        """Rules whose application was cut by the cap are reachable via the unknown group."""
        long_name = "A" * 210
        for direction in Direction:
            store.add(namer.name(long_name, "game.exe", direction), direction)
        records = grouper.list_owned_rules()

        assert grouper.remove_for_application(records, long_name) == []
        assert len(grouper.group_by_application(records)[UNKNOWN_APPLICATION]) == 2

    def test_remove_unknown_group(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Malformed owned rules can be removed through the unknown group."""
        removed = grouper.remove_for_application(grouper.list_owned_rules(), UNKNOWN_APPLICATION)

        assert [r.display_name for r in removed] == ["AppBlocker Rule - garbage"]

    def test_remove_missing_application(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore
    ) -> None:
        """Removing an application without rules makes no store call."""
        removed = grouper.remove_for_application(grouper.list_owned_rules(), "Baz")

        assert removed == []
        assert populated.delete_calls == []

    def test_remove_failure_reports_every_failure(
        self, grouper: RuleGrouper, populated: InMemoryRuleStore, namer: RuleNamer
    ) -> None:
        """A partial batch failure raises with one message per failed rule."""
        populated.fail_delete.add(namer.name("Foo", "a.exe", Direction.INBOUND))
        populated.fail_delete.add(namer.name("Foo", "b.exe", Direction.OUTBOUND))

        with pytest.raises(StoreError) as exc_info:
            grouper.remove_for_application(grouper.list_owned_rules(), "Foo")

        assert len(exc_info.value.failures) == 2
        assert len(grouper.records_for_application(grouper.list_owned_rules(), "Foo")) == 2
