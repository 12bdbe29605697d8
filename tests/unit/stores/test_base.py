"""Unit tests for the RuleStore base class and matching helpers."""

import pytest
from fakes import InMemoryRuleStore

from appblock.stores.base import RuleStore, StoreError, is_pattern, matches


class TestMatching:
    """Tests for is_pattern and matches."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("AppBlocker Rule - *", True),
            ("rule?", True),
            ("App[1]", True),
            ("AppBlocker Rule - Foo - a.exe (Inbound)", False),
        ],
    )
    def test_is_pattern(self, value: str, expected: bool) -> None:
        """Glob characters are detected."""
        assert is_pattern(value) is expected

    def test_glob_match(self) -> None:
        """Globs match by prefix."""
        assert matches("AppBlocker Rule - Foo - a.exe (Inbound)", "AppBlocker Rule - *")

    def test_glob_is_case_sensitive(self) -> None:
        """Differently cased prefixes don't match."""
        assert not matches("appblocker rule - Foo", "AppBlocker Rule - *")

    def test_exact_match(self) -> None:
        """Plain names must match exactly."""
        assert matches("Rule A", "Rule A")
        assert not matches("Rule AB", "Rule A")

    def test_exact_flag_disables_globbing(self) -> None:
        """With exact=True glob characters are literal."""
        name = "AppBlocker Rule - App[1] - a.exe (Inbound)"

        assert matches(name, name, exact=True)
        assert not matches("AppBlocker Rule - App1 - a.exe (Inbound)", name, exact=True)


class TestRuleStore:
    """Tests for RuleStore base behavior."""

    def test_cannot_instantiate_abstract(self) -> None:
        """RuleStore is abstract."""
        with pytest.raises(TypeError):
            RuleStore()  # type: ignore[abstract]

    def test_dry_run_property(self, store: InMemoryRuleStore, dry_run_store) -> None:
        """dry_run reflects the constructor argument."""
        assert store.dry_run is False
        assert dry_run_store.dry_run is True

    def test_rule_exists(self, store: InMemoryRuleStore) -> None:
        """rule_exists checks for an exact display name."""
        store.add("AppBlocker Rule - Foo - a.exe (Inbound)")

        assert store.rule_exists("AppBlocker Rule - Foo - a.exe (Inbound)") is True
        assert store.rule_exists("AppBlocker Rule - Foo - a.exe (Outbound)") is False

    def test_rule_exists_with_glob_characters(self, store: InMemoryRuleStore) -> None:
        """Names containing glob characters are not treated as patterns."""
        store.add("AppBlocker Rule - Foo - a.exe (Inbound)")

        assert store.rule_exists("AppBlocker Rule - * (Inbound)") is False


class TestStoreError:
    """Tests for StoreError."""

    def test_failures_default_empty(self) -> None:
        """A single failure carries no batch details."""
        assert StoreError("boom").failures == []

    def test_failures_are_kept(self) -> None:
        """Batch failures are exposed as a list."""
        error = StoreError("Failed to delete 2 of 3 rules", ("a: denied", "b: denied"))

        assert str(error) == "Failed to delete 2 of 3 rules"
        assert error.failures == ["a: denied", "b: denied"]
