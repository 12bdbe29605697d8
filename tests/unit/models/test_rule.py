"""Unit tests for rule models."""

import pytest

from appblock.models.rule import (
    MAX_DISPLAY_NAME_LENGTH,
    Direction,
    RuleAction,
    RuleProfile,
    RuleSpec,
)


class TestDirection:
    """Tests for Direction enum."""

    def test_netsh_values(self) -> None:
        """Directions map to netsh's dir= values."""
        assert Direction.INBOUND.netsh_value == "in"
        assert Direction.OUTBOUND.netsh_value == "out"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("In", Direction.INBOUND),
            ("inbound", Direction.INBOUND),
            (" Out ", Direction.OUTBOUND),
            ("OUTBOUND", Direction.OUTBOUND),
        ],
    )
    def test_from_netsh(self, value: str, expected: Direction) -> None:
        """netsh output is parsed case-insensitively."""
        assert Direction.from_netsh(value) == expected

    def test_from_netsh_unknown(self) -> None:
        """Unknown values raise ValueError."""
        with pytest.raises(ValueError, match="Unknown rule direction"):
            Direction.from_netsh("Both")


class TestRuleSpec:
    """Tests for RuleSpec dataclass."""

    def test_defaults(self) -> None:
        """Rules always block on every profile."""
        spec = RuleSpec("Rule (Inbound)", Direction.INBOUND, "C:/a.exe")

        assert spec.action == RuleAction.BLOCK
        assert spec.profile == RuleProfile.ANY

    def test_empty_name(self) -> None:
        """A display name is required."""
        with pytest.raises(ValueError, match="display name"):
            RuleSpec("", Direction.INBOUND, "C:/a.exe")

    def test_name_too_long(self) -> None:
        """Names beyond the store limit are rejected."""
        with pytest.raises(ValueError, match="exceeds"):
            RuleSpec("x" * (MAX_DISPLAY_NAME_LENGTH + 1), Direction.INBOUND, "C:/a.exe")

    def test_empty_program(self) -> None:
        """A program path is required."""
        with pytest.raises(ValueError, match="program path"):
            RuleSpec("Rule (Inbound)", Direction.INBOUND, "")
