"""Unit tests for history command."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from appblock.cli.main import app
from appblock.models.history import HistoryActionType, HistoryEntry, HistoryItem
from appblock.models.rule import Direction

runner = CliRunner()


@pytest.fixture
def sample_history_entries() -> list[HistoryEntry]:
    """Create sample history entries for testing."""
    return [
        HistoryEntry(
            id="abc123456789",
            timestamp="2026-01-26T14:30:00+00:00",
            action_type=HistoryActionType.BLOCK,
            application="MyGame",
            items=(
                HistoryItem(
                    name="AppBlocker Rule - MyGame - a.exe (Inbound)",
                    direction=Direction.INBOUND,
                ),
                HistoryItem(
                    name="AppBlocker Rule - MyGame - a.exe (Outbound)",
                    direction=Direction.OUTBOUND,
                ),
            ),
        ),
        HistoryEntry(
            id="def678901234",
            timestamp="2026-01-26T14:25:00+00:00",
            action_type=HistoryActionType.REMOVE_ALL,
            application=None,
            items=(HistoryItem(name="AppBlocker Rule - garbage", direction=Direction.INBOUND),),
            success=False,
        ),
    ]


class TestHistoryCommand:
    """Tests for appblock history command."""

    def test_history_help(self) -> None:
        """History command shows help."""
        result = runner.invoke(app, ["history", "--help"])

        assert result.exit_code == 0
        assert "--limit" in result.stdout
        assert "--json" in result.stdout

    def test_history_empty(self) -> None:
        """History shows message when no entries exist."""
        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "No history entries found" in result.stdout

    def test_history_table(self, sample_history_entries: list[HistoryEntry]) -> None:
        """History shows entries in table format."""
        with patch("appblock.cli.commands.history.StateManager") as mock_state:
            mock_state.return_value.get_history.return_value = sample_history_entries

            result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "Rule History" in result.stdout
        assert "abc12345" in result.stdout
        assert "remove_all" in result.stdout
        assert "MyGame" in result.stdout
        assert "2026-01-26 14:30" in result.stdout

    def test_history_limit(self, sample_history_entries: list[HistoryEntry]) -> None:
        """--limit is passed to the state manager."""
        with patch("appblock.cli.commands.history.StateManager") as mock_state:
            mock_state.return_value.get_history.return_value = sample_history_entries[:1]

            result = runner.invoke(app, ["history", "-n", "1"])

        assert result.exit_code == 0
        mock_state.return_value.get_history.assert_called_once_with(limit=1)

    def test_history_application_filter(self, sample_history_entries: list[HistoryEntry]) -> None:
        """--app keeps only entries for that application."""
        with patch("appblock.cli.commands.history.StateManager") as mock_state:
            mock_state.return_value.get_history.return_value = sample_history_entries

            result = runner.invoke(app, ["history", "--app", "MyGame", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [e["id"] for e in data] == ["abc123456789"]

    def test_history_json(self, sample_history_entries: list[HistoryEntry]) -> None:
        """--json outputs valid JSON."""
        with patch("appblock.cli.commands.history.StateManager") as mock_state:
            mock_state.return_value.get_history.return_value = sample_history_entries

            result = runner.invoke(app, ["history", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data) == 2
        assert data[1]["success"] is False
        assert data[0]["items"][0]["direction"] == "Inbound"
