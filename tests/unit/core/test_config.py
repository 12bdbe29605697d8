"""Unit tests for application configuration."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from appblock.core.config import (
    DEFAULT_RULE_PREFIX,
    AppBlockConfig,
    ConfigError,
    ConfigParseError,
    config_to_dict,
    load_config,
    save_config,
)


class TestAppBlockConfig:
    """Tests for AppBlockConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the standard naming convention."""
        config = AppBlockConfig()

        assert config.rule_prefix == DEFAULT_RULE_PREFIX == "AppBlocker Rule - "
        assert config.max_name_length == 220
        assert config.ellipsis == "..."
        assert config.default_extensions == ("*.exe",)
        assert config.workers == 1

    def test_frozen(self) -> None:
        """Configuration is immutable."""
        config = AppBlockConfig()

        with pytest.raises(ValidationError):
            config.workers = 4  # type: ignore[misc]

    @pytest.mark.parametrize("prefix", ["", "   ", "Rule *", "Rule?", "Rule [x]"])
    def test_invalid_prefix(self, prefix: str) -> None:
        """Blank prefixes and glob characters are rejected."""
        with pytest.raises(ValidationError):
            AppBlockConfig(rule_prefix=prefix)

    @pytest.mark.parametrize(
        "field_values",
        [
            {"max_name_length": 10},
            {"max_name_length": 241},
            {"workers": 0},
            {"workers": 33},
            {"command_timeout": 0},
            {"default_extensions": ()},
            {"ellipsis": "....."},
        ],
    )
    def test_out_of_range(self, field_values: dict[str, object]) -> None:
        """Values outside their bounds are rejected."""
        with pytest.raises(ValidationError):
            AppBlockConfig(**field_values)  # type: ignore[arg-type]

    def test_unknown_keys_forbidden(self) -> None:
        """Typos in the config file are reported."""
        with pytest.raises(ValidationError):
            AppBlockConfig.model_validate({"rule_prefx": "X - "})


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing file is not an error."""
        assert load_config(tmp_path / "missing.toml") == AppBlockConfig()

    def test_default_location(self) -> None:
        """Without a path the XDG config location is used."""
        assert load_config() == AppBlockConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file override defaults."""
        path = tmp_path / "config.toml"
        path.write_text(
            'rule_prefix = "Blocked - "\n'
            'default_extensions = ["*.exe", "*.dll"]\n'
            "workers = 4\n"
        )

        config = load_config(path)

        assert config.rule_prefix == "Blocked - "
        assert config.default_extensions == ("*.exe", "*.dll")
        assert config.workers == 4

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("workers = [")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("workers = 100\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = AppBlockConfig(workers=8, default_excluded_keywords=("crash", "setup"))
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_writes_plain_lists(self, tmp_path: Path) -> None:
        """Tuples are written as TOML arrays."""
        path = save_config(AppBlockConfig(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["default_extensions"] == ["*.exe"]

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Only the config file remains after saving."""
        save_config(AppBlockConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        """OS errors become ConfigError and clean up the temp file."""
        with (
            patch("appblock.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ConfigError, match="disk full"),
        ):
            save_config(AppBlockConfig(), tmp_path / "config.toml")

        assert list(tmp_path.iterdir()) == []

    def test_config_to_dict(self) -> None:
        """config_to_dict converts every tuple to a list."""
        data = config_to_dict(AppBlockConfig())

        assert data["default_extensions"] == ["*.exe"]
        assert data["default_excluded_files"] == []
