"""Application configuration.

This module provides the configuration model and I/O functions for
appblock. The configuration is a single immutable value built at startup
and handed to every component that needs it (rule prefix, naming limits,
default scan settings, worker count, command timeouts).

Configuration is stored in ~/.config/appblock/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from appblock.core.errors import AppBlockError
from appblock.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_RULE_PREFIX = "AppBlocker Rule - "
DEFAULT_MAX_NAME_LENGTH = 220
DEFAULT_ELLIPSIS = "..."


class AppBlockConfig(BaseModel):
    """Process-wide settings for appblock.

    Attributes:
        rule_prefix: Literal prefix marking every rule owned by appblock.
        max_name_length: Cap applied to the base rule name before the
            direction suffix is appended.
        ellipsis: Marker appended to truncated base names.
        default_extensions: Globs scanned when none are given explicitly.
        default_excluded_keywords: Keywords excluded when none are given.
        default_excluded_files: File names excluded when none are given.
        workers: Number of files processed concurrently during blocking.
        command_timeout: Seconds to wait for a single firewall command.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rule_prefix: Annotated[
        str,
        Field(min_length=1, description="Prefix marking rules owned by appblock"),
    ] = DEFAULT_RULE_PREFIX
    max_name_length: Annotated[
        int,
        Field(ge=32, le=240, description="Base rule name length cap"),
    ] = DEFAULT_MAX_NAME_LENGTH
    ellipsis: Annotated[
        str,
        Field(max_length=4, description="Marker appended to truncated names"),
    ] = DEFAULT_ELLIPSIS
    default_extensions: Annotated[
        tuple[str, ...],
        Field(min_length=1, description="Extension globs scanned by default"),
    ] = ("*.exe",)
    default_excluded_keywords: tuple[str, ...] = ()
    default_excluded_files: tuple[str, ...] = ()
    workers: Annotated[
        int,
        Field(ge=1, le=32, description="Concurrent files while blocking (1-32)"),
    ] = 1
    command_timeout: Annotated[
        float,
        Field(gt=0, le=600, description="Timeout in seconds per firewall command"),
    ] = 30.0

    @field_validator("rule_prefix")
    @classmethod
    def validate_rule_prefix(cls, v: str) -> str:
        """Reject prefixes that would break rule name recovery."""
        if not v.strip():
            msg = "rule_prefix cannot be blank"
            raise ValueError(msg)
        if any(ch in v for ch in "*?["):
            msg = "rule_prefix cannot contain glob characters (*, ?, [)"
            raise ValueError(msg)
        return v


class ConfigError(AppBlockError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AppBlockConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated AppBlockConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return AppBlockConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AppBlockConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: AppBlockConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AppBlockConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: AppBlockConfig) -> dict[str, object]:
    """Convert AppBlockConfig to a TOML-serializable dictionary.

    Tuples are written as plain lists.
    """
    data = config.model_dump()
    return {key: list(value) if isinstance(value, tuple) else value for key, value in data.items()}
