"""Rule naming convention.

Rule display names are the only place where appblock records which
application a firewall rule belongs to. This module owns both directions
of that convention:

    <prefix><application> - <file name> (<Inbound|Outbound>)

The ``<prefix><application> - <file name>`` part is capped at
``max_length`` characters (then suffixed with the ellipsis) before the
direction is appended.

Application names containing " - " cannot be recovered exactly: the
application is read up to the first separator.

The same holds for truncation. While the cap falls inside the file name,
the application stays recoverable. An application name long enough for
the cap to cut into it loses the separator, so its rules parse as
non-conforming and are grouped under the unknown application. Removing
such rules by application name then finds nothing; they are only
reachable through the unknown group or a full removal.
"""

import re

from appblock.core.config import AppBlockConfig
from appblock.models.rule import Direction

SEPARATOR = " - "


class RuleNamer:
    """Builds and parses appblock rule display names.

    Args:
        prefix: Literal marking rules owned by appblock.
        max_length: Cap for the base name before the direction suffix.
        ellipsis: Marker appended when the base name is truncated.
    """

    def __init__(self, prefix: str, max_length: int = 220, ellipsis: str = "...") -> None:
        if not prefix:
            msg = "Rule prefix cannot be empty"
            raise ValueError(msg)
        self._prefix = prefix
        self._max_length = max_length
        self._ellipsis = ellipsis
        directions = "|".join(re.escape(d.value) for d in Direction)
        self._pattern = re.compile(
            rf"^{re.escape(prefix)}(?P<app>.+?){re.escape(SEPARATOR)}.+ \((?:{directions})\)$",
            re.DOTALL,
        )

    @classmethod
    def from_config(cls, config: AppBlockConfig) -> "RuleNamer":
        """Create a namer from the application configuration."""
        return cls(config.rule_prefix, config.max_name_length, config.ellipsis)

    @property
    def prefix(self) -> str:
        """Literal prefix of every owned rule."""
        return self._prefix

    @property
    def owned_pattern(self) -> str:
        """Glob matching every rule owned by appblock."""
        return f"{self._prefix}*"

    def base_name(self, application: str, file_name: str) -> str:
        """Build the direction-less part of a rule name, truncated if needed."""
        base = f"{self._prefix}{application}{SEPARATOR}{file_name}"
        if len(base) > self._max_length:
            return base[: self._max_length] + self._ellipsis
        return base

    def name(self, application: str, file_name: str, direction: Direction) -> str:
        """Build the full display name for one direction.

        Args:
            application: Application name.
            file_name: Base name of the blocked file.
            direction: Inbound or outbound.

        Returns:
            Display name such as "AppBlocker Rule - MyApp - tool.exe (Inbound)".
        """
        return f"{self.base_name(application, file_name)} ({direction.value})"

    def application_of(self, display_name: str) -> str | None:
        """Recover the application name from a display name.

        Returns:
            The application name, or None if display_name does not follow
            the naming convention.
        """
        match = self._pattern.match(display_name)
        if match is None:
            return None
        return match.group("app")

    def is_owned(self, display_name: str) -> bool:
        """Check if a display name carries the appblock prefix."""
        return display_name.startswith(self._prefix)
