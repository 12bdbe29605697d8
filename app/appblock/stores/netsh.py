"""Windows Firewall rule store backed by netsh.

Creates, lists and deletes rules with ``netsh advfirewall firewall``.
Requires an elevated prompt for create and delete.
"""

import logging
import subprocess
from collections.abc import Sequence

from appblock.models.rule import CreateStatus, Direction, RuleRecord, RuleSpec
from appblock.stores.base import RuleStore, StoreError, is_pattern, matches
from appblock.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# Printed (with exit code 1) when a name query matches nothing.
_NO_MATCH_MARKER = "No rules match the specified criteria"


class NetshRuleStore(RuleStore):
    """Rule store for the Windows Defender Firewall.

    Exact-name queries ask netsh for that rule only; glob queries list
    every rule and filter the names locally.

    Attributes:
        dry_run: If True, create and delete calls are logged, not executed.
    """

    _NETSH = "netsh"

    def __init__(self, dry_run: bool = False, timeout: float = 30.0) -> None:
        """Initialize the store.

        Args:
            dry_run: If True, only simulate create and delete calls.
            timeout: Seconds to wait for each netsh invocation.
        """
        super().__init__(dry_run)
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if netsh is available."""
        return command_exists(self._NETSH)

    def create_rule(self, spec: RuleSpec) -> CreateStatus:
        """Create a block rule with ``netsh advfirewall firewall add rule``.

        netsh accepts duplicate names, so this always reports CREATED on
        success; duplicate detection is the caller's exact-name query.

        Raises:
            StoreError: If netsh fails.
        """
        args = [
            self._NETSH,
            "advfirewall",
            "firewall",
            "add",
            "rule",
            f"name={spec.display_name}",
            f"dir={spec.direction.netsh_value}",
            f"action={spec.action.value}",
            f"program={spec.program_path}",
            f"profile={spec.profile.value}",
            "enable=yes",
        ]

        if self.dry_run:
            logger.info("Dry-run: would create rule %s", spec.display_name)
            return CreateStatus.CREATED

        logger.info("Creating rule %s for %s", spec.display_name, spec.program_path)
        result = self._run(args)
        if not result.success:
            msg = f"Failed to create rule '{spec.display_name}': {result.output or 'netsh failed'}"
            raise StoreError(msg)

        return CreateStatus.CREATED

    def query_rules(self, name_or_pattern: str, *, exact: bool = False) -> list[RuleRecord]:
        """List rules with ``netsh advfirewall firewall show rule``.

        Raises:
            StoreError: If netsh fails for any reason other than no match.
        """
        use_glob = not exact and is_pattern(name_or_pattern)
        name_arg = "all" if use_glob else name_or_pattern

        result = self._run(
            [self._NETSH, "advfirewall", "firewall", "show", "rule", f"name={name_arg}", "verbose"]
        )

        if not result.success:
            if _NO_MATCH_MARKER in result.stdout:
                return []
            msg = f"Failed to query rules '{name_or_pattern}': {result.output or 'netsh failed'}"
            raise StoreError(msg)

        records = parse_show_rule_output(result.stdout)
        return [r for r in records if matches(r.display_name, name_or_pattern, exact=exact)]

    def delete_rules(self, records: Sequence[RuleRecord]) -> None:
        """Delete rules one by one with ``netsh advfirewall firewall delete rule``.

        netsh deletes every rule sharing a name and direction at once, so
        each (name, direction) pair is deleted a single time.

        Raises:
            StoreError: If any deletion failed, listing every failure.
        """
        unique: dict[tuple[str, Direction], RuleRecord] = {}
        for record in records:
            unique.setdefault((record.display_name, record.direction), record)

        if not unique:
            return

        failures: list[str] = []
        for name, direction in unique:
            if self.dry_run:
                logger.info("Dry-run: would delete rule %s (%s)", name, direction.value)
                continue

            args = [
                self._NETSH,
                "advfirewall",
                "firewall",
                "delete",
                "rule",
                f"name={name}",
                f"dir={direction.netsh_value}",
            ]
            try:
                result = self._run(args)
            except StoreError as e:
                failures.append(f"{name}: {e}")
                continue

            if result.success:
                logger.info("Deleted rule %s", name)
            else:
                logger.warning("Failed to delete rule %s: %s", name, result.output)
                failures.append(f"{name}: {result.output or 'netsh failed'}")

        if failures:
            msg = f"Failed to delete {len(failures)} of {len(unique)} rules"
            raise StoreError(msg, failures)

    def _run(self, args: list[str]) -> CommandResult:
        """Run netsh, converting launch failures into StoreError.

        Raises:
            StoreError: If netsh is missing, cannot start, or times out.
        """
        logger.debug("Executing: %s", " ".join(args))
        try:
            return run_command(args, timeout=self._timeout)
        except FileNotFoundError as e:
            msg = "netsh is not available on this system"
            raise StoreError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"netsh timed out after {self._timeout:.0f}s"
            raise StoreError(msg) from e
        except OSError as e:
            msg = f"Failed to run netsh: {e}"
            raise StoreError(msg) from e


def parse_show_rule_output(output: str) -> list[RuleRecord]:
    """Parse ``netsh advfirewall firewall show rule ... verbose`` output.

    Each rule is a block of ``Key: Value`` lines starting with
    ``Rule Name:``. Rules without a recognizable direction are skipped.

    Args:
        output: Raw stdout from netsh.

    Returns:
        Parsed rule records in output order.
    """
    blocks: list[dict[str, str]] = []
    current: dict[str, str] | None = None

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("---"):
            continue

        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        if key == "Rule Name":
            current = {"Rule Name": value}
            blocks.append(current)
        elif current is not None:
            current.setdefault(key, value)

    records: list[RuleRecord] = []
    for block in blocks:
        name = block["Rule Name"]
        try:
            direction = Direction.from_netsh(block.get("Direction", ""))
        except ValueError:
            logger.debug("Skipping rule without direction: %r", name)
            continue

        program = block.get("Program") or None
        records.append(RuleRecord(display_name=name, program_path=program, direction=direction))

    return records
