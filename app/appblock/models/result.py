"""Result models for blocking operations.

This module defines the per-rule, per-file and aggregate outcomes
reported by RuleManager.apply().
"""

from dataclasses import dataclass

from appblock.models.application import FileCandidate, SkippedCandidate
from appblock.models.rule import CreateStatus, RuleSpec


@dataclass(frozen=True, slots=True)
class RuleOutcome:
    """Outcome of ensuring a single rule exists.

    Attributes:
        spec: The rule that was requested.
        status: CREATED or ALREADY_EXISTS on success, None on failure.
        error: Error message if the store call failed, None otherwise.
    """

    spec: RuleSpec
    status: CreateStatus | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the rule is now present (created or pre-existing)."""
        return self.error is None and self.status is not None

    @property
    def created(self) -> bool:
        """Check if the store was mutated for this rule."""
        return self.status == CreateStatus.CREATED


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Outcome of blocking one file in both directions.

    The directional pair is the unit of success: a file only counts as
    blocked when both of its rules succeeded.

    Attributes:
        candidate: The file that was processed.
        inbound: Outcome of the inbound rule.
        outbound: Outcome of the outbound rule.
    """

    candidate: FileCandidate
    inbound: RuleOutcome
    outbound: RuleOutcome

    @property
    def success(self) -> bool:
        """Check if both directional rules succeeded."""
        return self.inbound.success and self.outbound.success

    @property
    def errors(self) -> list[str]:
        """Error messages of the failed directions."""
        return [
            f"{o.spec.direction.value}: {o.error}"
            for o in (self.inbound, self.outbound)
            if o.error is not None
        ]


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Aggregate result of RuleManager.apply().

    Attributes:
        application: Name of the application that was processed.
        outcomes: One FileOutcome per retained file, in scan order.
        skipped: Candidates removed by exclusion filtering.
    """

    application: str
    outcomes: tuple[FileOutcome, ...] = ()
    skipped: tuple[SkippedCandidate, ...] = ()

    @property
    def created_pairs(self) -> int:
        """Number of files whose inbound and outbound rules both succeeded."""
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed_files(self) -> int:
        """Number of files with at least one failed rule."""
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def skipped_files(self) -> int:
        """Number of files excluded before any store call."""
        return len(self.skipped)

    @property
    def failures(self) -> list[FileOutcome]:
        """File outcomes that did not fully succeed."""
        return [o for o in self.outcomes if not o.success]

    @property
    def new_rules(self) -> list[RuleSpec]:
        """Rules that were actually created by this run."""
        return [
            rule.spec
            for o in self.outcomes
            for rule in (o.inbound, o.outbound)
            if rule.created
        ]
