"""Rule creation for an application.

RuleManager turns an Application into firewall rules: it scans the root
directory, drops excluded files, and ensures an inbound and an outbound
block rule exist for every remaining file. Store failures are recorded
per file and never abort the run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from appblock.filesystem.exclusion import ExclusionFilter
from appblock.filesystem.scanner import FileScanner, validate_root
from appblock.models.application import Application, FileCandidate
from appblock.models.result import ApplyResult, FileOutcome, RuleOutcome
from appblock.models.rule import CreateStatus, Direction, RuleSpec
from appblock.rules.naming import RuleNamer
from appblock.stores.base import RuleStore, StoreError

logger = logging.getLogger(__name__)


class RuleManager:
    """Creates block rules for every retained file of an application.

    Creation is idempotent: a rule whose display name already exists is
    counted as a success without calling create. A file is reported as
    blocked only when both its inbound and outbound rules succeeded.

    Args:
        store: Firewall backend.
        namer: Rule naming convention.
        scanner: File scanner (a default FileScanner if omitted).
        workers: Number of files processed concurrently. 1 means strictly
            sequential, in scan order.

    Example:
        >>> manager = RuleManager(NetshRuleStore(), RuleNamer("AppBlocker Rule - "))
        >>> result = manager.apply(Application(name="Foo", root_path=Path("C:/Foo")))
        >>> print(result.created_pairs, result.failed_files)
    """

    def __init__(
        self,
        store: RuleStore,
        namer: RuleNamer,
        *,
        scanner: FileScanner | None = None,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)
        self._store = store
        self._namer = namer
        self._scanner = scanner if scanner is not None else FileScanner()
        self._workers = workers

    def build_spec(
        self,
        application: str,
        candidate: FileCandidate,
        direction: Direction,
    ) -> RuleSpec:
        """Build the rule blocking one file in one direction."""
        return RuleSpec(
            display_name=self._namer.name(application, candidate.file_name, direction),
            direction=direction,
            program_path=candidate.full_path,
        )

    def apply(self, application: Application) -> ApplyResult:
        """Block every retained file of an application.

        Args:
            application: What to block and what to leave alone.

        Returns:
            ApplyResult with per-file outcomes and skipped files.

        Raises:
            InvalidPathError: If the root path is missing or not a directory.
            ScanError: If the root directory cannot be enumerated.
        """
        root = validate_root(application.root_path)

        candidates = list(self._scanner.scan(root, application.extensions))
        exclusion = ExclusionFilter(application.excluded_files, application.excluded_keywords)
        to_block, to_skip = exclusion.partition(candidates)

        for skipped in to_skip:
            logger.info("Skipping %s: %s", skipped.candidate.full_path, skipped.description)

        logger.info(
            "Application %s: %d files to block, %d skipped",
            application.name,
            len(to_block),
            len(to_skip),
        )

        if not to_block:
            return ApplyResult(application=application.name, skipped=tuple(to_skip))

        if self._workers == 1 or len(to_block) == 1:
            outcomes = [self._process_file(application.name, c) for c in to_block]
        else:
            outcomes = self._process_parallel(application.name, to_block)

        result = ApplyResult(
            application=application.name,
            outcomes=tuple(outcomes),
            skipped=tuple(to_skip),
        )
        logger.info(
            "Application %s: %d blocked, %d failed, %d skipped",
            application.name,
            result.created_pairs,
            result.failed_files,
            result.skipped_files,
        )
        return result

    def _process_parallel(
        self,
        application: str,
        candidates: list[FileCandidate],
    ) -> list[FileOutcome]:
        """Process candidates on the worker pool, keeping scan order.

        Rule names depend on the file name only, so candidates sharing a
        name (one file matched by several globs, or same-named files in
        different directories) share their rules. Only the first of each
        runs on the pool; the rest run afterwards and see its rules.
        """
        seen: set[str] = set()
        first: list[int] = []
        repeats: list[int] = []
        for index, candidate in enumerate(candidates):
            key = self._namer.base_name(application, candidate.file_name)
            if key in seen:
                repeats.append(index)
            else:
                seen.add(key)
                first.append(index)

        outcomes: dict[int, FileOutcome] = {}
        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            results = executor.map(
                lambda i: self._process_file(application, candidates[i]), first
            )
            outcomes.update(zip(first, results, strict=True))

        for index in repeats:
            outcomes[index] = self._process_file(application, candidates[index])

        return [outcomes[i] for i in range(len(candidates))]

    def _process_file(self, application: str, candidate: FileCandidate) -> FileOutcome:
        """Ensure both directional rules exist for one file."""
        outcome = FileOutcome(
            candidate=candidate,
            inbound=self._ensure_rule(self.build_spec(application, candidate, Direction.INBOUND)),
            outbound=self._ensure_rule(self.build_spec(application, candidate, Direction.OUTBOUND)),
        )
        if not outcome.success:
            logger.warning(
                "Failed to block %s: %s", candidate.full_path, "; ".join(outcome.errors)
            )
        return outcome

    def _ensure_rule(self, spec: RuleSpec) -> RuleOutcome:
        """Create a rule unless one with the same display name exists."""
        try:
            if self._store.rule_exists(spec.display_name):
                logger.debug("Rule already exists: %s", spec.display_name)
                return RuleOutcome(spec=spec, status=CreateStatus.ALREADY_EXISTS)
            status = self._store.create_rule(spec)
        except StoreError as e:
            return RuleOutcome(spec=spec, error=str(e))

        return RuleOutcome(spec=spec, status=status)
