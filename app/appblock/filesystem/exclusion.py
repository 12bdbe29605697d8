"""Exclusion filtering for scanned files.

Splits scanned candidates into files to block and files to skip, based
on exact file names and case-insensitive keywords.
"""

import os
from collections.abc import Iterable

from appblock.models.application import FileCandidate, SkippedCandidate, SkipReason


class ExclusionFilter:
    """Partitions candidates using exact-name and keyword exclusions.

    Exact file names are compared with the host's default rules
    (os.path.normcase: case-insensitive on Windows, exact elsewhere).
    Keywords always match as case-insensitive substrings. Exact names are
    checked first, then keywords in the order given; the first match is
    recorded as the skip reason.

    Args:
        excluded_files: File names to skip.
        excluded_keywords: Substrings that cause a file to be skipped.
    """

    def __init__(
        self,
        excluded_files: Iterable[str] = (),
        excluded_keywords: Iterable[str] = (),
    ) -> None:
        self._excluded_files = {os.path.normcase(name): name for name in excluded_files if name}
        self._excluded_keywords = [kw for kw in excluded_keywords if kw]

    def check(self, candidate: FileCandidate) -> SkippedCandidate | None:
        """Return why a candidate is excluded, or None to keep it."""
        original = self._excluded_files.get(os.path.normcase(candidate.file_name))
        if original is not None:
            return SkippedCandidate(candidate, SkipReason.EXCLUDED_FILE, original)

        name_lower = candidate.file_name.lower()
        for keyword in self._excluded_keywords:
            if keyword.lower() in name_lower:
                return SkippedCandidate(candidate, SkipReason.EXCLUDED_KEYWORD, keyword)

        return None

    def partition(
        self,
        candidates: Iterable[FileCandidate],
    ) -> tuple[list[FileCandidate], list[SkippedCandidate]]:
        """Split candidates into (to_block, to_skip), preserving order.

        Args:
            candidates: Files produced by the scanner.

        Returns:
            Tuple of retained candidates and skipped candidates.
        """
        to_block: list[FileCandidate] = []
        to_skip: list[SkippedCandidate] = []

        for candidate in candidates:
            skipped = self.check(candidate)
            if skipped is None:
                to_block.append(candidate)
            else:
                to_skip.append(skipped)

        return to_block, to_skip
