"""Recursive file discovery for blocking candidates.

Walks an application's root directory once and yields every file whose
name matches one of the requested extension globs. Results are grouped
per glob in the order the globs were given, so a file matching two globs
is yielded twice.
"""

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from appblock.core.errors import AppBlockError
from appblock.models.application import FileCandidate

logger = logging.getLogger(__name__)


class InvalidPathError(AppBlockError):
    """Raised when a root path does not exist or is not a directory."""


class ScanError(AppBlockError):
    """Raised when the root directory itself cannot be enumerated."""


def validate_root(root_path: Path | str) -> Path:
    """Check that a scan root exists and is a directory.

    Args:
        root_path: Directory to validate.

    Returns:
        The root as an absolute Path.

    Raises:
        InvalidPathError: If the path is missing or not a directory.
    """
    root = Path(root_path).expanduser()
    if not root.exists():
        msg = f"Path does not exist: {root}"
        raise InvalidPathError(msg)
    if not root.is_dir():
        msg = f"Path is not a directory: {root}"
        raise InvalidPathError(msg)
    return root.absolute()


class FileScanner:
    """Scans a directory tree for files matching extension globs.

    Matching uses fnmatch, which follows the host's case rules
    (case-insensitive on Windows). Unreadable subdirectories are logged
    and skipped; an unreadable root aborts the scan.

    Example:
        >>> scanner = FileScanner()
        >>> for candidate in scanner.scan("C:/Games/Foo", ["*.exe"]):
        ...     print(candidate.file_name)
    """

    def __init__(self, *, follow_links: bool = False) -> None:
        """Initialize the scanner.

        Args:
            follow_links: If True, descend into symlinked directories.
        """
        self._follow_links = follow_links

    def scan(self, root_path: Path | str, extensions: Iterable[str]) -> Iterator[FileCandidate]:
        """Yield files under root_path matching any of the extension globs.

        Args:
            root_path: Directory to scan recursively.
            extensions: Glob patterns such as "*.exe". Order is preserved.

        Yields:
            FileCandidate for each (glob, file) match.

        Raises:
            InvalidPathError: If root_path is missing or not a directory.
            ScanError: If root_path cannot be enumerated.
        """
        root = validate_root(root_path)
        patterns = list(extensions)
        files = list(self._walk(root))

        logger.debug("Found %d files under %s", len(files), root)

        for pattern in patterns:
            matched = 0
            for full_path, file_name in files:
                if fnmatch.fnmatch(file_name, pattern):
                    matched += 1
                    yield FileCandidate(full_path=full_path, file_name=file_name)
            logger.debug("Pattern %s matched %d files", pattern, matched)

    def _walk(self, root: Path) -> Iterator[tuple[str, str]]:
        """Enumerate (full_path, file_name) for every file under root.

        Args:
            root: Validated root directory.

        Yields:
            Tuples of absolute path and base name.

        Raises:
            ScanError: If root itself cannot be listed.
        """
        root_str = os.path.normpath(str(root))

        def on_error(error: OSError) -> None:
            failed = os.path.normpath(error.filename) if error.filename else root_str
            if failed == root_str:
                msg = f"Cannot enumerate {root_str}: {error.strerror or error}"
                raise ScanError(msg) from error
            logger.warning("Skipping unreadable directory %s: %s", failed, error.strerror)

        for dirpath, _dirnames, filenames in os.walk(
            root_str, onerror=on_error, followlinks=self._follow_links
        ):
            for name in filenames:
                yield os.path.join(dirpath, name), name
