"""Filesystem discovery module.

This module provides candidate discovery under an application's root
directory and exclusion filtering of the discovered files.
"""

from appblock.filesystem.exclusion import ExclusionFilter
from appblock.filesystem.scanner import FileScanner, InvalidPathError, ScanError, validate_root

__all__ = [
    "ExclusionFilter",
    "FileScanner",
    "InvalidPathError",
    "ScanError",
    "validate_root",
]
