"""Application and file candidate models.

This module defines the input of a blocking operation (the Application
the user wants to cut off from the network) and the files discovered
for it while scanning.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Application(BaseModel):
    """A logical application whose executables should be blocked.

    Built once from user input at the start of a blocking operation and
    never persisted. Immutable for the lifetime of that operation.

    Attributes:
        name: Application name embedded in every rule name.
        root_path: Directory scanned recursively for candidate files.
        extensions: Ordered extension globs (e.g. "*.exe"). Duplicates are
            kept; a file matching two globs is processed twice.
        excluded_keywords: Case-insensitive substrings that exclude a file.
        excluded_files: Exact file names that exclude a file.
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(min_length=1)]
    root_path: Path
    extensions: Annotated[tuple[str, ...], Field(min_length=1)] = ("*.exe",)
    excluded_keywords: tuple[str, ...] = ()
    excluded_files: tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        name = v.strip()
        if not name:
            msg = "Application name cannot be empty"
            raise ValueError(msg)
        return name

    @field_validator("extensions", "excluded_keywords", "excluded_files", mode="before")
    @classmethod
    def drop_blank_entries(cls, v: object) -> object:
        """Strip entries and drop blank ones, preserving order."""
        if isinstance(v, str):
            v = (v,)
        if isinstance(v, (list, tuple)):
            return tuple(s.strip() for s in v if isinstance(s, str) and s.strip())
        return v


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """A file discovered under an application's root directory.

    Attributes:
        full_path: Absolute path of the file.
        file_name: Base name of the file.
    """

    full_path: str
    file_name: str

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.full_path or not self.file_name:
            msg = "File candidate requires both a path and a file name"
            raise ValueError(msg)

    @classmethod
    def from_path(cls, path: Path | str) -> "FileCandidate":
        """Create a candidate from a filesystem path."""
        p = Path(path)
        return cls(full_path=str(p), file_name=p.name)


class SkipReason(str, Enum):
    """Why a candidate was excluded from blocking.

    Attributes:
        EXCLUDED_FILE: File name matched an excluded file exactly.
        EXCLUDED_KEYWORD: File name contained an excluded keyword.
    """

    EXCLUDED_FILE = "excluded_file"
    EXCLUDED_KEYWORD = "excluded_keyword"


@dataclass(frozen=True, slots=True)
class SkippedCandidate:
    """A candidate removed by exclusion filtering.

    Attributes:
        candidate: The excluded file.
        reason: Which exclusion list matched.
        matched: The excluded file name or keyword that matched.
    """

    candidate: FileCandidate
    reason: SkipReason
    matched: str

    @property
    def description(self) -> str:
        """Human-readable skip reason."""
        if self.reason == SkipReason.EXCLUDED_FILE:
            return f"excluded file '{self.matched}'"
        return f"contains keyword '{self.matched}'"
