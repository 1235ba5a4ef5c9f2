"""Exception types surfaced by the archive boundary."""

from __future__ import annotations

from pathlib import Path


class ArchiveError(Exception):
    """Base exception for archive processing errors."""


class MalformedInputError(ArchiveError):
    """Raised when an export file cannot be decoded.

    Covers a missing JavaScript-assignment wrapper, unparseable JSON and a
    top-level value that is not an array. Fatal for the file being read.
    """


class ArchiveIOError(ArchiveError):
    """Raised when a source file cannot be read or an output cannot be written."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
