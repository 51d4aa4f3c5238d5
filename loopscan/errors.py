# Error taxonomy: a missing target aborts the scan, an unreadable file only skips that file.

from __future__ import annotations

from pathlib import Path


class LoopScanError(Exception):
    """Base class for errors raised by loopscan."""


class NotFoundError(LoopScanError, FileNotFoundError):
    """The scan target does not exist or is not a directory. Fatal."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Target directory does not exist: {root}")
        self.root = root


class ReadError(LoopScanError):
    """A single source file could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason
