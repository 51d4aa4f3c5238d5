# Per-file scan context: the SourceFile read once per scan, plus offset/line helpers.
# Handles reading files (unreadable or undecodable files raise ReadError) and
# collecting every readable source under a target directory.

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Optional

from loopscan.errors import ReadError
from loopscan.findings.models import SkippedFile
from loopscan.traversal import find_source_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """
    One file's path and full text, immutable for the duration of a scan.

    Rules only look at source.path (for reporting) and source.text. Use
    line_number() and line_text() to turn match offsets into locations.
    """

    path: str
    text: str


def display_path(path: Path) -> str:
    """Path relative to the working directory when possible, absolute otherwise."""
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def line_number(text: str, offset: int) -> int:
    """1-based line of offset: one plus the newlines that precede it."""
    return text.count("\n", 0, offset) + 1


def line_text(text: str, line: int) -> str:
    """Return the stripped source line (1-based), or "" when out of range."""
    lines = text.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1].strip()
    return ""


def read_source(path: Path, max_file_size: Optional[int] = None) -> SourceFile:
    """
    Read one file into a SourceFile.

    Raises:
        ReadError: The file is missing, unreadable, larger than max_file_size,
                   or not valid UTF-8.
    """
    try:
        if max_file_size is not None and path.stat().st_size > max_file_size:
            raise ReadError(path, f"larger than {max_file_size} bytes")
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ReadError(path, "not valid UTF-8") from e
    return SourceFile(path=display_path(path), text=text)


def load_sources(
    paths: list[Path],
    max_file_size: Optional[int] = None,
) -> tuple[list[SourceFile], list[SkippedFile]]:
    """
    Read multiple files, isolating failures per file.

    Returns:
        (sources, skipped). sources keeps input order; every file that could
        not be read is logged and listed in skipped instead.
    """
    sources: list[SourceFile] = []
    skipped: list[SkippedFile] = []
    for path in paths:
        try:
            sources.append(read_source(path, max_file_size=max_file_size))
        except ReadError as e:
            logger.warning("Skipping %s: %s", path, e.reason)
            skipped.append(SkippedFile(path=display_path(path), reason=e.reason))
    return sources, skipped


def collect(
    root: Path,
    extensions: Optional[AbstractSet[str]] = None,
    ignore_dirs: Optional[AbstractSet[str]] = None,
) -> list[SourceFile]:
    """
    Read every source file under root, in lexicographic path order.

    Raises NotFoundError for a missing root. Unreadable files are logged and
    left out; use load_sources() directly to also get the skipped list.
    """
    paths = find_source_files(root, extensions=extensions, ignore_dirs=ignore_dirs)
    sources, _ = load_sources(paths)
    return sources
