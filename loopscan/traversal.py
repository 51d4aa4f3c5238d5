"""
File system traversal: walk a target directory and collect script sources.

Collects JavaScript/TypeScript files (.js, .ts, .jsx, .tsx) for the pattern
scanner, pruning dependency directories such as node_modules. Results are
sorted so that reports are reproducible.

Typical usage:
    from pathlib import Path
    from loopscan.traversal import find_source_files

    files = find_source_files(Path("./src"))

    # Smaller tables for a test harness
    files = find_source_files(
        Path("./src"),
        extensions={".js"},
        ignore_dirs={"node_modules", "dist"},
    )
"""

import logging
from pathlib import Path
from typing import AbstractSet, Optional

from loopscan.errors import NotFoundError

logger = logging.getLogger(__name__)

# Two general-purpose script suffixes and their typed variants
DEFAULT_EXTENSIONS: frozenset[str] = frozenset({".js", ".jsx", ".ts", ".tsx"})

# Dependency directories never worth scanning
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({"node_modules"})


def is_source_file(path: Path, extensions: AbstractSet[str] = DEFAULT_EXTENSIONS) -> bool:
    """
    Check if a file has one of the scanned extensions.

    Examples:
        >>> is_source_file(Path("app.js"))
        True
        >>> is_source_file(Path("App.TSX"))
        True
        >>> is_source_file(Path("styles.css"))
        False
    """
    return path.suffix.lower() in extensions


def should_ignore_directory(dir_path: Path, ignore_dirs: AbstractSet[str]) -> bool:
    """
    Check if a directory should be pruned during traversal.

    Only the directory name is compared (case-sensitive).

    Examples:
        >>> should_ignore_directory(Path("node_modules"), {"node_modules"})
        True
        >>> should_ignore_directory(Path("src"), {"node_modules"})
        False
    """
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    extensions: Optional[AbstractSet[str]] = None,
    ignore_dirs: Optional[AbstractSet[str]] = None,
) -> list[Path]:
    """
    Recursively find all script source files under root.

    Args:
        root: Directory to start traversal from.
        extensions: Suffixes to collect (lowercase, with dot). If None, uses
                    DEFAULT_EXTENSIONS.
        ignore_dirs: Directory names to prune. If None, uses DEFAULT_IGNORE_DIRS.

    Returns:
        Absolute paths of all matching files, sorted by their string form.

    Raises:
        NotFoundError: If root does not exist or is not a directory.

    Notes:
        - A path part anywhere in the resolved root that names an ignored
          directory excludes the whole tree.
        - Symbolic links are never followed.
        - Permission errors on subdirectories are logged and do not stop traversal.
    """
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.is_dir():
        logger.error("Target directory does not exist: %s", root)
        raise NotFoundError(root)

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: extensions=%s, ignore_dirs=%s",
        sorted(extensions),
        sorted(ignore_dirs),
    )

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink():
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file() and is_source_file(entry, extensions):
                    logger.debug("Found source file: %s", entry)
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    if any(part in ignore_dirs for part in root.parts):
        logger.info("Target lies inside an ignored directory: %s", root)
    else:
        _walk_directory(root)

    # String order, so "a-b.js" sorts before "a/b.js"
    collected_files.sort(key=str)

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files
