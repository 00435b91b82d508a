"""
File scanner for finding Ember script and template files.

Provides utilities for:
- Recursively scanning directories for files
- Categorizing files as scripts or templates by extension
"""
from pathlib import Path
from typing import Iterator, Optional

from rich.console import Console

from emberdeps.constants import DEFAULT_IGNORE_DIRS
from emberdeps.models import FileKind

console = Console(stderr=True)


def should_ignore(path: Path, ignore_dirs: frozenset[str]) -> bool:
    """
    Check if a path should be ignored based on directory names.

    Args:
        path: Path to check
        ignore_dirs: Set of directory names to ignore

    Returns:
        True if any path component is in ignore_dirs
    """
    return any(part in ignore_dirs for part in path.parts)


def get_all_files(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> Iterator[Path]:
    """
    Get all files recursively from a directory, in sorted order.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore (default: DEFAULT_IGNORE_DIRS)

    Yields:
        Path objects pointing to files

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If path points to a file, not a directory
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    dir_path = Path(directory)

    if not dir_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {dir_path}")

    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")

    for item in sorted(dir_path.rglob('*')):
        try:
            # Only components below the scanned directory count
            if should_ignore(item.relative_to(dir_path), ignore_dirs):
                continue

            if item.is_file():
                yield item
        except PermissionError:
            console.print(f"[yellow]Warning:[/] Permission denied for {item}", style="dim")
            continue


def file_kind_for(filepath: Path | str) -> Optional[FileKind]:
    """
    Determine the file kind of a path from its extension.

    Returns:
        FileKind, or None for files that are neither scripts nor templates
    """
    return FileKind.from_extension(Path(filepath).suffix)


def categorize_files(
    directory: Path | str,
    ignore_dirs: Optional[frozenset[str]] = None,
) -> dict[str, list[Path]]:
    """
    Scan a directory and categorize files as scripts or templates.

    Args:
        directory: Path to directory (string or Path object)
        ignore_dirs: Set of directory names to ignore (default: DEFAULT_IGNORE_DIRS)

    Returns:
        dict: {'script': [Path, ...], 'template': [Path, ...]}

    Raises:
        FileNotFoundError: If directory doesn't exist
        NotADirectoryError: If path points to a file, not a directory
    """
    categorized: dict[str, list[Path]] = {kind.value: [] for kind in FileKind}

    for filepath in get_all_files(directory, ignore_dirs=ignore_dirs):
        kind = file_kind_for(filepath)
        if kind is not None:
            categorized[kind.value].append(filepath)

    return categorized
