"""
Extraction pipeline for script and template files.

This module converts files on disk into FileDependencies results.
"""
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

from emberdeps.constants import DEFAULT_SOURCE_TYPE
from emberdeps.models import ExtractionFailure, FileDependencies, FileKind
from emberdeps.readers import read_file_safe
from emberdeps.scanner import categorize_files, file_kind_for
from emberdeps.session import PARSE_ERRORS, ExtractionSession


def extract_file(
    filepath: Path,
    file_kind: Union[FileKind, str, None] = None,
    source_type: str = DEFAULT_SOURCE_TYPE,
) -> Optional[FileDependencies]:
    """
    Extract the dependencies referenced by one file.

    Args:
        filepath: Path to a script or template file
        file_kind: Overrides the kind inferred from the extension
        source_type: 'script' or 'module' for JavaScript files

    Returns:
        FileDependencies, or None if the file is unreadable or its kind
        cannot be determined

    Raises:
        UnsupportedFileKind: If file_kind is given but not recognized
        ScriptSyntaxError / TemplateSyntaxError: If the file does not parse
    """
    filepath = Path(filepath)
    kind = FileKind.coerce(file_kind) if file_kind is not None else file_kind_for(filepath)
    if kind is None:
        logger.debug("Skipping %s: not a script or template", filepath)
        return None

    content = read_file_safe(filepath)
    if content is None:
        logger.warning("Failed to read %s file: %s", kind.value, filepath)
        return None

    session = ExtractionSession(content, file_kind=kind, source_type=source_type)
    return FileDependencies.from_session(session, path=filepath)


def process_directory(
    directory: Path,
    ignore_dirs: Optional[frozenset[str]] = None,
    source_type: str = DEFAULT_SOURCE_TYPE,
) -> tuple[list[FileDependencies], list[ExtractionFailure]]:
    """
    Extract every script and template in a directory.

    A file that fails to parse or nests too deeply is logged and reported
    as a failure; the remaining files are still processed.

    Args:
        directory: Path to directory
        ignore_dirs: Directory names to skip
        source_type: 'script' or 'module' for JavaScript files

    Returns:
        Tuple of (results, failures)
    """
    categorized = categorize_files(directory, ignore_dirs=ignore_dirs)

    results = []
    failures = []
    for kind in FileKind:
        for filepath in categorized[kind.value]:
            try:
                result = extract_file(filepath, file_kind=kind, source_type=source_type)
            except PARSE_ERRORS as e:
                logger.warning("Syntax error in %s: %s", filepath, e)
                failures.append(ExtractionFailure(path=filepath, message=str(e)))
                continue
            except RecursionError:
                logger.warning("Source nested too deeply: %s", filepath)
                failures.append(ExtractionFailure(path=filepath, message="Source nested too deeply"))
                continue
            if result is not None:
                results.append(result)

    results.sort(key=lambda r: r.path)
    return results, failures
