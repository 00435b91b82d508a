"""
Serialization for extraction results.

This module handles saving and loading per-file results to/from JSON files.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from emberdeps.constants import RESULT_FILE_VERSION
from emberdeps.models import ExtractionFailure, FileDependencies


class ResultFileError(ValueError):
    """Raised when a result file has an unsupported format."""
    pass


def results_to_dict(
    results: list[FileDependencies],
    failures: Optional[list[ExtractionFailure]] = None,
) -> dict:
    """
    Build the JSON document for a set of results.

    Args:
        results: Extracted files
        failures: Files that could not be analyzed

    Returns:
        JSON-serializable dict with version and timestamp
    """
    return {
        "version": RESULT_FILE_VERSION,
        "created_at": datetime.now().isoformat(),
        "files": [r.to_dict() for r in results],
        "failures": [f.to_dict() for f in failures or []],
    }


def save_results(
    results: list[FileDependencies],
    failures: Optional[list[ExtractionFailure]],
    filepath: Path,
) -> None:
    """
    Save results to a JSON file.

    Args:
        results: Extracted files
        failures: Files that could not be analyzed
        filepath: Path to save the JSON file
    """
    data = results_to_dict(results, failures)

    filepath = Path(filepath)
    with filepath.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_results(
    filepath: Path,
) -> tuple[list[FileDependencies], list[ExtractionFailure]]:
    """
    Load results from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Tuple of (results, failures)

    Raises:
        ResultFileError: If the file was written by an incompatible version
    """
    filepath = Path(filepath)
    with filepath.open("r", encoding="utf-8") as f:
        data = json.load(f)

    version = data.get("version")
    if version != RESULT_FILE_VERSION:
        raise ResultFileError(
            f"Unsupported result file version {version!r} in {filepath} "
            f"(expected {RESULT_FILE_VERSION})"
        )

    results = [FileDependencies.from_dict(r) for r in data.get("files", [])]
    failures = [ExtractionFailure.from_dict(f) for f in data.get("failures", [])]
    return results, failures
