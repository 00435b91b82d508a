"""
Tests for saving and loading result files.
"""
import json
from pathlib import Path

import pytest

from emberdeps.constants import RESULT_FILE_VERSION
from emberdeps.models import ExtractionFailure, FileDependencies, FileKind
from emberdeps.serializer import (
    ResultFileError,
    load_results,
    results_to_dict,
    save_results,
)


@pytest.fixture
def results():
    return [
        FileDependencies(
            path=Path("app/templates/index.hbs"),
            file_kind=FileKind.TEMPLATE,
            controllers={"foo": "controller:foo"},
            templates={"foo": "template:foo"},
            names=["controller:foo", "template:foo"],
        ),
        FileDependencies(
            path=Path("app/controllers/post.js"),
            file_kind=FileKind.SCRIPT,
            controllers={"post": "controller:post"},
        ),
    ]


@pytest.fixture
def failures():
    return [ExtractionFailure(Path("app/templates/broken.hbs"), "Unclosed mustache")]


class TestResultsToDict:
    """Tests for the JSON document layout."""

    def test_layout(self, results, failures):
        data = results_to_dict(results, failures)
        assert data["version"] == RESULT_FILE_VERSION
        assert "created_at" in data
        assert len(data["files"]) == 2
        assert data["files"][0]["names"] == ["controller:foo", "template:foo"]
        assert data["failures"][0]["message"] == "Unclosed mustache"

    def test_failures_optional(self, results):
        assert results_to_dict(results)["failures"] == []

    def test_json_serializable(self, results, failures):
        json.dumps(results_to_dict(results, failures))


class TestSaveLoad:
    """Tests for save_results() and load_results()."""

    def test_round_trip(self, tmp_path, results, failures):
        path = tmp_path / "deps.json"
        save_results(results, failures, path)

        loaded, loaded_failures = load_results(path)
        assert loaded == results
        assert loaded_failures == failures

    def test_version_mismatch(self, tmp_path):
        path = tmp_path / "deps.json"
        path.write_text(json.dumps({"version": "0.1", "files": []}))
        with pytest.raises(ResultFileError, match="Unsupported result file version"):
            load_results(path)

    def test_missing_version(self, tmp_path):
        path = tmp_path / "deps.json"
        path.write_text(json.dumps({"files": []}))
        with pytest.raises(ResultFileError):
            load_results(path)

    def test_missing_sections(self, tmp_path):
        """A file with only a version loads as empty."""
        path = tmp_path / "deps.json"
        path.write_text(json.dumps({"version": RESULT_FILE_VERSION}))
        assert load_results(path) == ([], [])
