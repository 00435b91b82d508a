"""
emberdeps - Dependency extraction for Ember scripts and templates.

Parses JavaScript and Handlebars sources and reports the controllers,
templates and views each file references, as fully-qualified names
such as 'controller:post' or 'template:foo'.
"""

__version__ = "0.1.0"

# Models
from emberdeps.models import (
    Namespace,
    FileKind,
    UnsupportedFileKind,
    RenderOutlet,
    FileDependencies,
    ExtractionFailure,
)

# Core functionality
from emberdeps.accumulator import DependencyAccumulator
from emberdeps.session import PARSE_ERRORS, ExtractionSession, create_session
from emberdeps.parsers import ScriptSyntaxError, TemplateSyntaxError
from emberdeps.extractor import extract_file, process_directory
from emberdeps.scanner import categorize_files

# Serialization
from emberdeps.serializer import ResultFileError, save_results, load_results

__all__ = [
    # Version
    "__version__",
    # Enums
    "Namespace",
    "FileKind",
    # Models
    "RenderOutlet",
    "FileDependencies",
    "ExtractionFailure",
    # Errors
    "UnsupportedFileKind",
    "ScriptSyntaxError",
    "TemplateSyntaxError",
    "ResultFileError",
    "PARSE_ERRORS",
    # Extraction
    "DependencyAccumulator",
    "ExtractionSession",
    "create_session",
    "extract_file",
    "process_directory",
    "categorize_files",
    # Serialization
    "save_results",
    "load_results",
]
