"""
Extraction sessions: the public entry point for a single piece of text.

A session parses its text once, walks the tree once and then exposes the
collected names. Nothing is shared between sessions.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Union

from emberdeps.accumulator import DependencyAccumulator
from emberdeps.constants import DEFAULT_SOURCE_TYPE
from emberdeps.models import FileKind
from emberdeps.parsers import (
    ScriptSyntaxError,
    TemplateSyntaxError,
    parse_script,
    parse_template,
)
from emberdeps.traversal import walk_script, walk_template

logger = logging.getLogger(__name__)

__all__ = ["PARSE_ERRORS", "ExtractionSession", "create_session"]

# Exceptions raised for text that is not valid for its file kind
PARSE_ERRORS = (ScriptSyntaxError, TemplateSyntaxError)


class ExtractionSession:
    """
    Dependencies referenced by one script or template text.

    Usage:
        session = ExtractionSession("{{render 'foo'}}", file_kind="template")
        session.controllers     # {'foo': 'controller:foo'}
        session.ordered_names() # ['controller:foo', 'template:foo']

    Raises (from the constructor):
        UnsupportedFileKind: If file_kind is not 'script' or 'template'
        ScriptSyntaxError / TemplateSyntaxError: If the text does not parse
    """

    def __init__(
        self,
        text: str,
        file_kind: Union[FileKind, str, None] = None,
        source_type: str = DEFAULT_SOURCE_TYPE,
    ):
        self.file_kind = FileKind.coerce(file_kind)

        accumulator = DependencyAccumulator()
        if self.file_kind is FileKind.TEMPLATE:
            walk_template(parse_template(text), accumulator)
        else:
            walk_script(parse_script(text, source_type), accumulator)

        # Assigned only once the walk has completed
        self._accumulator = accumulator
        logger.debug(
            "Extracted %d names from %s text",
            len(accumulator.names), self.file_kind.value,
        )

    def __repr__(self) -> str:
        return f"ExtractionSession({self.file_kind.value}, {len(self._accumulator.names)} names)"

    @property
    def controllers(self) -> Mapping[str, str]:
        """Controller short name -> 'controller:<name>'."""
        return MappingProxyType(self._accumulator.controllers)

    @property
    def templates(self) -> Mapping[str, str]:
        """Template short name -> 'template:<name>'."""
        return MappingProxyType(self._accumulator.templates)

    @property
    def views(self) -> Mapping[str, str]:
        """View short name -> 'view:<name>'."""
        return MappingProxyType(self._accumulator.views)

    def ordered_names(self) -> list[str]:
        """Full names in first-reference order (a copy)."""
        return list(self._accumulator.names)

    def get_full_names(self) -> list[str]:
        """Alias of ordered_names()."""
        return self.ordered_names()


def create_session(
    text: str,
    file_kind: Optional[Union[FileKind, str]] = None,
    source_type: str = DEFAULT_SOURCE_TYPE,
) -> ExtractionSession:
    """
    Extract the dependencies of text.

    Args:
        text: Script or template source
        file_kind: 'script' (default) or 'template'
        source_type: 'script' or 'module' (scripts only)

    Returns:
        A finished ExtractionSession
    """
    return ExtractionSession(text, file_kind=file_kind, source_type=source_type)
