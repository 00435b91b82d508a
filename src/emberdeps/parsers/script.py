"""
Parse JavaScript source into a plain ESTree dictionary tree.

esprima returns node objects; they are converted to dicts and lists so that
matchers and the traversal driver work on one uniform, JSON-like shape
(the same shape used for template ASTs).
"""
import logging
from typing import Any

import esprima
from esprima.error_handler import Error as ScriptSyntaxError

from emberdeps.constants import DEFAULT_SOURCE_TYPE, SCRIPT_SOURCE_TYPES

logger = logging.getLogger(__name__)

__all__ = ["ScriptSyntaxError", "parse_script", "to_plain"]

_PARSE_OPTIONS = {"range": True, "comment": True}


def parse_script(text: str, source_type: str = DEFAULT_SOURCE_TYPE) -> dict:
    """
    Parse JavaScript source.

    Args:
        text: JavaScript source code
        source_type: 'script' for classic scripts, 'module' for ES modules

    Returns:
        The Program node as a dict

    Raises:
        ScriptSyntaxError: If esprima rejects the source
        ValueError: If source_type is not recognized
    """
    if source_type not in SCRIPT_SOURCE_TYPES:
        raise ValueError(
            f"Unknown source type {source_type!r}, "
            f"expected one of {sorted(SCRIPT_SOURCE_TYPES)}"
        )

    if source_type == "module":
        program = esprima.parseModule(text, _PARSE_OPTIONS)
    else:
        program = esprima.parseScript(text, _PARSE_OPTIONS)

    logger.debug("Parsed %d characters as %s", len(text), source_type)
    return to_plain(program)


def to_plain(value: Any) -> Any:
    """
    Convert esprima node objects into dicts, recursively.

    Lists stay lists, scalars pass through, and any other object with
    instance attributes becomes a dict of those attributes in definition
    order. Objects without a __dict__ (e.g. compiled regex literals) are
    kept as they are.
    """
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    attrs = getattr(value, "__dict__", None)
    if attrs is None:
        return value
    return {key: to_plain(item) for key, item in attrs.items()}
