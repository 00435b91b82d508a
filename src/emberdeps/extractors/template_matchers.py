"""
Recognize Ember helper invocations in Handlebars nodes.
"""
from typing import Optional

from emberdeps.constants import PARTIAL_HELPER, RENDER_HELPER, VIEW_HELPER
from emberdeps.extractors.node_access import key_path

__all__ = [
    "match_partial",
    "match_render",
    "match_view",
]


def _helper_params(node: dict, helper: str) -> Optional[list[dict]]:
    """Positional params of a mustache calling `helper`, else None."""
    if node.get("type") != "mustache":
        return None
    if key_path(node, "sexpr", "id", "original") != helper:
        return None
    return key_path(node, "sexpr", "params") or []


def match_partial(node: dict) -> Optional[str]:
    """
    Find the template rendered by `{{partial "name"}}`.

    Returns:
        Source text of the first param, or None
    """
    params = _helper_params(node, PARTIAL_HELPER)
    if not params:
        return None
    return params[0].get("original")


def match_render(node: dict) -> Optional[str]:
    """
    Find the template (and same-named controller) of `{{render "name"}}`.

    Only the first string param counts; paths, numbers and other params
    such as the model argument are skipped by type, not position.

    Returns:
        The template name, or None
    """
    params = _helper_params(node, RENDER_HELPER)
    if not params:
        return None
    for param in params:
        if param.get("type") == "STRING":
            return param.get("original")
    return None


def match_view(node: dict) -> Optional[list[str]]:
    """
    Find the views named by `{{view ...}}`.

    Subexpression params have no source text of their own and are skipped.

    Returns:
        Source text of every param, or None when there are none
    """
    params = _helper_params(node, VIEW_HELPER)
    if not params:
        return None
    names = [param["original"] for param in params if param.get("original") is not None]
    return names or None
