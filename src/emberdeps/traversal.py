"""
Pre-order traversal of dict ASTs and the per-file-kind walk drivers.

The drivers call every matcher for their file kind on every node and
record matches into a DependencyAccumulator. Matchers are pure; the
accumulator is the only state touched during a walk.
"""
import logging
from typing import Any, Callable

from emberdeps.accumulator import DependencyAccumulator
from emberdeps.extractors import (
    match_controller_for,
    match_needs,
    match_render_outlet,
    match_partial,
    match_render,
    match_view,
)
from emberdeps.extractors.node_access import is_node
from emberdeps.models import Namespace

logger = logging.getLogger(__name__)

__all__ = ["traverse", "walk_script", "walk_template"]


def _child_nodes(node: dict) -> list[dict]:
    """Direct child nodes in key order, list members in list order."""
    children = []
    for value in node.values():
        if isinstance(value, list):
            children.extend(item for item in value if is_node(item))
        elif is_node(value):
            children.append(value)
    return children


def traverse(root: Any, pre: Callable[[dict], None]) -> None:
    """
    Visit every node under root in pre-order, calling pre(node) once each.

    A node is a dict with a string 'type'; anything else is not visited
    and not descended into. Uses an explicit stack, so deep trees do not
    hit the recursion limit.
    """
    if not is_node(root):
        return

    stack = [root]
    while stack:
        node = stack.pop()
        pre(node)
        stack.extend(reversed(_child_nodes(node)))


def walk_script(tree: dict, accumulator: DependencyAccumulator) -> None:
    """Record controller and template references from a JavaScript AST."""

    def visit(node: dict) -> None:
        controller = match_controller_for(node)
        if controller:
            accumulator.register(Namespace.CONTROLLER, controller)

        needs = match_needs(node)
        if needs:
            for need in needs:
                accumulator.record_first(Namespace.CONTROLLER, need)

        outlet = match_render_outlet(node)
        if outlet:
            for name in outlet.controllers:
                accumulator.record(Namespace.CONTROLLER, name)
            for name in outlet.templates:
                accumulator.record(Namespace.TEMPLATE, name)

    traverse(tree, visit)
    logger.debug("Script walk recorded %d names", len(accumulator.names))


def walk_template(tree: dict, accumulator: DependencyAccumulator) -> None:
    """Record template, controller and view references from a Handlebars AST."""

    def visit(node: dict) -> None:
        partial = match_partial(node)
        if partial:
            accumulator.record(Namespace.TEMPLATE, partial)

        render = match_render(node)
        if render:
            accumulator.record(Namespace.CONTROLLER, render)
            accumulator.record(Namespace.TEMPLATE, render)

        views = match_view(node)
        if views:
            for view in views:
                accumulator.record(Namespace.VIEW, view)
                accumulator.record(Namespace.TEMPLATE, view)

    traverse(tree, visit)
    logger.debug("Template walk recorded %d names", len(accumulator.names))
