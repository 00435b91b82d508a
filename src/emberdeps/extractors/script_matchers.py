"""
Recognize Ember dependency idioms in JavaScript (ESTree) nodes.

Each matcher takes a single node and returns None when the node is not the
idiom it looks for. Matchers never raise on unexpected shapes.
"""
from typing import Optional

from emberdeps.constants import (
    CONTROLLER_FOR_METHOD,
    NEEDS_PROPERTY,
    RENDER_TEMPLATE_PROPERTY,
    RENDER_METHOD,
    OUTLET_INTO_KEY,
    OUTLET_CONTROLLER_KEY,
    JS_FUNCTION_TYPES,
)
from emberdeps.extractors.node_access import (
    is_node,
    key_path,
    property_name,
    string_literal_value,
)
from emberdeps.models import RenderOutlet

__all__ = [
    "match_controller_for",
    "match_needs",
    "match_render_outlet",
]


def match_controller_for(node: dict) -> Optional[str]:
    """
    Find the controller name in a `controllerFor` call.

    Matches:
    - this.controllerFor('post')
    - route.controllerFor('post')

    Args:
        node: ESTree node

    Returns:
        The controller name, or None
    """
    if node.get("type") != "CallExpression":
        return None
    if key_path(node, "callee", "type") != "MemberExpression":
        return None
    if key_path(node, "callee", "property", "name") != CONTROLLER_FOR_METHOD:
        return None

    arguments = node.get("arguments") or []
    if not arguments:
        return None
    return string_literal_value(arguments[0])


def match_needs(node: dict) -> Optional[list[str]]:
    """
    Find controller names declared in a `needs` property.

    Matches:
    - needs: 'post'
    - needs: ['post', 'comments']

    Args:
        node: ESTree node

    Returns:
        Controller names in declaration order, or None if the value is
        not a string or an array made only of strings
    """
    if property_name(node) != NEEDS_PROPERTY:
        return None

    value = node.get("value")
    single = string_literal_value(value)
    if single is not None:
        return [single]

    if key_path(value, "type") != "ArrayExpression":
        return None
    names = [string_literal_value(element) for element in value.get("elements") or []]
    if not names or any(name is None for name in names):
        return None
    return names


def match_render_outlet(node: dict) -> Optional[RenderOutlet]:
    """
    Find templates and controllers rendered by a `renderTemplate` hook.

    Every `this.render(...)` statement in the hook body is inspected:
    string arguments name templates, and option objects contribute their
    `into` template and their `controller` (only when it is a string).

        renderTemplate: function() {
          this.render('favoritePost', { into: 'posts', controller: 'blogPost' });
        }

    Args:
        node: ESTree node

    Returns:
        RenderOutlet with the collected names, or None
    """
    if property_name(node) != RENDER_TEMPLATE_PROPERTY:
        return None

    function = node.get("value")
    if key_path(function, "type") not in JS_FUNCTION_TYPES:
        return None
    if key_path(function, "body", "type") != "BlockStatement":
        return None

    controllers: list[str] = []
    templates: list[str] = []

    for statement in function["body"].get("body") or []:
        if not _is_this_render_statement(statement):
            continue
        for argument in statement["expression"].get("arguments") or []:
            _collect_render_argument(argument, controllers, templates)

    return RenderOutlet(controllers=tuple(controllers), templates=tuple(templates))


def _is_this_render_statement(statement: dict) -> bool:
    """Check for an expression statement calling this.render(...)."""
    if not is_node(statement) or statement["type"] != "ExpressionStatement":
        return False
    if key_path(statement, "expression", "type") != "CallExpression":
        return False
    if key_path(statement, "expression", "callee", "object", "type") != "ThisExpression":
        return False
    return key_path(statement, "expression", "callee", "property", "name") == RENDER_METHOD


def _collect_render_argument(
    argument: dict,
    controllers: list[str],
    templates: list[str],
) -> None:
    template = string_literal_value(argument)
    if template is not None:
        templates.append(template)
        return

    if key_path(argument, "type") != "ObjectExpression":
        return

    for prop in argument.get("properties") or []:
        name = property_name(prop)
        value = string_literal_value(prop.get("value"))
        if value is None:
            continue
        if name == OUTLET_INTO_KEY:
            templates.append(value)
        elif name == OUTLET_CONTROLLER_KEY:
            controllers.append(value)
