"""
Safe access into dict-shaped AST nodes.
"""
from typing import Any, Optional


def is_node(value: Any) -> bool:
    """An AST node is a dict with a string 'type'."""
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def key_path(node: Any, *keys: str) -> Any:
    """
    Follow nested keys, returning None as soon as one level is missing.

        key_path(call, "callee", "property", "name")
    """
    value = node
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def string_literal_value(node: Any) -> Optional[str]:
    """The value of a string Literal node, else None."""
    if not is_node(node) or node["type"] != "Literal":
        return None
    value = node.get("value")
    return value if isinstance(value, str) else None


def property_name(node: Any) -> Optional[str]:
    """
    The static key of an object Property node.

    Handles identifier keys (`needs: ...`) and string keys
    (`'needs': ...`); computed keys have no static name.
    """
    if not is_node(node) or node["type"] != "Property" or node.get("computed"):
        return None
    key = node.get("key")
    if key_path(key, "type") == "Identifier":
        return key.get("name")
    return string_literal_value(key)
