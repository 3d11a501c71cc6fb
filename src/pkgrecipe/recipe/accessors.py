"""Primitive value extraction over a single document node."""

from __future__ import annotations

from ..document import Node
from ..errors import ValidationError


def enforce(condition: bool, message: str, node: Node) -> None:
    """Raise a ValidationError located at ``node`` unless ``condition`` holds."""
    if not condition:
        raise ValidationError(message, node.location)


def require_single_string(node: Node, allow_children: bool = False) -> str:
    """Return the only value of a node, which must be a string.

    Attributes on the node are ignored so that newer documents still parse.
    """
    name = node.full_name
    enforce(len(node.values) > 0, f"Missing string value for '{name}'.", node)
    enforce(len(node.values) == 1, f"Expected only one value for '{name}'.", node)
    enforce(isinstance(node.values[0], str), f"Expected value of type string for '{name}'.", node)
    enforce(allow_children or not node.children, f"No child tags allowed for '{name}'.", node)
    return node.values[0]


def collect_string_array(node: Node, allow_children: bool = False) -> list[str]:
    """Return all values of a node as strings; the list may be empty."""
    name = node.full_name
    enforce(allow_children or not node.children, f"No child tags allowed for '{name}'.", node)
    for value in node.values:
        enforce(isinstance(value, str), f"Values for '{name}' must be strings.", node)
    return list(node.values)


def platform_key_of(node: Node) -> str:
    """Return the platform key of a node: ``""`` or ``"-" + platform``."""
    if not node.has_attribute("platform"):
        return ""
    return "-" + string_attribute(node, "platform")


def string_attribute(node: Node, name: str) -> str:
    value = node.first_attribute(name)
    enforce(
        isinstance(value, str),
        f"Expected attribute '{name}' of '{node.full_name}' to be a string.",
        node,
    )
    return value


def bool_attribute(node: Node, name: str) -> bool:
    value = node.first_attribute(name)
    enforce(
        isinstance(value, bool),
        f"Expected attribute '{name}' of '{node.full_name}' to be a boolean.",
        node,
    )
    return value
