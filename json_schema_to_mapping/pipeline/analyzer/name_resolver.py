"""
Name resolver for generated Go identifiers.

Converts arbitrary schema keys and titles into exported Go identifiers
and picks a name for every schema node that becomes a type.
"""

from __future__ import annotations

from ..schema_ast.nodes import SchemaNode


def _split_on_non_identifier(text: str) -> list[str]:
    """Split on every character that is not a letter or digit, dropping empty fragments."""
    fragments = []
    current = []
    for char in text:
        if char.isalpha() or char.isdecimal():
            current.append(char)
        elif current:
            fragments.append("".join(current))
            current = []
    if current:
        fragments.append("".join(current))
    return fragments


def to_go_name(text: str, conventions: dict[str, str] | None = None) -> str:
    """Convert text to an exported Go identifier.

    Examples:
        "first_name" -> "FirstName"
        "my thing" -> "MyThing"
        "3d-model" -> "_3dModel"
        "user_id" with {"Id": "ID"} -> "UserID"

    Args:
        text: Raw key or title
        conventions: Fragment -> override table, applied after capitalization

    Returns:
        The identifier, or "" when text holds no letters or digits
    """
    conventions = conventions or {}
    parts = []
    for i, fragment in enumerate(_split_on_non_identifier(text)):
        if i == 0 and fragment[0].isdecimal():
            # Go identifiers cannot start with a digit
            parts.append("_")
        capitalized = fragment[0].upper() + fragment[1:]
        parts.append(conventions.get(capitalized, capitalized))
    return "".join(parts)


class NameResolver:
    """Picks type names for schema nodes."""

    def __init__(self, conventions: dict[str, str] | None = None):
        """
        Initialize the resolver.

        Args:
            conventions: Fragment -> override table used by every conversion
        """
        self.conventions = conventions or {}
        self.anon_count = 0

    def go_name(self, text: str) -> str:
        return to_go_name(text, self.conventions)

    def schema_name(self, key_name: str, schema: SchemaNode) -> str:
        """
        Return a name for this (sub-)schema.

        Args:
            key_name: Name suggested by the caller, used when the node has no title
            schema: The node to name

        Returns:
            The generated name; "Anonymous<N>" when nothing else applies
        """
        if schema.title:
            return self.go_name(schema.title)
        if key_name:
            return self.go_name(key_name)
        if schema.parent is None:
            return "Root"
        if schema.json_key:
            return self.go_name(schema.json_key)
        if schema.parent.json_key:
            return self.go_name(schema.parent.json_key + "Item")
        self.anon_count += 1
        return f"Anonymous{self.anon_count}"
