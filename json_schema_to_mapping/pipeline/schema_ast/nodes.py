"""
Schema node definitions for JSON Schema.

These nodes represent the parsed structure of a JSON Schema document
before any reference resolution or type construction. Every node keeps a
back-reference to its parent so that naming fallbacks and root detection
can walk upwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AdditionalPropertiesSchema:
    """``additionalProperties`` given as a nested schema."""

    schema: SchemaNode


@dataclass
class AdditionalPropertiesFlag:
    """``additionalProperties`` given as ``true`` or ``false``."""

    allowed: bool


# Absent additionalProperties is represented by None
AdditionalProperties = AdditionalPropertiesSchema | AdditionalPropertiesFlag | None


@dataclass(eq=False)
class SchemaNode:
    """One parsed unit of a JSON Schema document."""

    # Identity and documentation
    id: str = ""
    title: str = ""
    description: str = ""
    format: str = ""

    # Declared type: None, a single tag or a list of tags
    type_value: str | list[str] | None = None

    # Structure
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    items: SchemaNode | None = None
    required: list[str] = field(default_factory=list)
    additional_properties: AdditionalProperties = None
    definitions: dict[str, SchemaNode] = field(default_factory=dict)

    # $ref text, empty when the node is not a reference
    reference: str = ""

    # Position in the tree
    parent: SchemaNode | None = field(default=None, repr=False)
    json_key: str = ""
    path_element: str = ""  # "definitions", "properties", "items", "additionalProperties"
    base_uri: str = ""

    # Resolved type memo, set once by the analyzer
    generated_type: str = ""

    def fix_missing_type_value(self) -> None:
        """Infer a type for nodes that declare none."""
        if self.type_value is not None or self.reference:
            return
        if self.properties:
            self.type_value = "object"
        elif self.items is not None:
            self.type_value = "array"

    def multi_type(self) -> tuple[list[str], bool]:
        """
        Return the declared type tags and whether they form a union.

        Returns:
            (tags, is_union) where is_union is True for more than one tag
        """
        if isinstance(self.type_value, str):
            return [self.type_value], False
        if isinstance(self.type_value, list):
            types = [t for t in self.type_value if isinstance(t, str)]
            return types, len(types) > 1
        return [], False

    def root(self) -> SchemaNode:
        """Walk the parent links up to the document root."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node
