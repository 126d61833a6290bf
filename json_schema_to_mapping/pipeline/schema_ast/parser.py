"""
JSON Schema parser that builds the schema node tree.

Phase 1 of the pipeline: turn a decoded JSON Schema document into linked
SchemaNode objects without resolving references or building types.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .nodes import AdditionalPropertiesFlag, AdditionalPropertiesSchema, SchemaNode


def load_schema(path: str | Path) -> tuple[str, dict[str, Any]]:
    """
    Load a JSON Schema file.

    Args:
        path: Path to the schema file

    Returns:
        (base_uri, schema) where base_uri is the file URI of the document
    """
    path = Path(path).resolve()
    with open(path, encoding="utf-8") as f:
        schema = json.load(f)
    return path.as_uri(), schema


class SchemaParser:
    """Parses JSON Schema documents into SchemaNode trees."""

    # Keys holding a block of named sub-schemas
    DEFINITION_KEYS = ("definitions", "$defs")

    def parse(self, schema: dict[str, Any], base_uri: str = "") -> SchemaNode:
        """
        Parse a JSON Schema document.

        Args:
            schema: The decoded JSON Schema document
            base_uri: URI used to resolve relative references; the document's
                own ``$id`` takes precedence

        Returns:
            The root SchemaNode, with parent links filled in
        """
        schema_id = schema.get("$id") or schema.get("id") or ""
        return self._parse_node(schema, schema_id or base_uri, parent=None, json_key="", path_element="")

    def _parse_node(
        self,
        schema: dict[str, Any],
        base_uri: str,
        parent: SchemaNode | None,
        json_key: str,
        path_element: str,
    ) -> SchemaNode:
        node = SchemaNode(
            id=schema.get("$id") or schema.get("id") or "",
            title=schema.get("title") or "",
            description=schema.get("description") or "",
            format=schema.get("format") or "",
            type_value=schema.get("type"),
            required=list(schema.get("required") or []),
            reference=schema.get("$ref") or "",
            parent=parent,
            json_key=json_key,
            path_element=path_element,
            base_uri=base_uri,
        )

        for key in self.DEFINITION_KEYS:
            for name, sub_schema in (schema.get(key) or {}).items():
                if not isinstance(sub_schema, dict):
                    continue
                node.definitions[name] = self._parse_node(sub_schema, base_uri, node, name, "definitions")

        for name, sub_schema in (schema.get("properties") or {}).items():
            if isinstance(sub_schema, dict):
                node.properties[name] = self._parse_node(sub_schema, base_uri, node, name, "properties")
            elif sub_schema is True:
                # "prop": true accepts any value
                node.properties[name] = SchemaNode(parent=node, json_key=name, path_element="properties", base_uri=base_uri)

        items = schema.get("items")
        if isinstance(items, dict):
            node.items = self._parse_node(items, base_uri, node, "", "items")

        node.additional_properties = self._parse_additional_properties(schema, base_uri, node)
        return node

    def _parse_additional_properties(self, schema: dict[str, Any], base_uri: str, node: SchemaNode):
        """Parse additionalProperties into its three-way variant."""
        if "additionalProperties" not in schema:
            return None
        value = schema["additionalProperties"]
        if isinstance(value, bool):
            return AdditionalPropertiesFlag(allowed=value)
        if isinstance(value, dict):
            return AdditionalPropertiesSchema(schema=self._parse_node(value, base_uri, node, "", "additionalProperties"))
        return None
