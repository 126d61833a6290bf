"""
Reference resolver for $ref resolution.

Indexes every node of a set of schema documents by its absolute JSON
pointer URI and resolves $ref strings against that index.
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urljoin

from ..errors import BrokenReferenceError, ReferenceResolverError
from ..schema_ast.nodes import AdditionalPropertiesSchema, SchemaNode

logger = logging.getLogger(__name__)


def _escape_pointer_segment(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def _normalize_uri(uri: str) -> str:
    """Normalize a URI so that "doc", "doc#" and "doc#/" compare equal."""
    document, _, fragment = uri.partition("#")
    fragment = unquote(fragment)
    if fragment == "/":
        fragment = ""
    return f"{document}#{fragment}"


class ReferenceResolver:
    """Resolves $ref to the schema nodes they point at."""

    def __init__(self, schemas: list[SchemaNode]):
        """
        Initialize the resolver.

        Args:
            schemas: Root nodes of every document taking part in the run
        """
        self.schemas = schemas
        self._path_to_schema: dict[str, SchemaNode] | None = None

    def init(self) -> None:
        """
        Index every node of every document.

        Must be called once before any reference is resolved.

        Raises:
            ReferenceResolverError: If two documents claim the same URI
        """
        self._path_to_schema = {}
        roots: set[str] = set()
        for schema in self.schemas:
            key = _normalize_uri(schema.base_uri)
            if key in roots:
                raise ReferenceResolverError(f"two schemas share the base URI {schema.base_uri!r}; give each document a distinct $id")
            roots.add(key)
            self._map_paths(schema, "")
        logger.debug("Indexed %d schema paths across %d documents", len(self._path_to_schema), len(self.schemas))

    def _map_paths(self, node: SchemaNode, pointer: str) -> None:
        self._register(f"{node.base_uri}#{pointer}", node)
        if node.id and node.parent is not None:
            # nested $id: also reachable by its own absolute URI
            self._register(urljoin(node.base_uri, node.id), node)

        for key, definition in node.definitions.items():
            segment = _escape_pointer_segment(key)
            # "$defs" and "definitions" are both accepted spellings
            self._register(f"{node.base_uri}#{pointer}/$defs/{segment}", definition)
            self._map_paths(definition, f"{pointer}/definitions/{segment}")
        for key, prop in node.properties.items():
            self._map_paths(prop, f"{pointer}/properties/{_escape_pointer_segment(key)}")
        if node.items is not None:
            self._map_paths(node.items, f"{pointer}/items")
        if isinstance(node.additional_properties, AdditionalPropertiesSchema):
            self._map_paths(node.additional_properties.schema, f"{pointer}/additionalProperties")

    def _register(self, uri: str, node: SchemaNode) -> None:
        self._path_to_schema.setdefault(_normalize_uri(uri), node)

    def get_path(self, node: SchemaNode) -> str:
        """
        Get the absolute pointer URI of a node, for diagnostics.

        Args:
            node: Any node of an indexed document

        Returns:
            URI such as "file:///schemas/a.json#/properties/b/items"
        """
        segments: list[str] = []
        current = node
        while current.parent is not None:
            if current.path_element in ("definitions", "properties"):
                segments.append(_escape_pointer_segment(current.json_key))
            segments.append(current.path_element)
            current = current.parent
        pointer = "".join(f"/{segment}" for segment in reversed(segments))
        return f"{node.base_uri}#{pointer}"

    def get_schema_by_reference(self, node: SchemaNode) -> SchemaNode:
        """
        Resolve the $ref of a node.

        Args:
            node: A node whose ``reference`` is set

        Returns:
            The referenced SchemaNode

        Raises:
            ReferenceResolverError: If init() has not been called
            BrokenReferenceError: If the reference does not resolve
        """
        if self._path_to_schema is None:
            raise ReferenceResolverError("the reference resolver must be initialized before use")

        reference = node.reference
        if reference.startswith("#"):
            target = node.base_uri + reference
        elif node.base_uri:
            target = urljoin(node.base_uri, reference)
        else:
            target = reference

        schema = self._path_to_schema.get(_normalize_uri(target))
        if schema is None:
            raise BrokenReferenceError(reference, self.get_path(node))
        return schema
