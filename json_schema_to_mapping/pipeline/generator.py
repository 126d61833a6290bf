"""
Pipeline generator.

Runs the phases in order: parse every schema document, build the type
model, render the mappings.
"""

from __future__ import annotations

from typing import Any

from .analyzer import SchemaAnalyzer, TypeModel
from .backends import BACKENDS
from .config import GeneratorConfig
from .schema_ast import SchemaNode, SchemaParser

# Base URI of documents given without one, formatted with their position
DEFAULT_BASE_URI = "urn:json-schema-to-mapping:schema-{index}"


class PipelineGenerator:
    """Generates index mappings from a set of JSON Schema documents."""

    def __init__(
        self,
        schemas: list[tuple[str, dict[str, Any]] | dict[str, Any]],
        config: GeneratorConfig | None = None,
        output_format: str = "go",
    ):
        """
        Initialize the generator.

        Args:
            schemas: Documents as (base_uri, schema) pairs, or bare schema dicts
            config: Generation configuration
            output_format: Name of the backend, "go" or "json"
        """
        if output_format not in BACKENDS:
            raise ValueError(f"Output format {output_format!r} is not supported")
        self.schemas = schemas
        self.config = config or GeneratorConfig()
        self.output_format = output_format
        self.model: TypeModel | None = None

    def parse(self) -> list[SchemaNode]:
        """Parse every document into a fresh node tree."""
        parser = SchemaParser()
        roots = []
        for index, entry in enumerate(self.schemas):
            if isinstance(entry, tuple):
                base_uri, schema = entry
            else:
                base_uri, schema = "", entry
            roots.append(parser.parse(schema, base_uri or DEFAULT_BASE_URI.format(index=index)))
        return roots

    def analyze(self) -> TypeModel:
        """
        Build the type model.

        Every call parses the documents again, so repeated calls are independent.

        Returns:
            The type model

        Raises:
            SchemaResolutionError: If any schema fails to resolve
        """
        analyzer = SchemaAnalyzer(self.parse(), self.config)
        self.model = analyzer.create_types()
        return self.model

    def generate(self) -> str:
        """
        Build the type model and render its mappings.

        Returns:
            The mapping output in the configured format
        """
        model = self.analyze()
        backend = BACKENDS[self.output_format](self.config)
        return backend.generate(model)
