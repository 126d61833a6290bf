"""
Exceptions raised by the pipeline.

Every resolution failure is fatal to the current pass: the type model
cross-references records by name, so a partial model is never returned.
"""

from __future__ import annotations


class SchemaResolutionError(Exception):
    """Base class for failures while building the type model."""

    pass


class BrokenReferenceError(SchemaResolutionError):
    """Raised when a $ref does not point at a known schema node."""

    def __init__(self, reference: str, path: str):
        self.reference = reference
        self.path = path
        super().__init__(f'reference "{reference}" not found at "{path}"')


class CyclicReferenceError(SchemaResolutionError):
    """Raised when a $ref loops back into a non-object schema still being resolved.

    Objects break cycles through their record pointer; arrays and bare
    references have no name to point at.
    """

    def __init__(self, reference: str, path: str):
        self.reference = reference
        self.path = path
        super().__init__(f'reference "{reference}" at "{path}" loops back into a schema that is not an object')


class EmptyReferenceError(SchemaResolutionError):
    """Raised when a node without $ref text is resolved as a reference."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"empty reference at {path}")


class DegenerateTypeError(SchemaResolutionError):
    """Raised for an array with no element type or an object with no name."""

    pass


class UnknownPrimitiveTypeError(SchemaResolutionError):
    """Raised for a type tag outside the JSON Schema primitive set."""

    def __init__(self, schema_type: str, sub_type: str = ""):
        self.schema_type = schema_type
        self.sub_type = sub_type
        super().__init__(f"failed to get a primitive type for schema type {schema_type!r} and sub type {sub_type!r}")


class ReferenceResolverError(SchemaResolutionError):
    """Raised when the reference resolver cannot index the schema set."""

    pass


class OutputValidationError(Exception):
    """Raised when generated output fails structural validation.

    This can happen when:
    - A mapping body is not valid JSON
    - The Go wrapper is missing its package clause
    - Braces or backquotes are unbalanced
    """

    pass
