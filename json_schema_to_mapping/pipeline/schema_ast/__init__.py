"""
Schema AST (Abstract Syntax Tree) module.

Contains the schema node definitions and the parser for JSON Schema.
"""

from __future__ import annotations

from .nodes import (
    AdditionalProperties,
    AdditionalPropertiesFlag,
    AdditionalPropertiesSchema,
    SchemaNode,
)
from .parser import SchemaParser, load_schema

__all__ = [
    "SchemaNode",
    "AdditionalProperties",
    "AdditionalPropertiesFlag",
    "AdditionalPropertiesSchema",
    "SchemaParser",
    "load_schema",
]
