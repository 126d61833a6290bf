"""
Analyzer module.

Contains reference resolution, name resolution, and type model building.
"""

from __future__ import annotations

from .analyzer import SchemaAnalyzer, primitive_type_name
from .ir_nodes import (
    DYNAMIC_TYPE,
    HIDDEN_JSON_NAME,
    NO_ADDITIONAL_PROPERTIES,
    Alias,
    Field,
    Struct,
    TypeModel,
)
from .name_resolver import NameResolver, to_go_name
from .reference_resolver import ReferenceResolver

__all__ = [
    "SchemaAnalyzer",
    "NameResolver",
    "ReferenceResolver",
    "TypeModel",
    "Struct",
    "Field",
    "Alias",
    "DYNAMIC_TYPE",
    "HIDDEN_JSON_NAME",
    "NO_ADDITIONAL_PROPERTIES",
    "primitive_type_name",
    "to_go_name",
]
