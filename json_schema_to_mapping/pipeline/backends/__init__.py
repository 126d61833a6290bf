"""
Mapping backends.

Contains the output-format specific mapping renderers.
"""

from __future__ import annotations

from .base import MappingBackend, get_es_type, inlined_struct_names
from .go_backend import GoMappingBackend
from .json_backend import JsonMappingBackend

BACKENDS: dict[str, type[MappingBackend]] = {
    "go": GoMappingBackend,
    "json": JsonMappingBackend,
}

__all__ = [
    "BACKENDS",
    "MappingBackend",
    "GoMappingBackend",
    "JsonMappingBackend",
    "get_es_type",
    "inlined_struct_names",
]
