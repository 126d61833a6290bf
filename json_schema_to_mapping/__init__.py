"""JSON Schema to Mapping Generator

A Python package for building a typed model from JSON Schema documents
and deriving Elasticsearch index mappings from it, written out as Go
constants or JSON.
"""

__version__ = "0.1.0"
__author__ = "François Lagunas"

from .pipeline import (
    AtomicWriter,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    SchemaResolutionError,
    load_schema,
)

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "SchemaResolutionError",
    "AtomicWriter",
    "load_schema",
]
