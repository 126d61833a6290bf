"""
Pipeline - JSON Schema to type model and index mapping generator.

This module provides a multi-phase architecture:

1. Phase 1 (Parser): Parse JSON Schema documents into linked schema nodes
2. Phase 2 (Analyzer): Resolve references and build the type model
3. Phase 3 (Backend): Render one index mapping per record
4. Phase 4 (Writer): Optionally write the output atomically
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .config import GeneratorConfig, OutputConfig, OutputMode, StringFormatType
from .errors import (
    BrokenReferenceError,
    CyclicReferenceError,
    DegenerateTypeError,
    EmptyReferenceError,
    OutputValidationError,
    ReferenceResolverError,
    SchemaResolutionError,
    UnknownPrimitiveTypeError,
)
from .generator import PipelineGenerator
from .schema_ast import load_schema

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "StringFormatType",
    "AtomicWriter",
    "load_schema",
    "SchemaResolutionError",
    "BrokenReferenceError",
    "CyclicReferenceError",
    "EmptyReferenceError",
    "DegenerateTypeError",
    "UnknownPrimitiveTypeError",
    "ReferenceResolverError",
    "OutputValidationError",
]
