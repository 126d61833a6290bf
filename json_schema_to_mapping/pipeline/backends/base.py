"""
Base class for mapping backends.

Walks the type model and builds one Elasticsearch mapping document per
record. Subclasses decide how the documents are serialized.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import HIDDEN_JSON_NAME, Field, Struct, TypeModel
from ..config import GeneratorConfig

logger = logging.getLogger(__name__)

# Prefix of JSON keys reserved by the search engine (_id, _source, ...)
INTERNAL_FIELD_PREFIX = "_"

# Field format marking an opaque blob that must not be indexed
RAW_FORMAT = "raw"

DISABLED_OBJECT_MAPPING = {"enabled": False, "type": "object"}


def get_es_type(f: Field) -> str:
    """
    Classify a field for the index mapping.

    Args:
        f: The field

    Returns:
        "date", "keyword", "integer", "boolean" or "object"
    """
    if f.type in ("string", "[]string"):
        if f.format == "date-time":
            return "date"
        return "keyword"
    if f.type == "int":
        return "integer"
    if f.type == "bool":
        return "boolean"
    return "object"


def referenced_name(type_name: str) -> str:
    """Strip slice and pointer markers, e.g. "[]*Address" -> "Address"."""
    return type_name.strip("[]*")


def is_mapped(f: Field) -> bool:
    """Whether a field appears in the document shape, and so in the mapping."""
    return not (f.json_name.startswith(INTERNAL_FIELD_PREFIX) or f.json_name == HIDDEN_JSON_NAME)


def inlined_struct_names(structs: dict[str, Struct]) -> set[str]:
    """Names of records reachable as object-typed fields of another record."""
    inlined: set[str] = set()
    for struct in structs.values():
        for f in struct.fields.values():
            if get_es_type(f) == "object" and referenced_name(f.type) in structs:
                inlined.add(referenced_name(f.type))
    return inlined


class MappingBackend(ABC):
    """Abstract base class for mapping backends."""

    # Template directory name, empty for backends without templates
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the backend.

        Args:
            config: Generation configuration
        """
        self.config = config or GeneratorConfig()
        if self.TEMPLATE_LANG:
            self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def generate(self, model: TypeModel) -> str:
        """
        Generate the mapping output for a type model.

        Args:
            model: The type model built by the analyzer

        Returns:
            Serialized mappings
        """

    def ordered_struct_names(self, model: TypeModel) -> list[str]:
        """Names of the records to render, ascending."""
        names = sorted(model.structs)
        if self.config.skip_inlined_structs:
            inlined = inlined_struct_names(model.structs)
            names = [name for name in names if name not in inlined]
        return names

    def build_mappings(self, model: TypeModel) -> dict[str, dict[str, Any]]:
        """Build the mapping document of every top-level record, keyed by record name."""
        return {name: self.build_struct_mapping(model.structs[name], model.structs) for name in self.ordered_struct_names(model)}

    def build_struct_mapping(
        self,
        struct: Struct,
        structs: dict[str, Struct],
        stack: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """
        Build the mapping document of one record.

        Args:
            struct: The record
            stack: Names of the records being inlined above this one

        Returns:
            {"properties": {...}} with fields in model order
        """
        stack = stack + (struct.name,)
        properties: dict[str, Any] = {}
        for f in struct.fields.values():
            if not is_mapped(f):
                # would conflict with the search engine's own fields
                continue
            properties[f.json_name] = self._field_mapping(f, structs, stack)
        return {"properties": properties}

    def _field_mapping(self, f: Field, structs: dict[str, Struct], stack: tuple[str, ...]) -> dict[str, Any]:
        es_type = get_es_type(f)
        if es_type != "object":
            return {"type": es_type}

        name = referenced_name(f.type)
        target = structs.get(name)
        if target is None:
            # map, dynamic or numeric alias
            return {"type": "integer" if name == "int64" else "keyword"}
        if target.additional_type is not None or f.format == RAW_FORMAT:
            return dict(DISABLED_OBJECT_MAPPING)
        if target.name in stack:
            logger.warning("Not inlining %s inside itself (%s), mapping it as disabled", target.name, " -> ".join(stack))
            return dict(DISABLED_OBJECT_MAPPING)
        return self.build_struct_mapping(target, structs, stack)
