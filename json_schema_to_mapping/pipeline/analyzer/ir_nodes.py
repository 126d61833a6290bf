"""
IR (Intermediate Representation) node definitions.

These nodes hold the type model built from the schema set: named records,
their fields and the top-level aliases. Types are textual references in
Go syntax, ready for a Go source emitter and for the mapping backends.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Dynamic type used for unions, empty schemas and untyped collections
DYNAMIC_TYPE = "interface{}"

# additional_type sentinel: the record accepts no keys beyond its properties
NO_ADDITIONAL_PROPERTIES = "false"

# JSON name of fields that are never serialized under a real key
HIDDEN_JSON_NAME = "-"

# JSON Schema primitive tags mapped to Go types
PRIMITIVE_TYPES: dict[str, str] = {
    "boolean": "bool",
    "integer": "int",
    "number": "float64",
    "string": "string",
    "null": "nil",
}


@dataclass
class Field:
    """A field of a record, or a top-level alias."""

    name: str = ""  # Go name, e.g. "Address1"
    json_name: str = ""  # JSON key, e.g. "address1"; "" or "-" when not serialized
    type: str = ""  # Go type, e.g. "string", "*Address", "[]int64"
    required: bool = False
    description: str = ""
    format: str = ""


@dataclass
class Alias(Field):
    """A top-level name bound to a non-record type (array or map)."""

    pass


@dataclass
class Struct:
    """A named record type."""

    id: str = ""  # Pointer of the originating schema, e.g. "#/definitions/address"
    name: str = ""
    description: str = ""
    fields: dict[str, Field] = field(default_factory=dict)

    # Set when the emitter must produce custom marshal/unmarshal code
    generate_code: bool = False

    # None, the element type of captured additional properties, or NO_ADDITIONAL_PROPERTIES
    additional_type: str | None = None

    # Packages needed by custom string formats
    import_types: list[str] = field(default_factory=list)


@dataclass
class TypeModel:
    """The complete type model of one resolution pass."""

    structs: dict[str, Struct] = field(default_factory=dict)
    aliases: dict[str, Alias] = field(default_factory=dict)

    def name_collisions(self) -> set[str]:
        """Names registered both as a record and as an alias."""
        return set(self.structs) & set(self.aliases)
