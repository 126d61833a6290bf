"""
Schema analyzer that builds the type model.

Phase 2 of the pipeline: resolve references, classify every schema node
and register the named records and top-level aliases they produce.
"""

from __future__ import annotations

import logging

from ..config import GeneratorConfig
from ..errors import CyclicReferenceError, DegenerateTypeError, EmptyReferenceError, UnknownPrimitiveTypeError
from ..schema_ast.nodes import AdditionalPropertiesFlag, AdditionalPropertiesSchema, SchemaNode
from .ir_nodes import (
    DYNAMIC_TYPE,
    HIDDEN_JSON_NAME,
    NO_ADDITIONAL_PROPERTIES,
    PRIMITIVE_TYPES,
    Alias,
    Field,
    Struct,
    TypeModel,
)
from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


def primitive_type_name(schema_type: str, sub_type: str = "", pointer: bool = False) -> str:
    """
    Get the Go type for a schema type tag.

    Args:
        schema_type: JSON Schema type tag
        sub_type: Element type for "array", record name for "object"
        pointer: Whether an object type is referenced through a pointer

    Returns:
        The Go type string

    Raises:
        DegenerateTypeError: If an array or object has an empty sub type
        UnknownPrimitiveTypeError: If the tag is not a JSON Schema type
    """
    if schema_type == "array":
        if not sub_type:
            raise DegenerateTypeError("can't create an array of an empty subtype")
        if sub_type == "int":
            # array elements use the wide integer
            sub_type = "int64"
        return "[]" + sub_type.strip("*")
    if schema_type == "object":
        if not sub_type:
            raise DegenerateTypeError("can't create an object of an empty subtype")
        return "*" + sub_type if pointer else sub_type
    if schema_type in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[schema_type]
    raise UnknownPrimitiveTypeError(schema_type, sub_type)


class SchemaAnalyzer:
    """Analyzes schema node trees and builds the type model."""

    def __init__(self, schemas: list[SchemaNode], config: GeneratorConfig | None = None):
        """
        Initialize the analyzer.

        Args:
            schemas: Root nodes of every document to process
            config: Generation configuration
        """
        self.schemas = schemas
        self.config = config or GeneratorConfig()
        self.resolver = ReferenceResolver(schemas)
        self.name_resolver = NameResolver(self.config.conventions)
        self.model = TypeModel()
        # nodes whose own type is being resolved
        self._in_progress: set[SchemaNode] = set()

    def create_types(self) -> TypeModel:
        """
        Create types from all schemas, keyed by their Go name.

        Returns:
            The populated TypeModel

        Raises:
            SchemaResolutionError: On the first failure anywhere in the schema set
        """
        self.resolver.init()

        for schema in self.schemas:
            name = self.name_resolver.schema_name("", schema)
            root_type = self.process_schema(name, schema)
            # anything but a record is published as an alias of the root name
            if root_type != "*" + name:
                self._register_alias(
                    Alias(
                        name=name,
                        json_name="",
                        type=root_type,
                        required=False,
                        description=schema.description,
                        format=schema.format,
                    )
                )

        logger.debug("Created %d structs and %d aliases", len(self.model.structs), len(self.model.aliases))
        return self.model

    def _ordered(self, mapping: dict[str, SchemaNode]) -> list[tuple[str, SchemaNode]]:
        if self.config.sort_properties:
            return sorted(mapping.items())
        return list(mapping.items())

    def process_definitions(self, schema: SchemaNode) -> None:
        """Process a block of definitions, each as an independent root."""
        for key, sub_schema in self._ordered(schema.definitions):
            if sub_schema.generated_type or sub_schema in self._in_progress:
                # already resolved, or being resolved, through a reference
                continue
            self.process_schema(self.name_resolver.go_name(key), sub_schema)

    def process_reference(self, schema: SchemaNode) -> str:
        """
        Resolve a $ref node to the type of its target.

        Args:
            schema: Node whose reference is set

        Returns:
            The target's memoised type, resolving the target first if needed
        """
        if not schema.reference:
            raise EmptyReferenceError(self.resolver.get_path(schema))
        ref_schema = self.resolver.get_schema_by_reference(schema)
        if ref_schema.generated_type:
            return ref_schema.generated_type
        if ref_schema in self._in_progress:
            raise CyclicReferenceError(schema.reference, self.resolver.get_path(schema))
        # not resolved yet, do that now
        ref_name = self.name_resolver.schema_name("", ref_schema)
        logger.debug("Resolving %s on first use as %s", schema.reference, ref_name)
        return self.process_schema(ref_name, ref_schema)

    def process_schema(self, schema_name: str, schema: SchemaNode) -> str:
        """
        Return the type of a schema after resolving all its dependencies.

        Args:
            schema_name: Name to give the type if it becomes a record or alias
            schema: The node to resolve

        Returns:
            The Go type string
        """
        if schema.generated_type:
            # already resolved, possibly through a reference under another name
            return schema.generated_type

        if schema.definitions:
            self.process_definitions(schema)
            if schema.generated_type:
                # resolved meanwhile through a reference from one of its definitions
                return schema.generated_type

        self._in_progress.add(schema)
        try:
            return self._resolve(schema_name, schema)
        finally:
            self._in_progress.discard(schema)

    def _resolve(self, schema_name: str, schema: SchemaNode) -> str:
        schema.fix_missing_type_value()

        types, is_multi_type = schema.multi_type()
        if not types:
            if schema.reference:
                return self.process_reference(schema)
            return DYNAMIC_TYPE

        if is_multi_type:
            # a union is always dynamic; every variant is still registered
            self._memoize(schema, DYNAMIC_TYPE)
            for schema_type in types:
                variant_name = f"{schema_name}_{schema_type}"
                variant_type = self._process_type(variant_name, schema_type, schema)
                if variant_type != "*" + variant_name and variant_name not in self.model.aliases:
                    self._register_alias(
                        Alias(
                            name=variant_name,
                            json_name="",
                            type=variant_type,
                            required=False,
                            description=schema.description,
                            format=schema.format,
                        )
                    )
            return DYNAMIC_TYPE

        typ = self._process_type(schema_name, types[0], schema)
        self._memoize(schema, typ)
        return typ

    def _process_type(self, name: str, schema_type: str, schema: SchemaNode) -> str:
        if schema_type == "object":
            return self.process_object(name, schema)
        if schema_type == "array":
            return self.process_array(name, schema)
        return primitive_type_name(schema_type)

    @staticmethod
    def _memoize(schema: SchemaNode, typ: str) -> None:
        if not schema.generated_type:
            schema.generated_type = typ

    def process_array(self, name: str, schema: SchemaNode) -> str:
        """
        Resolve an array node.

        Args:
            name: Name of this array, usually the JSON key
            schema: The array node

        Returns:
            The slice type
        """
        if schema.items is None:
            return "[]" + DYNAMIC_TYPE

        # fallback name in case this array contains an inline object without a title
        sub_name = self.name_resolver.schema_name(name + "Items", schema.items)
        sub_type = self.process_schema(sub_name, schema.items)
        final_type = primitive_type_name("array", sub_type)

        # only alias root arrays
        if schema.parent is None:
            self._register_alias(
                Alias(
                    name=name,
                    json_name="",
                    type=final_type,
                    required=name in schema.required,
                    description=schema.description,
                    format=schema.format,
                )
            )
        return final_type

    def process_object(self, name: str, schema: SchemaNode) -> str:
        """
        Resolve an object node into a record.

        Args:
            name: Name of the record, calculated by the caller
            schema: The object node with its properties

        Returns:
            Pointer to the record, or a map type when the object collapses
        """
        # objects are always a pointer
        typ = primitive_type_name("object", name, pointer=True)
        struct = Struct(
            id=self.resolver.get_path(schema),
            name=name,
            description=schema.description,
        )
        # memoise first so that recursive references resolve to this record
        self._memoize(schema, typ)

        for prop_key, prop in self._ordered(schema.properties):
            field_name = self.name_resolver.go_name(prop_key)
            # sub-schema name, only used if the property becomes a type of its own
            sub_schema_name = self.name_resolver.schema_name(field_name, prop)
            field_type = self.process_schema(sub_schema_name, prop)
            f = Field(
                name=field_name,
                json_name=prop_key,
                type=field_type,
                required=prop_key in schema.required,
                description=prop.description,
                format=prop.format,
            )
            if f.type == "string" and f.format in self.config.custom_string_formats:
                package_name = self.config.custom_string_formats[f.format].package_name
                if package_name not in struct.import_types:
                    struct.import_types.append(package_name)
            if f.required:
                struct.generate_code = True
            struct.fields[f.name] = f

        additional = schema.additional_properties
        if isinstance(additional, AdditionalPropertiesSchema):
            ap = additional.schema
            sub_type = self.process_schema(self.name_resolver.schema_name("", ap), ap)
            map_type = "map[string]" + sub_type
            # An inline object holding only additional properties collapses to a map.
            # A definition can't, or there would be no record for it.
            is_definition_object = schema.path_element.startswith("definitions")
            if not schema.properties and not is_definition_object:
                logger.debug("Collapsing %s to %s", name, map_type)
                if schema.generated_type == typ:
                    schema.generated_type = map_type
                return map_type
            self._add_additional_properties_field(struct, map_type)
            struct.additional_type = sub_type
        elif isinstance(additional, AdditionalPropertiesFlag):
            if additional.allowed:
                self._add_additional_properties_field(struct, "map[string]" + DYNAMIC_TYPE)
                struct.additional_type = DYNAMIC_TYPE
            else:
                struct.additional_type = NO_ADDITIONAL_PROPERTIES
            struct.generate_code = True

        self._register_struct(struct)
        return typ

    @staticmethod
    def _add_additional_properties_field(struct: Struct, map_type: str) -> None:
        f = Field(
            name="AdditionalProperties",
            json_name=HIDDEN_JSON_NAME,
            type=map_type,
            required=False,
            description="",
        )
        struct.fields[f.name] = f
        # the emitter must produce marshal code for the catch-all field
        struct.generate_code = True

    def _register_struct(self, struct: Struct) -> None:
        if struct.name in self.model.aliases:
            logger.warning("Record %s collides with an alias of the same name", struct.name)
        self.model.structs[struct.name] = struct

    def _register_alias(self, alias: Alias) -> None:
        if alias.name in self.model.structs:
            logger.warning("Alias %s collides with a record of the same name", alias.name)
        self.model.aliases[alias.name] = alias
