"""
Configuration for the mapping generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class StringFormatType:
    """Go type backing a string field with a given ``format``."""

    package_name: str = ""
    type_name: str = ""


def default_string_format_types() -> dict[str, StringFormatType]:
    """Return the built-in ``format`` to Go type table."""
    return {
        "date-time": StringFormatType(package_name="time", type_name="time.Time"),
        "uuid": StringFormatType(package_name="github.com/google/uuid", type_name="uuid.UUID"),
    }


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate output before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for type model and mapping generation."""

    # Identifier fragment -> override, e.g. {"Id": "ID", "Url": "URL"}
    conventions: dict[str, str] = field(default_factory=dict)

    # Go package of the generated mapping constants
    package_name: str = "mappings"

    # Add "Code generated ... DO NOT EDIT." comment at top of file
    add_generation_comment: bool = True

    # Materialize properties sorted by key (True) or in declaration order (False)
    sort_properties: bool = True

    # Drop records that are always inlined in another record's mapping
    skip_inlined_structs: bool = False

    # String format -> Go type backing it
    custom_string_formats: dict[str, StringFormatType] = field(default_factory=default_string_format_types)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "custom_string_formats" and isinstance(v, dict):
                config.custom_string_formats = {fmt: StringFormatType(**spec) for fmt, spec in v.items()}
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "conventions": self.conventions,
            "package_name": self.package_name,
            "add_generation_comment": self.add_generation_comment,
            "sort_properties": self.sort_properties,
            "skip_inlined_structs": self.skip_inlined_structs,
            "custom_string_formats": {
                fmt: {"package_name": spec.package_name, "type_name": spec.type_name} for fmt, spec in self.custom_string_formats.items()
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
