"""
Go mapping backend.

Writes every record mapping as a Go string constant, ``Mapping<Name>``.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ... import __version__
from ..analyzer.ir_nodes import TypeModel
from .base import MappingBackend


# A raw string cannot hold a backquote, so each one is spliced in as an interpreted string
RAW_STRING_BACKTICK = '` + "`" + `'


def escape_raw_string(text: str) -> str:
    """Make text safe to place between the backquotes of a Go raw string."""
    return text.replace("`", RAW_STRING_BACKTICK)


def clean_package_name(name: str) -> str:
    """Turn an arbitrary name into a Go package name."""
    cleaned = re.sub(r"[^0-9A-Za-z_]", "_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def name_and_description_comment(name: str, description: str) -> list[str]:
    """Comment lines introducing a constant; multi-line descriptions keep their breaks."""
    return [line.rstrip() for line in f"{name} {description}".split("\n")]


class GoMappingBackend(MappingBackend):
    """Go backend producing a package of mapping constants."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    def _setup_templates(self) -> None:
        super()._setup_templates()
        self.mappings_template = self.jinja_env.get_template(f"mappings.{self.FILE_EXTENSION}.jinja2")

    def generate(self, model: TypeModel) -> str:
        mappings: list[dict[str, Any]] = []
        for name, mapping in self.build_mappings(model).items():
            struct = model.structs[name]
            mappings.append(
                {
                    "name": struct.name,
                    "comment_lines": name_and_description_comment(struct.name, struct.description),
                    "body": escape_raw_string(json.dumps(mapping, indent="\t")),
                }
            )

        generation_comment = ""
        if self.config.add_generation_comment:
            generation_comment = f"Code generated by json_schema_to_mapping {__version__}. DO NOT EDIT."

        return self.mappings_template.render(
            generation_comment=generation_comment,
            package_name=clean_package_name(self.config.package_name),
            mappings=mappings,
        )
