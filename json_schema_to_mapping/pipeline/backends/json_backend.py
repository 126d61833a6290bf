"""
JSON mapping backend.

Writes all record mappings as a single JSON object keyed by record name.
"""

from __future__ import annotations

import json

from ..analyzer.ir_nodes import TypeModel
from .base import MappingBackend


class JsonMappingBackend(MappingBackend):
    """JSON backend, for tooling that loads mappings at runtime."""

    FILE_EXTENSION = "json"

    def generate(self, model: TypeModel) -> str:
        return json.dumps(self.build_mappings(model), indent=2) + "\n"
