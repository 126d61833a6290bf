"""
Functional tests for the mapping pipeline.

Each case in test_data/functional/*_tests.json gives a schema, an optional
config and the expected type model and mapping output.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from json_schema_to_mapping.pipeline import GeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    test_cases = []
    for json_file in sorted((TEST_DATA_DIR / "functional").glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _generator(test_case, output_format="go"):
    config = GeneratorConfig.from_dict(test_case.get("config", {}))
    return PipelineGenerator([test_case["schema"]], config, output_format)


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda case: case["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    source_file = test_case.get("_source_file", "unknown")
    print(f"\nTesting: {test_case['name']} (from {source_file})")
    print(f"Description: {test_case['description']}")

    model = _generator(test_case).analyze()
    assert model.name_collisions() == set()

    if "expected_structs" in test_case:
        structs = {name: {f.name: f.type for f in struct.fields.values()} for name, struct in model.structs.items()}
        assert structs == test_case["expected_structs"]

    if "expected_aliases" in test_case:
        aliases = {name: alias.type for name, alias in model.aliases.items()}
        assert aliases == test_case["expected_aliases"]

    if "expected_mappings" in test_case:
        mappings = json.loads(_generator(test_case, "json").generate())
        assert mappings == test_case["expected_mappings"]

    if "expected_go" in test_case or "unexpected_go" in test_case:
        generated_code = _generator(test_case).generate()
        for expected in test_case.get("expected_go", []):
            assert expected in generated_code, f"Expected pattern '{expected}' not found in Go output"
        for unexpected in test_case.get("unexpected_go", []):
            assert unexpected not in generated_code, f"Unexpected pattern '{unexpected}' found in Go output"
