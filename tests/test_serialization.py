"""
Tests for grammar serialization.

Verifies:
    - JSON and YAML round-trips preserve definitions
    - Catalogue files load every definition by section
    - Processed components are rejected
"""

import pytest
import yaml
from datline.components import Boolean, Processed, RealVector, Separator, String
from datline.definition import LineDefinition
from datline.examples import (
    build_example_definitions,
    build_manifold_kinetics_definition,
    build_manifold_surface_definition,
)
from datline.serialization import (
    component_from_dict,
    component_to_dict,
    definition_from_json,
    definition_from_yaml,
    definition_to_dict,
    definition_to_json,
    definition_to_yaml,
    load_catalog,
    save_catalog,
)


class TestRoundTrip:
    """Definitions survive serialization."""

    def test_json_round_trip(self):
        definition = build_manifold_kinetics_definition()
        restored = definition_from_json(definition_to_json(definition))
        assert definition_to_dict(restored) == definition_to_dict(definition)
        assert restored.components == definition.components

    def test_yaml_round_trip(self):
        definition = build_manifold_surface_definition()
        restored = definition_from_yaml(definition_to_yaml(definition))
        assert definition_to_dict(restored) == definition_to_dict(definition)

    def test_restored_definition_reads_lines(self):
        definition = definition_from_yaml(definition_to_yaml(build_manifold_kinetics_definition()))
        container = definition.read("ConditionID 1 ManifoldConditionID 2 KINETIC_MODEL NoInterfaceFlux")
        assert container.get("KINETIC_MODEL") == 3

    def test_leaf_components(self):
        for component in [
            Separator("FLAG", "a flag", optional=True),
            Boolean("FLAG", True, optional=True),
            String("NAME", "none"),
            RealVector("VAL", 3, default=0.5),
        ]:
            assert component_from_dict(component_to_dict(component)) == component

    def test_length_dict(self):
        d = component_to_dict(RealVector("VAL", 3))
        assert d["length"] == {"fixed": 3}


class TestErrors:
    """Unserializable input."""

    def test_processed_rejected(self):
        definition = LineDefinition("SEC", [Processed("P", lambda t, c: None)])
        with pytest.raises(TypeError):
            definition_to_dict(definition)

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            component_from_dict({"type": "matrix", "name": "M"})


class TestCatalog:
    """YAML catalogue files."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        definitions = build_example_definitions()
        save_catalog(definitions, path)

        catalog = load_catalog(path)
        assert list(catalog) == [d.section for d in definitions]
        for definition in definitions:
            assert definition_to_dict(catalog[definition.section]) == definition_to_dict(definition)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_catalog(path) == {}

    def test_duplicate_section(self, tmp_path):
        entry = {"section": "SEC", "components": [{"type": "int", "name": "N"}]}
        path = tmp_path / "dup.yaml"
        path.write_text(yaml.safe_dump({"definitions": [entry, entry]}))
        with pytest.raises(ValueError):
            load_catalog(path)

    def test_hand_written_catalog(self, tmp_path):
        path = tmp_path / "hand.yaml"
        path.write_text(
            "definitions:\n"
            "  - section: DESIGN POINT DIRICH CONDITIONS\n"
            "    components:\n"
            "      - {type: separator, name: NUMDOF}\n"
            "      - {type: int, name: NUMDOF}\n"
            "      - {type: separator, name: ONOFF}\n"
            "      - {type: int_vector, name: ONOFF, length: {from: NUMDOF}}\n"
        )
        definition = load_catalog(path)["DESIGN POINT DIRICH CONDITIONS"]
        assert definition.read("NUMDOF 2 ONOFF 1 0").to_dict() == {"NUMDOF": 2, "ONOFF": [1, 0]}
