"""
Tests for line definitions.

These tests verify:
    - Grammars are validated when the definition is built
    - Definitions read lines into fresh or supplied containers
    - Diagnostics carry the definition's section
"""

import logging

import pytest
from datline.components import Integer, IntegerVector, LengthFrom, Real, Separator, Switch
from datline.container import ParameterContainer
from datline.definition import LineDefinition
from datline.errors import InvalidGrammarDefinition, TrailingGarbage


class TestConstruction:
    """Test eager grammar validation."""

    def test_length_source_must_come_first(self):
        with pytest.raises(InvalidGrammarDefinition):
            LineDefinition("SEC", [IntegerVector("V", LengthFrom("N")), Integer("N")])

    def test_length_source_must_exist(self):
        with pytest.raises(InvalidGrammarDefinition):
            LineDefinition("SEC", [IntegerVector("V", LengthFrom("N"))])

    def test_length_source_must_be_integer(self):
        with pytest.raises(InvalidGrammarDefinition):
            LineDefinition("SEC", [Real("N"), IntegerVector("V", LengthFrom("N"))])

    def test_duplicate_keys(self):
        with pytest.raises(InvalidGrammarDefinition):
            LineDefinition("SEC", [Integer("A"), Real("A")])

    def test_same_key_in_different_branches(self):
        switch = Switch("D", 1, {1: ("A", [Integer("X")]), 2: ("B", [Real("X")])})
        definition = LineDefinition("SEC", [switch])
        assert definition.container_keys() == ["D", "X"]

    def test_length_source_in_other_branch(self):
        switch = Switch("D", 1, {
            1: ("A", [Integer("N")]),
            2: ("B", [IntegerVector("V", LengthFrom("N"))]),
        })
        with pytest.raises(InvalidGrammarDefinition):
            LineDefinition("SEC", [switch])

    def test_switch_key_as_length_source(self):
        switch = Switch("N", 2, {1: ("one", []), 2: ("two", [])})
        definition = LineDefinition("SEC", [switch, IntegerVector("V", LengthFrom("N"))])
        assert definition.read("two 5 6").to_dict() == {"N": 2, "V": [5, 6]}

    def test_warning_for_optional_separator_before_mandatory_value(self, caplog):
        with caplog.at_level(logging.WARNING, logger="datline.definition"):
            LineDefinition("SEC", [Separator("A", optional=True), Integer("A")])
        assert "Optional separator 'A'" in caplog.text


class TestReading:
    """Test reading through a definition."""

    def build_definition(self) -> LineDefinition:
        return LineDefinition(
            section="DESIGN POINT MANIFOLD DIRICH CONDITIONS",
            components=[
                Separator("NUMDOF"),
                Integer("NUMDOF"),
                Separator("ONOFF"),
                IntegerVector("ONOFF", LengthFrom("NUMDOF")),
            ],
        )

    def test_read(self):
        container = self.build_definition().read("NUMDOF 2 ONOFF 1 0")
        assert container.to_dict() == {"NUMDOF": 2, "ONOFF": [1, 0]}

    def test_read_into_supplied_container(self):
        container = ParameterContainer()
        container.insert("ConditionID", 4)
        result = self.build_definition().read("NUMDOF 1 ONOFF 1", container=container)
        assert result is container
        assert container.names() == ["ConditionID", "NUMDOF", "ONOFF"]

    def test_errors_name_the_section(self):
        with pytest.raises(TrailingGarbage) as exc:
            self.build_definition().read("NUMDOF 2x ONOFF 1 0")
        assert exc.value.section == "DESIGN POINT MANIFOLD DIRICH CONDITIONS"
        assert exc.value.field == "NUMDOF"

    def test_default_line(self):
        definition = self.build_definition()
        assert definition.default_line() == "NUMDOF 0 ONOFF"
        assert definition.read(definition.default_line()).to_dict() == {"NUMDOF": 0, "ONOFF": []}
