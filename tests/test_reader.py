"""
Tests for reading leaf components.

These tests verify:
    - Every leaf component reads its token(s) into the container
    - Optional fields fall back to their defaults
    - Mandatory fields fail when absent
    - Dynamic vector lengths are resolved against the container
"""

import pytest
from datline.components import (
    Boolean,
    Integer,
    IntegerVector,
    LengthFrom,
    Processed,
    Real,
    RealVector,
    Selection,
    Separator,
    String,
)
from datline.container import ParameterContainer
from datline.cursor import LineCursor
from datline.errors import (
    DuplicateKey,
    InternalInconsistency,
    InvalidBooleanLiteral,
    MalformedNumber,
    MissingRequiredValue,
    RequiredFieldMissing,
    TrailingGarbage,
)
from datline.reader import read_components, read_line


def read_with_cursor(components, line, container=None):
    """Read `line` and return (container, cursor) for inspection."""
    container = container if container is not None else ParameterContainer()
    cursor = LineCursor(line)
    read_components(components, "TEST SECTION", cursor, container)
    return container, cursor


class TestLabelledValues:
    """Test separators followed by values."""

    def test_labelled_integer(self):
        container = read_line([Separator("NUM"), Integer("NUM")], "NUM 5")
        assert container.get("NUM") == 5

    def test_labels_in_any_order(self):
        components = [Separator("A"), Integer("A"), Separator("B"), Real("B")]
        container = read_line(components, "B 2.5 A 3")
        assert container.to_dict() == {"A": 3, "B": 2.5}

    def test_mandatory_label_missing(self):
        with pytest.raises(RequiredFieldMissing) as exc:
            read_line([Separator("NUM"), Integer("NUM")], "OTHER 5", section="SEC")
        assert exc.value.section == "SEC"

    def test_separator_writes_nothing(self):
        container = read_line([Separator("NUM")], "NUM")
        assert len(container) == 0


@pytest.mark.parametrize(
    "component",
    [
        String("S"),
        Integer("S"),
        Real("S"),
        Boolean("S"),
        IntegerVector("S", 2),
        RealVector("S", 2),
        Processed("S", lambda token, container: container.insert("S", token)),
    ],
)
def test_mandatory_component_missing(component):
    """A mandatory field omitted from the line fails."""
    with pytest.raises(RequiredFieldMissing):
        read_line([Separator("S"), component], "S")


@pytest.mark.parametrize(
    "component, expected",
    [
        (String("S", "x", optional=True), "x"),
        (Integer("S", 4, optional=True), 4),
        (Real("S", 2.5, optional=True), 2.5),
        (Boolean("S", True, optional=True), True),
        (IntegerVector("S", 2, default=7, optional=True), [7, 7]),
        (RealVector("S", 2, default=1.5, optional=True), [1.5, 1.5]),
    ],
)
def test_optional_component_missing(component, expected):
    """An optional field omitted from the line keeps its default; the cursor ends at end-of-line."""
    container, cursor = read_with_cursor([Separator("S", optional=True), component], "OTHER 1")
    assert container.get("S") == expected
    assert cursor.at_end()


class TestScalars:
    """Test scalar components."""

    def test_successive_strings(self):
        container = read_line([String("A"), String("B")], "first second")
        assert container.to_dict() == {"A": "first", "B": "second"}

    def test_integer_trailing_garbage(self):
        with pytest.raises(TrailingGarbage):
            read_line([Integer("N")], "12abc")

    def test_integer_given_real(self):
        with pytest.raises(TrailingGarbage):
            read_line([Integer("N")], "3.14")

    def test_real(self):
        assert read_line([Real("R")], "3.14").get("R") == 3.14

    def test_real_exponent(self):
        assert read_line([Real("R")], "1.0e-3").get("R") == pytest.approx(1e-3)

    def test_malformed_real(self):
        with pytest.raises(MalformedNumber):
            read_line([Real("R")], "abc")

    @pytest.mark.parametrize("component, line", [(Integer("N"), "١٢"), (Real("R"), "١.٥")])
    def test_non_ascii_digits(self, component, line):
        with pytest.raises(MalformedNumber):
            read_line([component], line)

    def test_mandatory_integer_with_only_whitespace(self):
        with pytest.raises(MissingRequiredValue):
            read_line([Separator("N"), Integer("N")], "N ")

    def test_empty_mandatory_string(self):
        with pytest.raises(RequiredFieldMissing):
            read_line([String("S")], "   ")

    def test_empty_optional_real_leaves_cursor_untouched(self):
        """An empty optional real counts as absent: default kept, line and anchor unchanged."""
        container, cursor = read_with_cursor([Real("R", 1.5, optional=True)], "   ")
        assert container.get("R") == 1.5
        assert cursor.line == "   "
        assert cursor.position == 0

    def test_empty_optional_real_then_label(self):
        components = [
            Separator("R", optional=True),
            Real("R", 1.5, optional=True),
            Separator("N"),
            Integer("N"),
        ]
        container = read_line(components, "N 4 R ")
        assert container.to_dict() == {"R": 1.5, "N": 4}

    def test_duplicate_names(self):
        with pytest.raises(DuplicateKey):
            read_line([Integer("A"), Integer("A")], "1 2")


class TestBoolean:
    """Test yes/no literals."""

    @pytest.mark.parametrize("token", ["Yes", "YES", "yes", "True", "TRUE", "true"])
    def test_true_literals(self, token):
        assert read_line([Boolean("B")], token).get("B") is True

    @pytest.mark.parametrize("token", ["No", "NO", "no", "False", "FALSE", "false"])
    def test_false_literals(self, token):
        assert read_line([Boolean("B", default=True)], token).get("B") is False

    @pytest.mark.parametrize("token", ["yEs", "1", "y", "On"])
    def test_other_tokens_rejected(self, token):
        with pytest.raises(InvalidBooleanLiteral) as exc:
            read_line([Boolean("B")], token, section="SEC")
        assert exc.value.value == token


class TestVectors:
    """Test fixed and dynamic vectors."""

    def test_fixed_length(self):
        container = read_line([Separator("ONOFF"), IntegerVector("ONOFF", 2)], "ONOFF 1 0")
        assert container.get("ONOFF") == [1, 0]

    def test_length_from_container(self):
        """NUMSCAL = 3 already read: exactly three tokens are consumed."""
        container = ParameterContainer()
        container.insert("NUMSCAL", 3)
        container, cursor = read_with_cursor(
            [IntegerVector("STOICHIOMETRIES", LengthFrom("NUMSCAL"))], "1 2 3 4", container
        )
        assert container.get("STOICHIOMETRIES") == [1, 2, 3]
        assert cursor.peek_token() == "4"

    def test_length_from_same_line(self):
        components = [Integer("N"), RealVector("V", LengthFrom("N"))]
        container = read_line(components, "2 0.5 1.5")
        assert container.get("V") == [0.5, 1.5]

    def test_length_field_not_read(self):
        with pytest.raises(InternalInconsistency):
            read_line([IntegerVector("V", LengthFrom("N"))], "1 2")

    def test_negative_length(self):
        with pytest.raises(MalformedNumber):
            read_line([Integer("N"), IntegerVector("V", LengthFrom("N"))], "-1 2")

    def test_mandatory_vector_short(self):
        with pytest.raises(MissingRequiredValue):
            read_line([IntegerVector("V", 3)], "1 2")

    def test_optional_vector_short(self):
        container = read_line([IntegerVector("V", 3, default=9, optional=True)], "1 2")
        assert container.get("V") == [1, 2, 9]

    def test_zero_length_at_end(self):
        components = [Integer("N"), RealVector("V", LengthFrom("N"))]
        assert read_line(components, "0").get("V") == []

    def test_bad_vector_entry(self):
        with pytest.raises(TrailingGarbage):
            read_line([RealVector("V", 2)], "1.0 2.0x")


class TestSelection:
    """Test literal selection."""

    def build_selection(self) -> Selection:
        return Selection("S", "a", ["a", "b", "c"], ["A", "B", "C"])

    def test_literal_anywhere_in_line(self):
        container = read_line([self.build_selection()], "x c y")
        assert container.get("S") == "C"

    def test_absent_literal_uses_default(self):
        container, cursor = read_with_cursor([self.build_selection()], "x y")
        assert container.get("S") == "A"
        assert cursor.line == "x y"

    def test_declared_order_wins(self):
        """'b' is declared before 'c', so it wins even though 'c' comes first in the line."""
        container = read_line([self.build_selection()], "c b")
        assert container.get("S") == "B"

    def test_integer_values(self):
        selection = Selection("ImplType", "Undefined", ["Undefined", "Standard"], [0, 1])
        assert read_line([selection], "Standard").get("ImplType") == 1

    def test_value_after_selection(self):
        container = read_line([self.build_selection(), Integer("N")], "b 4")
        assert container.to_dict() == {"S": "B", "N": 4}


class TestProcessed:
    """Test caller-supplied insert operations."""

    def test_insert_operation(self):
        def insert_upper(token, container):
            container.insert("FILE", token.upper())

        container = read_line([Separator("FILE"), Processed("FILE", insert_upper)], "FILE data.csv")
        assert container.get("FILE") == "DATA.CSV"

    def test_optional_absent(self):
        calls = []
        container = read_line(
            [Separator("FILE", optional=True), Processed("FILE", lambda t, c: calls.append(t), optional=True)],
            "OTHER",
        )
        assert calls == []
        assert len(container) == 0
